from __future__ import annotations

import asyncio
import logging

import pytest

from blogbase import BackendGateway, ErrorKind, Post

from fakes import backend_error

POST_DATA = {"title": "T", "content": "C", "cover_image": "U", "author_id": "A"}


def test_fetch_posts_on_empty_table_is_quiet(gateway: BackendGateway, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG):
        result = asyncio.run(gateway.fetch_posts())

    assert result.ok
    assert result.value == []
    assert not [record for record in caplog.records if record.levelno >= logging.WARNING]


def test_fetch_posts_newest_first(gateway: BackendGateway, fake_client) -> None:
    fake_client.database.seed("posts", title="first")
    fake_client.database.seed("posts", title="second")
    fake_client.database.seed("posts", title="third")

    result = asyncio.run(gateway.fetch_posts())

    assert [post.title for post in result.value] == ["third", "second", "first"]


def test_fetch_posts_error_degrades_to_empty(gateway: BackendGateway, fake_client, caplog) -> None:
    fake_client.database.seed("posts", title="hidden")
    fake_client.database.fail_next("posts", backend_error())

    with caplog.at_level(logging.ERROR):
        result = asyncio.run(gateway.fetch_posts())

    assert result.error.kind is ErrorKind.BACKEND
    assert result.error.code == "42501"
    assert result.unwrap_or([]) == []
    assert "Error fetching posts" in caplog.text


def test_fetch_missing_post_is_absence_not_error(gateway: BackendGateway, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG):
        result = asyncio.run(gateway.fetch_post(404))

    assert result.ok
    assert result.value is None
    assert not [record for record in caplog.records if record.levelno >= logging.ERROR]


def test_fetch_post_logs_other_errors(gateway: BackendGateway, fake_client, caplog) -> None:
    fake_client.database.fail_next("posts", backend_error("connection reset", "08006"))

    with caplog.at_level(logging.ERROR):
        result = asyncio.run(gateway.fetch_post(1))

    assert result.value is None
    assert result.error.code == "08006"
    assert "Error fetching post 1" in caplog.text


def test_create_post_returns_generated_fields(gateway: BackendGateway) -> None:
    result = asyncio.run(gateway.create_post(POST_DATA))

    assert result.ok
    post = result.value
    assert isinstance(post, Post)
    assert (post.title, post.content, post.cover_image, post.author_id) == ("T", "C", "U", "A")
    assert post.id == 1
    assert post.created_at is not None
    assert post.likes == 0


def test_create_post_failure_returns_error(gateway: BackendGateway, fake_client) -> None:
    fake_client.database.fail_next("posts", backend_error("new row violates row-level security policy"))

    result = asyncio.run(gateway.create_post(POST_DATA))

    assert result.value is None
    assert result.error.message == "new row violates row-level security policy"


def test_update_post_verifies_written_fields(gateway: BackendGateway, fake_client) -> None:
    created = fake_client.database.seed("posts", title="Old", content="body")

    result = asyncio.run(gateway.update_post(created["id"], {"title": "New"}))

    assert result.ok
    assert result.value.title == "New"
    assert result.value.content == "body"


def test_update_missing_post_fails(gateway: BackendGateway) -> None:
    result = asyncio.run(gateway.update_post(99, {"title": "New"}))

    assert not result.ok
    assert result.error.kind is ErrorKind.NOT_FOUND


def test_update_silently_ignored_field_is_verification_failure(gateway: BackendGateway, fake_client, caplog) -> None:
    created = fake_client.database.seed("posts", title="Old", content="body")
    fake_client.database.frozen_columns["posts"] = {"title"}

    with caplog.at_level(logging.ERROR):
        result = asyncio.run(gateway.update_post(created["id"], {"title": "New", "content": "edited"}))

    assert result.error.kind is ErrorKind.VERIFICATION
    assert result.error.details == {"fields": ["title"]}
    assert fake_client.database.tables["posts"][0]["content"] == "edited"
    assert "Update verification failed" in caplog.text


def test_update_error_during_write(gateway: BackendGateway, fake_client) -> None:
    created = fake_client.database.seed("posts", title="Old")
    fake_client.database.fail_next("posts", backend_error("update denied"), operation="update")

    result = asyncio.run(gateway.update_post(created["id"], {"title": "New"}))

    assert result.error.kind is ErrorKind.BACKEND
    assert result.error.message == "update denied"
    assert fake_client.database.tables["posts"][0]["title"] == "Old"


def test_update_existence_check_backend_error(gateway: BackendGateway, fake_client, caplog) -> None:
    created = fake_client.database.seed("posts", title="Old")
    fake_client.database.fail_next("posts", backend_error("connection reset", "08006"), operation="select")

    with caplog.at_level(logging.ERROR):
        result = asyncio.run(gateway.update_post(created["id"], {"title": "New"}))

    assert result.error.kind is ErrorKind.BACKEND
    assert result.error.code == "08006"
    assert fake_client.database.tables["posts"][0]["title"] == "Old"
    assert f"Error checking post existence for {created['id']}" in caplog.text


def test_update_unexpected_error_is_reported(gateway: BackendGateway, fake_client, caplog) -> None:
    created = fake_client.database.seed("posts", title="Old")
    fake_client.database.fail_next("posts", RuntimeError("socket closed"), operation="update")

    with caplog.at_level(logging.ERROR):
        result = asyncio.run(gateway.update_post(created["id"], {"title": "New"}))

    assert result.error.kind is ErrorKind.UNEXPECTED
    assert result.error.message == "socket closed"
    assert f"Unexpected error updating post {created['id']}" in caplog.text


def test_delete_post(gateway: BackendGateway, fake_client) -> None:
    created = fake_client.database.seed("posts", title="Doomed")

    result = asyncio.run(gateway.delete_post(created["id"]))

    assert result.ok
    assert fake_client.database.tables["posts"] == []


def test_delete_post_failure(gateway: BackendGateway, fake_client) -> None:
    fake_client.database.fail_next("posts", backend_error())

    assert not asyncio.run(gateway.delete_post(1)).ok


def test_concurrent_likes_are_not_lost(gateway: BackendGateway, fake_client) -> None:
    created = fake_client.database.seed("posts", title="Popular", likes=5)

    async def scenario():
        return await asyncio.gather(gateway.increment_likes(created["id"]), gateway.increment_likes(created["id"]))

    outcomes = asyncio.run(scenario())

    assert all(outcome.ok for outcome in outcomes)
    assert fake_client.database.tables["posts"][0]["likes"] == 7
    assert fake_client.database.rpc_calls == [
        ("increment_likes", {"post_id": created["id"]}),
        ("increment_likes", {"post_id": created["id"]}),
    ]


def test_increment_likes_failure(gateway: BackendGateway, fake_client, caplog) -> None:
    fake_client.database.fail_next("rpc:increment_likes", backend_error("function missing", "PGRST202"))

    with caplog.at_level(logging.ERROR):
        result = asyncio.run(gateway.increment_likes(1))

    assert result.error.code == "PGRST202"
    assert "Error incrementing likes" in caplog.text


def test_malformed_post_row_is_backend_failure(gateway: BackendGateway, fake_client, caplog) -> None:
    fake_client.database.seed("posts", title="Broken")
    fake_client.database.tables["posts"][0]["created_at"] = "not a date"

    with caplog.at_level(logging.ERROR):
        listed = asyncio.run(gateway.fetch_posts())
        single = asyncio.run(gateway.fetch_post(1))

    assert listed.error.kind is ErrorKind.BACKEND
    assert listed.unwrap_or([]) == []
    assert single.error.kind is ErrorKind.BACKEND
    assert single.error.message.startswith("Malformed post record")
    assert "Error reading posts" in caplog.text


def test_post_rows_with_short_fractions_parse(gateway: BackendGateway, fake_client) -> None:
    fake_client.database.seed("posts", title="Precise")
    fake_client.database.tables["posts"][0]["created_at"] = "2024-01-15T10:20:30.12345+00:00"

    result = asyncio.run(gateway.fetch_posts())

    assert result.value[0].created_at.microsecond == 123450
