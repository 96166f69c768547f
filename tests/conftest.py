from __future__ import annotations

import pytest

from blogbase.data import SupabaseConnection
from blogbase.gateway import BackendGateway
from blogbase.services import ServiceContext

from fakes import FakeSupabaseClient

FIXED_CLOCK = 1_700_000_000.5


@pytest.fixture
def fake_client() -> FakeSupabaseClient:
    client = FakeSupabaseClient()
    client.auth.register("owner@example.com", "correct-horse")
    return client


@pytest.fixture
def gateway(fake_client: FakeSupabaseClient) -> BackendGateway:
    context = ServiceContext(
        connection=SupabaseConnection.from_client(fake_client),
        clock=lambda: FIXED_CLOCK,
    )
    return BackendGateway(context)
