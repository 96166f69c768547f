from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional, Set, Union

from ..domain import ChangeEvent
from .context import ServiceContext

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[ChangeEvent], Union[None, Awaitable[None]]]

POSTS_TOPIC = "public:posts"


def comments_topic(post_id: int) -> str:
    return f"post_comments_{post_id}"


@dataclass(slots=True)
class ChangeSubscription:
    """Live handle over a realtime channel; events flow until ``close`` is awaited."""

    topic: str
    table: str
    channel: Any
    filter: Optional[str] = None

    async def close(self) -> None:
        await self.channel.unsubscribe()


@dataclass(slots=True)
class RealtimeService:
    context: ServiceContext
    _pending: Set[asyncio.Task] = field(default_factory=set)

    def _dispatcher(self, topic: str, callback: ChangeCallback) -> Callable[[Dict[str, Any]], None]:
        def dispatch(payload: Dict[str, Any]) -> None:
            try:
                event = ChangeEvent.from_payload(payload)
            except ValueError:
                logger.warning("Ignoring unrecognised change payload on %s: %s", topic, payload)
                return
            # the realtime listen loop dies on any exception a handler raises
            try:
                outcome = callback(event)
            except Exception:  # noqa: BLE001
                logger.exception("Change callback on %s failed", topic)
                return
            if inspect.isawaitable(outcome):
                task = asyncio.ensure_future(outcome)
                self._pending.add(task)
                task.add_done_callback(lambda done: self._finish(topic, done))

        return dispatch

    def _finish(self, topic: str, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Change callback on %s failed", topic, exc_info=exc)

    async def _subscribe(
        self,
        topic: str,
        table: str,
        callback: ChangeCallback,
        *,
        filter: Optional[str] = None,
    ) -> ChangeSubscription:
        channel = await self.context.feed.open(topic, table, self._dispatcher(topic, callback), filter=filter)
        logger.debug("Subscribed to %s on table %s", topic, table)
        return ChangeSubscription(topic=topic, table=table, channel=channel, filter=filter)

    async def subscribe_to_posts(self, callback: ChangeCallback) -> ChangeSubscription:
        return await self._subscribe(POSTS_TOPIC, self.context.storage.posts_table, callback)

    async def subscribe_to_post_comments(self, post_id: int, callback: ChangeCallback) -> ChangeSubscription:
        return await self._subscribe(
            comments_topic(post_id),
            self.context.storage.comments_table,
            callback,
            filter=f"post_id=eq.{post_id}",
        )
