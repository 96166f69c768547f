from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict

from fastapi import FastAPI, File, HTTPException, Request, UploadFile, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from ...api import ApiFunction, call_api, get_api_functions
from ...api.serializers import serialize_change
from ...domain import ChangeEvent
from ...gateway import BackendGateway
from ..realtime import ChangeCallback, ChangeSubscription

logger = logging.getLogger(__name__)

Subscriber = Callable[[ChangeCallback], Awaitable[ChangeSubscription]]


class ApiCallRequest(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


def _serialize_api_function(api_function: ApiFunction) -> dict:
    return {
        "name": api_function.name,
        "description": api_function.description,
        "category": api_function.category,
        "tags": list(api_function.tags),
        "parameters": api_function.parameter_schema,
    }


def _gateway(request: Request) -> BackendGateway:
    return request.app.state.gateway


async def _forward_events(websocket: WebSocket, queue: "asyncio.Queue[ChangeEvent]") -> None:
    while True:
        event = await queue.get()
        await websocket.send_json(serialize_change(event))


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    while True:
        await websocket.receive_text()


async def stream_changes(websocket: WebSocket, subscribe: Subscriber) -> None:
    """Relay realtime change events to ``websocket`` until the client goes away."""

    queue: asyncio.Queue[ChangeEvent] = asyncio.Queue()
    # subscribe before accepting so no change is missed once the client is connected
    try:
        subscription = await subscribe(queue.put_nowait)
    except Exception:  # noqa: BLE001
        logger.exception("Could not open realtime stream for %s", websocket.url.path)
        await websocket.close(code=1011)
        return
    try:
        await websocket.accept()
        tasks = {
            asyncio.ensure_future(_forward_events(websocket, queue)),
            asyncio.ensure_future(_wait_for_disconnect(websocket)),
        }
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        for task in done:
            exc = task.exception()
            if exc is not None and not isinstance(exc, WebSocketDisconnect):
                logger.error("Realtime stream on %s stopped: %s", subscription.topic, exc)
    finally:
        await subscription.close()
        logger.debug("Closed realtime stream on %s", subscription.topic)


def create_app(gateway: BackendGateway) -> FastAPI:
    app = FastAPI(title="blogbase API", version="0.1.0")
    app.state.gateway = gateway
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/functions")
    async def list_api_functions() -> Dict[str, Any]:
        return {"functions": [_serialize_api_function(func) for func in get_api_functions()]}

    @app.post("/api/functions/{function_name}")
    async def invoke_api_function(function_name: str, payload: ApiCallRequest, request: Request) -> Dict[str, Any]:
        try:
            result = await call_api(function_name, _gateway(request), **payload.arguments)
        except KeyError as exc:
            logger.warning("API function not found: %s", function_name)
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except (TypeError, ValueError) as exc:
            logger.warning("API function %s rejected its arguments: %s", function_name, exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        logger.debug("API function %s executed successfully", function_name)
        return {"name": function_name, "result": result}

    @app.post("/api/uploads")
    async def upload_image(request: Request, file: UploadFile = File(...)) -> Dict[str, Any]:
        content = await file.read()
        result = await _gateway(request).upload_file_and_get_url(
            content,
            filename=file.filename,
            content_type=file.content_type,
        )
        return {"url": result.value.public_url if result.ok and result.value else None}

    @app.websocket("/api/realtime/posts")
    async def post_changes(websocket: WebSocket) -> None:
        await stream_changes(websocket, websocket.app.state.gateway.subscribe_to_posts)

    @app.websocket("/api/realtime/posts/{post_id}/comments")
    async def comment_changes(websocket: WebSocket, post_id: int) -> None:
        gateway: BackendGateway = websocket.app.state.gateway

        async def subscribe(callback: ChangeCallback) -> ChangeSubscription:
            return await gateway.subscribe_to_post_comments(post_id, callback)

        await stream_changes(websocket, subscribe)

    return app


def run_local_server(gateway: BackendGateway, host: str = "127.0.0.1", port: int = 8000) -> None:
    from hypercorn.asyncio import serve
    from hypercorn.config import Config

    config = Config()
    config.bind = [f"{host}:{port}"]
    asyncio.run(serve(create_app(gateway), config))
