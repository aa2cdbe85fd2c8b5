"""WebSocket handlers for the relay."""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from typing import Annotated

from fastapi import Depends, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from netwise.dependencies import get_completion_service
from netwise.exceptions import CompletionServiceError
from netwise.models import parse_prompt
from netwise.services.completion_service import CompletionService

logger = logging.getLogger(__name__)

GREETING = "✅ Connected to NetWise! Ask a CN question."
REFUSAL_REPLY = "❌ NetWise blocked non-networking topic."
INTERNAL_ERROR_REPLY = "⚠️ Internal error: NetWise unreachable."


async def websocket_endpoint(
    websocket: WebSocket,
    completion_service: Annotated[CompletionService, Depends(get_completion_service)],
) -> None:
    """Relay loop: every inbound frame becomes one completion and one reply.

    Frames are read in arrival order, but each is answered by its own task,
    so replies go out in completion order.
    """

    await websocket.accept()
    should_close = True
    client = _client_repr(websocket)
    logger.info("WebSocket connection accepted", extra={"client": client})

    pending: set[asyncio.Task[None]] = set()
    try:
        await websocket.send_text(GREETING)

        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                logger.info("WebSocket client disconnected", extra={"client": client})
                should_close = False
                break

            raw = _frame_text(message)
            if raw is None:
                continue

            task = asyncio.create_task(_relay(websocket, completion_service, raw))
            pending.add(task)
            task.add_done_callback(pending.discard)
    finally:
        in_flight = list(pending)
        for task in in_flight:
            task.cancel()
        if in_flight:
            await asyncio.gather(*in_flight, return_exceptions=True)
            logger.info(
                "Dropped in-flight prompts",
                extra={"client": client, "count": len(in_flight)},
            )

        if should_close and websocket.application_state == WebSocketState.CONNECTED:
            with suppress(RuntimeError, WebSocketDisconnect):
                await websocket.close()
        logger.info("WebSocket connection closed", extra={"client": client})


async def _relay(
    websocket: WebSocket, completion_service: CompletionService, raw: str
) -> None:
    """Forward one prompt upstream and send exactly one reply back."""

    client = _client_repr(websocket)
    prompt = parse_prompt(raw)
    logger.info("Prompt received", extra={"client": client, "chars": len(prompt)})

    try:
        reply = await completion_service.complete(prompt)
    except CompletionServiceError as exc:
        logger.warning(
            "Completion failed",
            extra={"client": client, "error": exc.message, "status_code": exc.status_code},
        )
        reply = INTERNAL_ERROR_REPLY
    else:
        if reply is None:
            reply = REFUSAL_REPLY

    try:
        await websocket.send_text(reply)
    except (RuntimeError, WebSocketDisconnect):
        logger.info("Client gone before reply was sent", extra={"client": client})
        return

    logger.info("Reply delivered", extra={"client": client, "chars": len(reply)})


def _frame_text(message: dict) -> str | None:
    """Return the payload of a receive event as text, whatever the frame type."""

    if message.get("text") is not None:
        return message["text"]
    if message.get("bytes") is not None:
        return message["bytes"].decode("utf-8", errors="replace")
    return None


def _client_repr(websocket: WebSocket) -> str:
    """Render the remote client for logging purposes."""

    client = websocket.client
    if client is None:
        return "unknown"
    return f"{client.host}:{client.port}"
