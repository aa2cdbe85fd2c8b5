"""Chat client: one WebSocket connection to the relay and its lifecycle."""

from __future__ import annotations

import asyncio
import enum
import logging
from contextlib import suppress
from typing import Any, Awaitable, Callable

import websockets
from websockets.exceptions import (
    ConnectionClosed,
    ConnectionClosedError,
    InvalidHandshake,
    InvalidURI,
)

from netwise.client.render import Renderer
from netwise.models import PromptMessage

logger = logging.getLogger(__name__)

Connector = Callable[[str], Awaitable[Any]]


class ConnectionState(str, enum.Enum):
    """Lifecycle of a single connection; CLOSED and ERRORED are terminal."""

    IDLE = "idle"
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"
    ERRORED = "errored"


class ChatClient:
    """Owns the relay connection and drives a renderer from its events.

    Nothing is retried automatically: after a close or an error the client
    waits for :meth:`focus` (or an explicit :meth:`connect`) to open a brand
    new connection.
    """

    def __init__(
        self,
        url: str,
        renderer: Renderer,
        connector: Connector | None = None,
    ) -> None:
        self.url = url
        self.renderer = renderer
        self.state = ConnectionState.IDLE
        self._connector = connector or websockets.connect
        self._connection: Any = None
        self._reader: asyncio.Task[None] | None = None

    async def connect(self) -> None:
        """Open a new connection and start reading from it.

        Any previous connection is closed first, so only one reader ever
        feeds the renderer.
        """

        await self._discard()
        self.state = ConnectionState.CONNECTING
        self.renderer.set_status("connecting", "Connecting...")

        try:
            connection = await self._connector(self.url)
        except InvalidURI as exc:
            logger.error("WebSocket creation failed: %s", exc)
            self.state = ConnectionState.ERRORED
            self.renderer.set_status("disconnected", "WS failed")
            self.renderer.append("WebSocket creation failed. Check URL.")
            return
        except (OSError, asyncio.TimeoutError, InvalidHandshake) as exc:
            self._on_error(exc)
            return

        self._connection = connection
        self._on_open()
        self._reader = asyncio.create_task(self._read(connection))

    async def submit(self, text: str) -> bool:
        """Echo ``text`` locally and send it as a prompt; True if it was sent."""

        text = text.strip()
        if not text:
            return False

        self.renderer.append(text, "user")

        if self.state is not ConnectionState.OPEN or self._connection is None:
            self.renderer.append("Not connected to bridge. Try reconnecting.")
            return False

        try:
            await self._connection.send(PromptMessage(prompt=text).model_dump_json())
        except ConnectionClosed as exc:
            self.renderer.append(f"Send failed: {exc}")
            return False

        self.renderer.show_typing()
        return True

    async def focus(self) -> bool:
        """Reconnect unless a connection is already open or being opened."""

        if self.state in (ConnectionState.OPEN, ConnectionState.CONNECTING):
            return False
        await self.connect()
        return True

    async def close(self) -> None:
        """Close the current connection without rendering a disconnect."""

        await self._discard()
        if self.state is not ConnectionState.IDLE:
            self.state = ConnectionState.CLOSED

    async def _discard(self) -> None:
        connection, self._connection = self._connection, None
        reader, self._reader = self._reader, None

        if reader is not None:
            reader.cancel()
            with suppress(asyncio.CancelledError):
                await reader
        if connection is not None:
            await connection.close()

    async def _read(self, connection: Any) -> None:
        try:
            async for message in connection:
                self._on_message(message)
        except ConnectionClosedError as exc:
            if connection is self._connection:
                self._on_error(exc)
            return

        if connection is self._connection:
            self._on_close()

    def _on_open(self) -> None:
        self.state = ConnectionState.OPEN
        self.renderer.set_status("connected", "Connected")
        self.renderer.append("Connection established. Ask a CN question.")

    def _on_message(self, message: str | bytes) -> None:
        if isinstance(message, bytes):
            message = message.decode("utf-8", errors="replace")
        self.renderer.hide_typing()
        self.renderer.append(message)

    def _on_close(self) -> None:
        self.state = ConnectionState.CLOSED
        self.renderer.set_status("disconnected", "Disconnected")
        self.renderer.append("Bridge disconnected.")

    def _on_error(self, exc: BaseException) -> None:
        logger.warning("WebSocket error: %s", exc)
        self.state = ConnectionState.ERRORED
        self.renderer.set_status("disconnected", "Error")
        self.renderer.append("Connection error. Is the bridge running?")
