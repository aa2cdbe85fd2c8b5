"""Interactive terminal chat against a running relay."""

from __future__ import annotations

import argparse
import asyncio
import logging
import threading
from contextlib import suppress
from typing import Callable

from rich.console import Console

from netwise.client.connection import ChatClient
from netwise.client.render import ConsoleRenderer

DEFAULT_URL = "ws://localhost:3000/"


async def read_line(prompt: Callable[[], str]) -> str:
    """Run a blocking ``prompt`` on a daemon thread and await its result.

    The thread is not joined at shutdown, so Ctrl+C exits while ``input()``
    is still waiting.
    """

    loop = asyncio.get_running_loop()
    future: asyncio.Future[str] = loop.create_future()

    def deliver(result: str | None, error: BaseException | None) -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)

    def target() -> None:
        try:
            line = prompt()
        except BaseException as exc:
            result, error = None, exc
        else:
            result, error = line, None
        # The loop is gone if the chat ended while we were blocked.
        with suppress(RuntimeError):
            loop.call_soon_threadsafe(deliver, result, error)

    threading.Thread(target=target, name="netwise-stdin", daemon=True).start()
    return await future


async def run_chat(url: str, sound: bool = True, console: Console | None = None) -> None:
    """Read lines from the terminal until /quit or EOF."""

    renderer = ConsoleRenderer(console, sound=sound)
    renderer.welcome()
    client = ChatClient(url, renderer)
    await client.connect()

    try:
        while True:
            try:
                line = await read_line(renderer.prompt)
            except EOFError:
                break

            command = line.strip().lower()
            if command in {"/quit", "/exit"}:
                break
            if command == "/clear":
                renderer.clear()
            elif command == "/sound":
                state = "on" if renderer.toggle_sound() else "off"
                renderer.notice(f"Sound {state}.")
            elif command == "/topics":
                renderer.topics()
            elif command == "/reconnect":
                if not await client.focus():
                    renderer.notice("Already connected.")
            else:
                await client.submit(line)
    finally:
        await client.close()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Terminal chat client for the NetWise relay.")
    parser.add_argument("--url", default=DEFAULT_URL, help="Relay URL (default: %(default)s)")
    parser.add_argument(
        "--no-sound", action="store_true", help="Do not ring the bell on replies."
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))
    try:
        asyncio.run(run_chat(args.url, sound=not args.no_sound))
    except KeyboardInterrupt:  # pragma: no cover - manual usage only
        pass


if __name__ == "__main__":  # pragma: no cover
    main()
