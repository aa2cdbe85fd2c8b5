"""Terminal rendering for the chat client."""

from __future__ import annotations

from typing import Literal, Protocol

from rich.console import Console
from rich.text import Text

Speaker = Literal["user", "bot"]
Status = Literal["connecting", "connected", "disconnected"]

SUGGESTED_TOPICS = (
    "TCP",
    "Routing",
    "DNS",
    "Congestion Control",
    "Socket programming",
    "ARP",
    "DHCP",
)

_STATUS_STYLES = {
    "connected": "bold green",
    "connecting": "bold yellow",
    "disconnected": "bold red",
}


class Renderer(Protocol):
    """What ChatClient needs from a UI."""

    def set_status(self, status: Status, text: str) -> None: ...

    def append(self, text: str, who: Speaker = "bot") -> None: ...

    def show_typing(self) -> None: ...

    def hide_typing(self) -> None: ...


class ConsoleRenderer:
    """Append-only transcript printed with rich."""

    def __init__(self, console: Console | None = None, sound: bool = True) -> None:
        self.console = console or Console(highlight=False)
        self.sound = sound
        self.typing = False

    def welcome(self) -> None:
        self.console.rule("[bold cyan]NETWORK YOUR KNOWLEDGE")
        self.console.print(
            "Type a question about Computer Networks to begin. "
            "Commands: /topics /clear /sound /reconnect /quit",
            style="dim",
            justify="center",
        )

    def set_status(self, status: Status, text: str) -> None:
        style = _STATUS_STYLES.get(status, "bold red")
        self.console.print(Text.assemble(("● ", style), (text, "dim")))

    def append(self, text: str, who: Speaker = "bot") -> None:
        # Text objects, not markup: replies may contain square brackets.
        if who == "user":
            self.console.print(Text(text, style="bold cyan", justify="right"))
            return

        self.console.print(Text.assemble(("⚡ ", "magenta"), text))
        if self.sound:
            self.console.bell()

    def show_typing(self) -> None:
        self.hide_typing()
        self.typing = True
        self.console.print("NetWise is typing…", style="italic sky_blue1")

    def hide_typing(self) -> None:
        self.typing = False

    def clear(self) -> None:
        self.console.clear()
        self.typing = False
        self.welcome()

    def toggle_sound(self) -> bool:
        self.sound = not self.sound
        return self.sound

    def topics(self) -> None:
        self.console.print(
            Text("Suggested: ", style="dim") + Text(" · ".join(SUGGESTED_TOPICS))
        )

    def notice(self, text: str) -> None:
        self.console.print(text, style="dim", markup=False)

    def prompt(self) -> str:
        return self.console.input("[bold]You ›[/bold] ")
