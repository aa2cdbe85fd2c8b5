"""Terminal chat client for the relay."""

from netwise.client.connection import ChatClient, ConnectionState
from netwise.client.render import ConsoleRenderer

__all__ = ["ChatClient", "ConnectionState", "ConsoleRenderer"]
