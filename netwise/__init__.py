"""NetWise: a WebSocket relay to the Gemini completion API."""

__version__ = "0.1.0"
