"""Pydantic models shared across application layers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationError


class PromptMessage(BaseModel):
    """Incoming WebSocket envelope: ``{"type": "prompt", "prompt": "..."}``."""

    type: str = "prompt"
    prompt: str = Field(strict=True, description="User supplied question.")


def parse_prompt(raw: str) -> str:
    """Extract the prompt from an inbound frame.

    Anything that is not a JSON object with a string ``prompt`` is treated as
    the prompt itself, byte for byte.
    """

    try:
        return PromptMessage.model_validate_json(raw).prompt
    except ValidationError:
        return raw


# Outbound request body for ``models/{model}:generateContent``.


class Part(BaseModel):
    text: str


class Content(BaseModel):
    role: str | None = None
    parts: list[Part]


class GenerateContentRequest(BaseModel):
    system_instruction: Content
    contents: list[Content]

    @classmethod
    def single_turn(cls, system_instruction: str, prompt: str) -> GenerateContentRequest:
        """Build a request with the system instruction and one user turn."""

        return cls(
            system_instruction=Content(parts=[Part(text=system_instruction)]),
            contents=[Content(role="user", parts=[Part(text=prompt)])],
        )


# Response body lookups. Only the path to the answer is inspected; any
# missing or mistyped link on it yields ``None``.


def _field(node: Any, key: str) -> Any:
    return node.get(key) if isinstance(node, dict) else None


def _first(node: Any) -> Any:
    return node[0] if isinstance(node, list) and node else None


def reply_text(body: Any) -> str | None:
    """Return ``candidates[0].content.parts[0].text`` or ``None``."""

    candidate = _first(_field(body, "candidates"))
    part = _first(_field(_field(candidate, "content"), "parts"))
    text = _field(part, "text")
    if isinstance(text, str) and text:
        return text
    return None


def finish_reason(body: Any) -> str | None:
    """Return the first candidate's ``finishReason``, if any."""

    reason = _field(_first(_field(body, "candidates")), "finishReason")
    return reason if isinstance(reason, str) else None
