"""Adapter for the Gemini ``generateContent`` endpoint."""

from __future__ import annotations

import logging

import httpx

from netwise.config import Settings
from netwise.exceptions import CompletionServiceError
from netwise.models import GenerateContentRequest, finish_reason, reply_text

logger = logging.getLogger(__name__)


class CompletionService:
    """Forward one prompt to Gemini and extract the answer text."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self._client = client
        self._settings = settings

    @property
    def endpoint(self) -> str:
        base_url = self._settings.gemini_base_url.rstrip("/")
        return f"{base_url}/models/{self._settings.gemini_model}:generateContent"

    async def complete(self, prompt: str) -> str | None:
        """Return the first candidate's text, or ``None`` when there is none.

        Each call is stateless: the request carries the system instruction
        and ``prompt`` as its only turn.
        """

        body = GenerateContentRequest.single_turn(
            self._settings.system_instruction, prompt
        )
        request_options = {}
        if self._settings.gemini_timeout is not None:
            request_options["timeout"] = self._settings.gemini_timeout

        try:
            response = await self._client.post(
                self.endpoint,
                params={"key": self._settings.gemini_api_key},
                headers={"Content-Type": "application/json"},
                json=body.model_dump(exclude_none=True),
                **request_options,
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("Completion request timed out", exc_info=exc)
            raise CompletionServiceError("Completion service timed out") from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Completion request failed",
                extra={
                    "status_code": exc.response.status_code,
                    "response_text": exc.response.text,
                },
            )
            raise CompletionServiceError(
                "Completion service returned an error",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.exception("Unexpected completion HTTP error")
            raise CompletionServiceError("Completion service request failed") from exc

        try:
            data = response.json()
        except ValueError as exc:
            logger.error(
                "Malformed completion response",
                extra={"response_text": response.text},
            )
            raise CompletionServiceError("Invalid completion response payload") from exc

        reply = reply_text(data)
        if reply is None:
            logger.info(
                "Completion returned no text",
                extra={"finish_reason": finish_reason(data)},
            )
        return reply
