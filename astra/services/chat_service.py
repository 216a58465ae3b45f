"""Adapter for Groq's OpenAI-compatible chat completions."""

from __future__ import annotations

import logging

import httpx

from astra.config import Settings
from astra.exceptions import ChatServiceError
from astra.policy import DEFAULT_POLICY, PolicyDirective

logger = logging.getLogger(__name__)


class ChatService:
    """Wrapper around the upstream chat completions endpoint."""

    _path = "/chat/completions"

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: Settings,
        policy: PolicyDirective = DEFAULT_POLICY,
    ) -> None:
        self._client = client
        self._settings = settings
        self._policy = policy

    @property
    def endpoint(self) -> str:
        return self._settings.groq_base_url.rstrip("/") + self._path

    async def complete(self, message: str) -> str:
        """Return the raw candidate reply for ``message``.

        A single attempt is made; every failure surfaces as ChatServiceError.
        """

        payload = {
            "model": self._settings.chat_model,
            "messages": [
                {"role": "system", "content": self._policy.system_prompt},
                {"role": "user", "content": message},
            ],
            "temperature": self._settings.chat_temperature,
            "max_tokens": self._settings.chat_max_tokens,
        }

        headers = {
            "Authorization": f"Bearer {self._settings.groq_api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = await self._client.post(
                self.endpoint,
                headers=headers,
                json=payload,
                timeout=self._settings.chat_timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("Chat completion timed out", exc_info=exc)
            raise ChatServiceError("Chat service timed out") from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Chat completion failed",
                extra={
                    "status_code": exc.response.status_code,
                    "response_text": exc.response.text,
                },
            )
            raise ChatServiceError(
                "Chat service returned an error",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.exception("Unexpected chat HTTP error")
            raise ChatServiceError("Chat service request failed") from exc

        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Chat response is not JSON", extra={"response_text": response.text})
            raise ChatServiceError("Invalid chat response payload") from exc

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            logger.error("Malformed chat response", extra={"raw_response": data})
            raise ChatServiceError("Invalid chat response payload") from exc

        if not isinstance(content, str):
            logger.error("Chat response has no text content", extra={"raw_response": data})
            raise ChatServiceError("Chat service returned no content")

        return content
