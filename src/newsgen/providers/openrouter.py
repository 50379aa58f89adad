"""OpenRouter model invoker.

Talks to OpenRouter's OpenAI-compatible chat completions endpoint with
httpx. A single user message carries the prompt.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..constants import NETWORK_TIMEOUT, OPENROUTER_APP_TITLE, OPENROUTER_BASE_URL
from ..exceptions import EmptyResponseError, MissingKeyError, TransportError

log = logging.getLogger(__name__)


class OpenRouterInvoker:
    """Invokes models hosted on OpenRouter."""

    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str = OPENROUTER_BASE_URL,
        app_title: str = OPENROUTER_APP_TITLE,
        timeout: float = NETWORK_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Create an invoker.

        Args:
            api_key: OpenRouter API key.
            base_url: API root; ``/chat/completions`` is appended.
            app_title: Sent as ``X-Title`` for OpenRouter's app attribution.
            timeout: Request timeout used when the client is created here.
            http_client: Optional shared client. Clients passed in are not
                closed by ``aclose()``.
        """
        if not api_key:
            raise MissingKeyError("OpenRouter API key is required")
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "X-Title": app_title,
        }
        self._url = f"{base_url.rstrip('/')}/chat/completions"
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def invoke(self, model_id: str, prompt: str) -> str:  # noqa: D102
        payload = {
            "model": model_id,
            "messages": [{"role": "user", "content": prompt}],
        }
        try:
            response = await self._client.post(
                self._url, json=payload, headers=self._headers
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"OpenRouter request failed for {model_id}: "
                f"{e.response.status_code} {e.response.reason_phrase}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"OpenRouter request failed for {model_id}: {e}") from e
        except ValueError as e:
            raise TransportError(
                f"OpenRouter returned a non-JSON body for {model_id}"
            ) from e

        text = _first_message_content(data)
        if not text:
            raise EmptyResponseError(f"Empty response from OpenRouter ({model_id})")

        log.debug("OpenRouter %s returned %d chars", model_id, len(text))
        return text

    async def aclose(self) -> None:
        """Close the HTTP client if this invoker created it."""
        if self._owns_client:
            await self._client.aclose()


def _first_message_content(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None
