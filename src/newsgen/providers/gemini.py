"""Gemini model invoker built on the google-genai SDK."""

from __future__ import annotations

import logging

from google import genai
from google.genai import errors

from ..exceptions import EmptyResponseError, MissingKeyError, TransportError

log = logging.getLogger(__name__)


class GeminiInvoker:
    """Invokes Gemini models through the SDK's async client."""

    def __init__(self, api_key: str | None = None, *, client: genai.Client | None = None):
        """Create an invoker from an API key or a pre-built SDK client."""
        if client is None:
            if not api_key:
                raise MissingKeyError("Gemini API key is required")
            client = genai.Client(api_key=api_key)
        self.client = client

    async def invoke(self, model_id: str, prompt: str) -> str:  # noqa: D102
        try:
            response = await self.client.aio.models.generate_content(
                model=model_id,
                contents=prompt,
            )
        except errors.APIError as e:
            raise TransportError(
                f"Gemini request failed for {model_id}: {e}",
                status_code=getattr(e, "code", None),
            ) from e
        except Exception as e:
            raise TransportError(f"Gemini request failed for {model_id}: {e}") from e

        text = response.text
        if not text:
            raise EmptyResponseError(f"Empty response from Gemini ({model_id})")

        log.debug("Gemini %s returned %d chars", model_id, len(text))
        return text
