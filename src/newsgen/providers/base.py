"""Model invocation protocol.

An invoker sends one prompt to one model and returns the raw reply text.
It owns the transport (SDK, HTTP client, timeouts); parsing and retries
live above it in ``StructuredGenerator``.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ModelInvoker(Protocol):
    """Capability to invoke a generative model."""

    async def invoke(self, model_id: str, prompt: str) -> str:
        """Return the model's reply to ``prompt``.

        Implementations must return non-empty text, raise
        ``EmptyResponseError`` when the model produced none, and raise
        ``TransportError`` for any network or provider failure.
        """
        ...
