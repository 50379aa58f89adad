"""Model invocation adapters."""

from .base import ModelInvoker
from .gemini import GeminiInvoker
from .openrouter import OpenRouterInvoker

__all__ = ["GeminiInvoker", "ModelInvoker", "OpenRouterInvoker"]
