"""Model selection policy.

Maps a requested capability and budget to a concrete model identifier for
each provider. This is a pure lookup; unknown combinations fall back to the
provider's default model instead of failing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .constants import (
    GEMINI_BASIC_MODEL,
    GEMINI_FREE_MODEL,
    GEMINI_REASONING_MODEL,
    OPENROUTER_BASIC_MODEL,
    OPENROUTER_FREE_MODEL,
    OPENROUTER_REASONING_MODEL,
)


class Provider(str, Enum):
    GEMINI = "gemini"
    OPENROUTER = "openrouter"


class Capability(str, Enum):
    """How much reasoning a request needs."""

    BASIC = "basic"
    REASONING = "reasoning"


class Budget(str, Enum):
    """Spending class for model invocations."""

    FREE = "free"
    PAID = "paid"


@dataclass(frozen=True)
class ModelInvocationConfig:
    """Per-call model request, resolved to a model id by ``select_model``."""

    capability: Capability = Capability.BASIC
    budget: Budget = Budget.PAID

    def __post_init__(self) -> None:
        # Accept plain strings from settings and callers
        object.__setattr__(self, "capability", Capability(self.capability))
        object.__setattr__(self, "budget", Budget(self.budget))


# A free budget pins one economical model regardless of capability
_FREE_MODELS: dict[Provider, str] = {
    Provider.GEMINI: GEMINI_FREE_MODEL,
    Provider.OPENROUTER: OPENROUTER_FREE_MODEL,
}

_PAID_MODELS: dict[Provider, dict[Capability, str]] = {
    Provider.GEMINI: {
        Capability.BASIC: GEMINI_BASIC_MODEL,
        Capability.REASONING: GEMINI_REASONING_MODEL,
    },
    Provider.OPENROUTER: {
        Capability.BASIC: OPENROUTER_BASIC_MODEL,
        Capability.REASONING: OPENROUTER_REASONING_MODEL,
    },
}

DEFAULT_MODELS: dict[Provider, str] = {
    Provider.GEMINI: GEMINI_BASIC_MODEL,
    Provider.OPENROUTER: OPENROUTER_BASIC_MODEL,
}


def select_model(
    provider: Provider | str, config: ModelInvocationConfig | None = None
) -> str:
    """Return the model identifier for ``provider`` under ``config``."""
    config = config or ModelInvocationConfig()
    try:
        provider = Provider(provider)
    except ValueError:
        return DEFAULT_MODELS[Provider.OPENROUTER]

    if config.budget is Budget.FREE:
        return _FREE_MODELS.get(provider, DEFAULT_MODELS[provider])
    return _PAID_MODELS.get(provider, {}).get(
        config.capability, DEFAULT_MODELS[provider]
    )
