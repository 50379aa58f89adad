"""
Project-wide constants for newsgen
"""  # noqa: D200, D212, D415

# ==============================================================================
# Retry Configuration
# ==============================================================================

# Attempt budgets observed per provider
GEMINI_MAX_ATTEMPTS = 1
OPENROUTER_MAX_ATTEMPTS = 3

RETRY_DELAY = 0.0  # seconds, fixed wait between parsing retries

# ==============================================================================
# API and Network Configuration
# ==============================================================================

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_APP_TITLE = "Fake News"
NETWORK_TIMEOUT = 60.0  # seconds

# Minimum spacing between requests for throttled sources
RATE_LIMIT_MIN_INTERVAL = 1.2  # seconds

# ==============================================================================
# Model Identifiers
# ==============================================================================

GEMINI_FREE_MODEL = "gemini-2.0-flash-lite"
GEMINI_BASIC_MODEL = "gemini-1.5-flash"
GEMINI_REASONING_MODEL = "gemini-1.5-pro"

OPENROUTER_FREE_MODEL = "deepseek/deepseek-chat:free"
OPENROUTER_BASIC_MODEL = "deepseek/deepseek-chat"
OPENROUTER_REASONING_MODEL = "deepseek/deepseek-r1"

# ==============================================================================
# Telemetry Scopes
# ==============================================================================

T_GENERATE = "generator.generate_content"
T_ATTEMPT = "generator.attempt"
T_RATE_LIMIT = "rate_limit"
