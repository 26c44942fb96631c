# fluent-chain/src/fluent_chain/config.py
import os

# --- Retry defaults ---
# These feed RetryPolicy.from_env() and can be overridden per process.
RETRY_MAX_ATTEMPTS = int(os.getenv("FLUENT_RETRY_MAX_ATTEMPTS", "3"))
RETRY_BUDGET_SECS = float(os.getenv("FLUENT_RETRY_BUDGET_SECS", "5.0"))
RETRY_BACKOFF_SECS = float(os.getenv("FLUENT_RETRY_BACKOFF_SECS", "0.1"))
RETRY_BACKOFF_MULTIPLIER = float(os.getenv("FLUENT_RETRY_BACKOFF_MULTIPLIER", "1.5"))

# --- Logging ---
LOG_LEVEL = os.getenv("FLUENT_LOG_LEVEL", "WARNING").upper()

# --- Lineage labels ---
ROOT_CONTEXT = "?"
ELEMENT_CONTEXT_PREFIX = "we"
PLACEHOLDER_PREFIX = "r"
