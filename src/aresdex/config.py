r"""Default configurations for the exchange client.

Durations are expressed in seconds.
"""

from __future__ import annotations

__all__ = [
    "API_V3_PREFIX",
    "API_V4_PREFIX",
    "DEFAULT_BACKOFF_FACTOR",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_MAX_DELAY",
    "DEFAULT_MIN_DELAY",
    "DEFAULT_NETWORK_ID",
    "DEFAULT_TIMEOUT",
    "SUCCESS_STATUS_CODES",
]

# Default timeout in seconds for each individual HTTP attempt
DEFAULT_TIMEOUT = 10.0

# Mainnet
DEFAULT_NETWORK_ID = 1

# Default exponential policy
# Wait time = min_delay * (factor ** attempt), capped at max_delay
# With the defaults: 1st retry waits 1s, 2nd waits 2s, 3rd waits 4s
DEFAULT_BACKOFF_FACTOR = 2.0
DEFAULT_MIN_DELAY = 1.0
DEFAULT_MAX_DELAY = 60.0

# Total attempts = max_attempts + 1 (initial attempt)
DEFAULT_MAX_ATTEMPTS = 3

# Version prefixes of the two API generations
API_V3_PREFIX = "v3"
API_V4_PREFIX = "v4"

# Every other status is a failure
SUCCESS_STATUS_CODES = (200, 201)
