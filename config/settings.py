"""
Global settings for the offchain resolver gateway
"""
from typing import Final

# Default HTTP listener
DEFAULT_PORT: Final[int] = 8787
DEFAULT_HOST: Final[str] = "0.0.0.0"

# Paths accepting CCIP-Read POST requests
GATEWAY_PATHS: Final[tuple[str, ...]] = ("/", "/agent-delegations")

# Per-request timeout of the JSON-RPC provider, in seconds
PROVIDER_TIMEOUT: Final[float] = 15.0

# Endpoint considered unhealthy after this many consecutive failures...
MAX_ENDPOINT_FAILURES: Final[int] = 3

# ...for this long, in seconds
ENDPOINT_COOLDOWN_SECONDS: Final[float] = 60.0

# Logging level (overridden by LOG_LEVEL in the environment)
LOG_LEVEL: Final[str] = "INFO"

# Message carried by an encoded Error(string) when the failure has none
DEFAULT_GATEWAY_ERROR: Final[str] = "Gateway error"

# Env files read at startup, first one wins
ENV_FILES: Final[tuple[str, ...]] = (".env.local", ".env")

# aiohttp access log line: client, request line, status, size, duration
ACCESS_LOG_FORMAT: Final[str] = '%a "%r" %s %b %Tfs'
