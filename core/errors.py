"""
Exceptions raised while serving offchain lookups.

Each gateway error carries the HTTP status and the public message returned
to the caller when it surfaces at the top level. Inside a batch the same
errors are encoded into the failing item's response slot instead.
"""
from typing import Optional


class GatewayError(Exception):
    """Base exception for gateway failures (500, "Internal server error")."""

    status_code: int = 500
    public_message: str = "Internal server error"


class MissingPayloadError(GatewayError):
    """Raised when the request body carries no 0x-prefixed payload."""

    status_code = 400
    public_message = "Missing request data"

    def __init__(self, message: str = "Missing request data"):
        super().__init__(message)


class RequestDecodeError(GatewayError):
    """Raised when the payload does not match the expected ABI schema."""

    status_code = 400
    public_message = "Invalid request data"


class UnsupportedKindError(GatewayError):
    """Raised when a well-formed request names an unknown lookup kind."""

    status_code = 400

    def __init__(self, kind: int):
        self.kind = kind
        super().__init__(f"Unsupported request kind: {kind}")

    @property
    def public_message(self) -> str:
        return str(self)


class ChainReadError(GatewayError):
    """Raised when the resolver contract call reverts or the RPC transport fails."""

    def __init__(self, message: str, function_name: Optional[str] = None):
        self.function_name = function_name
        super().__init__(message)


class ConfigurationError(Exception):
    """Raised at startup when required configuration is missing or invalid."""
    pass
