"""
Lookup kinds served by the gateway
"""
from dataclasses import dataclass
from enum import Enum

from web3 import Web3

from core.errors import UnsupportedKindError


class LookupKind(Enum):
    """
    Record kinds understood by the resolver.

    Each member carries the resolver view function that answers it and
    the ABI type of that function's single return value.
    """
    TEXT = (0, "text", "string")
    DATA = (1, "data", "bytes")

    def __init__(self, code: int, function_name: str, result_type: str):
        self.code = code
        self.function_name = function_name
        self.result_type = result_type

    @classmethod
    def from_code(cls, code: int) -> "LookupKind":
        """Map the wire value to a kind, raising UnsupportedKindError for anything else"""
        for kind in cls:
            if kind.code == code:
                return kind
        raise UnsupportedKindError(code)


@dataclass(frozen=True)
class LookupRequest:
    """A decoded single lookup: which record (key) of which node"""
    kind: LookupKind
    node: bytes  # 32-byte namehash
    key: str

    def __post_init__(self):
        if len(self.node) != 32:
            raise ValueError(f"node must be 32 bytes, got {len(self.node)}")


def namehash(name: str) -> bytes:
    """
    ENS namehash of a dotted name.
    Labels are only lowercased here, not fully ENSIP-15 normalized.
    """
    node = b"\x00" * 32
    if not name:
        return node
    for label in reversed(name.lower().split(".")):
        node = bytes(Web3.keccak(node + Web3.keccak(text=label)))
    return node
