"""
ABI codec for gateway requests and responses.

Wire layouts:
    request          abi.encode(uint8 kind, bytes32 node, string key)
    text response    abi.encode(string)
    data response    abi.encode(bytes)
    batch call       query((address,string[],bytes)[]) selector + arguments
    batch response   abi.encode(bool[] failures, bytes[] responses)
    item error       Error(string) selector + abi.encode(string)
"""
from typing import Any, NamedTuple, Optional

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError
from web3 import Web3

from config.settings import DEFAULT_GATEWAY_ERROR
from core.errors import RequestDecodeError
from core.lookup import LookupKind, LookupRequest

REQUEST_TYPES = ["uint8", "bytes32", "string"]

BATCH_QUERY_SIGNATURE = "query((address,string[],bytes)[])"
BATCH_QUERY_SELECTOR = bytes(Web3.keccak(text=BATCH_QUERY_SIGNATURE)[:4])
BATCH_QUERY_TYPES = ["(address,string[],bytes)[]"]
BATCH_RESULT_TYPES = ["bool[]", "bytes[]"]

ERROR_SIGNATURE = "Error(string)"
ERROR_SELECTOR = bytes(Web3.keccak(text=ERROR_SIGNATURE)[:4])  # 0x08c379a0

# Resolver view functions, one per lookup kind
TEXT_ABI = [
    {
        "inputs": [
            {"internalType": "bytes32", "name": "node", "type": "bytes32"},
            {"internalType": "string", "name": "key", "type": "string"}
        ],
        "name": "text",
        "outputs": [{"internalType": "string", "name": "value", "type": "string"}],
        "stateMutability": "view",
        "type": "function"
    }
]

DATA_ABI = [
    {
        "inputs": [
            {"internalType": "bytes32", "name": "node", "type": "bytes32"},
            {"internalType": "string", "name": "key", "type": "string"}
        ],
        "name": "data",
        "outputs": [{"internalType": "bytes", "name": "value", "type": "bytes"}],
        "stateMutability": "view",
        "type": "function"
    }
]

RESOLVER_ABI = TEXT_ABI + DATA_ABI


class BatchQuery(NamedTuple):
    sender: str
    urls: list[str]
    data: bytes


def decode_lookup_request(payload: bytes) -> LookupRequest:
    """
    Decode (uint8 kind, bytes32 node, string key).

    Raises:
        RequestDecodeError: payload is not a valid encoding of the tuple
        UnsupportedKindError: kind is not a known LookupKind
    """
    try:
        code, node, key = decode(REQUEST_TYPES, payload)
    except (DecodingError, ValueError, TypeError) as e:
        raise RequestDecodeError(f"Malformed lookup request: {e}") from e
    return LookupRequest(kind=LookupKind.from_code(code), node=node, key=key)


def encode_lookup_request(kind: LookupKind | int, node: bytes, key: str) -> bytes:
    """Encode a lookup request the way the on-chain resolver builds its callData"""
    code = kind.code if isinstance(kind, LookupKind) else kind
    return encode(REQUEST_TYPES, [code, node, key])


def encode_lookup_result(kind: LookupKind, value: Any) -> bytes:
    """Encode a resolved value as the 1-tuple the resolver callback decodes"""
    try:
        return encode([kind.result_type], [value])
    except EncodingError as e:
        raise ValueError(f"Cannot encode {kind.function_name} result: {e}") from e


def decode_lookup_result(kind: LookupKind, data: bytes) -> str | bytes:
    (value,) = decode([kind.result_type], data)
    return value


def decode_batch_call(payload: bytes) -> Optional[list[BatchQuery]]:
    """
    Decode a batch gateway query() call.
    Returns None if the payload is not such a call; never raises.
    """
    if len(payload) < 4 or payload[:4] != BATCH_QUERY_SELECTOR:
        return None
    try:
        (queries,) = decode(BATCH_QUERY_TYPES, payload[4:])
    except Exception:
        return None
    return [BatchQuery(sender, list(urls), data) for sender, urls, data in queries]


def encode_batch_call(queries: list[BatchQuery]) -> bytes:
    """Encode a batch gateway query() call"""
    args = [(q.sender, list(q.urls), q.data) for q in queries]
    return BATCH_QUERY_SELECTOR + encode(BATCH_QUERY_TYPES, [args])


def encode_batch_result(failures: list[bool], responses: list[bytes]) -> bytes:
    """Encode the (bool[] failures, bytes[] responses) result of query()"""
    return encode(BATCH_RESULT_TYPES, [failures, responses])


def decode_batch_result(data: bytes) -> tuple[list[bool], list[bytes]]:
    failures, responses = decode(BATCH_RESULT_TYPES, data)
    return list(failures), list(responses)


def encode_error(error: BaseException | str | None) -> bytes:
    """
    Encode a failure as Error(string).
    Falls back to "Gateway error" when the failure carries no message.
    """
    message = str(error) if error is not None else ""
    if not message:
        message = DEFAULT_GATEWAY_ERROR
    return ERROR_SELECTOR + encode(["string"], [message])


def decode_error(data: bytes) -> Optional[str]:
    """Decode an Error(string) payload, or None if data is something else"""
    if data[:4] != ERROR_SELECTOR:
        return None
    (message,) = decode(["string"], data[4:])
    return message
