"""
Extraction of the request payload from an inbound message body
"""
import json
from typing import Optional

from core.errors import RequestDecodeError

HEX_PREFIX = "0x"


def parse_request_data(body: str) -> Optional[str]:
    """
    Find the 0x-prefixed payload in a request body.

    Accepts either a JSON object {"data": "0x..."} or the raw hex string.
    Malformed JSON falls through to the raw-body check.

    Returns:
        The hex payload, or None if the body carries none
    """
    if not body:
        return None

    try:
        parsed = json.loads(body)
    except ValueError:
        parsed = None

    if isinstance(parsed, dict):
        data = parsed.get("data")
        if isinstance(data, str) and data.startswith(HEX_PREFIX):
            return data

    if body.startswith(HEX_PREFIX):
        return body
    return None


def decode_payload(hex_data: str) -> bytes:
    """Hex-decode a 0x-prefixed payload, raising RequestDecodeError on bad hex"""
    if hex_data.startswith(HEX_PREFIX):
        hex_data = hex_data[len(HEX_PREFIX):]
    try:
        return bytes.fromhex(hex_data.strip())
    except ValueError as e:
        raise RequestDecodeError(f"Request data is not valid hex: {e}") from e
