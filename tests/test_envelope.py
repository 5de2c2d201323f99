import pytest

from core.envelope import decode_payload, parse_request_data
from core.errors import RequestDecodeError


@pytest.mark.parametrize(
    "body, expected",
    [
        ('{"data":"0x1234"}', "0x1234"),
        ('{"data": "0x", "sender": "0xabc"}', "0x"),
        ("0x1234", "0x1234"),
        ("0xnot-hex", "0xnot-hex"),
        ('{"data": 1234}', None),
        ('{"data": "1234"}', None),
        ('"0x1234"', None),
        ('["0x1234"]', None),
        ("{}", None),
        ("", None),
        ("{not json", None),
        ("1234", None),
    ],
)
def test_parse_request_data(body, expected):
    assert parse_request_data(body) == expected


def test_decode_payload():
    assert decode_payload("0x1234") == b"\x12\x34"
    assert decode_payload("0x") == b""
    assert decode_payload("0xABcd") == b"\xab\xcd"


@pytest.mark.parametrize("hex_data", ["0x123", "0xzz", "0x1g"])
def test_decode_payload_rejects_invalid_hex(hex_data):
    with pytest.raises(RequestDecodeError):
        decode_payload(hex_data)
