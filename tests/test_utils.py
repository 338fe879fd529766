"""
Tests for the utils module of the DataContract SDK.
"""
import pytest

from datacontract_sdk.utils import encode_bytes32_string, decode_bytes32_string, to_hex


def test_encode_bytes32_string_pads_to_32_bytes():
    encoded = encode_bytes32_string("OWNER_001")
    assert len(encoded) == 32
    assert encoded.startswith(b"OWNER_001")
    assert encoded[9:] == b"\x00" * 23


def test_encode_bytes32_string_max_length():
    label = "A" * 31
    assert encode_bytes32_string(label)[:31] == label.encode()

    with pytest.raises(ValueError, match="less than 32 bytes"):
        encode_bytes32_string("A" * 32)


def test_encode_bytes32_string_counts_utf8_bytes():
    # 16 two-byte characters are 32 bytes
    with pytest.raises(ValueError):
        encode_bytes32_string("é" * 16)


def test_encode_bytes32_string_type_error():
    with pytest.raises(TypeError):
        encode_bytes32_string(b"OWNER_001")


@pytest.mark.parametrize("label", ["OWNER_001", "ACTION_REF_123", "", "Ünïcode"])
def test_decode_bytes32_string(label):
    encoded = encode_bytes32_string(label)
    assert decode_bytes32_string(encoded) == label
    assert decode_bytes32_string("0x" + encoded.hex()) == label
    assert decode_bytes32_string(encoded.hex()) == label


def test_decode_bytes32_string_requires_null_terminator():
    with pytest.raises(ValueError, match="no null terminator"):
        decode_bytes32_string(b"A" * 32)


def test_decode_bytes32_string_requires_32_bytes():
    with pytest.raises(ValueError, match="not 32 bytes"):
        decode_bytes32_string(b"short\x00")


def test_decode_bytes32_string_stops_at_first_zero():
    value = b"AB\x00CD".ljust(32, b"\x00")
    assert decode_bytes32_string(value) == "AB"


@pytest.mark.parametrize("value, expected", [
    (bytes.fromhex("abcd"), "0xabcd"),
    ("abcd", "0xabcd"),
    ("0xABCD", "0xabcd"),
    ("0XAbCd", "0xabcd"),
])
def test_to_hex(value, expected):
    assert to_hex(value) == expected
