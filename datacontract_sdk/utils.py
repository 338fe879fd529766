"""
Utility functions for the DataContract SDK.
"""
from typing import Union

BYTES32_LENGTH = 32


def encode_bytes32_string(text: str) -> bytes:
    """
    Encode a short label as a null-terminated bytes32 value.

    Args:
        text: Label to encode (at most 31 bytes once UTF-8 encoded)

    Returns:
        32 bytes, zero padded on the right

    Raises:
        TypeError: If text is not a string
        ValueError: If the encoded label does not leave room for a null terminator
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected str, got {type(text).__name__}")

    raw = text.encode("utf-8")
    if len(raw) > BYTES32_LENGTH - 1:
        raise ValueError(f"bytes32 string must be less than 32 bytes (got {len(raw)})")
    return raw.ljust(BYTES32_LENGTH, b"\x00")


def decode_bytes32_string(value: Union[bytes, str]) -> str:
    """
    Decode a bytes32 value produced by encode_bytes32_string.

    Args:
        value: 32 raw bytes or their 0x-prefixed hex form

    Returns:
        The label up to the first zero byte

    Raises:
        ValueError: If the value is not 32 bytes or lacks a null terminator
    """
    if isinstance(value, str):
        value = bytes.fromhex(value[2:] if value.startswith("0x") else value)

    data = bytes(value)
    if len(data) != BYTES32_LENGTH:
        raise ValueError(f"invalid bytes32 - not 32 bytes long (got {len(data)})")
    if data[-1] != 0:
        raise ValueError("invalid bytes32 string - no null terminator")

    return data[:data.index(0)].decode("utf-8")


def to_hex(value: Union[bytes, str]) -> str:
    """
    Normalise a hash or byte string to a 0x-prefixed lowercase hex string.

    Args:
        value: Raw bytes (including HexBytes) or a hex string with or without prefix

    Returns:
        0x-prefixed hex string
    """
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if value.startswith(("0x", "0X")):
        value = value[2:]
    return "0x" + value.lower()
