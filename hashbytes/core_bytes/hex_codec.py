"""
Hex Codec

Conversion between byte sequences and lowercase hex strings, plus the
UTF-8 coercion used for string input to digest functions.
"""

from typing import Union

from ..errors import TypeValidationError, FormatError
from .buffers import is_bytes, assert_bytes


HEX_PREFIX = "0x"
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

Input = Union[bytes, bytearray, memoryview, str]


def bytes_to_hex(data) -> str:
    """
    Encode a byte sequence as lowercase hex.

    Example:
        >>> bytes_to_hex(bytes([0xde, 0xad, 0xbe, 0xef]))
        'deadbeef'
    """
    assert_bytes(data)
    return data.hex()


def hex_to_bytes(hex_str: str) -> bytes:
    """
    Decode a hex string into bytes.

    An optional ``0x`` prefix is stripped first. Upper- and lowercase
    digits are both accepted.

    Args:
        hex_str: Hex-encoded string

    Returns:
        Decoded bytes, one per digit pair

    Raises:
        TypeValidationError: If ``hex_str`` is not a str
        FormatError: On odd length or a pair that is not two hex digits

    Example:
        >>> hex_to_bytes('0xdeadbeef')
        b'\\xde\\xad\\xbe\\xef'
    """
    if not isinstance(hex_str, str):
        raise TypeValidationError(f"hex_to_bytes: expected string, got {type(hex_str).__name__}")

    if hex_str.startswith(HEX_PREFIX):
        hex_str = hex_str[len(HEX_PREFIX):]

    if len(hex_str) % 2:
        raise FormatError("hex_to_bytes: received invalid unpadded hex")

    out = bytearray(len(hex_str) // 2)
    for i in range(len(out)):
        pair = hex_str[2 * i:2 * i + 2]
        # int(..., 16) alone would also accept '+f', ' f' and '_f'
        if pair[0] not in _HEX_DIGITS or pair[1] not in _HEX_DIGITS:
            raise FormatError(f"hex_to_bytes: invalid byte sequence {pair!r} at offset {2 * i}")
        out[i] = int(pair, 16)
    return bytes(out)


def utf8_to_bytes(text: str) -> bytes:
    """UTF-8 encode a string."""
    if not isinstance(text, str):
        raise TypeValidationError(f"utf8_to_bytes expected string, got {type(text).__name__}")
    return text.encode('utf-8')


def to_bytes(data: Input):
    """
    Normalize digest input: strings are UTF-8 encoded, byte sequences pass
    through unchanged.
    """
    if isinstance(data, str):
        data = utf8_to_bytes(data)
    if not is_bytes(data):
        raise TypeValidationError(f"Expected input type is bytes or str (got {type(data).__name__})")
    return data
