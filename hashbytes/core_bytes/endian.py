"""
Byte Order & Typed Views

Host byte-order detection plus zero-copy reinterpretation of byte buffers.

Features:
- Import-time little-endian check (big-endian hosts are rejected)
- 8-bit and 32-bit memoryview casts sharing the caller's storage
- 32-bit circular right rotation

Views returned here borrow the buffer they were built from; release the
owner, never the view on its own.
"""

import struct
from array import array
from typing import Union

from ..errors import PlatformUnsupportedError, TypeValidationError


# Mask for 32-bit arithmetic
MASK_32 = 0xFFFFFFFF

# Native 4-byte unsigned format code ('I' on every mainstream ABI)
WORD_FORMAT = 'I' if struct.calcsize('I') == 4 else 'L'

ENDIAN_PROBE_WORD = 0x11223344

Buffer = Union[bytes, bytearray, memoryview]


def _probe_first_byte() -> int:
    """Store the probe word natively and return its lowest-addressed byte."""
    return array(WORD_FORMAT, [ENDIAN_PROBE_WORD]).tobytes()[0]


def check_little_endian(first_byte: int = None) -> bool:
    """
    Verify the host stores words little-endian.

    Args:
        first_byte: Observed first byte of the probe word; probed from the
            host when omitted

    Returns:
        True when the host is little-endian

    Raises:
        PlatformUnsupportedError: On a big-endian host
    """
    if first_byte is None:
        first_byte = _probe_first_byte()
    if first_byte != ENDIAN_PROBE_WORD & 0xFF:
        raise PlatformUnsupportedError("Non little-endian hardware is not supported")
    return True


# Fails the import on big-endian hosts, before anything else can run
IS_LE = check_little_endian()


def u8(buf: Buffer) -> memoryview:
    """
    Byte view over the same memory as ``buf``.

    Raises:
        TypeValidationError: If ``buf`` is not a contiguous buffer
    """
    try:
        view = memoryview(buf)
    except TypeError:
        raise TypeValidationError(f"Expected a buffer, got {type(buf).__name__}")
    if not view.c_contiguous:
        raise TypeValidationError("Expected a contiguous buffer")
    return view.cast('B')


def u32(buf: Buffer) -> memoryview:
    """
    32-bit word view over ``buf``.

    Covers ``len(buf) // 4`` words; trailing bytes that do not fill a word
    are left out of the view.
    """
    view = u8(buf)
    words = len(view) // 4
    return view[:words * 4].cast(WORD_FORMAT)


def create_view(buf: Buffer) -> memoryview:
    """Flat byte view for explicit-endianness reads via ``struct.unpack_from``."""
    return u8(buf)


def rotr(word: int, shift: int) -> int:
    """Right rotate a 32-bit integer by ``shift`` bits (taken mod 32)."""
    shift %= 32
    word &= MASK_32
    return ((word << (32 - shift)) | (word >> shift)) & MASK_32
