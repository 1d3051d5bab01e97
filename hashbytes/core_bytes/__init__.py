# Core Bytes Module
"""
Byte-level utilities including:
- Host byte-order check and typed views - endian.py
- Hex encoding/decoding - hex_codec.py
- Concatenation, comparison and digest input guards - buffers.py
"""

from .endian import (
    IS_LE,
    MASK_32,
    check_little_endian,
    create_view,
    rotr,
    u8,
    u32,
)

from .buffers import (
    HashFunction,
    assert_bytes,
    concat_bytes,
    equals_bytes,
    is_bytes,
    wrap_hash,
)

from .hex_codec import (
    Input,
    bytes_to_hex,
    hex_to_bytes,
    to_bytes,
    utf8_to_bytes,
)

__all__ = [
    'IS_LE',
    'MASK_32',
    'check_little_endian',
    'create_view',
    'rotr',
    'u8',
    'u32',
    'HashFunction',
    'assert_bytes',
    'concat_bytes',
    'equals_bytes',
    'is_bytes',
    'wrap_hash',
    'Input',
    'bytes_to_hex',
    'hex_to_bytes',
    'to_bytes',
    'utf8_to_bytes',
]
