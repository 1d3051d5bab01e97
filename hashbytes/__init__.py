# hashbytes
"""
Byte, hex and host-capability utilities for hash libraries.

Modules:
- Byte order check, typed views, hex codec, buffer ops - core_bytes
- Capability detection, secure random, cooperative loop - runtime
- Guarded digests and batch hashing - integration

Importing the package fails with PlatformUnsupportedError on big-endian hosts.
"""

from .errors import (
    HashbytesError,
    TypeValidationError,
    FormatError,
    PlatformUnsupportedError,
    LoopCancelledError,
)
from .config import Settings, DEFAULT_RANDOM_LENGTH, DEFAULT_TICK
from .core_bytes import (
    IS_LE,
    u8,
    u32,
    create_view,
    rotr,
    bytes_to_hex,
    hex_to_bytes,
    utf8_to_bytes,
    to_bytes,
    is_bytes,
    assert_bytes,
    concat_bytes,
    equals_bytes,
    wrap_hash,
)
from .runtime import (
    Capabilities,
    detect_capabilities,
    get_capabilities,
    random_bytes,
    async_loop,
)

__version__ = "1.0.0"

__all__ = [
    'HashbytesError',
    'TypeValidationError',
    'FormatError',
    'PlatformUnsupportedError',
    'LoopCancelledError',
    'Settings',
    'DEFAULT_RANDOM_LENGTH',
    'DEFAULT_TICK',
    'IS_LE',
    'u8',
    'u32',
    'create_view',
    'rotr',
    'bytes_to_hex',
    'hex_to_bytes',
    'utf8_to_bytes',
    'to_bytes',
    'is_bytes',
    'assert_bytes',
    'concat_bytes',
    'equals_bytes',
    'wrap_hash',
    'Capabilities',
    'detect_capabilities',
    'get_capabilities',
    'random_bytes',
    'async_loop',
]
