"""
Buffer Operations

Validation, concatenation and comparison of byte sequences, plus the
input guard applied to externally supplied digest callables.

A byte sequence is ``bytes``, ``bytearray`` or a flat, contiguous
``memoryview`` of unsigned bytes.
"""

import functools
from typing import Any, Callable

from ..errors import TypeValidationError


HashFunction = Callable[[bytes], bytes]


def is_bytes(value: Any) -> bool:
    """Check whether ``value`` is a byte sequence."""
    if isinstance(value, (bytes, bytearray)):
        return True
    return (isinstance(value, memoryview) and value.format == 'B'
            and value.ndim == 1 and value.c_contiguous)


def assert_bytes(value: Any) -> None:
    """
    Require ``value`` to be a byte sequence.

    Raises:
        TypeValidationError: If it is not
    """
    if not is_bytes(value):
        raise TypeValidationError(f"Expected bytes-like input, got {type(value).__name__}")


def concat_bytes(*buffers):
    """
    Concatenate byte sequences into one new ``bytes`` object.

    A single argument is returned as-is, without copying.

    Example:
        >>> concat_bytes(b"\\x01", b"\\x02\\x03")
        b'\\x01\\x02\\x03'
    """
    for buf in buffers:
        if not is_bytes(buf):
            raise TypeValidationError(
                f"Expected a list of bytes-like objects, got {type(buf).__name__}"
            )
    if len(buffers) == 1:
        return buffers[0]
    return b''.join(buffers)


def equals_bytes(a, b) -> bool:
    """
    Compare two byte sequences.

    Not constant-time; do not use on secrets.
    """
    if len(a) != len(b):
        return False
    for x, y in zip(a, b):
        if x != y:
            return False
    return True


def wrap_hash(hash_fn: HashFunction) -> HashFunction:
    """
    Guard a digest callable so it only ever receives byte sequences.

    Args:
        hash_fn: Callable taking a message and returning its digest

    Returns:
        Wrapper that raises TypeValidationError on non-bytes input and
        otherwise forwards to ``hash_fn``
    """
    @functools.wraps(hash_fn)
    def wrapped(msg):
        assert_bytes(msg)
        return hash_fn(msg)

    return wrapped
