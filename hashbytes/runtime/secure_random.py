"""Secure random byte generation backed by the selected host RandomSource."""

from typing import Optional

from ..config import DEFAULT_RANDOM_LENGTH
from ..errors import TypeValidationError
from .capabilities import Capabilities, get_capabilities


def random_bytes(length: int = DEFAULT_RANDOM_LENGTH, *,
                 capabilities: Optional[Capabilities] = None) -> bytes:
    """
    Generate cryptographically secure random bytes.

    Args:
        length: Number of bytes (default 32)
        capabilities: Host capabilities (default: process-wide detection)

    Returns:
        Newly allocated bytes of exactly ``length``

    Raises:
        TypeValidationError: If ``length`` is not an int
        ValueError: If ``length`` is negative
        PlatformUnsupportedError: If the host has no secure random source
    """
    if isinstance(length, bool) or not isinstance(length, int):
        raise TypeValidationError(f"Length must be an int, got {type(length).__name__}")
    if length < 0:
        raise ValueError("Length must be non-negative")

    caps = capabilities if capabilities is not None else get_capabilities()
    return caps.get_random_bytes(length)
