"""
Exception types raised by hashbytes.

Every error derives from HashbytesError and from the builtin it refines,
so callers may catch either ``TypeError`` / ``ValueError`` / ``RuntimeError``
or the library-specific class.
"""


class HashbytesError(Exception):
    """Base class for all hashbytes errors."""
    pass


class TypeValidationError(HashbytesError, TypeError):
    """Raised when an argument is not a byte sequence (or not a str where one is required)."""
    pass


class FormatError(HashbytesError, ValueError):
    """Raised when a hex string is malformed."""
    pass


class PlatformUnsupportedError(HashbytesError, RuntimeError):
    """Raised on a big-endian host or when no secure random source exists."""
    pass


class LoopCancelledError(HashbytesError):
    """Raised by the cooperative loop when its cancel event is set."""

    def __init__(self, index: int):
        super().__init__(f"Loop cancelled before iteration {index}")
        self.index = index
