"""
Digest Adapters

Input-guarded digest callables. SHA-2, SHA-3 and SHAKE come from
``cryptography``; the pre-standard Keccak padding (Ethereum-style
``keccak_256``) is not in ``cryptography`` and comes from ``pycryptodome``.
This module only adapts them to the ``bytes -> bytes`` shape and validates
input.

Example:
    >>> digest_hex(sha256, 'abc')
    'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'
"""

from Crypto.Hash import keccak
from cryptography.hazmat.primitives import hashes

from ..core_bytes.buffers import HashFunction, assert_bytes, wrap_hash
from ..core_bytes.hex_codec import Input, bytes_to_hex, to_bytes


SHAKE128_DEFAULT_LENGTH = 16
SHAKE256_DEFAULT_LENGTH = 32


def _finalize(algorithm: hashes.HashAlgorithm, msg) -> bytes:
    h = hashes.Hash(algorithm)
    h.update(msg)
    return h.finalize()


def digest_function(algorithm: hashes.HashAlgorithm) -> HashFunction:
    """
    Build a guarded ``bytes -> bytes`` digest for a fixed-size algorithm.

    Args:
        algorithm: A ``cryptography`` hash algorithm instance

    Returns:
        Callable that rejects non-bytes input with TypeValidationError
    """
    def digest(msg):
        return _finalize(algorithm, msg)

    digest.__name__ = algorithm.name.replace('-', '_')
    digest.__doc__ = f"{algorithm.name.upper()} digest ({algorithm.digest_size} bytes)."
    return wrap_hash(digest)


sha256 = digest_function(hashes.SHA256())
sha512 = digest_function(hashes.SHA512())
sha3_224 = digest_function(hashes.SHA3_224())
sha3_256 = digest_function(hashes.SHA3_256())
sha3_384 = digest_function(hashes.SHA3_384())
sha3_512 = digest_function(hashes.SHA3_512())


def keccak_function(digest_bits: int) -> HashFunction:
    """Build a guarded Keccak digest of ``digest_bits`` bits (224, 256, 384 or 512)."""
    def digest(msg):
        return keccak.new(digest_bits=digest_bits, data=msg).digest()

    digest.__name__ = f"keccak_{digest_bits}"
    digest.__doc__ = f"Keccak-{digest_bits} digest ({digest_bits // 8} bytes)."
    return wrap_hash(digest)


keccak_224 = keccak_function(224)
keccak_256 = keccak_function(256)
keccak_384 = keccak_function(384)
keccak_512 = keccak_function(512)


def _shake(algorithm_cls, msg, length: int) -> bytes:
    assert_bytes(msg)
    if length <= 0:
        raise ValueError("Output length must be positive")
    return _finalize(algorithm_cls(digest_size=length), msg)


def shake128(msg, length: int = SHAKE128_DEFAULT_LENGTH) -> bytes:
    """SHAKE128 extendable output of ``length`` bytes."""
    return _shake(hashes.SHAKE128, msg, length)


def shake256(msg, length: int = SHAKE256_DEFAULT_LENGTH) -> bytes:
    """SHAKE256 extendable output of ``length`` bytes."""
    return _shake(hashes.SHAKE256, msg, length)


def digest_hex(hash_fn: HashFunction, data: Input) -> str:
    """Hash ``data`` (str is UTF-8 encoded) and return the hex digest."""
    return bytes_to_hex(hash_fn(to_bytes(data)))
