# Integration Module
"""
Consumers of the byte and runtime layers:
- Guarded digest callables over ``cryptography`` and ``pycryptodome`` - digests.py
- Cooperative batch hashing and salted digests - batch.py
"""

from .digests import (
    digest_function,
    digest_hex,
    keccak_function,
    keccak_224,
    keccak_256,
    keccak_384,
    keccak_512,
    sha256,
    sha512,
    sha3_224,
    sha3_256,
    sha3_384,
    sha3_512,
    shake128,
    shake256,
)

from .batch import hash_batch, salted_digest

__all__ = [
    'digest_function',
    'digest_hex',
    'keccak_function',
    'keccak_224',
    'keccak_256',
    'keccak_384',
    'keccak_512',
    'sha256',
    'sha512',
    'sha3_224',
    'sha3_256',
    'sha3_384',
    'sha3_512',
    'shake128',
    'shake256',
    'hash_batch',
    'salted_digest',
]
