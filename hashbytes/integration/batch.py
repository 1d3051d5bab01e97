"""
Batch Hashing

Hashes many messages inside a cooperative loop so the event loop stays
responsive, and builds salted digests from the secure random source.
"""

import asyncio
from typing import Iterable, List, Optional, Tuple

from ..core_bytes.buffers import HashFunction, assert_bytes, concat_bytes, wrap_hash
from ..core_bytes.hex_codec import Input, to_bytes
from ..runtime.async_loop import async_loop
from ..runtime.capabilities import Capabilities
from ..runtime.secure_random import random_bytes


DEFAULT_SALT_LENGTH = 16


async def hash_batch(
    messages: Iterable[Input],
    hash_fn: HashFunction,
    *,
    tick: Optional[float] = None,
    capabilities: Optional[Capabilities] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> List[bytes]:
    """
    Hash each message, yielding to the event loop every ``tick`` seconds.

    Args:
        messages: Byte sequences or strings (UTF-8 encoded)
        hash_fn: Digest callable; guarded against non-bytes input
        tick: Yield interval in seconds (default: capabilities.tick)
        capabilities: Host capabilities (default: process-wide detection)
        cancel_event: Stops the batch when set

    Returns:
        Digests in the same order as ``messages``

    Raises:
        TypeValidationError: If a message is neither bytes nor str
        LoopCancelledError: If ``cancel_event`` is set mid-batch
    """
    items = [to_bytes(m) for m in messages]
    guarded = wrap_hash(hash_fn)
    digests: List[bytes] = [b''] * len(items)

    def step(i: int) -> None:
        digests[i] = guarded(items[i])

    await async_loop(len(items), tick, step,
                     capabilities=capabilities, cancel_event=cancel_event)
    return digests


def salted_digest(
    data: Input,
    hash_fn: HashFunction,
    *,
    salt: Optional[bytes] = None,
    salt_length: int = DEFAULT_SALT_LENGTH,
    capabilities: Optional[Capabilities] = None,
) -> Tuple[bytes, bytes]:
    """
    Hash ``salt || data``, drawing a fresh salt when none is given.

    Returns:
        (salt, digest)
    """
    if salt is None:
        salt = random_bytes(salt_length, capabilities=capabilities)
    else:
        assert_bytes(salt)
    digest = wrap_hash(hash_fn)(concat_bytes(salt, to_bytes(data)))
    return salt, digest
