"""
Cooperative Async Loop

Runs a synchronous callback over a range of indices while periodically
handing control back to the asyncio event loop, so long bursts of hashing
do not starve other tasks.

Yield rule, checked after every callback:
- elapsed = clock() - checkpoint
- elapsed < 0 (wall clock moved backward): yield immediately
- elapsed >= tick: yield
After a yield the checkpoint moves forward by ``elapsed`` rather than to
the current time.
"""

import asyncio
import logging
from typing import Callable, Optional, Union

from ..config import check_interval
from ..errors import LoopCancelledError
from .capabilities import Capabilities, SchedulingCapabilities, get_scheduling


logger = logging.getLogger(__name__)


async def async_loop(
    iterations: int,
    tick: Optional[float],
    callback: Callable[[int], None],
    *,
    capabilities: Optional[Union[Capabilities, SchedulingCapabilities]] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> None:
    """
    Call ``callback(i)`` for ``i`` in ``range(iterations)``, yielding every
    ``tick`` seconds of wall-clock time.

    Args:
        iterations: Number of callback invocations
        tick: Seconds between yields; 0 yields after every call, None uses
            ``capabilities.tick``
        callback: Synchronous function receiving the current index
        capabilities: Scheduler, clock and default tick (default: process-wide
            scheduling, which never probes the random sources)
        cancel_event: Checked before each iteration; when set the loop stops

    Raises:
        ValueError: If ``iterations`` is negative or ``tick`` is negative or
            not finite
        LoopCancelledError: If ``cancel_event`` is set
    """
    caps = capabilities if capabilities is not None else get_scheduling()
    if tick is None:
        tick = caps.tick
    if iterations < 0:
        raise ValueError("Iterations must be non-negative")
    check_interval("Tick", tick)

    clock = caps.clock
    checkpoint = clock()
    for i in range(iterations):
        if cancel_event is not None and cancel_event.is_set():
            logger.debug("Async loop cancelled at iteration %d of %d", i, iterations)
            raise LoopCancelledError(i)

        callback(i)

        elapsed = clock() - checkpoint
        if 0 <= elapsed < tick:
            continue
        if elapsed < 0:
            logger.debug("Clock moved backward by %.6fs, forcing a yield", -elapsed)
        await caps.schedule_continuation()
        checkpoint += elapsed
