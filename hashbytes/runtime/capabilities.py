"""
Host Capabilities

Small adapter interfaces over what the host provides:
- RandomSource: cryptographically secure random bytes
- Scheduler: a minimal-delay continuation on the asyncio event loop

``detect_capabilities()`` probes once and returns an immutable
``Capabilities`` object that callers pass to the functions needing it.
``get_capabilities()`` caches a default one for the process lifetime;
``get_scheduling()`` caches only the scheduling part, for code that never
needs randomness.
"""

import asyncio
import functools
import logging
import os
import secrets
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Sequence, Type

from ..config import Settings, check_interval
from ..errors import PlatformUnsupportedError


logger = logging.getLogger(__name__)


# ============================================================================
# Random sources
# ============================================================================

class RandomSource(ABC):
    """A cryptographically secure source of random bytes."""

    name = "abstract"

    @abstractmethod
    def get_random_bytes(self, length: int) -> bytes:
        """Return ``length`` fresh random bytes."""

    def is_available(self) -> bool:
        """Probe the source by drawing a single byte."""
        try:
            return len(self.get_random_bytes(1)) == 1
        except (NotImplementedError, OSError) as e:
            logger.debug("Random source %s unavailable: %s", self.name, e)
            return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class SecretsRandomSource(RandomSource):
    """Platform-native source via the ``secrets`` module."""

    name = "secrets"

    def get_random_bytes(self, length: int) -> bytes:
        return secrets.token_bytes(length)


class UrandomRandomSource(RandomSource):
    """Fallback source reading the OS entropy pool directly."""

    name = "urandom"

    def get_random_bytes(self, length: int) -> bytes:
        return os.urandom(length)


RANDOM_SOURCES: Dict[str, Type[RandomSource]] = {
    SecretsRandomSource.name: SecretsRandomSource,
    UrandomRandomSource.name: UrandomRandomSource,
}


# ============================================================================
# Schedulers
# ============================================================================

class Scheduler(ABC):
    """Hands control back to the event loop and resumes afterwards."""

    @abstractmethod
    async def schedule_continuation(self) -> None:
        """Suspend the current task for one minimal scheduling step."""


class ImmediateScheduler(Scheduler):
    """Yields through ``asyncio.sleep(0)``: resumes on the next loop pass."""

    async def schedule_continuation(self) -> None:
        await asyncio.sleep(0)

    def __repr__(self) -> str:
        return "ImmediateScheduler()"


class TimerScheduler(Scheduler):
    """Yields through a loop timer, resuming after ``delay`` seconds."""

    def __init__(self, delay: float = 0.0):
        self.delay = check_interval("Delay", delay)

    async def schedule_continuation(self) -> None:
        loop = asyncio.get_running_loop()
        future = loop.create_future()
        handle = loop.call_later(self.delay, _resolve, future)
        try:
            await future
        finally:
            handle.cancel()

    def __repr__(self) -> str:
        return f"TimerScheduler(delay={self.delay})"


def _resolve(future: asyncio.Future) -> None:
    if not future.done():
        future.set_result(None)


def detect_scheduler(settings: Settings) -> Scheduler:
    """Timer-based continuation when a delay is configured, immediate otherwise."""
    if settings.scheduler_delay > 0:
        return TimerScheduler(settings.scheduler_delay)
    return ImmediateScheduler()


# ============================================================================
# Capability objects
# ============================================================================

@dataclass(frozen=True)
class SchedulingCapabilities:
    """Scheduler, tick and clock: all the cooperative loop needs."""
    scheduler: Scheduler
    tick: float
    clock: Callable[[], float] = field(default=time.time)

    async def schedule_continuation(self) -> None:
        await self.scheduler.schedule_continuation()


@dataclass(frozen=True)
class Capabilities:
    """What the host provides, selected once and then only read."""
    random_source: RandomSource
    scheduler: Scheduler
    tick: float
    clock: Callable[[], float] = field(default=time.time)

    def get_random_bytes(self, length: int) -> bytes:
        return self.random_source.get_random_bytes(length)

    async def schedule_continuation(self) -> None:
        await self.scheduler.schedule_continuation()


def select_random_source(sources: Sequence[RandomSource]) -> RandomSource:
    """
    Pick the first available random source.

    Raises:
        PlatformUnsupportedError: If none of them works
    """
    for source in sources:
        if source.is_available():
            return source
    raise PlatformUnsupportedError("The environment doesn't have a secure random source")


def detect_scheduling(
    settings: Optional[Settings] = None,
    *,
    scheduler: Optional[Scheduler] = None,
    clock: Optional[Callable[[], float]] = None,
) -> SchedulingCapabilities:
    """
    Select the scheduling primitives without touching the random sources.

    Args:
        settings: Tunables (default: read from the environment)
        scheduler: Continuation primitive (default: ``detect_scheduler``)
        clock: Wall-clock function in seconds (default: ``time.time``)
    """
    if settings is None:
        settings = Settings.from_env()
    scheduling = SchedulingCapabilities(
        scheduler=scheduler if scheduler is not None else detect_scheduler(settings),
        tick=settings.tick,
        clock=clock if clock is not None else time.time,
    )
    logger.debug("Selected scheduling: %r", scheduling)
    return scheduling


def detect_capabilities(
    settings: Optional[Settings] = None,
    *,
    random_sources: Optional[Sequence[RandomSource]] = None,
    scheduler: Optional[Scheduler] = None,
    clock: Optional[Callable[[], float]] = None,
) -> Capabilities:
    """
    Probe the host and build a Capabilities object.

    Args:
        settings: Tunables (default: read from the environment)
        random_sources: Candidate sources in preference order (default:
            built from ``settings.random_source_order``)
        scheduler: Continuation primitive (default: ``detect_scheduler``)
        clock: Wall-clock function in seconds (default: ``time.time``)

    Returns:
        Immutable capability object

    Raises:
        PlatformUnsupportedError: If no secure random source is available
    """
    if settings is None:
        settings = Settings.from_env()
    if random_sources is None:
        random_sources = [RANDOM_SOURCES[name]() for name in settings.random_source_order]

    source = select_random_source(random_sources)
    preferred = settings.preferred_random_source
    if preferred is not None and source.name != preferred:
        logger.warning("Preferred random source %r unavailable, using %r", preferred, source.name)

    scheduling = detect_scheduling(settings, scheduler=scheduler, clock=clock)
    caps = Capabilities(
        random_source=source,
        scheduler=scheduling.scheduler,
        tick=scheduling.tick,
        clock=scheduling.clock,
    )
    logger.debug("Selected capabilities: %r", caps)
    return caps


@functools.lru_cache(maxsize=None)
def get_capabilities() -> Capabilities:
    """Process-wide default capabilities, detected on first use."""
    return detect_capabilities()


@functools.lru_cache(maxsize=None)
def get_scheduling() -> SchedulingCapabilities:
    """Process-wide default scheduling; never probes the random sources."""
    return detect_scheduling()
