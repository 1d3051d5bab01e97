"""
Configuration for hashbytes.

Defaults live in module-level constants; ``Settings.from_env()`` lets a
deployment override them through environment variables:

- HASHBYTES_RANDOM_SOURCE: preferred random source name ("secrets" or "urandom")
- HASHBYTES_ASYNC_TICK: cooperative loop yield interval in seconds
- HASHBYTES_SCHEDULER_DELAY: timer delay for cooperative yields in seconds
  (0 resumes on the next event loop pass)
"""

import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional


DEFAULT_RANDOM_LENGTH = 32          # bytes returned by random_bytes()
DEFAULT_TICK = 0.010                # seconds between cooperative yields
DEFAULT_SCHEDULER_DELAY = 0.0       # immediate continuation
RANDOM_SOURCE_ORDER = ("secrets", "urandom")  # native first, fallback second

ENV_RANDOM_SOURCE = "HASHBYTES_RANDOM_SOURCE"
ENV_ASYNC_TICK = "HASHBYTES_ASYNC_TICK"
ENV_SCHEDULER_DELAY = "HASHBYTES_SCHEDULER_DELAY"


def check_interval(name: str, value: float) -> float:
    """
    Validate a duration in seconds.

    Raises:
        ValueError: If ``value`` is negative, NaN or infinite
    """
    if not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
    return value


def _env_seconds(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    """Tunable settings consumed by ``detect_capabilities``."""
    preferred_random_source: Optional[str] = None
    tick: float = DEFAULT_TICK
    scheduler_delay: float = DEFAULT_SCHEDULER_DELAY

    def __post_init__(self):
        if self.preferred_random_source is not None and \
                self.preferred_random_source not in RANDOM_SOURCE_ORDER:
            raise ValueError(
                f"Unknown random source {self.preferred_random_source!r}; "
                f"expected one of {', '.join(RANDOM_SOURCE_ORDER)}"
            )
        check_interval("Tick", self.tick)
        check_interval("Scheduler delay", self.scheduler_delay)

    @property
    def random_source_order(self) -> tuple:
        """Probe order with the preferred source (if any) moved to the front."""
        if self.preferred_random_source is None:
            return RANDOM_SOURCE_ORDER
        rest = tuple(n for n in RANDOM_SOURCE_ORDER if n != self.preferred_random_source)
        return (self.preferred_random_source,) + rest

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (default: ``os.environ``)

        Returns:
            Settings with any overrides applied

        Raises:
            ValueError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ

        return cls(
            preferred_random_source=env.get(ENV_RANDOM_SOURCE) or None,
            tick=_env_seconds(env, ENV_ASYNC_TICK, DEFAULT_TICK),
            scheduler_delay=_env_seconds(env, ENV_SCHEDULER_DELAY, DEFAULT_SCHEDULER_DELAY),
        )
