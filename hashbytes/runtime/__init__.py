# Runtime Module
"""
Host-facing runtime services:
- Capability detection (random source, scheduler, clock) - capabilities.py
- Secure random bytes - secure_random.py
- Cooperative async loop - async_loop.py
"""

from .capabilities import (
    Capabilities,
    ImmediateScheduler,
    RandomSource,
    RANDOM_SOURCES,
    Scheduler,
    SchedulingCapabilities,
    SecretsRandomSource,
    TimerScheduler,
    UrandomRandomSource,
    detect_capabilities,
    detect_scheduler,
    detect_scheduling,
    get_capabilities,
    get_scheduling,
    select_random_source,
)

from .secure_random import random_bytes

from .async_loop import async_loop

__all__ = [
    'Capabilities',
    'ImmediateScheduler',
    'RandomSource',
    'RANDOM_SOURCES',
    'Scheduler',
    'SchedulingCapabilities',
    'SecretsRandomSource',
    'TimerScheduler',
    'UrandomRandomSource',
    'detect_capabilities',
    'detect_scheduler',
    'detect_scheduling',
    'get_capabilities',
    'get_scheduling',
    'select_random_source',
    'random_bytes',
    'async_loop',
]
