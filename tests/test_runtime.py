"""
Unit tests for runtime services.

Tests:
- Settings and environment overrides
- Capability detection and caching
- Secure random bytes
- Cooperative async loop (ordering, yields, clock anomalies, cancellation)
"""

import asyncio
import dataclasses
import logging
from unittest.mock import patch

import pytest

from hashbytes.config import DEFAULT_TICK, RANDOM_SOURCE_ORDER, Settings
from hashbytes.errors import LoopCancelledError, PlatformUnsupportedError
from hashbytes.runtime import capabilities as capabilities_module
from hashbytes.runtime.capabilities import (
    Capabilities, ImmediateScheduler, RandomSource, Scheduler,
    SchedulingCapabilities, SecretsRandomSource, TimerScheduler,
    UrandomRandomSource, detect_capabilities, detect_scheduler,
    detect_scheduling, get_capabilities, get_scheduling,
)
from hashbytes.runtime.secure_random import random_bytes
from hashbytes.runtime.async_loop import async_loop


class CountingSource(RandomSource):
    """Deterministic source for tests."""

    name = "counting"

    def get_random_bytes(self, length):
        return bytes(i % 256 for i in range(length))


class BrokenSource(RandomSource):
    """Source whose probe always fails."""

    name = "secrets"

    def get_random_bytes(self, length):
        raise NotImplementedError("no entropy")


class RecordingScheduler(Scheduler):
    """Records the loop index current at every yield."""

    def __init__(self, calls):
        self.calls = calls
        self.yields = []

    async def schedule_continuation(self):
        self.yields.append(self.calls[-1])


class FakeClock:
    """Returns the given timestamps in order."""

    def __init__(self, times):
        self._times = iter(times)

    def __call__(self):
        return next(self._times)


def make_caps(scheduler, clock=None, tick=DEFAULT_TICK):
    return Capabilities(
        random_source=CountingSource(),
        scheduler=scheduler,
        tick=tick,
        clock=clock if clock is not None else FakeClock([0.0] * 1000),
    )


class TestSettings:
    """Unit tests for configuration."""

    def test_defaults(self):
        """Default settings use the built-in order and tick."""
        settings = Settings()
        assert settings.tick == DEFAULT_TICK
        assert settings.random_source_order == RANDOM_SOURCE_ORDER

    def test_preferred_source_first(self):
        """A preferred source is probed first."""
        settings = Settings(preferred_random_source="urandom")
        assert settings.random_source_order == ("urandom", "secrets")

    def test_from_env(self):
        """Environment variables override defaults."""
        settings = Settings.from_env({
            "HASHBYTES_RANDOM_SOURCE": "urandom",
            "HASHBYTES_ASYNC_TICK": "0.5",
        })
        assert settings.preferred_random_source == "urandom"
        assert settings.tick == 0.5

    def test_from_empty_env(self):
        """Missing variables give defaults."""
        assert Settings.from_env({}) == Settings()

    def test_invalid_tick_env(self):
        """Non-numeric tick is rejected."""
        with pytest.raises(ValueError):
            Settings.from_env({"HASHBYTES_ASYNC_TICK": "soon"})

    def test_invalid_source(self):
        """Unknown source names are rejected."""
        with pytest.raises(ValueError):
            Settings(preferred_random_source="mersenne")

    def test_negative_tick(self):
        """Negative tick is rejected."""
        with pytest.raises(ValueError):
            Settings(tick=-1)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_tick(self, value):
        """NaN and infinite ticks are rejected."""
        with pytest.raises(ValueError):
            Settings(tick=value)

    @pytest.mark.parametrize("raw", ["nan", "inf", "-inf"])
    def test_non_finite_tick_env(self, raw):
        """Non-finite tick from the environment is rejected."""
        with pytest.raises(ValueError):
            Settings.from_env({"HASHBYTES_ASYNC_TICK": raw})

    def test_scheduler_delay_env(self):
        """Scheduler delay is read from the environment."""
        settings = Settings.from_env({"HASHBYTES_SCHEDULER_DELAY": "0.002"})
        assert settings.scheduler_delay == 0.002

    def test_invalid_scheduler_delay(self):
        """Negative or NaN scheduler delay is rejected."""
        with pytest.raises(ValueError):
            Settings(scheduler_delay=-1)
        with pytest.raises(ValueError):
            Settings.from_env({"HASHBYTES_SCHEDULER_DELAY": "nan"})


class TestCapabilities:
    """Unit tests for capability detection."""

    def test_native_source_preferred(self):
        """secrets is selected when available."""
        caps = detect_capabilities(Settings())
        assert isinstance(caps.random_source, SecretsRandomSource)
        assert isinstance(caps.scheduler, ImmediateScheduler)

    def test_fallback_source(self):
        """urandom is used when the native source fails."""
        caps = detect_capabilities(
            Settings(), random_sources=[BrokenSource(), UrandomRandomSource()]
        )
        assert isinstance(caps.random_source, UrandomRandomSource)

    def test_fallback_from_preferred_logs_warning(self, caplog):
        """Falling back from a configured source is logged."""
        with caplog.at_level(logging.WARNING):
            detect_capabilities(
                Settings(preferred_random_source="secrets"),
                random_sources=[BrokenSource(), UrandomRandomSource()],
            )
        assert "unavailable" in caplog.text

    def test_tick_from_settings(self):
        """Capabilities carry the configured tick."""
        caps = detect_capabilities(Settings(tick=0.25))
        assert caps.tick == 0.25

    def test_capabilities_immutable(self):
        """Capabilities cannot be changed after detection."""
        caps = detect_capabilities(Settings())
        with pytest.raises(dataclasses.FrozenInstanceError):
            caps.tick = 1.0

    def test_default_cached(self):
        """The process-wide default is detected once."""
        assert get_capabilities() is get_capabilities()

    def test_timer_scheduler_resumes(self):
        """TimerScheduler returns control after its delay."""
        asyncio.run(TimerScheduler(0.001).schedule_continuation())

    def test_timer_scheduler_negative_delay(self):
        """Negative delay is rejected."""
        with pytest.raises(ValueError):
            TimerScheduler(-0.1)

    def test_timer_scheduler_nan_delay(self):
        """NaN delay is rejected."""
        with pytest.raises(ValueError):
            TimerScheduler(float("nan"))

    def test_scheduler_immediate_by_default(self):
        """No configured delay selects the immediate scheduler."""
        assert isinstance(detect_scheduler(Settings()), ImmediateScheduler)

    def test_scheduler_timer_when_delay_configured(self):
        """A positive delay selects the timer scheduler."""
        scheduler = detect_scheduler(Settings(scheduler_delay=0.005))
        assert isinstance(scheduler, TimerScheduler)
        assert scheduler.delay == 0.005

    def test_detected_capabilities_use_timer(self):
        """detect_capabilities carries the detected scheduler."""
        caps = detect_capabilities(Settings(scheduler_delay=0.001))
        assert isinstance(caps.scheduler, TimerScheduler)

    def test_scheduling_skips_random_probe(self):
        """Scheduling detection works on a host without entropy."""
        with patch.object(capabilities_module, "select_random_source",
                          side_effect=PlatformUnsupportedError("no entropy")):
            scheduling = detect_scheduling(Settings(tick=0.5))
        assert isinstance(scheduling, SchedulingCapabilities)
        assert scheduling.tick == 0.5

    def test_default_scheduling_cached(self):
        """The process-wide scheduling default is detected once."""
        assert get_scheduling() is get_scheduling()


class TestSecureRandom:
    """Unit tests for random_bytes."""

    def test_default_length(self):
        """Default length is 32 bytes."""
        assert len(random_bytes()) == 32

    def test_exact_lengths(self):
        """Output length matches the request, including zero."""
        for n in (0, 1, 7, 64, 1000):
            assert len(random_bytes(n)) == n

    def test_successive_calls_differ(self):
        """Two draws are different with overwhelming probability."""
        assert random_bytes(32) != random_bytes(32)

    def test_returns_bytes(self):
        """Result is an owned bytes object."""
        assert isinstance(random_bytes(4), bytes)

    def test_injected_source(self):
        """Capabilities decide where bytes come from."""
        caps = make_caps(ImmediateScheduler())
        assert random_bytes(5, capabilities=caps) == bytes([0, 1, 2, 3, 4])

    def test_urandom_source(self):
        """The fallback source produces bytes too."""
        caps = detect_capabilities(Settings(preferred_random_source="urandom"))
        assert len(random_bytes(16, capabilities=caps)) == 16


class TestAsyncLoop:
    """Unit tests for the cooperative loop."""

    def test_calls_every_index_in_order(self):
        """Callback runs once per index, strictly in order."""
        calls = []
        asyncio.run(async_loop(100, 0.01, calls.append))
        assert calls == list(range(100))

    def test_zero_iterations(self):
        """Nothing is called for zero iterations."""
        calls = []
        asyncio.run(async_loop(0, 0, calls.append))
        assert calls == []

    def test_tick_zero_yields_every_iteration(self):
        """tick=0 yields after each callback."""
        calls = []
        scheduler = RecordingScheduler(calls)
        asyncio.run(async_loop(5, 0, calls.append, capabilities=make_caps(scheduler)))
        assert calls == [0, 1, 2, 3, 4]
        assert scheduler.yields == [0, 1, 2, 3, 4]

    def test_no_yield_before_tick(self):
        """A frozen clock with positive tick never yields."""
        calls = []
        scheduler = RecordingScheduler(calls)
        asyncio.run(async_loop(10, 1.0, calls.append, capabilities=make_caps(scheduler)))
        assert scheduler.yields == []

    def test_checkpoint_advances_by_elapsed(self):
        """Yields happen whenever the measured time crosses one tick."""
        calls = []
        scheduler = RecordingScheduler(calls)
        clock = FakeClock([0.0, 0.5, 1.2, 2.0, 2.3])
        caps = make_caps(scheduler, clock=clock)
        asyncio.run(async_loop(4, 1.0, calls.append, capabilities=caps))
        assert calls == [0, 1, 2, 3]
        assert scheduler.yields == [1, 3]

    def test_clock_backwards_forces_yield(self):
        """A negative elapsed time yields immediately."""
        calls = []
        scheduler = RecordingScheduler(calls)
        clock = FakeClock([100.0, 99.0, 99.001, 99.002])
        caps = make_caps(scheduler, clock=clock)
        asyncio.run(async_loop(3, 1.0, calls.append, capabilities=caps))
        assert calls == [0, 1, 2]
        assert scheduler.yields == [0]

    def test_default_tick_from_capabilities(self):
        """tick=None falls back to the capability tick."""
        calls = []
        scheduler = RecordingScheduler(calls)
        caps = make_caps(scheduler, tick=0.0)
        asyncio.run(async_loop(3, None, calls.append, capabilities=caps))
        assert scheduler.yields == [0, 1, 2]

    def test_other_tasks_run_during_loop(self):
        """Yielding lets other tasks make progress."""
        async def main():
            order = []

            async def other():
                order.append("other")

            task = asyncio.ensure_future(other())
            caps = detect_capabilities(Settings(tick=0.0))
            await async_loop(3, 0, order.append, capabilities=caps)
            await task
            return order

        assert asyncio.run(main()) == [0, "other", 1, 2]

    def test_cancellation(self):
        """Setting the cancel event stops the loop before the next index."""
        async def main():
            calls = []
            cancel = asyncio.Event()

            def step(i):
                calls.append(i)
                if i == 2:
                    cancel.set()

            with pytest.raises(LoopCancelledError) as exc_info:
                await async_loop(10, 0, step, cancel_event=cancel)
            return calls, exc_info.value

        calls, error = asyncio.run(main())
        assert calls == [0, 1, 2]
        assert error.index == 3

    def test_negative_arguments(self):
        """Negative iterations or tick are rejected."""
        with pytest.raises(ValueError):
            asyncio.run(async_loop(-1, 0, lambda i: None))
        with pytest.raises(ValueError):
            asyncio.run(async_loop(1, -0.5, lambda i: None))

    @pytest.mark.parametrize("tick", [float("nan"), float("inf")])
    def test_non_finite_tick_rejected(self, tick):
        """NaN or infinite tick is rejected before any callback runs."""
        calls = []
        with pytest.raises(ValueError):
            asyncio.run(async_loop(3, tick, calls.append))
        assert calls == []

    def test_loop_without_entropy_source(self):
        """The default loop never needs a random source."""
        calls = []
        get_scheduling.cache_clear()
        try:
            with patch.object(capabilities_module, "select_random_source",
                              side_effect=PlatformUnsupportedError("no entropy")):
                asyncio.run(async_loop(3, 0, calls.append))
        finally:
            get_scheduling.cache_clear()
        assert calls == [0, 1, 2]

    def test_scheduling_capabilities_accepted(self):
        """A SchedulingCapabilities object drives the loop."""
        calls = []
        scheduler = RecordingScheduler(calls)
        scheduling = SchedulingCapabilities(
            scheduler=scheduler, tick=0.0, clock=FakeClock([0.0] * 10)
        )
        asyncio.run(async_loop(2, None, calls.append, capabilities=scheduling))
        assert scheduler.yields == [0, 1]
