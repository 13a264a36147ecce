"""Unit tests for ProgressReporter (premiumgen.orchestrator.progress).

Tests cover:
- Sync and async observers
- subscribe
- Failing and slow observers are isolated and counted
"""

from __future__ import annotations

import asyncio

import pytest

from premiumgen.orchestrator import ProcessStatus, ProgressEvent, ProgressReporter


def make_event(percent: float = 50.0) -> ProgressEvent:
    return ProgressEvent(
        phase_index=1,
        phase_name="Template Selection & Architecture",
        total_phases=5,
        phase_percent=percent,
        total_percent=20 + percent / 5,
        elapsed_minutes=9.0,
        remaining_minutes=21.0,
        status=ProcessStatus.RUNNING,
        current_task="Template adaptation",
        completed_phases=1,
    )


class TestSubscription:
    @pytest.mark.unit
    def test_subscribe_deduplicates(self):
        reporter = ProgressReporter()
        observer = lambda event: None  # noqa: E731
        reporter.subscribe(observer)
        reporter.subscribe(observer)
        assert reporter.observers == (observer,)


class TestPublish:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_observers(self):
        reporter = ProgressReporter()
        await reporter.publish(make_event())
        assert reporter.failures == 0

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_sync_observer(self):
        received: list[ProgressEvent] = []
        reporter = ProgressReporter([received.append])
        event = make_event()
        await reporter.publish(event)
        assert received == [event]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_async_observer(self):
        received: list[ProgressEvent] = []

        async def observer(event: ProgressEvent) -> None:
            received.append(event)

        reporter = ProgressReporter([observer])
        await reporter.publish(make_event(75))
        assert received[0].phase_percent == 75

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_callable_object_observer(self):
        class Collector:
            def __init__(self):
                self.events = []

            async def __call__(self, event):
                self.events.append(event)

        collector = Collector()
        await ProgressReporter([collector]).publish(make_event())
        assert len(collector.events) == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failing_observer_is_isolated(self):
        received: list[ProgressEvent] = []

        def broken(event: ProgressEvent) -> None:
            raise RuntimeError("display gone")

        reporter = ProgressReporter([broken, received.append])
        await reporter.publish(make_event())

        assert len(received) == 1
        assert reporter.failures == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_slow_observer_times_out(self):
        received: list[ProgressEvent] = []

        async def slow(event: ProgressEvent) -> None:
            await asyncio.sleep(5)

        reporter = ProgressReporter([slow, received.append], timeout=0.05)
        loop = asyncio.get_running_loop()
        start = loop.time()
        await reporter.publish(make_event())

        assert loop.time() - start < 2
        assert len(received) == 1
        assert reporter.failures == 1
