"""Deadline-enforced, quality-gated phase orchestrator.

Runs a fixed sequence of phases strictly one after another.  Each phase's
work coroutine races a deadline measured from a ``time.monotonic()`` start;
the deadline winning is fatal.  Completed phases are scored, gated against
their quality threshold and appended as immutable ``PhaseResult`` records
that every later phase receives.  Progress events are published at a fixed
cadence from a separate ticker task, so emitting progress never shifts a
deadline.

Cancellation is cooperative: ``cancel()`` (or a caller-supplied
``asyncio.Event``) is only checked between phases.
"""

from __future__ import annotations

import asyncio
import contextlib
import time
import traceback
from datetime import datetime, timezone
from collections.abc import Awaitable, Callable, Mapping, Sequence
from statistics import fmean
from typing import Any, Optional

from premiumgen.config import ProcessConfig
from premiumgen.orchestrator.models import (
    CancellationRequested,
    Checkpoint,
    Phase,
    PhaseResult,
    PhaseTimeoutError,
    PipelineError,
    ProcessResult,
    ProcessState,
    ProcessStatus,
    ProgressEvent,
    QualityThresholdMiss,
)
from premiumgen.orchestrator.progress import ProgressReporter
from premiumgen.utils import (
    clamp,
    console,
    format_minutes,
    print_error,
    print_phase_header,
    print_success,
    print_summary_table,
    print_warning,
    round_half_up,
)

WorkFn = Callable[[tuple[PhaseResult, ...]], Awaitable[Any]]
QualityEvaluator = Callable[[Phase, Any], float]

# Grace period for a timed-out work task to honour its cancellation.
_CANCEL_GRACE_SECONDS = 1.0

READINESS_QUALITY_WEIGHT = 0.7
READINESS_COMPLETION_WEIGHT = 0.3
RECOMMENDED_MIN_QUALITY = 90.0


def evaluate_output_quality(phase: Phase, output: Any) -> float:
    """Default quality evaluator.

    Uses the output's own ``quality_score`` (mapping key or attribute) when it
    reports one.  Otherwise scores structure: an empty mapping gets 80, a
    populated mapping 90 plus 2 per key (capped at 100), any other non-``None``
    value 90 and ``None`` 0.
    """
    if isinstance(output, Mapping):
        explicit = output.get("quality_score")
    else:
        explicit = getattr(output, "quality_score", None)
    if explicit is not None:
        return clamp(float(explicit), 0.0, 100.0)

    if output is None:
        return 0.0
    if isinstance(output, Mapping):
        if not output:
            return 80.0
        return min(100.0, 90.0 + 2 * len(output))
    return 90.0


def output_warnings(output: Any) -> list[str]:
    """Warnings a work function attached to its output."""
    if isinstance(output, Mapping):
        warnings = output.get("warnings") or ()
    else:
        warnings = getattr(output, "warnings", None) or ()
    if isinstance(warnings, str):
        return [warnings]
    return [str(w) for w in warnings]


class PhaseOrchestrator:
    """Sequences phases under per-phase deadlines and quality gates.

    A single instance must not execute concurrent ``run`` calls; every run
    builds its own ``ProcessState``.

    Attributes:
        config: Timing and gating configuration.
        reporter: Fan-out sink for progress events.
        status: Status of the latest (or current) run.
    """

    def __init__(
        self,
        config: Optional[ProcessConfig] = None,
        reporter: Optional[ProgressReporter] = None,
        quality_evaluator: QualityEvaluator = evaluate_output_quality,
    ) -> None:
        self.config = config or ProcessConfig()
        self.reporter = reporter or ProgressReporter(timeout=self.config.observer_timeout_seconds)
        self.quality_evaluator = quality_evaluator
        self.status = ProcessStatus.IDLE
        self._cancel_event = asyncio.Event()

    # ------------------------------------------------------------------
    # Cancellation
    # ------------------------------------------------------------------

    def cancel(self) -> None:
        """Request cancellation; honoured before the next phase starts."""
        self._cancel_event.set()

    @property
    def cancel_requested(self) -> bool:
        return self._cancel_event.is_set()

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    async def run(
        self,
        phases: Sequence[Phase],
        work_fns: Sequence[WorkFn],
        overall_budget_minutes: Optional[float] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> ProcessResult:
        """Execute *phases* in order and aggregate their results.

        Args:
            phases: Phase declarations.
            work_fns: One coroutine function per phase; each receives the
                results of all previous phases.
            overall_budget_minutes: Budget used for the remaining-time figure.
                Defaults to ``config.overall_budget_minutes``.
            cancel_event: Optional external cancellation signal, checked
                between phases alongside ``cancel()``.

        Raises:
            ValueError: If there are no phases or the counts differ.
        """
        phases = tuple(phases)
        work_fns = tuple(work_fns)
        if not phases:
            raise ValueError("At least one phase is required")
        if len(phases) != len(work_fns):
            raise ValueError(
                f"Got {len(work_fns)} work functions for {len(phases)} phases"
            )

        state = ProcessState(
            start_time=time.monotonic(),
            overall_budget_minutes=overall_budget_minutes or self.config.overall_budget_minutes,
            status=ProcessStatus.RUNNING,
        )
        self.status = ProcessStatus.RUNNING

        for index, (phase, work_fn) in enumerate(zip(phases, work_fns)):
            if self._cancel_event.is_set() or (cancel_event is not None and cancel_event.is_set()):
                cancelled = CancellationRequested(index, phase.name)
                state.status = ProcessStatus.CANCELLED
                state.issues.append(str(cancelled))
                print_warning(str(cancelled))
                break

            print_phase_header(index, phase.name, phase.time_budget_minutes)
            try:
                await self._run_phase(state, phases, index, work_fn)
            except PipelineError as exc:
                state.status = ProcessStatus.FAILED
                if not isinstance(exc, QualityThresholdMiss):
                    state.issues.append(str(exc))
                print_error(f"{exc} -- aborting")
                break
            except Exception as exc:
                state.status = ProcessStatus.FAILED
                state.issues.append(f"Phase {index + 1} ({phase.name}) failed: {exc}")
                print_error(f"Phase {index + 1} ({phase.name}) FAILED: {exc}")
                console.print(f"[dim]{traceback.format_exc()}[/dim]")
                break
        else:
            state.status = ProcessStatus.COMPLETED

        self._cancel_event.clear()
        self.status = state.status

        result = self._finalize(state, phases)
        await self.reporter.publish(
            self._snapshot(
                state,
                phases,
                min(state.current_phase_index, len(phases) - 1),
                phase_percent=100.0 if state.status == ProcessStatus.COMPLETED else 0.0,
            )
        )
        self._print_final_summary(result)
        return result

    async def _run_phase(
        self,
        state: ProcessState,
        phases: tuple[Phase, ...],
        index: int,
        work_fn: WorkFn,
    ) -> PhaseResult:
        """Race one phase's work against its deadline, then score and record it."""
        phase = phases[index]
        await self.reporter.publish(self._snapshot(state, phases, index, phase_percent=0.0))

        phase_start = time.monotonic()
        deadline = phase_start + phase.time_budget_minutes * self.config.minute_seconds
        prior = tuple(state.phase_results)

        reached: dict[str, Checkpoint] = {}
        self._mark_checkpoint(reached, phase, 0.0, phase_start)

        work = asyncio.ensure_future(work_fn(prior))
        ticker = asyncio.create_task(self._tick(state, phases, index, phase_start, reached))
        try:
            done, _ = await asyncio.wait({work}, timeout=max(0.0, deadline - time.monotonic()))
        except asyncio.CancelledError:
            work.cancel()
            raise
        finally:
            ticker.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await ticker

        if work not in done:
            work.cancel()
            await asyncio.wait({work}, timeout=_CANCEL_GRACE_SECONDS)
            raise PhaseTimeoutError(index, phase.name, phase.time_budget_minutes)

        output = work.result()
        quality = clamp(float(self.quality_evaluator(phase, output)), 0.0, 100.0)
        threshold_met = quality >= phase.quality_threshold
        duration = (time.monotonic() - phase_start) / self.config.minute_seconds

        for warning in output_warnings(output):
            state.issues.append(f"Phase {index + 1} ({phase.name}): {warning}")

        result = PhaseResult(
            phase_index=index,
            phase_name=phase.name,
            output=output,
            quality_score=quality,
            threshold_met=threshold_met,
            actual_duration_minutes=duration,
            checkpoints=self._checkpoints(phase, reached, duration),
        )
        state.phase_results.append(result)
        state.current_phase_index += 1

        if threshold_met:
            print_success(
                f"Phase {index + 1} ({phase.name}) completed in {format_minutes(duration)} "
                f"with quality {quality:.1f}"
            )
        else:
            miss = QualityThresholdMiss(index, phase.name, quality, phase.quality_threshold)
            state.issues.append(str(miss))
            print_warning(str(miss))
            if self.config.require_all_thresholds:
                raise miss

        await self.reporter.publish(self._snapshot(state, phases, index, phase_percent=100.0))
        return result

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------

    async def _tick(
        self,
        state: ProcessState,
        phases: tuple[Phase, ...],
        index: int,
        phase_start: float,
        reached: dict[str, Checkpoint],
    ) -> None:
        """Publish a progress event every ``progress_interval_seconds``."""
        interval = self.config.progress_interval_seconds
        ticks = 0
        while True:
            ticks += 1
            await asyncio.sleep(max(0.0, phase_start + ticks * interval - time.monotonic()))
            event = self._snapshot(state, phases, index, phase_start=phase_start)
            self._mark_checkpoint(reached, phases[index], event.phase_percent, phase_start)
            await self.reporter.publish(event)

    def _mark_checkpoint(
        self,
        reached: dict[str, Checkpoint],
        phase: Phase,
        percent: float,
        phase_start: float,
    ) -> None:
        """Stamp the checkpoint at *percent* the first time progress enters it."""
        if not phase.checkpoint_labels:
            return
        label = phase.checkpoint_at(percent)
        if label not in reached:
            reached[label] = Checkpoint(
                label=label,
                minutes_into_phase=(time.monotonic() - phase_start) / self.config.minute_seconds,
            )

    @staticmethod
    def _checkpoints(
        phase: Phase, reached: dict[str, Checkpoint], duration: float
    ) -> tuple[Checkpoint, ...]:
        finished_at = datetime.now(timezone.utc)
        return tuple(
            reached[label]
            if label in reached
            else Checkpoint(label=label, timestamp=finished_at, minutes_into_phase=duration)
            for label in phase.checkpoint_labels
        )

    def _elapsed_minutes(self, state: ProcessState, now: Optional[float] = None) -> float:
        now = time.monotonic() if now is None else now
        return max(0.0, (now - state.start_time) / self.config.minute_seconds)

    def _snapshot(
        self,
        state: ProcessState,
        phases: tuple[Phase, ...],
        index: int,
        *,
        phase_start: Optional[float] = None,
        phase_percent: Optional[float] = None,
    ) -> ProgressEvent:
        """Build a progress event for phase *index*.

        Either *phase_start* (percent derived from elapsed/budget) or an
        explicit *phase_percent* must be given.  A percent of 100 means the
        phase is already counted in the completed phases.
        """
        now = time.monotonic()
        phase = phases[index]
        weight = 100.0 / len(phases)
        completed = len(state.phase_results)

        if phase_percent is None:
            if phase_start is None:
                raise ValueError("phase_start or phase_percent is required")
            phase_elapsed = (now - phase_start) / self.config.minute_seconds
            phase_percent = min(100.0, phase_elapsed / phase.time_budget_minutes * 100.0)
            fraction = phase_percent / 100.0
        else:
            fraction = 0.0 if phase_percent >= 100.0 else phase_percent / 100.0

        elapsed = self._elapsed_minutes(state, now)
        return ProgressEvent(
            phase_index=index,
            phase_name=phase.name,
            total_phases=len(phases),
            phase_percent=phase_percent,
            total_percent=clamp(completed * weight + fraction * weight, 0.0, 100.0),
            elapsed_minutes=elapsed,
            remaining_minutes=max(0.0, state.overall_budget_minutes - elapsed),
            status=state.status,
            current_task=phase.checkpoint_at(phase_percent),
            completed_phases=completed,
        )

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    def _finalize(self, state: ProcessState, phases: tuple[Phase, ...]) -> ProcessResult:
        elapsed = self._elapsed_minutes(state)
        completed = len(state.phase_results)

        final_quality: Optional[float] = None
        readiness = 0
        if state.status == ProcessStatus.COMPLETED and completed == len(phases):
            final_quality = fmean(r.quality_score for r in state.phase_results)
            completion_rate = completed / len(phases) * 100.0
            readiness = round_half_up(
                READINESS_QUALITY_WEIGHT * final_quality
                + READINESS_COMPLETION_WEIGHT * completion_rate
            )

        return ProcessResult(
            success=state.status == ProcessStatus.COMPLETED,
            status=state.status,
            total_elapsed_minutes=elapsed,
            final_quality_score=final_quality,
            production_readiness=int(clamp(readiness, 0, 100)),
            phase_results=tuple(state.phase_results),
            issues=tuple(state.issues),
            recommendations=tuple(
                self._recommendations(state, phases, final_quality, elapsed)
            ),
        )

    @staticmethod
    def _recommendations(
        state: ProcessState,
        phases: tuple[Phase, ...],
        final_quality: Optional[float],
        elapsed: float,
    ) -> list[str]:
        recommendations: list[str] = []

        if state.status == ProcessStatus.FAILED:
            recommendations.extend(
                ["Retry with simplified requirements", "Check system resources"]
            )
        elif state.status == ProcessStatus.CANCELLED:
            remaining = len(phases) - len(state.phase_results)
            recommendations.append(
                f"Resume the process to finish the remaining {remaining} phase(s)"
            )

        for result in state.phase_results:
            if not result.threshold_met:
                recommendations.append(
                    f"Revisit phase {result.phase_index + 1} ({result.phase_name})"
                )

        if final_quality is not None and final_quality < RECOMMENDED_MIN_QUALITY:
            recommendations.append("Consider additional quality improvements")
        if elapsed > state.overall_budget_minutes:
            recommendations.append("Optimize process timing for future generations")

        return recommendations

    def _print_final_summary(self, result: ProcessResult) -> None:
        print_summary_table(
            {
                "Status": result.status.value,
                "Phases completed": str(len(result.phase_results)),
                "Elapsed": format_minutes(result.total_elapsed_minutes),
                "Final quality": (
                    f"{result.final_quality_score:.1f}/100"
                    if result.final_quality_score is not None
                    else "n/a"
                ),
                "Production readiness": f"{result.production_readiness}%",
                "Issues": str(len(result.issues)),
            },
            title="Process Summary",
        )
