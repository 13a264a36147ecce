"""Data model and error taxonomy for the phase orchestrator.

``Phase`` declarations, ``PhaseResult`` records and the terminal
``ProcessResult`` are immutable.  ``ProcessState`` is the only mutable object
and belongs to a single ``PhaseOrchestrator.run`` call.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class PipelineError(Exception):
    """Raised when a phase cannot continue.

    Attributes:
        phase_index: Zero-based index of the phase (shown one-based).
        phase_name: Display name of the phase.
    """

    def __init__(self, phase_index: int, phase_name: str, message: str) -> None:
        self.phase_index = phase_index
        self.phase_name = phase_name
        super().__init__(f"Phase {phase_index + 1} ({phase_name}): {message}")


class PhaseTimeoutError(PipelineError):
    """The phase's work did not finish within its time budget. Fatal."""

    def __init__(self, phase_index: int, phase_name: str, budget_minutes: float) -> None:
        self.budget_minutes = budget_minutes
        super().__init__(
            phase_index, phase_name, f"timed out after {budget_minutes:g} minutes"
        )


class QualityThresholdMiss(PipelineError):
    """A phase scored below its threshold.

    Recorded as an issue; only raised when the orchestrator requires every
    threshold to be met.
    """

    def __init__(
        self, phase_index: int, phase_name: str, quality_score: float, threshold: float
    ) -> None:
        self.quality_score = quality_score
        self.threshold = threshold
        super().__init__(
            phase_index,
            phase_name,
            f"quality below threshold: {quality_score:g}/{threshold:g}",
        )


class CancellationRequested(PipelineError):
    """Cancellation was observed before the phase started."""

    def __init__(self, phase_index: int, phase_name: str) -> None:
        super().__init__(phase_index, phase_name, "cancelled before start")


# ---------------------------------------------------------------------------
# Declarations and results
# ---------------------------------------------------------------------------

class ProcessStatus(str, Enum):
    """Lifecycle of one orchestrator run."""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class Phase(BaseModel):
    """One bounded, quality-gated unit of the pipeline."""

    model_config = ConfigDict(frozen=True)

    name: str
    time_budget_minutes: float = Field(..., gt=0)
    quality_threshold: float = Field(default=0.0, ge=0, le=100)
    checkpoint_labels: tuple[str, ...] = ()
    description: str = ""

    def checkpoint_at(self, percent: float) -> str:
        """The checkpoint being worked on at *percent* of the budget."""
        if not self.checkpoint_labels:
            return self.description or self.name
        position = int(percent / 100 * len(self.checkpoint_labels))
        return self.checkpoint_labels[min(position, len(self.checkpoint_labels) - 1)]


class Checkpoint(BaseModel):
    """When a phase's progress first entered one of its checkpoint slices.

    Checkpoints the work finished before reaching are stamped at phase
    completion.
    """

    model_config = ConfigDict(frozen=True)

    label: str
    completed: bool = True
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    minutes_into_phase: float = Field(default=0.0, ge=0)


class PhaseResult(BaseModel):
    """Outcome of one completed phase. Never mutated."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    phase_index: int = Field(..., ge=0)
    phase_name: str
    output: Any = None
    quality_score: float = Field(..., ge=0, le=100)
    threshold_met: bool = True
    actual_duration_minutes: float = Field(default=0.0, ge=0)
    checkpoints: tuple[Checkpoint, ...] = ()


class ProcessState(BaseModel):
    """Per-run mutable state, owned by the orchestrator."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    start_time: float = Field(..., description="time.monotonic() at run start")
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    overall_budget_minutes: float
    current_phase_index: int = 0
    phase_results: list[PhaseResult] = Field(default_factory=list)
    status: ProcessStatus = ProcessStatus.IDLE
    issues: list[str] = Field(default_factory=list)


class ProcessResult(BaseModel):
    """Terminal, immutable summary of a run."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    success: bool
    status: ProcessStatus
    total_elapsed_minutes: float = Field(default=0.0, ge=0)
    final_quality_score: Optional[float] = Field(
        default=None, description="Mean phase quality; only set when every phase completed"
    )
    production_readiness: int = Field(default=0, ge=0, le=100)
    phase_results: tuple[PhaseResult, ...] = ()
    issues: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()


class ProgressEvent(BaseModel):
    """Normalised progress snapshot sent to observers."""

    model_config = ConfigDict(frozen=True)

    phase_index: int
    phase_name: str
    total_phases: int
    phase_percent: float = Field(..., ge=0, le=100)
    total_percent: float = Field(..., ge=0, le=100)
    elapsed_minutes: float = Field(..., ge=0)
    remaining_minutes: float = Field(..., ge=0)
    status: ProcessStatus
    current_task: str = ""
    completed_phases: int = 0
