"""premiumgen phase orchestration.

Usage::

    from premiumgen.orchestrator import Phase, PhaseOrchestrator

    phases = [Phase(name="Analyse", time_budget_minutes=6, quality_threshold=85)]
    result = await PhaseOrchestrator().run(phases, [analyse])
    print(result.production_readiness)
"""

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
from premiumgen.orchestrator.progress import ProgressObserver, ProgressReporter
from premiumgen.orchestrator.runner import (
    PhaseOrchestrator,
    WorkFn,
    evaluate_output_quality,
)

__all__ = [
    "CancellationRequested",
    "Checkpoint",
    "Phase",
    "PhaseOrchestrator",
    "PhaseResult",
    "PhaseTimeoutError",
    "PipelineError",
    "ProcessResult",
    "ProcessState",
    "ProcessStatus",
    "ProgressEvent",
    "ProgressObserver",
    "ProgressReporter",
    "QualityThresholdMiss",
    "WorkFn",
    "evaluate_output_quality",
]
