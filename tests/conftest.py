"""Shared pytest fixtures for the premiumgen test suite.

Provides reusable fixtures for:
- Design contexts covering the common categories
- A compressed-time process configuration
- Phase declarations and trivial work functions
- A customizer with a fixed clock
"""

from __future__ import annotations

from typing import Any

import pytest

from premiumgen.config import Config, ProcessConfig
from premiumgen.orchestrator import Phase, PhaseResult
from premiumgen.selector import (
    Category,
    Complexity,
    DesignContext,
    EmotionalTone,
    PrimaryGoal,
    TargetAudience,
    TemplateCustomizer,
    generate_palette,
)


# ---------------------------------------------------------------------------
# Design contexts
# ---------------------------------------------------------------------------

@pytest.fixture
def productivity_context() -> DesignContext:
    """A simple productivity app for a general audience."""
    return DesignContext(
        category=Category.PRODUCTIVITY,
        complexity=Complexity.SIMPLE,
        emotional_tone=EmotionalTone.PROFESSIONAL,
        target_audience=TargetAudience.GENERAL,
        primary_goal=PrimaryGoal.EFFICIENCY,
        confidence_score=7.0,
    )


@pytest.fixture
def dashboard_context() -> DesignContext:
    """An enterprise analytics dashboard."""
    return DesignContext(
        category=Category.DASHBOARD,
        complexity=Complexity.COMPLEX,
        emotional_tone=EmotionalTone.SERIOUS,
        target_audience=TargetAudience.ENTERPRISE,
        primary_goal=PrimaryGoal.ANALYSIS,
        confidence_score=8.5,
    )


@pytest.fixture
def productivity_palette(productivity_context):
    return generate_palette(productivity_context)


@pytest.fixture
def fixed_clock_customizer() -> TemplateCustomizer:
    """Customizer whose identity timestamp is always 1234.5s."""
    return TemplateCustomizer(clock=lambda: 1234.5)


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------

@pytest.fixture
def fast_process_config() -> ProcessConfig:
    """One budget minute lasts 50ms so phase budgets are tiny."""
    return ProcessConfig(
        overall_budget_minutes=30,
        minute_seconds=0.05,
        progress_interval_seconds=0.01,
        observer_timeout_seconds=0.5,
    )


@pytest.fixture
def fast_config(fast_process_config, tmp_path) -> Config:
    return Config(
        process=fast_process_config,
        output_path=tmp_path / "output" / "process-result.json",
    )


@pytest.fixture
def five_phases() -> list[Phase]:
    """Five one-minute phases with no quality thresholds."""
    return [
        Phase(name=name, time_budget_minutes=1, checkpoint_labels=("start", "finish"))
        for name in ("Analyse", "Select", "Design", "Implement", "Verify")
    ]


def constant_work(quality: float, **extra: Any):
    """Work function returning a fixed quality score."""

    async def work(prior: tuple[PhaseResult, ...]) -> dict[str, Any]:
        return {"quality_score": quality, "seen": len(prior), **extra}

    return work


@pytest.fixture
def make_work():
    return constant_work
