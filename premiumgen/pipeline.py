"""premiumgen premium generation pipeline.

Implements the five-phase, time-boxed generation process on top of
``PhaseOrchestrator``:

Phase 1: REQUIREMENTS -- Derive the design context from the user's idea.
Phase 2: SELECTION    -- Rank templates, adapt the winner, outline the architecture.
Phase 3: DESIGN       -- Design tokens and palette contrast checks.
Phase 4: IMPLEMENT    -- Component, page, test and document manifest.
Phase 5: QA           -- Final checklist over everything above.

Usage::

    python -m premiumgen.pipeline "A task board for small teams"
    python -m premiumgen.pipeline "An online shop for handmade goods" --audience general -o result.json
"""

from __future__ import annotations

import asyncio
import re
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, Optional

from rich.panel import Panel

from premiumgen.config import Config
from premiumgen.orchestrator import (
    Phase,
    PhaseOrchestrator,
    PhaseResult,
    PipelineError,
    ProcessResult,
    ProgressEvent,
    ProgressReporter,
)
from premiumgen.selector import (
    CANDIDATE_CATALOG,
    AdaptedCandidate,
    Candidate,
    ColorSlots,
    Complexity,
    DesignContext,
    DesignEnrichmentClient,
    EmotionalTone,
    Layout,
    PrimaryGoal,
    QualityLevel,
    RequestOptions,
    TargetAudience,
    TemplateCustomizer,
    TemplateScorer,
    TemplateSelection,
    build_design_context,
    generate_palette,
    select_template,
)
from premiumgen.selector.customizer import adapt_layout
from premiumgen.utils import console, create_progress, print_summary_table, save_json

ProfileBuilder = Callable[[str, RequestOptions], DesignContext]
PaletteGenerator = Callable[[DesignContext], ColorSlots]

# ---------------------------------------------------------------------------
# Phase declarations
# ---------------------------------------------------------------------------

DEFAULT_PHASES: tuple[Phase, ...] = (
    Phase(
        name="Deep Requirements Analysis",
        time_budget_minutes=6,
        quality_threshold=85,
        description="Requirement profile and user persona",
        checkpoint_labels=(
            "User persona analysis",
            "Business requirements",
            "Technical requirements",
            "Performance requirements",
        ),
    ),
    Phase(
        name="Template Selection & Architecture",
        time_budget_minutes=7,
        quality_threshold=90,
        description="Template ranking, adaptation and application structure",
        checkpoint_labels=(
            "Template ranking",
            "Template adaptation",
            "Application structure",
            "Page map",
        ),
    ),
    Phase(
        name="Premium UI Design",
        time_budget_minutes=8,
        quality_threshold=92,
        description="Design system and accessibility of the palette",
        checkpoint_labels=(
            "Colour palette",
            "Typography system",
            "Spacing and shape",
            "Accessibility checks",
        ),
    ),
    Phase(
        name="Production-Grade Implementation Plan",
        time_budget_minutes=10,
        quality_threshold=88,
        description="Component, page, test and documentation manifest",
        checkpoint_labels=(
            "Component modules",
            "Pages",
            "Tests",
            "Documentation",
        ),
    ),
    Phase(
        name="Quality Assurance & Optimization",
        time_budget_minutes=4,
        quality_threshold=95,
        description="Final checklist",
        checkpoint_labels=(
            "Accessibility review",
            "Scope review",
            "Consistency review",
            "Final sign-off",
        ),
    ),
)

# A candidate matching category, complexity, layout, audience and goal
# exactly with a perfect base quality (non-diversity category).
PERFECT_FIT_SCORE = 125.0
FALLBACK_PENALTY = 10.0

GOAL_PAGES: dict[PrimaryGoal, str] = {
    PrimaryGoal.EFFICIENCY: "Workspace",
    PrimaryGoal.ENGAGEMENT: "Feed",
    PrimaryGoal.CONVERSION: "Checkout",
    PrimaryGoal.ANALYSIS: "Reports",
    PrimaryGoal.COLLABORATION: "Team",
}

COMPONENT_BUDGET: dict[Complexity, int] = {
    Complexity.SIMPLE: 4,
    Complexity.MODERATE: 6,
    Complexity.COMPLEX: 10,
}

TYPE_SCALES: dict[Layout, tuple[str, float]] = {
    Layout.MINIMAL: ("Inter", 1.2),
    Layout.MODERN: ("Plus Jakarta Sans", 1.25),
    Layout.PROFESSIONAL: ("IBM Plex Sans", 1.2),
    Layout.CREATIVE: ("Space Grotesk", 1.333),
}

CORNER_RADII: dict[EmotionalTone, int] = {
    EmotionalTone.SERIOUS: 2,
    EmotionalTone.PROFESSIONAL: 4,
    EmotionalTone.MODERN: 8,
    EmotionalTone.FRIENDLY: 12,
    EmotionalTone.CREATIVE: 16,
}

# ---------------------------------------------------------------------------
# Design helpers
# ---------------------------------------------------------------------------

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def _relative_luminance(hex_color: str) -> float:
    """WCAG 2.x relative luminance of an sRGB hex colour.

    Raises:
        ValueError: If *hex_color* is not a 3- or 6-digit hex colour.
    """
    match = _HEX_RE.match(hex_color.strip())
    if not match:
        raise ValueError(f"Not a hex colour: {hex_color!r}")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(d * 2 for d in digits)

    def channel(value: int) -> float:
        c = value / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = (channel(int(digits[i : i + 2], 16)) for i in (0, 2, 4))
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(foreground: str, background: str) -> float:
    """WCAG contrast ratio between two hex colours (1.0 .. 21.0)."""
    lighter, darker = sorted(
        (_relative_luminance(foreground), _relative_luminance(background)), reverse=True
    )
    return (lighter + 0.05) / (darker + 0.05)


def text_contrast_quality(ratio: float) -> float:
    """Quality score for body-text contrast (AAA >= 7, AA >= 4.5, large-text AA >= 3)."""
    if ratio >= 7.0:
        return 100.0
    if ratio >= 4.5:
        return 94.0
    if ratio >= 3.0:
        return 80.0
    return 60.0


def _slug(tag: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", tag.lower()).strip("-")


def _title(tag: str) -> str:
    return " ".join(part.capitalize() for part in re.split(r"[-_\s]+", tag) if part)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class Pipeline:
    """Five-phase premium generation pipeline.

    Every collaborator can be replaced: the profile builder and palette
    generator are plain callables, the scorer/customizer are injectable and
    the candidate catalog is just a sequence.

    Attributes:
        config: Global configuration.
        orchestrator: The orchestrator that runs the phases.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        *,
        profile_builder: ProfileBuilder = build_design_context,
        palette_generator: PaletteGenerator = generate_palette,
        candidates: Sequence[Candidate] = CANDIDATE_CATALOG,
        scorer: Optional[TemplateScorer] = None,
        customizer: Optional[TemplateCustomizer] = None,
        reporter: Optional[ProgressReporter] = None,
        phases: Sequence[Phase] = DEFAULT_PHASES,
    ) -> None:
        self.config = config or Config()
        self.profile_builder = profile_builder
        self.palette_generator = palette_generator
        self.candidates = tuple(candidates)
        self.scorer = scorer or TemplateScorer()
        if customizer is None:
            client = None
            if self.config.enrichment.enabled:
                client = DesignEnrichmentClient.from_config(self.config.enrichment)
            customizer = TemplateCustomizer(
                enrichment_client=client,
                enrichment_timeout=self.config.enrichment.timeout,
            )
        self.customizer = customizer
        self.phases = tuple(phases)
        if len(self.phases) != len(DEFAULT_PHASES):
            raise ValueError(f"The premium pipeline needs {len(DEFAULT_PHASES)} phases")
        self.orchestrator = PhaseOrchestrator(
            self.config.process,
            reporter or ProgressReporter(timeout=self.config.process.observer_timeout_seconds),
        )

    def cancel(self) -> None:
        """Stop before the next phase starts."""
        self.orchestrator.cancel()

    async def run(self, user_input: str, options: Optional[RequestOptions] = None) -> ProcessResult:
        """Run all five phases for *user_input*."""
        options = options or RequestOptions()
        budget = options.time_budget_minutes or self.config.process.overall_budget_minutes

        console.print(
            Panel(
                f"[bold bright_cyan]premiumgen[/bold bright_cyan]\n"
                f"Idea     : {user_input.strip()[:80] or '(empty)'}\n"
                f"Quality  : {options.quality_level.value}\n"
                f"Budget   : {budget:g} min",
                title="[bold]Process Start[/bold]",
                border_style="bright_cyan",
            )
        )

        async def requirements(prior: tuple[PhaseResult, ...]) -> dict[str, Any]:
            return await self.analyse_requirements(user_input, options)

        return await self.orchestrator.run(
            self.phases,
            [
                requirements,
                self.select_and_architect,
                self.design_system,
                self.implementation_plan,
                self.quality_assurance,
            ],
            overall_budget_minutes=budget,
        )

    # ------------------------------------------------------------------
    # Phase 1: REQUIREMENTS
    # ------------------------------------------------------------------

    async def analyse_requirements(
        self, user_input: str, options: RequestOptions
    ) -> dict[str, Any]:
        """Derive the ``DesignContext`` and the headline requirements."""
        if not user_input.strip():
            raise PipelineError(0, self.phases[0].name, "User input is empty")

        context = self.profile_builder(user_input, options)
        console.print(
            f"  Category [bold]{context.category.value}[/bold], "
            f"complexity [bold]{context.complexity.value}[/bold], "
            f"confidence {context.confidence_score:g}/10"
        )

        requirements = [
            f"Serve a {context.target_audience.value} audience",
            f"Optimise for {context.primary_goal.value}",
            f"Convey a {context.emotional_tone.value} tone",
            f"Deliver {context.complexity.value} scope",
        ]
        if options.industry:
            requirements.append(f"Follow {options.industry} industry conventions")

        return {
            "context": context,
            "requirements": requirements,
            "quality_level": options.quality_level.value,
            "quality_score": 50.0 + 5.0 * context.confidence_score,
        }

    # ------------------------------------------------------------------
    # Phase 2: SELECTION
    # ------------------------------------------------------------------

    async def select_and_architect(self, prior: tuple[PhaseResult, ...]) -> dict[str, Any]:
        """Rank and adapt a template, then outline pages and modules."""
        context: DesignContext = prior[0].output["context"]
        palette = self.palette_generator(context)
        selection = await select_template(
            context,
            palette,
            candidates=self.candidates,
            scorer=self.scorer,
            customizer=self.customizer,
        )
        adapted = selection.customized

        pages = ["Home", GOAL_PAGES[context.primary_goal], "Settings"]
        if context.target_audience in (TargetAudience.ENTERPRISE, TargetAudience.PROFESSIONAL):
            pages.append("Admin")

        quality = min(100.0, selection.score / PERFECT_FIT_SCORE * 100.0)
        if selection.used_fallback:
            quality -= FALLBACK_PENALTY

        print_summary_table(
            {
                "Template": selection.selected.name,
                "Adapted as": adapted.name,
                "Score": f"{selection.score:.1f}",
                "Layout": adapted.layout.value,
                "Components": ", ".join(adapted.components),
            },
            title="Template Selection",
        )

        return {
            "selection": selection,
            "architecture": {
                "pages": pages,
                "components": list(adapted.components),
                "layout": adapted.layout.value,
            },
            "reasoning": selection.reasoning,
            "warnings": list(selection.warnings),
            "quality_score": max(0.0, quality),
        }

    # ------------------------------------------------------------------
    # Phase 3: DESIGN
    # ------------------------------------------------------------------

    async def design_system(self, prior: tuple[PhaseResult, ...]) -> dict[str, Any]:
        """Design tokens for the adapted template and WCAG contrast checks."""
        selection: TemplateSelection = prior[1].output["selection"]
        adapted = selection.customized
        colors = adapted.colors

        warnings: list[str] = []
        try:
            text_ratio = contrast_ratio(colors.text, colors.background)
            primary_ratio = contrast_ratio(colors.primary, colors.background)
        except ValueError as exc:
            # Unmeasurable colours score as no contrast at all.
            warnings.append(f"Palette contrast could not be measured: {exc}")
            text_ratio = primary_ratio = 1.0
        quality = text_contrast_quality(text_ratio)
        if primary_ratio < 3.0:
            # Non-text UI elements need 3:1 against the background.
            quality -= 4.0

        font, scale = TYPE_SCALES[adapted.layout]
        tokens = {
            "colors": colors.model_dump(),
            "font_family": font,
            "type_scale": [round(16 * scale**step, 1) for step in range(-1, 5)],
            "spacing_unit": 4 if adapted.complexity == Complexity.COMPLEX else 8,
            "corner_radius": CORNER_RADII[selection.context.emotional_tone],
        }

        return {
            "tokens": tokens,
            "contrast": {
                "text_on_background": round(text_ratio, 2),
                "primary_on_background": round(primary_ratio, 2),
            },
            "warnings": warnings,
            "quality_score": max(0.0, quality),
        }

    # ------------------------------------------------------------------
    # Phase 4: IMPLEMENT
    # ------------------------------------------------------------------

    async def implementation_plan(self, prior: tuple[PhaseResult, ...]) -> dict[str, Any]:
        """List the modules, pages, tests and documents to produce."""
        selection: TemplateSelection = prior[1].output["selection"]
        architecture = prior[1].output["architecture"]
        adapted: AdaptedCandidate = selection.customized

        components = [f"components/{_slug(tag)}" for tag in adapted.components]
        pages = [f"pages/{_slug(page)}" for page in architecture["pages"]]
        tests = [f"tests/{module.split('/', 1)[1]}.test" for module in components + pages]
        documents = ["README.md", "ARCHITECTURE.md", "DESIGN_TOKENS.md"]

        coverage = min(1.0, len(tests) / max(1, len(components) + len(pages)))
        quality = 60.0 * coverage + 4.0 * adapted.base_quality_score

        return {
            "modules": {
                "components": components,
                "pages": pages,
                "tests": tests,
                "documents": documents,
            },
            "component_titles": [_title(tag) for tag in adapted.components],
            "test_coverage": coverage,
            "quality_score": min(100.0, quality),
        }

    # ------------------------------------------------------------------
    # Phase 5: QA
    # ------------------------------------------------------------------

    async def quality_assurance(self, prior: tuple[PhaseResult, ...]) -> dict[str, Any]:
        """Score a checklist over all previous phase outputs."""
        context: DesignContext = prior[0].output["context"]
        selection: TemplateSelection = prior[1].output["selection"]
        adapted = selection.customized
        contrast = prior[2].output["contrast"]

        checks = {
            "text_contrast_aa": contrast["text_on_background"] >= 4.5,
            "component_budget": len(adapted.components) <= COMPONENT_BUDGET[adapted.complexity],
            "layout_matches_tone": adapted.layout == adapt_layout(adapted.layout, context.emotional_tone),
            "confident_profile": context.confidence_score >= 6.0,
            "earlier_phases_met_thresholds": all(r.threshold_met for r in prior),
        }
        passed = sum(checks.values())
        failed = [name for name, ok in checks.items() if not ok]
        for name in failed:
            console.print(f"  [yellow]- check failed:[/yellow] {name}")

        return {
            "checks": checks,
            "failed_checks": failed,
            "quality_score": 100.0 * passed / len(checks),
        }


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


class RichProgressObserver:
    """Renders progress events on a Rich progress bar."""

    def __init__(self) -> None:
        self.progress = create_progress()
        self.task_id = self.progress.add_task("Starting", total=100)

    def __call__(self, event: ProgressEvent) -> None:
        self.progress.update(
            self.task_id,
            completed=event.total_percent,
            description=(
                f"[{event.phase_index + 1}/{event.total_phases}] {event.current_task} "
                f"({event.remaining_minutes:.1f} min left)"
            ),
        )


def main() -> None:
    """CLI entry point for ``python -m premiumgen.pipeline``."""
    import argparse

    parser = argparse.ArgumentParser(
        description="premiumgen -- time-boxed, quality-gated generation pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            '  python -m premiumgen.pipeline "A task board for small teams"\n'
            '  python -m premiumgen.pipeline "An analytics dashboard" --audience enterprise\n'
            '  python -m premiumgen.pipeline "A portfolio site" --minute-seconds 1\n'
        ),
    )
    parser.add_argument("idea", help="Short description of the application to generate")
    parser.add_argument("--industry", default=None, help="Industry hint")
    parser.add_argument(
        "--audience",
        choices=[a.value for a in TargetAudience],
        default=None,
        help="Target audience (detected from the idea if omitted)",
    )
    parser.add_argument(
        "--quality-level",
        choices=[q.value for q in QualityLevel],
        default=QualityLevel.PREMIUM.value,
    )
    parser.add_argument(
        "--time-budget", type=float, default=None, help="Overall budget in minutes"
    )
    parser.add_argument(
        "--minute-seconds",
        type=float,
        default=None,
        help="Real seconds per budget minute (default: 60)",
    )
    parser.add_argument(
        "--output", "-o", default=None, help="Write the process result as JSON to this path"
    )

    args = parser.parse_args()

    if not args.idea.strip():
        console.print("[bold red]Error:[/bold red] The idea must not be empty")
        sys.exit(1)
    if args.time_budget is not None and args.time_budget <= 0:
        console.print(f"[bold red]Error:[/bold red] Invalid time budget: {args.time_budget}")
        sys.exit(1)

    config = Config.from_env()
    if args.minute_seconds:
        config.process.minute_seconds = args.minute_seconds
    if args.output:
        config.output_path = Path(args.output)

    options = RequestOptions(
        industry=args.industry,
        target_audience=TargetAudience(args.audience) if args.audience else None,
        quality_level=QualityLevel(args.quality_level),
        time_budget_minutes=args.time_budget,
    )

    observer = RichProgressObserver()
    pipeline = Pipeline(config)
    pipeline.orchestrator.reporter.subscribe(observer)

    async def _run() -> ProcessResult:
        with observer.progress:
            result = await pipeline.run(args.idea, options)
        await save_json(result.model_dump(mode="json"), config.output_path)
        return result

    result = asyncio.run(_run())
    console.print(f"Result written to [bold]{config.output_path}[/bold]")

    if result.success:
        console.print(
            f"[bold green]Process completed -- production readiness "
            f"{result.production_readiness}%[/bold green]"
        )
    else:
        console.print("[bold red]Process did not complete.[/bold red]")
        for issue in result.issues:
            console.print(f"  - {issue}")
        sys.exit(1)


if __name__ == "__main__":
    main()
