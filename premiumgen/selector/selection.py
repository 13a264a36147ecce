"""Template selection: rank, fall back, customise and explain."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from premiumgen.selector.catalog import CANDIDATE_CATALOG, default_candidate
from premiumgen.selector.customizer import TemplateCustomizer
from premiumgen.selector.models import (
    AdaptedCandidate,
    Candidate,
    ColorSlots,
    Complexity,
    CustomizationOptions,
    DesignContext,
    TemplateSelection,
)
from premiumgen.selector.scorer import TemplateScorer
from premiumgen.utils import console, print_warning

MAX_ALTERNATIVES = 3


def design_reasoning(
    context: DesignContext,
    selected: Candidate,
    customized: AdaptedCandidate,
) -> str:
    """Human-readable explanation of why a template was chosen and how it changed."""
    reasons = [f"Selected a template optimised for the '{context.category.value}' category"]

    if context.complexity != Complexity.MODERATE:
        style = "streamlined" if context.complexity == Complexity.SIMPLE else "feature-rich"
        reasons.append(
            f"Chose a {style} design to serve a {context.target_audience.value} audience"
        )

    reasons.append(
        f"Adopted a {customized.layout.value} layout for a "
        f"{context.emotional_tone.value} impression"
    )
    if customized.colors != selected.colors:
        reasons.append("Customised the colour scheme to match the product's personality")
    else:
        reasons.append("Kept the template's standard colour scheme")
    reasons.append(f"Arranged elements and user flows to maximise {context.primary_goal.value}")

    if context.confidence_score >= 8:
        reasons.append(f"High-confidence choice ({context.confidence_score:g}/10)")
    elif context.confidence_score <= 5:
        reasons.append(
            f"Safe, general-purpose choice given limited detail "
            f"({context.confidence_score:g}/10)"
        )

    return ". ".join(reasons) + "."


async def select_template(
    context: DesignContext,
    palette: ColorSlots,
    *,
    candidates: Sequence[Candidate] = CANDIDATE_CATALOG,
    scorer: Optional[TemplateScorer] = None,
    customizer: Optional[TemplateCustomizer] = None,
    options: Optional[CustomizationOptions] = None,
) -> TemplateSelection:
    """Pick the best candidate for *context* and adapt it.

    An empty *candidates* sequence falls back to the catalog's default
    candidate and records a warning.
    """
    scorer = scorer or TemplateScorer()
    customizer = customizer or TemplateCustomizer()
    warnings: list[str] = []

    ranking = scorer.rank(candidates, context)
    if ranking:
        selected, score, used_fallback = ranking[0].candidate, ranking[0].score, False
    else:
        selected = default_candidate()
        score = scorer.score(selected, context).score
        used_fallback = True
        warning = f"Candidate catalog empty; fell back to default template {selected.id}"
        warnings.append(warning)
        print_warning(f"  {warning}")

    for item in ranking:
        console.print(f"    [dim]{item.candidate.id:<24} {item.score:7.2f}[/dim]")

    customized = await customizer.customize(selected, context, palette, options)
    warnings.extend(customized.warnings)

    return TemplateSelection(
        context=context,
        selected=selected,
        customized=customized,
        score=score,
        alternatives=tuple(ranking[1 : 1 + MAX_ALTERNATIVES]),
        used_fallback=used_fallback,
        reasoning=design_reasoning(context, selected, customized),
        warnings=tuple(warnings),
    )
