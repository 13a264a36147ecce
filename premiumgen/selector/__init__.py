"""premiumgen template selection.

Ranks a catalog of templates against a derived design context and adapts the
winner to it.

Usage::

    from premiumgen.selector import build_design_context, generate_palette, select_template

    context = build_design_context("A task board for small teams")
    selection = await select_template(context, generate_palette(context))
    print(selection.customized.name)
"""

from premiumgen.selector.catalog import CANDIDATE_CATALOG, DEFAULT_CANDIDATE_ID, default_candidate
from premiumgen.selector.customizer import TemplateCustomizer
from premiumgen.selector.enrichment import DesignEnrichmentClient, EnrichmentResult
from premiumgen.selector.models import (
    AdaptedCandidate,
    Candidate,
    Category,
    ColorSlots,
    Complexity,
    CustomizationOptions,
    DesignContext,
    EmotionalTone,
    EmptyCandidateCatalog,
    EnrichmentFailure,
    Layout,
    PrimaryGoal,
    ScoredCandidate,
    TargetAudience,
    TemplateSelection,
)
from premiumgen.selector.profile import (
    QualityLevel,
    RequestOptions,
    build_design_context,
    generate_palette,
)
from premiumgen.selector.scorer import TemplateScorer
from premiumgen.selector.selection import select_template

__all__ = [
    "AdaptedCandidate",
    "CANDIDATE_CATALOG",
    "Candidate",
    "Category",
    "ColorSlots",
    "Complexity",
    "CustomizationOptions",
    "DEFAULT_CANDIDATE_ID",
    "DesignContext",
    "DesignEnrichmentClient",
    "EmotionalTone",
    "EmptyCandidateCatalog",
    "EnrichmentFailure",
    "EnrichmentResult",
    "Layout",
    "PrimaryGoal",
    "QualityLevel",
    "RequestOptions",
    "ScoredCandidate",
    "TargetAudience",
    "TemplateCustomizer",
    "TemplateScorer",
    "TemplateSelection",
    "build_design_context",
    "default_candidate",
    "generate_palette",
    "select_template",
]
