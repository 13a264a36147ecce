"""Adapts a selected template to a design context.

Apart from the identity timestamp and the outcome of the optional enrichment
call, customisation is deterministic.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from typing import Optional

from premiumgen.selector.enrichment import DesignEnrichmentClient, EnrichmentResult
from premiumgen.selector.models import (
    AdaptedCandidate,
    Candidate,
    Category,
    ColorSlots,
    Complexity,
    CustomizationOptions,
    DesignContext,
    DesignEnrichment,
    EmotionalTone,
    Layout,
)
from premiumgen.utils import print_warning

CATEGORY_NAME_PREFIXES: dict[Category, str] = {
    Category.DASHBOARD: "Data-Driven",
    Category.PRODUCTIVITY: "Efficiency-First",
    Category.CREATIVE: "Creative",
    Category.BUSINESS: "Business-Optimized",
    Category.SOCIAL: "Community-Centered",
    Category.ECOMMERCE: "Conversion-Focused",
}

TONE_LAYOUTS: dict[EmotionalTone, Layout] = {
    EmotionalTone.SERIOUS: Layout.PROFESSIONAL,
    EmotionalTone.PROFESSIONAL: Layout.PROFESSIONAL,
    EmotionalTone.FRIENDLY: Layout.MODERN,
    EmotionalTone.CREATIVE: Layout.CREATIVE,
    EmotionalTone.MODERN: Layout.MODERN,
}

# Appended, in this order, when a template is scaled up to "complex".
SUPPLEMENTAL_COMPONENTS: tuple[str, ...] = ("search", "filters", "analytics", "notifications")

SIMPLE_COMPONENT_LIMIT = 3
QUALITY_BOOST = 1.0
MAX_QUALITY = 10.0


def adapt_components(components: tuple[str, ...], complexity: Complexity) -> tuple[str, ...]:
    """Resize a component list for *complexity*.

    ``simple`` keeps the first three entries; ``complex`` appends the missing
    supplemental components; ``moderate`` leaves the list alone.
    """
    if complexity == Complexity.SIMPLE:
        return components[:SIMPLE_COMPONENT_LIMIT]
    if complexity == Complexity.COMPLEX:
        extra = tuple(c for c in SUPPLEMENTAL_COMPONENTS if c not in components)
        return components + extra
    return components


def adapt_layout(layout: Layout, tone: EmotionalTone) -> Layout:
    return TONE_LAYOUTS.get(tone, layout)


def customized_name(name: str, category: Category) -> str:
    return f"{CATEGORY_NAME_PREFIXES.get(category, 'Custom')} {name}"


class TemplateCustomizer:
    """Produces ``AdaptedCandidate`` objects.

    Args:
        enrichment_client: Optional client used for best-effort enrichment.
        enrichment_timeout: Seconds to wait for enrichment before giving up.
        clock: Returns epoch seconds; only used for the identity suffix.
    """

    def __init__(
        self,
        enrichment_client: Optional[DesignEnrichmentClient] = None,
        enrichment_timeout: float = 10.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.enrichment_client = enrichment_client
        self.enrichment_timeout = enrichment_timeout
        self._clock = clock

    async def customize(
        self,
        candidate: Candidate,
        context: DesignContext,
        palette: ColorSlots,
        options: CustomizationOptions | None = None,
    ) -> AdaptedCandidate:
        """Adapt *candidate* to *context*.

        Re-customising an ``AdaptedCandidate`` starts from the original
        catalog entry's id, name, components and quality score, so the
        quality boost is applied once and a "simple" list is always a prefix
        of the catalog entry's list.
        """
        options = options or CustomizationOptions()

        if isinstance(candidate, AdaptedCandidate):
            source_id = candidate.source_id
            source_name = candidate.source_name
            source_complexity = candidate.source_complexity
            source_components = candidate.source_components
            source_quality = candidate.source_base_quality_score
        else:
            source_id = candidate.id
            source_name = candidate.name
            source_complexity = candidate.complexity
            source_components = candidate.components
            source_quality = candidate.base_quality_score

        colors = palette if options.adapt_colors else candidate.colors

        complexity = candidate.complexity
        components = candidate.components
        if options.adapt_complexity:
            # Always resize from the catalog entry's list, never an adapted one.
            complexity = context.complexity
            components = source_components
            if source_complexity != context.complexity:
                components = adapt_components(source_components, context.complexity)

        layout = candidate.layout
        if options.adapt_layout:
            layout = adapt_layout(candidate.layout, context.emotional_tone)

        enrichment: Optional[DesignEnrichment] = None
        warnings: list[str] = []
        if options.adapt_components and candidate.design_url and self.enrichment_client:
            result = await self._enrich(candidate)
            if result.success and result.enrichment is not None:
                enrichment = result.enrichment.model_copy(update={"colors": colors})
            else:
                warning = f"Design enrichment skipped for {source_id}: {result.error}"
                warnings.append(warning)
                print_warning(f"  {warning}")

        return AdaptedCandidate(
            id=f"customized-{source_id}-{int(self._clock() * 1000)}",
            name=customized_name(source_name, context.category),
            category=candidate.category,
            complexity=complexity,
            layout=layout,
            colors=colors,
            components=components,
            base_quality_score=min(MAX_QUALITY, source_quality + QUALITY_BOOST),
            design_url=candidate.design_url,
            source_id=source_id,
            source_name=source_name,
            source_complexity=source_complexity,
            source_components=source_components,
            source_base_quality_score=source_quality,
            enrichment=enrichment,
            warnings=tuple(warnings),
        )

    async def _enrich(self, candidate: Candidate) -> EnrichmentResult:
        """Run the enrichment call under its own timeout."""
        if self.enrichment_client is None:
            raise RuntimeError("No enrichment client configured")
        try:
            return await asyncio.wait_for(
                self.enrichment_client.fetch(candidate), timeout=self.enrichment_timeout
            )
        except asyncio.TimeoutError:
            return EnrichmentResult(
                success=False,
                error=f"enrichment timed out after {self.enrichment_timeout}s",
            )
