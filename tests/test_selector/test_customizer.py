"""Unit tests for TemplateCustomizer (premiumgen.selector.customizer).

Tests cover:
- adapt_components / adapt_layout / customized_name helpers
- Identity, naming and quality boost of adapted candidates
- Re-customising an adapted candidate
- Customisation options
- Best-effort enrichment (success, failure, timeout)
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from premiumgen.selector import (
    CANDIDATE_CATALOG,
    Category,
    Complexity,
    CustomizationOptions,
    DesignContext,
    EmotionalTone,
    EnrichmentResult,
    Layout,
    TemplateCustomizer,
    generate_palette,
)
from premiumgen.selector.catalog import get_candidate
from premiumgen.selector.customizer import (
    SUPPLEMENTAL_COMPONENTS,
    adapt_components,
    adapt_layout,
    customized_name,
)
from premiumgen.selector.models import DesignEnrichment


def _context(**overrides) -> DesignContext:
    return DesignContext(**overrides)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestAdaptComponents:
    @pytest.mark.unit
    def test_simple_keeps_first_three(self):
        result = adapt_components(("a", "b", "c", "d", "e"), Complexity.SIMPLE)
        assert result == ("a", "b", "c")

    @pytest.mark.unit
    def test_simple_short_list_unchanged(self):
        assert adapt_components(("a",), Complexity.SIMPLE) == ("a",)

    @pytest.mark.unit
    def test_complex_appends_missing_supplements(self):
        result = adapt_components(("charts", "filters"), Complexity.COMPLEX)
        assert result == ("charts", "filters", "search", "analytics", "notifications")

    @pytest.mark.unit
    def test_complex_no_duplicates(self):
        result = adapt_components(SUPPLEMENTAL_COMPONENTS, Complexity.COMPLEX)
        assert result == SUPPLEMENTAL_COMPONENTS

    @pytest.mark.unit
    def test_moderate_unchanged(self):
        assert adapt_components(("a", "b", "c", "d"), Complexity.MODERATE) == ("a", "b", "c", "d")


class TestAdaptLayout:
    @pytest.mark.unit
    @pytest.mark.parametrize("tone,expected", [
        (EmotionalTone.SERIOUS, Layout.PROFESSIONAL),
        (EmotionalTone.PROFESSIONAL, Layout.PROFESSIONAL),
        (EmotionalTone.FRIENDLY, Layout.MODERN),
        (EmotionalTone.CREATIVE, Layout.CREATIVE),
        (EmotionalTone.MODERN, Layout.MODERN),
    ])
    def test_tone_mapping(self, tone, expected):
        assert adapt_layout(Layout.MINIMAL, tone) == expected


class TestCustomizedName:
    @pytest.mark.unit
    def test_prefixes(self):
        assert customized_name("Shop", Category.ECOMMERCE) == "Conversion-Focused Shop"
        assert customized_name("Board", Category.DASHBOARD) == "Data-Driven Board"
        assert customized_name("Notes", Category.PRODUCTIVITY) == "Efficiency-First Notes"


# ---------------------------------------------------------------------------
# TemplateCustomizer.customize
# ---------------------------------------------------------------------------


class TestCustomize:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_identity_and_name(self, fixed_clock_customizer):
        candidate = get_candidate("minimal-productivity")
        context = _context(category=Category.DASHBOARD)
        adapted = await fixed_clock_customizer.customize(
            candidate, context, generate_palette(context)
        )
        assert adapted.id == "customized-minimal-productivity-1234500"
        assert adapted.name == "Data-Driven Clean Productivity App"
        assert adapted.source_id == "minimal-productivity"
        assert adapted.source_name == "Clean Productivity App"
        assert adapted.category == Category.PRODUCTIVITY

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_quality_boost(self, fixed_clock_customizer):
        candidate = get_candidate("ecommerce-shop")
        context = _context(category=Category.ECOMMERCE, complexity=Complexity.COMPLEX)
        adapted = await fixed_clock_customizer.customize(
            candidate, context, generate_palette(context)
        )
        assert adapted.base_quality_score == 10
        assert adapted.source_base_quality_score == 9

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_quality_capped_at_ten(self, fixed_clock_customizer):
        candidate = get_candidate("business-saas").model_copy(update={"base_quality_score": 10})
        context = _context()
        adapted = await fixed_clock_customizer.customize(
            candidate, context, generate_palette(context)
        )
        assert adapted.base_quality_score == 10

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_recustomising_does_not_compound(self, fixed_clock_customizer):
        candidate = get_candidate("minimal-productivity")
        context = _context(category=Category.SOCIAL)
        palette = generate_palette(context)
        once = await fixed_clock_customizer.customize(candidate, context, palette)
        twice = await fixed_clock_customizer.customize(once, context, palette)
        assert twice.base_quality_score == 9
        assert twice.name == "Community-Centered Clean Productivity App"
        assert twice.source_id == "minimal-productivity"
        assert twice.id == once.id

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_recustomising_complex_to_simple_uses_source_components(
        self, fixed_clock_customizer
    ):
        candidate = get_candidate("business-saas").model_copy(
            update={"complexity": Complexity.MODERATE, "components": ("forms", "lists")}
        )
        complex_context = _context(complexity=Complexity.COMPLEX)
        simple_context = _context(complexity=Complexity.SIMPLE)

        grown = await fixed_clock_customizer.customize(
            candidate, complex_context, generate_palette(complex_context)
        )
        assert grown.components[:2] == ("forms", "lists")
        assert "search" in grown.components

        trimmed = await fixed_clock_customizer.customize(
            grown, simple_context, generate_palette(simple_context)
        )
        assert trimmed.complexity == Complexity.SIMPLE
        assert trimmed.components == ("forms", "lists")
        assert trimmed.source_components == ("forms", "lists")
        assert trimmed.source_complexity == Complexity.MODERATE

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_recustomising_back_to_source_complexity_restores_components(
        self, fixed_clock_customizer
    ):
        candidate = get_candidate("modern-dashboard")
        complex_context = _context(complexity=Complexity.COMPLEX)
        moderate_context = _context(complexity=Complexity.MODERATE)

        grown = await fixed_clock_customizer.customize(
            candidate, complex_context, generate_palette(complex_context)
        )
        restored = await fixed_clock_customizer.customize(
            grown, moderate_context, generate_palette(moderate_context)
        )
        assert restored.complexity == Complexity.MODERATE
        assert restored.components == candidate.components

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_simple_context_trims_components(self, fixed_clock_customizer):
        candidate = get_candidate("ecommerce-shop")
        context = _context(category=Category.ECOMMERCE, complexity=Complexity.SIMPLE)
        adapted = await fixed_clock_customizer.customize(
            candidate, context, generate_palette(context)
        )
        assert adapted.complexity == Complexity.SIMPLE
        assert adapted.components == ("product-grids", "cart", "checkout")
        assert len(adapted.components) <= 3

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_complex_context_appends_components(self, fixed_clock_customizer):
        candidate = get_candidate("modern-dashboard")
        context = _context(category=Category.DASHBOARD, complexity=Complexity.COMPLEX)
        adapted = await fixed_clock_customizer.customize(
            candidate, context, generate_palette(context)
        )
        assert adapted.complexity == Complexity.COMPLEX
        assert adapted.components == (
            "charts", "metrics-cards", "tables", "filters", "search", "analytics", "notifications",
        )

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_same_complexity_keeps_components(self, fixed_clock_customizer):
        candidate = get_candidate("minimal-productivity")
        context = _context(complexity=Complexity.SIMPLE)
        adapted = await fixed_clock_customizer.customize(
            candidate, context, generate_palette(context)
        )
        assert adapted.components == candidate.components

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_layout_and_palette_applied(self, fixed_clock_customizer):
        candidate = get_candidate("business-saas")
        context = _context(category=Category.CREATIVE, emotional_tone=EmotionalTone.CREATIVE)
        palette = generate_palette(context)
        adapted = await fixed_clock_customizer.customize(candidate, context, palette)
        assert adapted.layout == Layout.CREATIVE
        assert adapted.colors == palette

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_options_disable_adaptation(self, fixed_clock_customizer):
        candidate = get_candidate("ecommerce-shop")
        context = _context(complexity=Complexity.SIMPLE, emotional_tone=EmotionalTone.SERIOUS)
        options = CustomizationOptions(
            adapt_colors=False,
            adapt_layout=False,
            adapt_complexity=False,
            adapt_components=False,
        )
        adapted = await fixed_clock_customizer.customize(
            candidate, context, generate_palette(context), options
        )
        assert adapted.colors == candidate.colors
        assert adapted.layout == candidate.layout
        assert adapted.complexity == candidate.complexity
        assert adapted.components == candidate.components

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_catalog_untouched(self, fixed_clock_customizer):
        before = [c.model_dump() for c in CANDIDATE_CATALOG]
        for candidate in CANDIDATE_CATALOG:
            context = _context(complexity=Complexity.COMPLEX)
            await fixed_clock_customizer.customize(candidate, context, generate_palette(context))
        assert [c.model_dump() for c in CANDIDATE_CATALOG] == before


# ---------------------------------------------------------------------------
# Enrichment
# ---------------------------------------------------------------------------


def _client(fetch) -> MagicMock:
    client = MagicMock()
    client.fetch = fetch
    return client


class TestEnrichment:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_success_attaches_enrichment(self):
        enrichment = DesignEnrichment(file_key="abc", name="Shop", frames=("Home",), node_count=3)
        fetch = AsyncMock(return_value=EnrichmentResult(success=True, enrichment=enrichment))
        customizer = TemplateCustomizer(enrichment_client=_client(fetch))
        context = _context()
        palette = generate_palette(context)

        adapted = await customizer.customize(get_candidate("ecommerce-shop"), context, palette)

        fetch.assert_awaited_once()
        assert adapted.enrichment is not None
        assert adapted.enrichment.frames == ("Home",)
        assert adapted.enrichment.colors == palette
        assert adapted.warnings == ()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failure_becomes_warning(self):
        fetch = AsyncMock(return_value=EnrichmentResult(success=False, error="HTTP 403"))
        customizer = TemplateCustomizer(enrichment_client=_client(fetch))
        context = _context()

        adapted = await customizer.customize(
            get_candidate("minimal-productivity"), context, generate_palette(context)
        )

        assert adapted.enrichment is None
        assert adapted.warnings == (
            "Design enrichment skipped for minimal-productivity: HTTP 403",
        )

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_timeout_becomes_warning(self):
        async def slow_fetch(candidate):
            await asyncio.sleep(5)

        customizer = TemplateCustomizer(
            enrichment_client=_client(slow_fetch), enrichment_timeout=0.01
        )
        context = _context()

        adapted = await customizer.customize(
            get_candidate("minimal-productivity"), context, generate_palette(context)
        )

        assert adapted.enrichment is None
        assert len(adapted.warnings) == 1
        assert "timed out" in adapted.warnings[0]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_skipped_without_design_url(self):
        fetch = AsyncMock()
        customizer = TemplateCustomizer(enrichment_client=_client(fetch))
        candidate = get_candidate("minimal-productivity").model_copy(update={"design_url": None})
        context = _context()

        adapted = await customizer.customize(candidate, context, generate_palette(context))

        fetch.assert_not_awaited()
        assert adapted.warnings == ()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_skipped_when_components_not_adapted(self):
        fetch = AsyncMock()
        customizer = TemplateCustomizer(enrichment_client=_client(fetch))
        context = _context()

        await customizer.customize(
            get_candidate("minimal-productivity"),
            context,
            generate_palette(context),
            CustomizationOptions(adapt_components=False),
        )

        fetch.assert_not_awaited()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_enrich_without_client_raises(self):
        with pytest.raises(RuntimeError):
            await TemplateCustomizer()._enrich(get_candidate("minimal-productivity"))
