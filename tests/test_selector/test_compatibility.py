"""Unit tests for the compatibility tables (premiumgen.selector.compatibility).

Every table must define every enum pairing explicitly and stay in [0, 1].
"""

from __future__ import annotations

import itertools

import pytest

from premiumgen.selector.compatibility import (
    AUDIENCE_CATEGORIES,
    AUDIENCE_MISS_FACTOR,
    CATEGORY_AFFINITY,
    GOAL_CATEGORIES,
    GOAL_MISS_FACTOR,
    LAYOUT_AUDIENCE_AFFINITY,
    LAYOUT_TONE_AFFINITY,
    audience_affinity,
    category_affinity,
    complexity_affinity,
    goal_affinity,
    layout_affinity,
)
from premiumgen.selector.models import (
    Category,
    Complexity,
    EmotionalTone,
    Layout,
    PrimaryGoal,
    TargetAudience,
)


# ---------------------------------------------------------------------------
# Exhaustiveness
# ---------------------------------------------------------------------------


class TestTablesAreExhaustive:
    @pytest.mark.unit
    def test_category_table(self):
        assert set(CATEGORY_AFFINITY) == set(Category)
        for row in CATEGORY_AFFINITY.values():
            assert set(row) == set(Category)

    @pytest.mark.unit
    def test_layout_tone_table(self):
        assert set(LAYOUT_TONE_AFFINITY) == set(Layout)
        for row in LAYOUT_TONE_AFFINITY.values():
            assert set(row) == set(EmotionalTone)

    @pytest.mark.unit
    def test_layout_audience_table(self):
        assert set(LAYOUT_AUDIENCE_AFFINITY) == set(Layout)
        for row in LAYOUT_AUDIENCE_AFFINITY.values():
            assert set(row) == set(TargetAudience)

    @pytest.mark.unit
    def test_audience_and_goal_tables(self):
        assert set(AUDIENCE_CATEGORIES) == set(TargetAudience)
        assert set(GOAL_CATEGORIES) == set(PrimaryGoal)

    @pytest.mark.unit
    def test_values_in_unit_interval(self):
        tables = [CATEGORY_AFFINITY, LAYOUT_TONE_AFFINITY, LAYOUT_AUDIENCE_AFFINITY]
        for table in tables:
            for row in table.values():
                for value in row.values():
                    assert 0.0 <= value <= 1.0


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


class TestCategoryAffinity:
    @pytest.mark.unit
    @pytest.mark.parametrize("category", list(Category))
    def test_diagonal_is_one(self, category):
        assert category_affinity(category, category) == 1.0

    @pytest.mark.unit
    def test_known_pairs(self):
        assert category_affinity(Category.DASHBOARD, Category.BUSINESS) == 0.8
        assert category_affinity(Category.PRODUCTIVITY, Category.BUSINESS) == 0.7
        assert category_affinity(Category.CREATIVE, Category.SOCIAL) == 0.5

    @pytest.mark.unit
    def test_undefined_pair_is_zero(self):
        assert category_affinity(Category.CREATIVE, Category.DASHBOARD) == 0.0


class TestComplexityAffinity:
    @pytest.mark.unit
    def test_same_level(self):
        for level in Complexity:
            assert complexity_affinity(level, level) == 1.0

    @pytest.mark.unit
    def test_adjacent_levels(self):
        assert complexity_affinity(Complexity.SIMPLE, Complexity.MODERATE) == pytest.approx(0.7)
        assert complexity_affinity(Complexity.COMPLEX, Complexity.MODERATE) == pytest.approx(0.7)

    @pytest.mark.unit
    def test_opposite_levels(self):
        assert complexity_affinity(Complexity.SIMPLE, Complexity.COMPLEX) == pytest.approx(0.4)

    @pytest.mark.unit
    def test_symmetric_and_non_negative(self):
        for a, b in itertools.product(Complexity, repeat=2):
            assert complexity_affinity(a, b) == complexity_affinity(b, a)
            assert complexity_affinity(a, b) >= 0.0


class TestLayoutAffinity:
    @pytest.mark.unit
    def test_best_of_tone_and_audience(self):
        # minimal: professional tone 0.8, general audience 0.5
        assert layout_affinity(
            Layout.MINIMAL, EmotionalTone.PROFESSIONAL, TargetAudience.GENERAL
        ) == 0.8
        # modern: serious tone 0.5, general audience 0.9
        assert layout_affinity(
            Layout.MODERN, EmotionalTone.SERIOUS, TargetAudience.GENERAL
        ) == 0.9

    @pytest.mark.unit
    def test_exact_fit(self):
        assert layout_affinity(
            Layout.PROFESSIONAL, EmotionalTone.SERIOUS, TargetAudience.ENTERPRISE
        ) == 1.0

    @pytest.mark.unit
    def test_neutral_fallback(self):
        assert layout_affinity(
            Layout.PROFESSIONAL, EmotionalTone.MODERN, TargetAudience.GENERAL
        ) == 0.5


class TestAudienceAndGoalAffinity:
    @pytest.mark.unit
    def test_audience_hit_and_miss(self):
        assert audience_affinity(Category.BUSINESS, TargetAudience.ENTERPRISE) == 1.0
        assert audience_affinity(Category.CREATIVE, TargetAudience.ENTERPRISE) == AUDIENCE_MISS_FACTOR

    @pytest.mark.unit
    def test_goal_hit_and_miss(self):
        assert goal_affinity(Category.ECOMMERCE, PrimaryGoal.CONVERSION) == 1.0
        assert goal_affinity(Category.CREATIVE, PrimaryGoal.ANALYSIS) == GOAL_MISS_FACTOR

    @pytest.mark.unit
    def test_every_pair_defined(self):
        for category, audience in itertools.product(Category, TargetAudience):
            assert audience_affinity(category, audience) in (1.0, AUDIENCE_MISS_FACTOR)
        for category, goal in itertools.product(Category, PrimaryGoal):
            assert goal_affinity(category, goal) in (1.0, GOAL_MISS_FACTOR)
