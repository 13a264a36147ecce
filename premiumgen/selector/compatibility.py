"""Compatibility tables between categorical design attributes.

Every table is keyed by the closed enumerations in
:mod:`premiumgen.selector.models` and lists every member explicitly, so a new
enum member without a table entry fails ``test_compatibility`` instead of
silently scoring zero.  Affinities are in ``[0, 1]``.
"""

from __future__ import annotations

from premiumgen.selector.models import (
    Category,
    Complexity,
    EmotionalTone,
    Layout,
    PrimaryGoal,
    TargetAudience,
)

# Affinity used where no specific pairing was ever defined for a layout.
NEUTRAL_LAYOUT_AFFINITY = 0.5

# ---------------------------------------------------------------------------
# Category <-> category
# ---------------------------------------------------------------------------

_C = Category

CATEGORY_AFFINITY: dict[Category, dict[Category, float]] = {
    _C.DASHBOARD: {
        _C.DASHBOARD: 1.0, _C.BUSINESS: 0.8, _C.PRODUCTIVITY: 0.6,
        _C.ECOMMERCE: 0.4, _C.SOCIAL: 0.0, _C.CREATIVE: 0.0,
    },
    _C.PRODUCTIVITY: {
        _C.PRODUCTIVITY: 1.0, _C.BUSINESS: 0.7, _C.DASHBOARD: 0.6,
        _C.SOCIAL: 0.3, _C.ECOMMERCE: 0.0, _C.CREATIVE: 0.0,
    },
    _C.CREATIVE: {
        _C.CREATIVE: 1.0, _C.SOCIAL: 0.5, _C.ECOMMERCE: 0.4,
        _C.BUSINESS: 0.2, _C.DASHBOARD: 0.0, _C.PRODUCTIVITY: 0.0,
    },
    _C.BUSINESS: {
        _C.BUSINESS: 1.0, _C.DASHBOARD: 0.8, _C.PRODUCTIVITY: 0.7,
        _C.ECOMMERCE: 0.6, _C.SOCIAL: 0.0, _C.CREATIVE: 0.0,
    },
    _C.SOCIAL: {
        _C.SOCIAL: 1.0, _C.CREATIVE: 0.5, _C.ECOMMERCE: 0.4,
        _C.PRODUCTIVITY: 0.3, _C.DASHBOARD: 0.0, _C.BUSINESS: 0.0,
    },
    _C.ECOMMERCE: {
        _C.ECOMMERCE: 1.0, _C.BUSINESS: 0.6, _C.DASHBOARD: 0.4,
        _C.SOCIAL: 0.4, _C.PRODUCTIVITY: 0.0, _C.CREATIVE: 0.0,
    },
}

# ---------------------------------------------------------------------------
# Layout <-> tone / audience
# ---------------------------------------------------------------------------

_N = NEUTRAL_LAYOUT_AFFINITY
_T = EmotionalTone
_A = TargetAudience

LAYOUT_TONE_AFFINITY: dict[Layout, dict[EmotionalTone, float]] = {
    Layout.PROFESSIONAL: {
        _T.SERIOUS: 1.0, _T.PROFESSIONAL: 1.0, _T.FRIENDLY: _N, _T.CREATIVE: _N, _T.MODERN: _N,
    },
    Layout.MODERN: {
        _T.MODERN: 1.0, _T.FRIENDLY: 0.8, _T.SERIOUS: _N, _T.PROFESSIONAL: _N, _T.CREATIVE: _N,
    },
    Layout.MINIMAL: {
        _T.SERIOUS: 0.7, _T.PROFESSIONAL: 0.8, _T.CREATIVE: 0.6, _T.FRIENDLY: _N, _T.MODERN: _N,
    },
    Layout.CREATIVE: {
        _T.CREATIVE: 1.0, _T.FRIENDLY: 0.8, _T.SERIOUS: _N, _T.PROFESSIONAL: _N, _T.MODERN: _N,
    },
}

LAYOUT_AUDIENCE_AFFINITY: dict[Layout, dict[TargetAudience, float]] = {
    Layout.PROFESSIONAL: {
        _A.ENTERPRISE: 1.0, _A.PROFESSIONAL: 1.0, _A.GENERAL: _N, _A.CREATIVE: _N, _A.TECHNICAL: _N,
    },
    Layout.MODERN: {
        _A.GENERAL: 0.9, _A.PROFESSIONAL: _N, _A.ENTERPRISE: _N, _A.CREATIVE: _N, _A.TECHNICAL: _N,
    },
    Layout.MINIMAL: {
        _A.PROFESSIONAL: 0.8, _A.CREATIVE: 0.6, _A.GENERAL: _N, _A.ENTERPRISE: _N, _A.TECHNICAL: _N,
    },
    Layout.CREATIVE: {
        _A.CREATIVE: 1.0, _A.GENERAL: 0.6, _A.PROFESSIONAL: _N, _A.ENTERPRISE: _N, _A.TECHNICAL: _N,
    },
}

# ---------------------------------------------------------------------------
# Audience / goal -> categories that serve them well
# ---------------------------------------------------------------------------

AUDIENCE_CATEGORIES: dict[TargetAudience, frozenset[Category]] = {
    _A.GENERAL: frozenset({_C.PRODUCTIVITY, _C.SOCIAL}),
    _A.PROFESSIONAL: frozenset({_C.BUSINESS, _C.DASHBOARD, _C.PRODUCTIVITY}),
    _A.ENTERPRISE: frozenset({_C.BUSINESS, _C.DASHBOARD}),
    _A.CREATIVE: frozenset({_C.CREATIVE, _C.SOCIAL}),
    _A.TECHNICAL: frozenset({_C.DASHBOARD, _C.PRODUCTIVITY}),
}

GOAL_CATEGORIES: dict[PrimaryGoal, frozenset[Category]] = {
    PrimaryGoal.EFFICIENCY: frozenset({_C.PRODUCTIVITY, _C.DASHBOARD}),
    PrimaryGoal.ENGAGEMENT: frozenset({_C.SOCIAL, _C.CREATIVE}),
    PrimaryGoal.CONVERSION: frozenset({_C.ECOMMERCE, _C.BUSINESS}),
    PrimaryGoal.ANALYSIS: frozenset({_C.DASHBOARD, _C.BUSINESS}),
    PrimaryGoal.COLLABORATION: frozenset({_C.PRODUCTIVITY, _C.SOCIAL}),
}

AUDIENCE_MISS_FACTOR = 0.3
GOAL_MISS_FACTOR = 0.4


# ---------------------------------------------------------------------------
# Lookup functions
# ---------------------------------------------------------------------------


def category_affinity(candidate: Category, target: Category) -> float:
    return CATEGORY_AFFINITY[candidate][target]


def complexity_affinity(candidate: Complexity, target: Complexity) -> float:
    """``max(0, 1 - 0.3 * |level difference|)``."""
    diff = abs(candidate.level - target.level)
    return max(0.0, 1.0 - diff * 0.3)


def layout_affinity(layout: Layout, tone: EmotionalTone, audience: TargetAudience) -> float:
    """Best of the layout's fit for the tone and for the audience."""
    return max(LAYOUT_TONE_AFFINITY[layout][tone], LAYOUT_AUDIENCE_AFFINITY[layout][audience])


def audience_affinity(category: Category, audience: TargetAudience) -> float:
    return 1.0 if category in AUDIENCE_CATEGORIES[audience] else AUDIENCE_MISS_FACTOR


def goal_affinity(category: Category, goal: PrimaryGoal) -> float:
    return 1.0 if category in GOAL_CATEGORIES[goal] else GOAL_MISS_FACTOR
