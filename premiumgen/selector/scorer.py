"""Multi-criteria template scorer.

Ranks catalog candidates against a ``DesignContext``.  Each candidate's score
is the sum of six weighted terms:

* category   -- +40 on exact match (+15 more for the high-diversity category),
  otherwise +20 x category affinity
* complexity -- +25 on exact match, otherwise +15 x complexity affinity
* layout     -- +20 x best layout affinity for the tone or the audience
* quality    -- +1.5 x base quality score
* audience   -- +10 x audience affinity
* goal       -- +15 x goal affinity

Scoring is pure: no I/O, no randomness, and the ranking is stable so ties
keep catalog order.
"""

from __future__ import annotations

from collections.abc import Iterable

from premiumgen.selector.compatibility import (
    audience_affinity,
    category_affinity,
    complexity_affinity,
    goal_affinity,
    layout_affinity,
)
from premiumgen.selector.models import (
    Candidate,
    Category,
    DesignContext,
    EmptyCandidateCatalog,
    ScoreBreakdown,
    ScoredCandidate,
)

# Exact matches on this category get a bonus to promote catalog diversity.
HIGH_DIVERSITY_CATEGORY = Category.CREATIVE


class TemplateScorer:
    """Scores and ranks candidates for a design context."""

    CATEGORY_MATCH = 40.0
    CATEGORY_PARTIAL = 20.0
    DIVERSITY_BONUS = 15.0
    COMPLEXITY_MATCH = 25.0
    COMPLEXITY_PARTIAL = 15.0
    LAYOUT_WEIGHT = 20.0
    QUALITY_WEIGHT = 1.5
    AUDIENCE_WEIGHT = 10.0
    GOAL_WEIGHT = 15.0

    def score(self, candidate: Candidate, context: DesignContext) -> ScoredCandidate:
        """Score a single candidate."""
        if candidate.category == context.category:
            category = self.CATEGORY_MATCH
            if context.category == HIGH_DIVERSITY_CATEGORY:
                category += self.DIVERSITY_BONUS
        else:
            category = self.CATEGORY_PARTIAL * category_affinity(
                candidate.category, context.category
            )

        if candidate.complexity == context.complexity:
            complexity = self.COMPLEXITY_MATCH
        else:
            complexity = self.COMPLEXITY_PARTIAL * complexity_affinity(
                candidate.complexity, context.complexity
            )

        breakdown = ScoreBreakdown(
            category=category,
            complexity=complexity,
            layout=self.LAYOUT_WEIGHT
            * layout_affinity(candidate.layout, context.emotional_tone, context.target_audience),
            quality=self.QUALITY_WEIGHT * candidate.base_quality_score,
            audience=self.AUDIENCE_WEIGHT
            * audience_affinity(candidate.category, context.target_audience),
            goal=self.GOAL_WEIGHT * goal_affinity(candidate.category, context.primary_goal),
        )
        return ScoredCandidate(candidate=candidate, score=breakdown.total, breakdown=breakdown)

    def rank(
        self, candidates: Iterable[Candidate], context: DesignContext
    ) -> list[ScoredCandidate]:
        """Score every candidate and sort by descending score.

        Returns an empty list for an empty catalog.  ``sorted`` is stable
        (also with ``reverse=True``) so equal scores keep catalog order.
        """
        scored = [self.score(candidate, context) for candidate in candidates]
        return sorted(scored, key=lambda item: item.score, reverse=True)

    def best(self, candidates: Iterable[Candidate], context: DesignContext) -> ScoredCandidate:
        """Return the top-ranked candidate.

        Raises:
            EmptyCandidateCatalog: If *candidates* is empty.
        """
        ranking = self.rank(candidates, context)
        if not ranking:
            raise EmptyCandidateCatalog("No candidates to rank")
        return ranking[0]
