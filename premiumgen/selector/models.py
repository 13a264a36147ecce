"""Pydantic v2 models for template selection and adaptation.

Defines the closed enumerations used by the scorer and the compatibility
tables, the catalog ``Candidate`` type, the derived ``DesignContext`` and the
results produced by ranking and customisation.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Category(str, Enum):
    """Product category of a template or of a requested application."""
    PRODUCTIVITY = "productivity"
    CREATIVE = "creative"
    BUSINESS = "business"
    SOCIAL = "social"
    ECOMMERCE = "ecommerce"
    DASHBOARD = "dashboard"


class Complexity(str, Enum):
    """Feature breadth of a template."""
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"

    @property
    def level(self) -> int:
        """Ordinal used for distance scoring (simple=1 .. complex=3)."""
        return _COMPLEXITY_LEVELS[self]


_COMPLEXITY_LEVELS: dict[Complexity, int] = {
    Complexity.SIMPLE: 1,
    Complexity.MODERATE: 2,
    Complexity.COMPLEX: 3,
}


class Layout(str, Enum):
    """Visual layout style."""
    MINIMAL = "minimal"
    MODERN = "modern"
    PROFESSIONAL = "professional"
    CREATIVE = "creative"


class EmotionalTone(str, Enum):
    """Impression the application should leave on its users."""
    SERIOUS = "serious"
    FRIENDLY = "friendly"
    PROFESSIONAL = "professional"
    CREATIVE = "creative"
    MODERN = "modern"


class TargetAudience(str, Enum):
    """Who the application is built for."""
    GENERAL = "general"
    PROFESSIONAL = "professional"
    ENTERPRISE = "enterprise"
    CREATIVE = "creative"
    TECHNICAL = "technical"


class PrimaryGoal(str, Enum):
    """What the application should primarily optimise for."""
    EFFICIENCY = "efficiency"
    ENGAGEMENT = "engagement"
    CONVERSION = "conversion"
    ANALYSIS = "analysis"
    COLLABORATION = "collaboration"


# ---------------------------------------------------------------------------
# Catalog models
# ---------------------------------------------------------------------------

class ColorSlots(BaseModel):
    """The five colour roles every template defines."""

    model_config = ConfigDict(frozen=True)

    primary: str = Field(..., description="Hex colour, e.g. '#1f2937'")
    secondary: str
    accent: str
    background: str = Field(default="#ffffff")
    text: str = Field(default="#1f2937")


class Candidate(BaseModel):
    """A selectable template from the catalog. Immutable once loaded."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: Category
    complexity: Complexity
    layout: Layout
    colors: ColorSlots
    components: tuple[str, ...] = Field(
        default=(), description="Ordered capability tags, e.g. ('charts', 'tables')"
    )
    base_quality_score: float = Field(default=5.0, ge=0, le=10)
    design_url: Optional[str] = Field(
        default=None, description="Remote design file used for optional enrichment"
    )


class DesignContext(BaseModel):
    """Derived requirement profile used to score and adapt candidates."""

    model_config = ConfigDict(frozen=True)

    category: Category = Category.PRODUCTIVITY
    complexity: Complexity = Complexity.MODERATE
    emotional_tone: EmotionalTone = EmotionalTone.MODERN
    target_audience: TargetAudience = TargetAudience.GENERAL
    primary_goal: PrimaryGoal = PrimaryGoal.EFFICIENCY
    confidence_score: float = Field(default=5.0, ge=0, le=10)


# ---------------------------------------------------------------------------
# Scoring results
# ---------------------------------------------------------------------------

class ScoreBreakdown(BaseModel):
    """Weighted contribution of every scoring term."""

    model_config = ConfigDict(frozen=True)

    category: float = 0.0
    complexity: float = 0.0
    layout: float = 0.0
    quality: float = 0.0
    audience: float = 0.0
    goal: float = 0.0

    @property
    def total(self) -> float:
        return (
            self.category
            + self.complexity
            + self.layout
            + self.quality
            + self.audience
            + self.goal
        )


class ScoredCandidate(BaseModel):
    """A candidate paired with its score for one ranking run."""

    model_config = ConfigDict(frozen=True)

    candidate: Candidate
    score: float
    breakdown: ScoreBreakdown


# ---------------------------------------------------------------------------
# Customisation
# ---------------------------------------------------------------------------

class CustomizationOptions(BaseModel):
    """Which aspects of the winning candidate may be adapted."""

    model_config = ConfigDict(frozen=True)

    adapt_colors: bool = True
    adapt_layout: bool = True
    adapt_complexity: bool = True
    adapt_components: bool = True


class DesignEnrichment(BaseModel):
    """Extra visual data fetched for a candidate's remote design file."""

    model_config = ConfigDict(frozen=True)

    file_key: str
    name: str = ""
    frames: tuple[str, ...] = Field(default=(), description="Top-level frame names")
    node_count: int = Field(default=0, ge=0)
    colors: Optional[ColorSlots] = Field(
        default=None, description="Colours applied on top of the fetched design"
    )


class AdaptedCandidate(Candidate):
    """A candidate rewritten to fit a ``DesignContext``.

    The ``source_*`` fields always refer to the original catalog entry, even
    when an adapted candidate is customised again.
    """

    source_id: str
    source_name: str
    source_complexity: Complexity
    source_components: tuple[str, ...] = ()
    source_base_quality_score: float = Field(..., ge=0, le=10)
    enrichment: Optional[DesignEnrichment] = None
    warnings: tuple[str, ...] = ()


class TemplateSelection(BaseModel):
    """Everything the selection step hands to later phases."""

    model_config = ConfigDict(frozen=True)

    context: DesignContext
    selected: Candidate
    customized: AdaptedCandidate
    score: float = Field(default=0.0, description="Score of the selected candidate")
    alternatives: tuple[ScoredCandidate, ...] = ()
    used_fallback: bool = False
    reasoning: str = ""
    warnings: tuple[str, ...] = ()

    def summary(self) -> dict[str, Any]:
        """Flat view for console tables and JSON reports."""
        return {
            "selected": self.selected.id,
            "customized": self.customized.id,
            "score": round(self.score, 2),
            "alternatives": [alt.candidate.id for alt in self.alternatives],
            "used_fallback": self.used_fallback,
        }


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class EmptyCandidateCatalog(Exception):
    """Raised when a best candidate is requested from an empty catalog.

    Recoverable: callers fall back to the default catalog candidate.
    """


class EnrichmentFailure(Exception):
    """Raised inside the enrichment client when a design file cannot be used.

    Recoverable: customisation proceeds without enrichment.
    """
