"""Static catalog of selectable templates.

The catalog is loaded once at import time and shared read-only across
requests.
"""

from __future__ import annotations

from typing import Optional

from premiumgen.selector.models import Candidate, Category, ColorSlots, Complexity, Layout

DEFAULT_CANDIDATE_ID = "minimal-productivity"

CANDIDATE_CATALOG: tuple[Candidate, ...] = (
    Candidate(
        id="modern-dashboard",
        name="Modern Analytics Dashboard",
        category=Category.DASHBOARD,
        complexity=Complexity.MODERATE,
        layout=Layout.PROFESSIONAL,
        colors=ColorSlots(
            primary="#1f2937",
            secondary="#374151",
            accent="#3b82f6",
            background="#f9fafb",
            text="#111827",
        ),
        components=("charts", "metrics-cards", "tables", "filters"),
        base_quality_score=9,
        design_url="https://www.figma.com/design/dashboard-analytics-template",
    ),
    Candidate(
        id="minimal-productivity",
        name="Clean Productivity App",
        category=Category.PRODUCTIVITY,
        complexity=Complexity.SIMPLE,
        layout=Layout.MINIMAL,
        colors=ColorSlots(
            primary="#059669",
            secondary="#d1fae5",
            accent="#10b981",
            background="#ffffff",
            text="#1f2937",
        ),
        components=("forms", "lists", "buttons", "cards"),
        base_quality_score=8,
        design_url="https://www.figma.com/design/productivity-minimal-template",
    ),
    Candidate(
        id="creative-portfolio",
        name="Creative Portfolio Showcase",
        category=Category.CREATIVE,
        complexity=Complexity.MODERATE,
        layout=Layout.CREATIVE,
        colors=ColorSlots(
            primary="#7c3aed",
            secondary="#ede9fe",
            accent="#a855f7",
            background="#fafafa",
            text="#1f2937",
        ),
        components=("galleries", "hero-sections", "testimonials", "contact-forms"),
        base_quality_score=7,
        design_url="https://www.figma.com/design/creative-portfolio-template",
    ),
    Candidate(
        id="business-saas",
        name="Professional SaaS Platform",
        category=Category.BUSINESS,
        complexity=Complexity.COMPLEX,
        layout=Layout.PROFESSIONAL,
        colors=ColorSlots(
            primary="#1e40af",
            secondary="#dbeafe",
            accent="#2563eb",
            background="#ffffff",
            text="#1f2937",
        ),
        components=("navigation", "pricing-tables", "feature-sections", "auth-forms"),
        base_quality_score=9,
        design_url="https://www.figma.com/design/business-saas-template",
    ),
    Candidate(
        id="social-community",
        name="Social Community Platform",
        category=Category.SOCIAL,
        complexity=Complexity.MODERATE,
        layout=Layout.MODERN,
        colors=ColorSlots(
            primary="#dc2626",
            secondary="#fecaca",
            accent="#ef4444",
            background="#ffffff",
            text="#1f2937",
        ),
        components=("feeds", "user-profiles", "messaging", "notifications"),
        base_quality_score=8,
        design_url="https://www.figma.com/design/social-community-template",
    ),
    Candidate(
        id="ecommerce-shop",
        name="Modern E-commerce Store",
        category=Category.ECOMMERCE,
        complexity=Complexity.COMPLEX,
        layout=Layout.MODERN,
        colors=ColorSlots(
            primary="#f59e0b",
            secondary="#fef3c7",
            accent="#d97706",
            background="#ffffff",
            text="#1f2937",
        ),
        components=("product-grids", "cart", "checkout", "search"),
        base_quality_score=9,
        design_url="https://www.figma.com/design/ecommerce-modern-template",
    ),
)


def get_candidate(candidate_id: str) -> Optional[Candidate]:
    """Return the catalog entry with *candidate_id*, or ``None``."""
    for candidate in CANDIDATE_CATALOG:
        if candidate.id == candidate_id:
            return candidate
    return None


def default_candidate() -> Candidate:
    """The candidate used when ranking produced nothing."""
    candidate = get_candidate(DEFAULT_CANDIDATE_ID)
    if candidate is None:
        raise LookupError(f"{DEFAULT_CANDIDATE_ID} missing from catalog")
    return candidate
