"""Default requirement-profile builder and palette generator.

Both are plain functions that the pipeline accepts as replaceable
collaborators.  The profile builder does simple keyword counting over the
user's idea (English and Japanese keywords); it is intentionally shallow and
any smarter classifier can be plugged in through ``Pipeline(profile_builder=...)``.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional, TypeVar

from pydantic import BaseModel, Field

from premiumgen.selector.models import (
    Category,
    ColorSlots,
    Complexity,
    DesignContext,
    EmotionalTone,
    PrimaryGoal,
    TargetAudience,
)
from premiumgen.utils import clamp


class QualityLevel(str, Enum):
    """Requested quality tier."""
    PROFESSIONAL = "professional"
    ENTERPRISE = "enterprise"
    PREMIUM = "premium"


class RequestOptions(BaseModel):
    """Caller-supplied options that accompany the user's idea."""

    industry: Optional[str] = Field(default=None, description="Free-form industry hint")
    target_audience: Optional[TargetAudience] = Field(default=None)
    quality_level: QualityLevel = Field(default=QualityLevel.PREMIUM)
    time_budget_minutes: Optional[float] = Field(
        default=None, gt=0, description="Overrides the configured overall budget"
    )


# ---------------------------------------------------------------------------
# Keyword tables
# ---------------------------------------------------------------------------

CATEGORY_KEYWORDS: dict[Category, tuple[str, ...]] = {
    Category.DASHBOARD: (
        "dashboard", "analytics", "metrics", "data", "chart", "graph", "report",
        "ダッシュボード", "データ", "グラフ", "レポート", "分析", "メトリクス",
    ),
    Category.PRODUCTIVITY: (
        "todo", "task", "note", "manage", "organize", "schedule", "plan",
        "タスク", "管理", "ノート", "メモ", "スケジュール", "予定", "計画", "プロジェクト",
    ),
    Category.CREATIVE: (
        "portfolio", "gallery", "showcase", "design", "art", "creative", "visual",
        "ポートフォリオ", "ギャラリー", "デザイン", "アート", "作品", "制作",
    ),
    Category.BUSINESS: (
        "business", "saas", "enterprise", "corporate", "service", "crm",
        "ビジネス", "企業", "法人", "会社", "サービス", "営業",
    ),
    Category.SOCIAL: (
        "social", "community", "chat", "message", "share", "connect", "network", "sns",
        "ソーシャル", "コミュニティ", "チャット", "メッセージ", "共有", "ネットワーク",
    ),
    Category.ECOMMERCE: (
        "shop", "store", "buy", "sell", "product", "cart", "payment", "ecommerce",
        "ショップ", "店舗", "購入", "販売", "商品", "カート", "決済",
    ),
}

COMPLEXITY_KEYWORDS: dict[Complexity, tuple[str, ...]] = {
    Complexity.SIMPLE: ("simple", "basic", "minimal", "簡単", "シンプル", "基本", "最小限"),
    Complexity.COMPLEX: (
        "complex", "advanced", "multi-feature", "enterprise-grade",
        "複雑", "高度", "多機能", "企業級", "エンタープライズ",
    ),
}

AUDIENCE_KEYWORDS: dict[TargetAudience, tuple[str, ...]] = {
    TargetAudience.ENTERPRISE: ("enterprise", "corporate", "企業", "法人", "大企業"),
    TargetAudience.TECHNICAL: ("developer", "engineer", "programmer", "開発者", "エンジニア"),
    TargetAudience.CREATIVE: ("creator", "designer", "artist", "クリエイター", "デザイナー"),
    TargetAudience.PROFESSIONAL: ("professional", "expert", "プロフェッショナル", "専門家"),
    TargetAudience.GENERAL: ("everyone", "anyone", "personal", "一般", "誰でも", "個人"),
}

GOAL_KEYWORDS: dict[PrimaryGoal, tuple[str, ...]] = {
    PrimaryGoal.EFFICIENCY: ("efficien", "productiv", "optimi", "効率", "生産性", "時間短縮"),
    PrimaryGoal.ENGAGEMENT: ("engage", "interact", "community", "エンゲージ", "交流", "参加"),
    PrimaryGoal.CONVERSION: ("conversion", "sales", "revenue", "売上", "成約", "コンバージョン"),
    PrimaryGoal.ANALYSIS: ("analy", "insight", "report", "分析", "解析", "洞察"),
    PrimaryGoal.COLLABORATION: ("collaborat", "team", "together", "協力", "チーム", "共同"),
}

TONE_KEYWORDS: dict[EmotionalTone, tuple[str, ...]] = {
    EmotionalTone.SERIOUS: ("serious", "strict", "critical", "真剣", "厳格", "重要"),
    EmotionalTone.FRIENDLY: ("friendly", "casual", "fun", "親しみやすい", "フレンドリー", "気軽"),
    EmotionalTone.PROFESSIONAL: ("professional", "trust", "reliab", "専門的", "信頼性"),
    EmotionalTone.CREATIVE: ("creative", "innovative", "artistic", "クリエイティブ", "創造的"),
    EmotionalTone.MODERN: ("modern", "stylish", "sleek", "モダン", "現代的", "スタイリッシュ"),
}

_FEATURE_RE = re.compile(r"feature|function|機能|できる", re.IGNORECASE)
_USER_TYPE_RE = re.compile(r"users?|customers?|admins?|ユーザー|利用者|顧客", re.IGNORECASE)

_E = TypeVar("_E", bound=Enum)


def _keyword_score(text: str, keywords: tuple[str, ...]) -> int:
    """Occurrences of *keywords* in *text*; keywords longer than 4 chars count double."""
    return sum(text.count(kw) * (2 if len(kw) > 4 else 1) for kw in keywords)


def _best_match(text: str, table: dict[_E, tuple[str, ...]]) -> Optional[_E]:
    """Highest-scoring key, first key wins ties; ``None`` when nothing matched."""
    best: Optional[_E] = None
    best_score = 0
    for key, keywords in table.items():
        score = _keyword_score(text, keywords)
        if score > best_score:
            best, best_score = key, score
    return best


def _determine_complexity(text: str) -> Complexity:
    explicit = _best_match(text, COMPLEXITY_KEYWORDS)
    if explicit is not None:
        return explicit

    features = len(_FEATURE_RE.findall(text))
    user_types = len(_USER_TYPE_RE.findall(text))
    if features > 5 or user_types > 3:
        return Complexity.COMPLEX
    if features > 2 or user_types > 1:
        return Complexity.MODERATE
    return Complexity.SIMPLE


def build_design_context(user_input: str, options: RequestOptions | None = None) -> DesignContext:
    """Derive a ``DesignContext`` from the user's idea.

    Every attribute falls back to a default (productivity / efficiency /
    modern / general) when no keyword matches, so this never raises for
    ordinary text.
    """
    options = options or RequestOptions()
    text = user_input.lower()
    if options.industry:
        text = f"{text} {options.industry.lower()}"

    category = _best_match(text, CATEGORY_KEYWORDS)
    audience = options.target_audience or _best_match(text, AUDIENCE_KEYWORDS)
    goal = _best_match(text, GOAL_KEYWORDS)
    tone = _best_match(text, TONE_KEYWORDS)

    confidence = 5.0
    words = len(text.split())
    if words > 10:
        confidence += 1
    if words > 30:
        confidence += 1
    confidence += 0.5 * sum(match is not None for match in (category, audience, goal, tone))

    return DesignContext(
        category=category or Category.PRODUCTIVITY,
        complexity=_determine_complexity(text),
        emotional_tone=tone or EmotionalTone.MODERN,
        target_audience=audience or TargetAudience.GENERAL,
        primary_goal=goal or PrimaryGoal.EFFICIENCY,
        confidence_score=clamp(confidence, 1.0, 10.0),
    )


# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------

CATEGORY_COLORS: dict[Category, tuple[str, str, str]] = {
    Category.DASHBOARD: ("#1f2937", "#374151", "#3b82f6"),
    Category.PRODUCTIVITY: ("#059669", "#d1fae5", "#10b981"),
    Category.CREATIVE: ("#7c3aed", "#ede9fe", "#a855f7"),
    Category.BUSINESS: ("#1e40af", "#dbeafe", "#2563eb"),
    Category.SOCIAL: ("#dc2626", "#fecaca", "#ef4444"),
    Category.ECOMMERCE: ("#f59e0b", "#fef3c7", "#d97706"),
}

TONE_COLORS: dict[EmotionalTone, tuple[str, str, str]] = {
    EmotionalTone.SERIOUS: ("#1f2937", "#4b5563", "#374151"),
    EmotionalTone.FRIENDLY: ("#22c55e", "#bbf7d0", "#16a34a"),
    EmotionalTone.PROFESSIONAL: ("#1e40af", "#dbeafe", "#3730a3"),
    EmotionalTone.CREATIVE: ("#a855f7", "#e879f9", "#c026d3"),
    EmotionalTone.MODERN: ("#0ea5e9", "#38bdf8", "#0284c7"),
}


def generate_palette(context: DesignContext) -> ColorSlots:
    """Blend category and tone colours into the five colour slots.

    Primary and accent come from the category, secondary from the tone.
    """
    primary, _, accent = CATEGORY_COLORS[context.category]
    _, secondary, _ = TONE_COLORS[context.emotional_tone]
    return ColorSlots(
        primary=primary,
        secondary=secondary,
        accent=accent,
        background="#ffffff",
        text="#1f2937",
    )
