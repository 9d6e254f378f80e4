"""Score normalization: display percentages, risk tiers and tier styles.

Each breakdown category arrives on its own scale. ``aggro_score`` is tiered
on the scaled percentage with four buckets; every other category, known or
not, is tiered on the raw score with a single cut-off. The aggregate score
has its own cut-off. Scores outside [0, 1] are classified as-is and only
clamped for display.
"""

from dataclasses import dataclass
import math

from .schemas import RiskLevelKind, RiskTier, ScoreBadge, TierStyle


AGGRO_KEY = "aggro_score"
MISMATCH_KEY = "mismatch_score"
CROSSREF_KEY = "crossref_score"

# Cut-offs on the scaled percentage for aggro_score.
AGGRO_PERCENT_CUTOFFS: tuple[tuple[float, RiskTier], ...] = (
    (40.0, "low"),
    (60.0, "medium"),
    (80.0, "high"),
)
# Cut-offs on the raw score.
CATEGORY_RAW_CUTOFF = 0.45
AGGREGATE_RAW_CUTOFF = 0.5

TIER_STYLES: dict[RiskTier, TierStyle] = {
    "low": TierStyle(
        text_class="text-green-600",
        background_class="bg-green-50",
        bar_class="bg-green-500",
    ),
    "medium": TierStyle(
        text_class="text-yellow-600",
        background_class="bg-yellow-50",
        bar_class="bg-yellow-500",
    ),
    "high": TierStyle(
        text_class="text-orange-600",
        background_class="bg-orange-50",
        bar_class="bg-orange-500",
    ),
    "critical": TierStyle(
        text_class="text-red-600",
        background_class="bg-red-50",
        bar_class="bg-red-500",
    ),
}

DANGER_LEVELS = frozenset({"위험"})
WARNING_LEVELS = frozenset({"주의", "경고"})

LEVEL_CLASSES: dict[RiskLevelKind, str] = {
    "danger": "text-red-600 bg-red-50",
    "warning": "text-yellow-600 bg-yellow-50",
    "safe": "text-green-600 bg-green-50",
}


@dataclass(frozen=True)
class ScoreClassification:
    """Display percentage and tier for one score."""

    display_percent: int
    tier: RiskTier

    @property
    def style(self) -> TierStyle:
        return TIER_STYLES[self.tier]

    def as_badge(self) -> ScoreBadge:
        return ScoreBadge(display_percent=self.display_percent, tier=self.tier, style=self.style)


def display_percent(raw_score: float) -> int:
    """Scale a raw score to an integer percentage clamped to 0..100.

    ``-inf`` shows 0; ``+inf`` and NaN show 100, matching the top tier
    they classify into.
    """

    if math.isnan(raw_score) or raw_score == math.inf:
        return 100
    if raw_score == -math.inf:
        return 0
    return int(round(max(0.0, min(100.0, raw_score * 100))))


def _binary_tier(raw_score: float, cutoff: float) -> RiskTier:
    return "low" if raw_score < cutoff else "high"


def _aggro_tier(raw_score: float) -> RiskTier:
    scaled = raw_score * 100
    for upper, tier in AGGRO_PERCENT_CUTOFFS:
        if scaled < upper:
            return tier
    return "critical"


def score_tier(category_key: str, raw_score: float) -> RiskTier:
    """Return the tier of a breakdown score for its category."""

    if category_key == AGGRO_KEY:
        return _aggro_tier(raw_score)
    return _binary_tier(raw_score, CATEGORY_RAW_CUTOFF)


def classify_score(category_key: str, raw_score: float) -> ScoreClassification:
    """Classify one breakdown score."""

    return ScoreClassification(
        display_percent=display_percent(raw_score),
        tier=score_tier(category_key, raw_score),
    )


def classify_aggregate(final_risk_score: float) -> ScoreClassification:
    """Classify the aggregate ``final_risk_score``."""

    return ScoreClassification(
        display_percent=display_percent(final_risk_score),
        tier=_binary_tier(final_risk_score, AGGREGATE_RAW_CUTOFF),
    )


def tier_style(tier: RiskTier) -> TierStyle:
    return TIER_STYLES[tier]


def risk_level_kind(level_label: str) -> RiskLevelKind:
    """Map the service's risk level label to its display kind."""

    label = (level_label or "").strip()
    if label in DANGER_LEVELS:
        return "danger"
    if label in WARNING_LEVELS:
        return "warning"
    return "safe"
