"""Aggregate permission scores and indicator levels into one 0-100 score.

Each detected permission contributes its catalog ``risk_score`` out of a
maximum of 10. Each indicator contributes a fixed weight for its level, also
out of 10. The ratio is scaled to 0-100 and rounded half up in exact integer
arithmetic: 23/40 is exactly 57.5 and becomes 58.

An indicator whose level has no weight contributes nothing to either the
total or the maximum, but still counts towards ``total_indicators``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from types import MappingProxyType

from permrisk.core.analyzer.models import DetectedPermission, OverallRisk, RiskIndicator
from permrisk.core.reference.models import RiskLevel

logger = logging.getLogger(__name__)

MAX_CONTRIBUTION = 10

INDICATOR_WEIGHTS: Mapping[RiskLevel, int] = MappingProxyType({
    RiskLevel.CRITICAL: 10,
    RiskLevel.HIGH: 7,
    RiskLevel.MEDIUM: 4,
    RiskLevel.LOW: 2,
})

# Lower bounds of each level on the normalized score, highest first.
LEVEL_THRESHOLDS: tuple[tuple[int, RiskLevel], ...] = (
    (80, RiskLevel.CRITICAL),
    (60, RiskLevel.HIGH),
    (30, RiskLevel.MEDIUM),
)


def level_for_score(score: int) -> RiskLevel:
    """Return the risk level bucket for a normalized score."""
    for threshold, level in LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return RiskLevel.LOW


def normalize_score(total: int, maximum: int) -> int:
    """Scale ``total / maximum`` to 0-100, rounding exact halves up; 0 when empty."""
    if maximum <= 0:
        return 0
    score = (200 * total + maximum) // (2 * maximum)
    return max(0, min(100, score))


def calculate_overall_risk(
    permissions: Sequence[DetectedPermission],
    indicators: Sequence[RiskIndicator],
) -> OverallRisk:
    """Combine permissions and indicators into an ``OverallRisk``."""
    total = 0
    maximum = 0

    for perm in permissions:
        total += perm.risk_score or 0
        maximum += MAX_CONTRIBUTION

    for indicator in indicators:
        weight = INDICATOR_WEIGHTS.get(indicator.level)
        if weight is None:
            logger.warning(
                "Indicator %r has unrecognized level %r; it does not affect the score",
                indicator.indicator, indicator.level,
            )
            continue
        total += weight
        maximum += MAX_CONTRIBUTION

    score = normalize_score(total, maximum)
    return OverallRisk(
        score=score,
        level=level_for_score(score),
        total_permissions=len(permissions),
        total_indicators=len(indicators),
    )
