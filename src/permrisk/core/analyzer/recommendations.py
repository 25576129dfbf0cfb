"""Remediation recommendations derived from permissions and indicators.

Triggered rules come first, each contributing at most one recommendation;
the baseline block is appended to every result. Recommendations are unique
by title, first occurrence wins.
"""

from __future__ import annotations

from collections.abc import Sequence

from permrisk.core.analyzer.models import DetectedPermission, Recommendation, RiskIndicator
from permrisk.core.reference.models import RiskLevel

# A plan requesting more than this many permissions should be split up.
SEGMENTATION_THRESHOLD = 5

REVIEW_HIGH_RISK = Recommendation(
    title="Review High-Risk Permissions",
    description=(
        "Consider using least privilege principle and implement "
        "just-in-time access for high-risk permissions"
    ),
    priority=RiskLevel.HIGH,
)

CONDITIONAL_ACCESS = Recommendation(
    title="Implement Conditional Access",
    description=(
        "Use conditional access policies to restrict when and how these "
        "permissions can be used"
    ),
    priority=RiskLevel.HIGH,
)

CRITICAL_MITIGATION = Recommendation(
    title="Critical Risk Mitigation",
    description=(
        "Implement additional controls for critical risks including "
        "monitoring, alerting, and approval workflows"
    ),
    priority=RiskLevel.CRITICAL,
)

SEGMENTATION = Recommendation(
    title="Permission Segmentation",
    description=(
        "Consider splitting permissions across multiple applications to "
        "reduce blast radius"
    ),
    priority=RiskLevel.MEDIUM,
)

BASELINE_RECOMMENDATIONS: tuple[Recommendation, ...] = (
    Recommendation(
        title="Enable Audit Logging",
        description="Ensure comprehensive audit logging is enabled for all privileged operations",
        priority=RiskLevel.MEDIUM,
    ),
    Recommendation(
        title="Regular Permission Reviews",
        description="Implement quarterly reviews of application permissions and access",
        priority=RiskLevel.MEDIUM,
    ),
    Recommendation(
        title="Multi-Factor Authentication",
        description="Require MFA for all administrative and high-privilege operations",
        priority=RiskLevel.HIGH,
    ),
)


def generate_recommendations(
    permissions: Sequence[DetectedPermission],
    indicators: Sequence[RiskIndicator],
) -> tuple[Recommendation, ...]:
    """Return triggered recommendations followed by the baseline block."""
    triggered: list[Recommendation] = []

    if any(p.risk_level >= RiskLevel.HIGH for p in permissions):
        triggered.append(REVIEW_HIGH_RISK)
    if any("ReadWrite.All" in p.name for p in permissions):
        triggered.append(CONDITIONAL_ACCESS)
    if any(i.level == RiskLevel.CRITICAL for i in indicators):
        triggered.append(CRITICAL_MITIGATION)
    if len(permissions) > SEGMENTATION_THRESHOLD:
        triggered.append(SEGMENTATION)

    unique: dict[str, Recommendation] = {}
    for rec in (*triggered, *BASELINE_RECOMMENDATIONS):
        unique.setdefault(rec.title, rec)
    return tuple(unique.values())
