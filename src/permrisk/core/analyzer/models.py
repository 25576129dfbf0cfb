"""Data models for the risk analyzer.

These are the records produced and consumed by the analysis pipeline. They
are intentionally decoupled from the detection engine so that downstream
modules (report generators, CLI formatters) can import them without pulling
in the pattern catalogs or analysis logic.

Every record is frozen. An ``AnalysisResult`` is never mutated after the
analyzer builds it; report writers treat every field as already validated.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from permrisk.core.reference.models import (
    PermissionCatalogEntry,
    PermissionType,
    RiskLevel,
)


class DetectionMethod(Enum):
    """How a permission was found in the input text."""

    EXACT_MATCH = "exact_match"
    PATTERN_MATCH = "pattern_match"


# ---------------------------------------------------------------------------
# DetectedPermission
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DetectedPermission:
    """A catalog permission found in the analyzed text.

    Carries an explicit copy of the catalog entry's metadata plus the
    detection method. One instance exists per distinct permission name
    within a single analysis.
    """

    name: str
    risk_level: RiskLevel
    risk_score: int
    description: str
    detected: DetectionMethod
    permission_types: frozenset[PermissionType] = frozenset()
    consent_type: str | None = None
    impact: str | None = None
    csf_mapping: tuple[str, ...] = ()

    @classmethod
    def from_entry(
        cls, entry: PermissionCatalogEntry, method: DetectionMethod
    ) -> DetectedPermission:
        return cls(
            name=entry.name,
            risk_level=entry.risk_level,
            risk_score=entry.risk_score,
            description=entry.description,
            detected=method,
            permission_types=entry.permission_types,
            consent_type=entry.consent_type,
            impact=entry.impact,
            csf_mapping=entry.csf_mapping,
        )


# ---------------------------------------------------------------------------
# RiskIndicator
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RiskIndicator:
    """A qualitative risk signal raised by one scanner rule.

    Attributes:
        indicator: Rule name, e.g. "Global Administrator Access".
        level: Severity of the signal.
        description: Human-readable explanation.
        evidence: The first matched substring, for rules that capture it.
    """

    indicator: str
    level: RiskLevel
    description: str
    evidence: str | None = None


# ---------------------------------------------------------------------------
# FrameworkCategoryMapping
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FrameworkCategoryMapping:
    """A framework control category that applies to the analyzed plan.

    Attributes:
        category: Full category code, e.g. "PR.AC".
        name: Category name from the taxonomy (the code when unknown).
        description: Category description.
        main_category: Name of the parent function, e.g. "Protect".
        controls: Controls the taxonomy lists for this category.
        remediation: Remediation guidance for this category.
        severity: Derived from the permissions mapped to this category.
    """

    category: str
    name: str
    description: str
    main_category: str
    severity: RiskLevel
    controls: tuple[str, ...] = ()
    remediation: tuple[str, ...] = ()


@dataclass(frozen=True)
class Recommendation:
    """A remediation recommendation with a priority."""

    title: str
    description: str
    priority: RiskLevel


@dataclass(frozen=True)
class OverallRisk:
    """The normalized aggregate risk of a plan.

    Attributes:
        score: Integer in [0, 100].
        level: Threshold bucket of ``score``.
        total_permissions: Number of detected permissions.
        total_indicators: Number of risk indicators raised.
    """

    score: int
    level: RiskLevel
    total_permissions: int
    total_indicators: int


# ---------------------------------------------------------------------------
# AnalysisResult: Complete output of one analysis run
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AnalysisResult:
    """The complete, immutable result of analyzing one project plan.

    ``content`` holds the first characters of the input for audit and
    reporting; it plays no part in scoring.
    """

    detected_permissions: tuple[DetectedPermission, ...]
    csf_mappings: tuple[FrameworkCategoryMapping, ...]
    risk_indicators: tuple[RiskIndicator, ...]
    recommendations: tuple[Recommendation, ...]
    overall_risk: OverallRisk
    timestamp: str
    content: str = ""

    @property
    def max_permission_level(self) -> RiskLevel | None:
        """Return the highest level among detected permissions, or None."""
        if not self.detected_permissions:
            return None
        return max(p.risk_level for p in self.detected_permissions)

    @property
    def risk_distribution(self) -> dict[RiskLevel, int]:
        """Count detected permissions per level, highest level first."""
        counts = {level: 0 for level in sorted(RiskLevel, reverse=True)}
        for perm in self.detected_permissions:
            counts[perm.risk_level] += 1
        return counts
