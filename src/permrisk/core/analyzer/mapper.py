"""Map a plan onto framework control categories and derive their severity.

Category codes are gathered from two sources into an insertion-ordered set
(a dict keyed by code), so each code appears once and results are
reproducible run to run:

1. the ``csf_mapping`` of every detected permission, in detection order;
2. every category in ``CSF_KEYWORDS`` with a keyword in the lowercased text.

Each code is then resolved against the taxonomy. Codes the taxonomy does not
describe get synthesized metadata instead of failing the analysis.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from statistics import fmean

from permrisk.core.analyzer.models import DetectedPermission, FrameworkCategoryMapping
from permrisk.core.analyzer.patterns import CSF_KEYWORDS
from permrisk.core.reference.models import FrameworkTaxonomy, RiskLevel, split_category_code

logger = logging.getLogger(__name__)

GENERIC_CATEGORY_DESCRIPTION = "generic framework category"

# Mean risk score thresholds used when no permission is HIGH or CRITICAL.
_MEAN_HIGH_THRESHOLD = 7
_MEAN_MEDIUM_THRESHOLD = 4


def collect_category_codes(
    permissions: Sequence[DetectedPermission], text: str
) -> list[str]:
    """Return the unique category codes implied by permissions and text."""
    codes: dict[str, None] = {}
    for perm in permissions:
        for code in perm.csf_mapping:
            codes.setdefault(code, None)

    text_lower = text.lower()
    for code, keywords in CSF_KEYWORDS.items():
        if any(keyword in text_lower for keyword in keywords):
            codes.setdefault(code, None)

    return list(codes)


def category_severity(
    code: str, permissions: Sequence[DetectedPermission]
) -> RiskLevel:
    """Derive a category's severity from the permissions mapped to it.

    No mapped permissions means the severity cannot be inferred and
    defaults to MEDIUM. Otherwise the highest of CRITICAL/HIGH present
    wins, falling back to the mean risk score.
    """
    mapped = [p for p in permissions if code in p.csf_mapping]
    if not mapped:
        return RiskLevel.MEDIUM

    levels = {p.risk_level for p in mapped}
    if RiskLevel.CRITICAL in levels:
        return RiskLevel.CRITICAL
    if RiskLevel.HIGH in levels:
        return RiskLevel.HIGH

    mean_score = fmean(p.risk_score for p in mapped)
    if mean_score >= _MEAN_HIGH_THRESHOLD:
        return RiskLevel.HIGH
    if mean_score >= _MEAN_MEDIUM_THRESHOLD:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def resolve_category(
    code: str, taxonomy: FrameworkTaxonomy, severity: RiskLevel
) -> FrameworkCategoryMapping:
    """Build the mapping record for ``code`` from taxonomy metadata."""
    parent, sub = taxonomy.lookup(code)
    main_code, _ = split_category_code(code)
    main_name = parent.name if parent is not None else main_code

    if sub is None:
        logger.debug("No taxonomy metadata for %s; using generic entry", code)
        return FrameworkCategoryMapping(
            category=code,
            name=code,
            description=GENERIC_CATEGORY_DESCRIPTION,
            main_category=main_name,
            severity=severity,
        )

    return FrameworkCategoryMapping(
        category=code,
        name=sub.name,
        description=sub.description or GENERIC_CATEGORY_DESCRIPTION,
        main_category=main_name,
        severity=severity,
        controls=sub.controls,
        remediation=sub.remediation,
    )


def map_framework_categories(
    permissions: Sequence[DetectedPermission],
    text: str,
    taxonomy: FrameworkTaxonomy,
) -> tuple[FrameworkCategoryMapping, ...]:
    """Return one mapping per applicable category, in order of first discovery."""
    return tuple(
        resolve_category(code, taxonomy, category_severity(code, permissions))
        for code in collect_category_codes(permissions, text)
    )
