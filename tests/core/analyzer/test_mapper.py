"""Tests for framework category mapping and severity derivation."""

from __future__ import annotations

import pytest

from permrisk.core.analyzer.detector import detect_permissions
from permrisk.core.analyzer.mapper import (
    GENERIC_CATEGORY_DESCRIPTION,
    category_severity,
    collect_category_codes,
    map_framework_categories,
    resolve_category,
)
from permrisk.core.analyzer.models import DetectedPermission, DetectionMethod
from permrisk.core.reference import FrameworkTaxonomy, PermissionCatalog, RiskLevel


def _perm(
    name: str, level: RiskLevel, score: int, csf: tuple[str, ...]
) -> DetectedPermission:
    return DetectedPermission(
        name=name,
        risk_level=level,
        risk_score=score,
        description="",
        detected=DetectionMethod.EXACT_MATCH,
        csf_mapping=csf,
    )


# ---------------------------------------------------------------------------
# Code collection
# ---------------------------------------------------------------------------


class TestCollectCategoryCodes:
    """Codes from permissions first, then content keywords, deduplicated."""

    def test_permission_codes_in_detection_order(self) -> None:
        perms = [
            _perm("A", RiskLevel.LOW, 1, ("PR.AC", "ID.AM")),
            _perm("B", RiskLevel.LOW, 1, ("PR.AC", "RS.CO")),
        ]
        assert collect_category_codes(perms, "") == ["PR.AC", "ID.AM", "RS.CO"]

    def test_keyword_codes_follow_permission_codes(self) -> None:
        perms = [_perm("A", RiskLevel.LOW, 1, ("RS.CO",))]
        codes = collect_category_codes(perms, "Quarterly backup of the inventory")
        assert codes == ["RS.CO", "ID.AM", "RC.RP"]

    def test_keyword_shared_by_two_categories(self) -> None:
        """'incident' is a keyword of both DE.AE and RS.RP."""
        assert collect_category_codes([], "incident") == ["DE.AE", "RS.RP"]

    def test_no_duplicates(self) -> None:
        perms = [_perm("A", RiskLevel.LOW, 1, ("PR.AC", "PR.AC"))]
        assert collect_category_codes(perms, "access control") == ["PR.AC"]


# ---------------------------------------------------------------------------
# Severity
# ---------------------------------------------------------------------------


class TestCategorySeverity:
    def test_no_mapped_permissions_defaults_to_medium(self) -> None:
        perms = [_perm("A", RiskLevel.CRITICAL, 10, ("PR.AC",))]
        assert category_severity("DE.CM", perms) is RiskLevel.MEDIUM

    def test_critical_wins(self) -> None:
        perms = [
            _perm("A", RiskLevel.LOW, 1, ("PR.AC",)),
            _perm("B", RiskLevel.CRITICAL, 10, ("PR.AC",)),
            _perm("C", RiskLevel.HIGH, 7, ("PR.AC",)),
        ]
        assert category_severity("PR.AC", perms) is RiskLevel.CRITICAL

    def test_high_wins_without_critical(self) -> None:
        perms = [
            _perm("A", RiskLevel.LOW, 1, ("PR.AC",)),
            _perm("B", RiskLevel.HIGH, 7, ("PR.AC",)),
        ]
        assert category_severity("PR.AC", perms) is RiskLevel.HIGH

    @pytest.mark.parametrize(
        ("scores", "expected"),
        [
            ((8, 7), RiskLevel.HIGH),
            ((5, 3), RiskLevel.MEDIUM),
            ((4,), RiskLevel.MEDIUM),
            ((3, 2), RiskLevel.LOW),
        ],
    )
    def test_mean_score_thresholds(
        self, scores: tuple[int, ...], expected: RiskLevel
    ) -> None:
        perms = [
            _perm(f"P{i}", RiskLevel.MEDIUM, s, ("PR.DS",))
            for i, s in enumerate(scores)
        ]
        assert category_severity("PR.DS", perms) is expected


# ---------------------------------------------------------------------------
# Taxonomy resolution
# ---------------------------------------------------------------------------


class TestResolveCategory:
    def test_known_category(self, taxonomy: FrameworkTaxonomy) -> None:
        mapping = resolve_category("PR.AC", taxonomy, RiskLevel.HIGH)
        assert mapping.name == "Identity Management and Access Control"
        assert mapping.main_category == "Protect"
        assert mapping.controls == ("Least privilege", "Conditional access")
        assert mapping.remediation == ("Review role assignments quarterly",)
        assert mapping.severity is RiskLevel.HIGH

    def test_unknown_function(self, taxonomy: FrameworkTaxonomy) -> None:
        mapping = resolve_category("DE.AE", taxonomy, RiskLevel.MEDIUM)
        assert mapping.name == "DE.AE"
        assert mapping.description == GENERIC_CATEGORY_DESCRIPTION
        assert mapping.main_category == "DE"
        assert mapping.controls == ()

    def test_unknown_subcategory_of_known_function(
        self, taxonomy: FrameworkTaxonomy
    ) -> None:
        mapping = resolve_category("RS.RP", taxonomy, RiskLevel.MEDIUM)
        assert mapping.name == "RS.RP"
        assert mapping.main_category == "Respond"
        assert mapping.description == GENERIC_CATEGORY_DESCRIPTION

    def test_empty_description_falls_back(self, taxonomy: FrameworkTaxonomy) -> None:
        mapping = resolve_category("GV.RM", taxonomy, RiskLevel.LOW)
        assert mapping.name == "Risk Management Strategy"
        assert mapping.description == GENERIC_CATEGORY_DESCRIPTION

    def test_name_only_subcategory(self, taxonomy: FrameworkTaxonomy) -> None:
        mapping = resolve_category("PR.DS", taxonomy, RiskLevel.LOW)
        assert mapping.name == "Data Security"


class TestMapFrameworkCategories:
    def test_read_users_and_send_mail(
        self, catalog: PermissionCatalog, taxonomy: FrameworkTaxonomy
    ) -> None:
        text = "We need to read all users and send mail"
        perms = detect_permissions(text, catalog)
        mappings = map_framework_categories(perms, text, taxonomy)
        assert [(m.category, m.severity) for m in mappings] == [
            ("PR.AC", RiskLevel.HIGH),
            ("ID.AM", RiskLevel.MEDIUM),
            ("RS.CO", RiskLevel.HIGH),
        ]

    def test_keywords_only(self, taxonomy: FrameworkTaxonomy) -> None:
        text = "This plan covers data protection and incident response."
        mappings = map_framework_categories((), text, taxonomy)
        assert [m.category for m in mappings] == ["PR.DS", "DE.AE", "RS.RP"]
        assert all(m.severity is RiskLevel.MEDIUM for m in mappings)

    def test_nothing_to_map(self, taxonomy: FrameworkTaxonomy) -> None:
        assert map_framework_categories((), "", taxonomy) == ()
