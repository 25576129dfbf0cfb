"""Prepare analysis results for JSON and HTML reports.

Transforms an ``AnalysisResult`` into plain dictionaries that can be safely
serialised to JSON. Levels are rendered as lowercase labels and enums as
their string values; nothing is re-derived from the raw data.

All public functions are pure transformations -- no side effects, no I/O.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from permrisk.core.analyzer.models import (
    AnalysisResult,
    DetectedPermission,
    FrameworkCategoryMapping,
    Recommendation,
    RiskIndicator,
)

REPORT_VERSION = "1.0"


def permission_to_dict(perm: DetectedPermission) -> dict[str, Any]:
    return {
        "name": perm.name,
        "risk_level": perm.risk_level.label,
        "risk_score": perm.risk_score,
        "description": perm.description,
        "permission_types": sorted(t.value for t in perm.permission_types),
        "consent_type": perm.consent_type,
        "impact": perm.impact,
        "csf_mapping": list(perm.csf_mapping),
        "detected": perm.detected.value,
    }


def mapping_to_dict(mapping: FrameworkCategoryMapping) -> dict[str, Any]:
    return {
        "category": mapping.category,
        "name": mapping.name,
        "description": mapping.description,
        "main_category": mapping.main_category,
        "severity": mapping.severity.label,
        "controls": list(mapping.controls),
        "remediation": list(mapping.remediation),
    }


def indicator_to_dict(indicator: RiskIndicator) -> dict[str, Any]:
    return {
        "indicator": indicator.indicator,
        "level": indicator.level.label,
        "evidence": indicator.evidence,
        "description": indicator.description,
    }


def recommendation_to_dict(rec: Recommendation) -> dict[str, Any]:
    return {
        "title": rec.title,
        "description": rec.description,
        "priority": rec.priority.label,
    }


def prepare_summary(result: AnalysisResult) -> dict[str, Any]:
    """Build the summary block shown at the top of every report.

    Returns:
        Dict with keys: score, level, total_permissions, total_indicators,
        categories_mapped, risk_distribution.
    """
    overall = result.overall_risk
    return {
        "score": overall.score,
        "level": overall.level.label,
        "total_permissions": overall.total_permissions,
        "total_indicators": overall.total_indicators,
        "categories_mapped": len(result.csf_mappings),
        "risk_distribution": {
            level.label: count
            for level, count in result.risk_distribution.items()
        },
    }


def result_to_dict(result: AnalysisResult) -> dict[str, Any]:
    """Convert a full result into a JSON-serializable dict."""
    overall = result.overall_risk
    return {
        "timestamp": result.timestamp,
        "summary": prepare_summary(result),
        "overall_risk": {
            "score": overall.score,
            "level": overall.level.label,
            "total_permissions": overall.total_permissions,
            "total_indicators": overall.total_indicators,
        },
        "detected_permissions": [permission_to_dict(p) for p in result.detected_permissions],
        "csf_mappings": [mapping_to_dict(m) for m in result.csf_mappings],
        "risk_indicators": [indicator_to_dict(i) for i in result.risk_indicators],
        "recommendations": [recommendation_to_dict(r) for r in result.recommendations],
        "content": result.content,
    }


def encode_json_report(
    result: AnalysisResult,
    *,
    generated_at: str | None = None,
) -> str:
    """Produce the complete JSON report for a result.

    Args:
        result: The analysis result to serialize.
        generated_at: Report timestamp; defaults to now (UTC).

    Returns:
        An indented JSON string.
    """
    payload = result_to_dict(result)
    payload["generated_at"] = generated_at or datetime.now(timezone.utc).isoformat(
        timespec="seconds"
    )
    payload["report_version"] = REPORT_VERSION
    return json.dumps(payload, indent=2)
