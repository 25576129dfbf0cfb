"""Detection-and-scoring pipeline for project-plan risk assessment.

Given raw plan text and a loaded ``ReferenceData`` bundle, the
``RiskAnalyzer`` runs five phases and returns an ``AnalysisResult``.

Five-Phase Analysis
-------------------

**Phase 1 -- Permission Detection:**
    Catalog keys found verbatim (dotted or spaced) are exact matches;
    heuristic intent rules ("read all users") add pattern matches.

**Phase 2 -- Risk Indicator Scanning:**
    High-risk rules capture evidence; compliance rules flag obligations.

**Phase 3 -- Framework Mapping:**
    Category codes from permissions and content keywords, deduplicated in
    discovery order, each with a severity derived from mapped permissions.

**Phase 4 -- Recommendations:**
    Triggered remediation advice followed by a fixed baseline block.

**Phase 5 -- Score Aggregation:**
    A normalized 0-100 score bucketed into low/medium/high/critical.

Submodules
----------
- ``models``: Result records (DetectedPermission, RiskIndicator, ...).
- ``patterns``: Compiled regex catalogs and keyword tables.
- ``detector``, ``indicators``, ``mapper``, ``recommendations``,
  ``scoring``: One module per phase.
- ``engine``: The RiskAnalyzer class.

All public names are re-exported here::

    from permrisk.core.analyzer import RiskAnalyzer, AnalysisResult
"""

from permrisk.core.analyzer.engine import RiskAnalyzer
from permrisk.core.analyzer.models import (
    AnalysisResult,
    DetectedPermission,
    DetectionMethod,
    FrameworkCategoryMapping,
    OverallRisk,
    Recommendation,
    RiskIndicator,
)

__all__ = [
    "AnalysisResult",
    "DetectedPermission",
    "DetectionMethod",
    "FrameworkCategoryMapping",
    "OverallRisk",
    "Recommendation",
    "RiskAnalyzer",
    "RiskIndicator",
]
