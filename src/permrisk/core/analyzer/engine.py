"""Risk analysis engine for project-plan text.

This module implements the ``RiskAnalyzer`` class which orchestrates the
five analysis phases:

1. **Permission Detection** -- exact and heuristic matching against the
   permission catalog.
2. **Risk Indicator Scanning** -- high-risk and compliance rules.
3. **Framework Mapping** -- category codes from permissions and content
   keywords, resolved against the taxonomy with a derived severity.
4. **Recommendation Synthesis** -- triggered rules plus a baseline block.
5. **Score Aggregation** -- one normalized 0-100 score and level.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from permrisk.core.analyzer.detector import detect_permissions
from permrisk.core.analyzer.indicators import scan_risk_indicators
from permrisk.core.analyzer.mapper import map_framework_categories
from permrisk.core.analyzer.models import AnalysisResult
from permrisk.core.analyzer.recommendations import generate_recommendations
from permrisk.core.analyzer.scoring import calculate_overall_risk
from permrisk.core.reference.models import ReferenceData
from permrisk.exceptions import PreconditionError

logger = logging.getLogger(__name__)

# Number of input characters retained on the result for reports.
CONTENT_PREVIEW_CHARS = 1000


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RiskAnalyzer:
    """Five-phase risk analyzer for project-plan text.

    The analyzer takes raw text and returns an immutable ``AnalysisResult``.
    Reference data (catalog and taxonomy) is injected at construction and
    never mutated, and each ``analyze()`` call works on local buffers only,
    so one analyzer may be shared across threads.

    Usage::

        reference = load_reference_data_sync()
        analyzer = RiskAnalyzer(reference)
        result = analyzer.analyze(plan_text)
        print(result.overall_risk.score, result.overall_risk.level.label)

    Args:
        reference: The loaded catalog and taxonomy. ``None`` is accepted so
            that callers may construct the analyzer before loading finishes,
            but ``analyze()`` refuses to run until data is supplied.
        clock: Returns the current time for ``AnalysisResult.timestamp``.
    """

    def __init__(
        self,
        reference: ReferenceData | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._reference = reference
        self._clock = clock or _utc_now

    @property
    def reference(self) -> ReferenceData | None:
        return self._reference

    @property
    def is_ready(self) -> bool:
        """True when both the catalog and the taxonomy are available."""
        ref = self._reference
        return ref is not None and ref.catalog is not None and ref.taxonomy is not None

    def analyze(self, text: str) -> AnalysisResult:
        """Analyze project-plan text and return the complete assessment.

        Args:
            text: Raw plan text. Empty text yields an empty, low-risk result.

        Returns:
            An ``AnalysisResult`` with permissions, categories, indicators,
            recommendations and the overall risk.

        Raises:
            PreconditionError: If the catalog or taxonomy is not loaded.
        """
        ref = self._reference
        if ref is None or not self.is_ready:
            raise PreconditionError(
                "Permission catalog and framework taxonomy must be loaded before analysis"
            )
        catalog = ref.catalog
        taxonomy = ref.taxonomy

        # Phase 1: Permission detection
        permissions = detect_permissions(text, catalog)

        # Phase 2: Risk indicators
        indicators = scan_risk_indicators(text)

        # Phase 3: Framework categories
        mappings = map_framework_categories(permissions, text, taxonomy)

        # Phase 4: Recommendations
        recommendations = generate_recommendations(permissions, indicators)

        # Phase 5: Overall risk
        overall = calculate_overall_risk(permissions, indicators)

        logger.info(
            "Analysis complete: %d permissions, %d indicators, %d categories, "
            "score %d (%s)",
            len(permissions), len(indicators), len(mappings),
            overall.score, overall.level.label,
        )

        return AnalysisResult(
            detected_permissions=permissions,
            csf_mappings=mappings,
            risk_indicators=indicators,
            recommendations=recommendations,
            overall_risk=overall,
            timestamp=self._clock().isoformat(timespec="seconds"),
            content=text[:CONTENT_PREVIEW_CHARS],
        )
