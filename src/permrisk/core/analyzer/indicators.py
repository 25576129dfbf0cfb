"""Risk indicator scanning over high-risk and compliance rule sets.

The two rule sets run independently and every rule fires at most once.
There is no cross-rule suppression: text that matches several overlapping
rules (say "delete all" inside a sentence about "unrestricted access")
raises one indicator per matching rule.
"""

from __future__ import annotations

from permrisk.core.analyzer.models import RiskIndicator
from permrisk.core.analyzer.patterns import (
    COMPLIANCE_DESCRIPTION,
    COMPLIANCE_PATTERNS,
    HIGH_RISK_PATTERNS,
    risk_description,
)


def scan_risk_indicators(text: str) -> tuple[RiskIndicator, ...]:
    """Return the indicators raised by ``text``: high-risk rules, then compliance."""
    indicators: list[RiskIndicator] = []

    for pattern, name, level in HIGH_RISK_PATTERNS:
        match = pattern.search(text)
        if match:
            indicators.append(RiskIndicator(
                indicator=name,
                level=level,
                description=risk_description(name),
                evidence=match.group(0),
            ))

    for pattern, name, level in COMPLIANCE_PATTERNS:
        if pattern.search(text):
            indicators.append(RiskIndicator(
                indicator=name,
                level=level,
                description=COMPLIANCE_DESCRIPTION,
            ))

    return tuple(indicators)
