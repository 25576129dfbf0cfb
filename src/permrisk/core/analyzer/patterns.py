"""Rule catalogs for permission detection, risk indicators and category mapping.

This module contains every compiled regex and keyword table the analysis
pipeline uses. The catalogs are kept apart from the engine so they can be
tested independently and audited as the permission landscape evolves.

All patterns are static and trusted. They are compiled at import time, so a
malformed pattern fails loudly during development rather than at analysis
time. Matching is case-insensitive and ``.`` never crosses a line break.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType

from permrisk.core.reference.models import RiskLevel


# ---------------------------------------------------------------------------
# Heuristic permission rules
# ---------------------------------------------------------------------------

# Each entry: (compiled regex, implied permission name).
# Declaration order matters: the first rule implying a permission wins.

PERMISSION_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"read.*all.*user", re.IGNORECASE), "User.Read.All"),
    (re.compile(r"write.*all.*user", re.IGNORECASE), "User.ReadWrite.All"),
    (re.compile(r"read.*director", re.IGNORECASE), "Directory.Read.All"),
    (re.compile(r"write.*director", re.IGNORECASE), "Directory.ReadWrite.All"),
    (re.compile(r"manage.*application", re.IGNORECASE), "Application.ReadWrite.All"),
    (re.compile(r"read.*application", re.IGNORECASE), "Application.Read.All"),
    (re.compile(r"manage.*group", re.IGNORECASE), "Group.ReadWrite.All"),
    (re.compile(r"read.*group", re.IGNORECASE), "Group.Read.All"),
    (re.compile(r"send.*mail", re.IGNORECASE), "Mail.Send"),
    (re.compile(r"read.*mail", re.IGNORECASE), "Mail.Read"),
    (re.compile(r"manage.*role", re.IGNORECASE), "RoleManagement.ReadWrite.All"),
    (re.compile(r"read.*role", re.IGNORECASE), "RoleManagement.Read.All"),
    (re.compile(r"manage.*polic", re.IGNORECASE), "Policy.ReadWrite.All"),
    (re.compile(r"read.*polic", re.IGNORECASE), "Policy.Read.All"),
    (re.compile(r"read.*file", re.IGNORECASE), "Files.Read.All"),
    (re.compile(r"write.*file", re.IGNORECASE), "Files.ReadWrite.All"),
    (re.compile(r"audit.*log", re.IGNORECASE), "AuditLog.Read.All"),
)


# ---------------------------------------------------------------------------
# High-risk indicator rules
# ---------------------------------------------------------------------------

# Each entry: (compiled regex, indicator name, level).
# Evidence is the first matched substring.

HIGH_RISK_PATTERNS: tuple[tuple[re.Pattern[str], str, RiskLevel], ...] = (
    (re.compile(r"global.*admin", re.IGNORECASE),
     "Global Administrator Access", RiskLevel.CRITICAL),
    (re.compile(r"privileg.*escalat", re.IGNORECASE),
     "Privilege Escalation Risk", RiskLevel.HIGH),
    (re.compile(r"(delete|remove).*all", re.IGNORECASE),
     "Destructive Operations", RiskLevel.HIGH),
    (re.compile(r"unrestricted.*access", re.IGNORECASE),
     "Unrestricted Access", RiskLevel.HIGH),
    (re.compile(r"application.*readwrite.*all", re.IGNORECASE),
     "Full Application Management", RiskLevel.CRITICAL),
    (re.compile(r"directory.*readwrite.*all", re.IGNORECASE),
     "Full Directory Access", RiskLevel.CRITICAL),
    (re.compile(r"external.*integration", re.IGNORECASE),
     "External System Integration", RiskLevel.MEDIUM),
    (re.compile(r"third.*party", re.IGNORECASE),
     "Third-party Access", RiskLevel.MEDIUM),
    (re.compile(r"(credential|secret|password).*manage", re.IGNORECASE),
     "Credential Management", RiskLevel.HIGH),
    (re.compile(r"role.*management", re.IGNORECASE),
     "Role Management Access", RiskLevel.HIGH),
)

RISK_DESCRIPTIONS: Mapping[str, str] = MappingProxyType({
    "Global Administrator Access": "Highest level of access with potential for significant damage",
    "Privilege Escalation Risk": "Ability to gain higher privileges than initially granted",
    "Destructive Operations": "Operations that can permanently delete or modify data",
    "Unrestricted Access": "Access without proper limitations or controls",
    "Full Application Management": "Complete control over application configurations",
    "Full Directory Access": "Complete access to organizational directory",
    "External System Integration": "Integration with systems outside organizational control",
    "Third-party Access": "Access granted to external parties",
    "Credential Management": "Ability to manage authentication credentials",
    "Role Management Access": "Ability to assign and modify user roles",
})

GENERIC_RISK_DESCRIPTION = "Potential security risk requiring attention"


def risk_description(name: str) -> str:
    """Return the static description for a risk name, or the generic one."""
    return RISK_DESCRIPTIONS.get(name, GENERIC_RISK_DESCRIPTION)


# ---------------------------------------------------------------------------
# Compliance indicator rules
# ---------------------------------------------------------------------------

COMPLIANCE_PATTERNS: tuple[tuple[re.Pattern[str], str, RiskLevel], ...] = (
    (re.compile(r"gdpr", re.IGNORECASE), "GDPR Compliance Required", RiskLevel.MEDIUM),
    (re.compile(r"hipaa", re.IGNORECASE), "HIPAA Compliance Required", RiskLevel.HIGH),
    (re.compile(r"sox", re.IGNORECASE), "SOX Compliance Required", RiskLevel.MEDIUM),
    (re.compile(r"pci.*dss", re.IGNORECASE), "PCI DSS Compliance Required", RiskLevel.HIGH),
)

COMPLIANCE_DESCRIPTION = "Compliance requirements may increase security obligations"


# ---------------------------------------------------------------------------
# Content keywords per framework category
# ---------------------------------------------------------------------------

# Matched as plain substrings of the lowercased text, in declaration order.

CSF_KEYWORDS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "ID.AM": ("asset", "inventory", "catalog", "management"),
    "ID.RA": ("risk", "assessment", "evaluation", "analysis"),
    "PR.AC": ("access", "authentication", "authorization", "permission"),
    "PR.DS": ("data", "protection", "encryption", "privacy"),
    "PR.AT": ("training", "awareness", "education"),
    "PR.IP": ("process", "procedure", "policy"),
    "DE.CM": ("monitoring", "detection", "surveillance"),
    "DE.AE": ("anomaly", "event", "incident"),
    "RS.RP": ("response", "plan", "incident"),
    "RS.CO": ("communication", "notification"),
    "RC.RP": ("recovery", "backup", "restore"),
    "GV.RM": ("governance", "management", "oversight"),
    "GV.PO": ("policy", "procedure", "standard"),
})
