"""Permission detection: exact catalog matches plus heuristic intent rules.

Detection runs in two passes over the raw text:

1. **Exact match** -- every catalog key is looked up case-insensitively in
   its dotted form (``Mail.Send``) and its spaced form (``mail send``).
2. **Pattern match** -- each heuristic rule in ``PERMISSION_PATTERNS`` that
   matches the text implies a permission; it is added only if the catalog
   knows it and it was not already detected.

The output holds each permission name at most once, exact matches first.
"""

from __future__ import annotations

import logging

from permrisk.core.analyzer.models import DetectedPermission, DetectionMethod
from permrisk.core.analyzer.patterns import PERMISSION_PATTERNS
from permrisk.core.reference.models import PermissionCatalog

logger = logging.getLogger(__name__)


def _literal_forms(name: str) -> tuple[str, str]:
    lowered = name.lower()
    return lowered, lowered.replace(".", " ")


def detect_permissions(
    text: str, catalog: PermissionCatalog
) -> tuple[DetectedPermission, ...]:
    """Detect catalog permissions implied by ``text``.

    Args:
        text: Raw input text (may be empty).
        catalog: The permission catalog to match against.

    Returns:
        Detected permissions in discovery order, unique by name.
    """
    if not text:
        return ()

    detected: dict[str, DetectedPermission] = {}
    text_lower = text.lower()

    for entry in catalog:
        dotted, spaced = _literal_forms(entry.name)
        if dotted in text_lower or spaced in text_lower:
            detected[entry.name] = DetectedPermission.from_entry(
                entry, DetectionMethod.EXACT_MATCH
            )

    for pattern, name in PERMISSION_PATTERNS:
        if name in detected or not pattern.search(text):
            continue
        entry = catalog.get(name)
        if entry is None:
            logger.debug("Rule %r implies %s, which is not in the catalog",
                         pattern.pattern, name)
            continue
        detected[name] = DetectedPermission.from_entry(
            entry, DetectionMethod.PATTERN_MATCH
        )

    return tuple(detected.values())
