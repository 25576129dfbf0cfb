"""Reference data models: risk levels, catalog entries, and framework taxonomy.

The permission catalog and the framework taxonomy are static documents that
the analysis pipeline consumes read-only. Every type here is immutable once
built so a single ``ReferenceData`` bundle can be shared by any number of
concurrent ``RiskAnalyzer.analyze()`` calls.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from types import MappingProxyType


# ---------------------------------------------------------------------------
# RiskLevel: Ordered qualitative levels
# ---------------------------------------------------------------------------


class RiskLevel(IntEnum):
    """Four-level risk scale shared by permissions, indicators and categories.

    The integer encoding enables direct comparison: LOW < MEDIUM < HIGH < CRITICAL.
    Documents and reports use the lowercase ``label``.
    """

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    @property
    def label(self) -> str:
        """Lowercase label used in reference documents and reports."""
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> RiskLevel:
        """Parse a level label case-insensitively.

        Raises:
            ValueError: If ``label`` is not one of low/medium/high/critical.
        """
        try:
            return cls[label.strip().upper()]
        except (KeyError, AttributeError):
            raise ValueError(f"Unknown risk level: {label!r}") from None


class PermissionType(Enum):
    """How a permission is granted to an application."""

    APPLICATION = "Application"
    DELEGATED = "Delegated"


# ---------------------------------------------------------------------------
# Permission catalog
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PermissionCatalogEntry:
    """Static metadata for one sensitive API permission.

    Attributes:
        name: Unique dotted identifier, e.g. ``Directory.ReadWrite.All``.
        risk_level: Qualitative risk of granting this permission.
        risk_score: Integer score in [0, 10].
        description: Human-readable summary of what the permission allows.
        permission_types: Grant types the permission is available as.
        consent_type: Who may consent (e.g. "Admin"), if known.
        impact: Free-text blast-radius note, if known.
        csf_mapping: Framework category codes this permission touches.
    """

    name: str
    risk_level: RiskLevel
    risk_score: int
    description: str
    permission_types: frozenset[PermissionType] = frozenset()
    consent_type: str | None = None
    impact: str | None = None
    csf_mapping: tuple[str, ...] = ()


class PermissionCatalog:
    """Read-only, declaration-ordered mapping of permission name to entry."""

    def __init__(self, entries: Mapping[str, PermissionCatalogEntry]) -> None:
        self._entries: Mapping[str, PermissionCatalogEntry] = MappingProxyType(
            dict(entries)
        )

    def get(self, name: str) -> PermissionCatalogEntry | None:
        return self._entries.get(name)

    def by_level(self, minimum: RiskLevel) -> list[PermissionCatalogEntry]:
        """Return entries at or above ``minimum``, in declaration order."""
        return [e for e in self._entries.values() if e.risk_level >= minimum]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[PermissionCatalogEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"PermissionCatalog({len(self)} permissions)"


# ---------------------------------------------------------------------------
# Framework taxonomy
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FrameworkSubcategory:
    """One control category, e.g. ``PR.AC``, with its guidance text."""

    code: str
    name: str
    description: str = ""
    controls: tuple[str, ...] = ()
    remediation: tuple[str, ...] = ()


@dataclass(frozen=True)
class FrameworkCategory:
    """A top-level framework function, e.g. ``PR`` (Protect)."""

    code: str
    name: str
    description: str = ""
    subcategories: Mapping[str, FrameworkSubcategory] = field(
        default_factory=lambda: MappingProxyType({})
    )


def split_category_code(code: str) -> tuple[str, str]:
    """Split ``"PR.AC"`` into ``("PR", "AC")``. A code without a dot has no sub part."""
    main, _, sub = code.partition(".")
    return main, sub


class FrameworkTaxonomy:
    """Read-only mapping of top-level category code to ``FrameworkCategory``."""

    def __init__(self, categories: Mapping[str, FrameworkCategory]) -> None:
        self._categories: Mapping[str, FrameworkCategory] = MappingProxyType(
            dict(categories)
        )

    def category(self, main_code: str) -> FrameworkCategory | None:
        return self._categories.get(main_code)

    def lookup(
        self, code: str
    ) -> tuple[FrameworkCategory | None, FrameworkSubcategory | None]:
        """Resolve a full category code to its parent and subcategory metadata.

        Either element is None when the taxonomy has no entry for it.
        """
        main, _ = split_category_code(code)
        parent = self._categories.get(main)
        if parent is None:
            return None, None
        return parent, parent.subcategories.get(code)

    def subcategories(self) -> Iterator[tuple[FrameworkCategory, FrameworkSubcategory]]:
        """Yield every (parent, subcategory) pair in declaration order."""
        for parent in self._categories.values():
            for sub in parent.subcategories.values():
                yield parent, sub

    def __contains__(self, main_code: object) -> bool:
        return main_code in self._categories

    def __iter__(self) -> Iterator[FrameworkCategory]:
        return iter(self._categories.values())

    def __len__(self) -> int:
        return len(self._categories)

    def __repr__(self) -> str:
        return f"FrameworkTaxonomy({len(self)} categories)"


# ---------------------------------------------------------------------------
# ReferenceData: the immutable bundle handed to the analyzer
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ReferenceData:
    """Catalog and taxonomy loaded together, ready for analysis.

    Attributes:
        catalog: The permission catalog.
        taxonomy: The framework taxonomy.
        catalog_source: Where the catalog came from (path, URL or "bundled").
        taxonomy_source: Where the taxonomy came from.
    """

    catalog: PermissionCatalog
    taxonomy: FrameworkTaxonomy
    catalog_source: str = "bundled"
    taxonomy_source: str = "bundled"
