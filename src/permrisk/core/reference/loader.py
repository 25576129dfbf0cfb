"""Load and validate the permission catalog and framework taxonomy.

Reference documents are JSON or YAML, read from a local path or fetched
from an ``http(s)`` URL. Both documents are loaded concurrently by a single
async initialization step that returns only once both are available, so an
analyzer can never observe a half-loaded bundle.

Document shapes::

    {"permissions": {"User.Read.All": {"riskLevel": "high", "riskScore": 7, ...}}}

    {"categories": {"PR": {"name": "Protect", "description": "...",
                           "subcategories": {"PR.AC": {"name": "...", ...}}}}}
"""

from __future__ import annotations

import asyncio
import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml

from permrisk.core.reference.http_client import fetch_text, is_remote
from permrisk.core.reference.models import (
    FrameworkCategory,
    FrameworkSubcategory,
    FrameworkTaxonomy,
    PermissionCatalog,
    PermissionCatalogEntry,
    PermissionType,
    ReferenceData,
    RiskLevel,
)
from permrisk.exceptions import ReferenceDataError

logger = logging.getLogger(__name__)

BUNDLED = "bundled"
CATALOG_FILENAME = "entra-permissions.json"
TAXONOMY_FILENAME = "nist-csf-2.0.json"

_YAML_SUFFIXES = (".yaml", ".yml")
_MAX_RISK_SCORE = 10


def default_catalog_path() -> Path:
    """Path of the permission catalog shipped with the package."""
    return Path(str(resources.files("permrisk") / "data" / CATALOG_FILENAME))


def default_taxonomy_path() -> Path:
    """Path of the framework taxonomy shipped with the package."""
    return Path(str(resources.files("permrisk") / "data" / TAXONOMY_FILENAME))


# ---------------------------------------------------------------------------
# Document decoding
# ---------------------------------------------------------------------------


def decode_document(text: str, source: str) -> dict[str, Any]:
    """Decode a JSON or YAML document; the format is chosen by suffix.

    Raises:
        ReferenceDataError: If the text cannot be decoded or is not a mapping.
    """
    suffix = Path(urlparse(source).path if is_remote(source) else source).suffix
    try:
        if suffix.lower() in _YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ReferenceDataError(f"Could not decode {source}: {exc}") from exc
    if not isinstance(data, dict):
        raise ReferenceDataError(f"{source}: top level must be a mapping")
    return data


def read_document(path: str | Path) -> dict[str, Any]:
    """Read and decode a local reference document."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as exc:
        raise ReferenceDataError(f"Reference file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ReferenceDataError(f"Could not read {path}: {exc}") from exc
    return decode_document(text, str(path))


async def fetch_document(source: str) -> dict[str, Any]:
    """Load a reference document from a URL or a local path.

    Local reads run in a worker thread so that two documents can be
    loaded concurrently with ``asyncio.gather``.
    """
    if is_remote(source):
        text = await fetch_text(source)
        return decode_document(text, source)
    return await asyncio.to_thread(read_document, source)


# ---------------------------------------------------------------------------
# Catalog parsing
# ---------------------------------------------------------------------------


def _parse_level(value: Any, where: str) -> RiskLevel:
    if not isinstance(value, str):
        raise ReferenceDataError(f"{where}: riskLevel must be a string")
    try:
        return RiskLevel.from_label(value)
    except ValueError as exc:
        raise ReferenceDataError(f"{where}: {exc}") from exc


def _parse_score(value: Any, where: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ReferenceDataError(f"{where}: riskScore must be a number")
    if isinstance(value, float) and not value.is_integer():
        raise ReferenceDataError(f"{where}: riskScore must be a whole number")
    score = int(value)
    if not 0 <= score <= _MAX_RISK_SCORE:
        raise ReferenceDataError(
            f"{where}: riskScore {score} outside 0-{_MAX_RISK_SCORE}"
        )
    return score


def _parse_permission_types(value: Any, where: str) -> frozenset[PermissionType]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise ReferenceDataError(f"{where}: permissionTypes must be a list")
    by_label = {t.value.lower(): t for t in PermissionType}
    types: set[PermissionType] = set()
    for raw in value:
        ptype = by_label.get(str(raw).strip().lower())
        if ptype is None:
            raise ReferenceDataError(f"{where}: unknown permission type {raw!r}")
        types.add(ptype)
    return frozenset(types)


def _parse_str_list(value: Any, where: str, key: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ReferenceDataError(f"{where}: {key} must be a list of strings")
    return tuple(value)


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def parse_catalog(document: dict[str, Any]) -> PermissionCatalog:
    """Validate a catalog document and build a ``PermissionCatalog``.

    Raises:
        ReferenceDataError: Naming the first offending entry.
    """
    permissions = document.get("permissions")
    if not isinstance(permissions, dict):
        raise ReferenceDataError("Catalog must contain a 'permissions' mapping")

    entries: dict[str, PermissionCatalogEntry] = {}
    for name, raw in permissions.items():
        where = f"permission {name!r}"
        if not isinstance(raw, dict):
            raise ReferenceDataError(f"{where}: entry must be a mapping")
        entries[str(name)] = PermissionCatalogEntry(
            name=str(name),
            risk_level=_parse_level(raw.get("riskLevel"), where),
            risk_score=_parse_score(raw.get("riskScore"), where),
            description=str(raw.get("description", "")),
            permission_types=_parse_permission_types(raw.get("permissionTypes"), where),
            consent_type=_optional_str(raw.get("consentType")),
            impact=_optional_str(raw.get("impact")),
            csf_mapping=_parse_str_list(raw.get("csfMapping"), where, "csfMapping"),
        )
    return PermissionCatalog(entries)


# ---------------------------------------------------------------------------
# Taxonomy parsing
# ---------------------------------------------------------------------------


def _parse_subcategory(code: str, raw: Any, where: str) -> FrameworkSubcategory:
    # Older taxonomy files map a code straight to its name.
    if isinstance(raw, str):
        return FrameworkSubcategory(code=code, name=raw)
    if not isinstance(raw, dict):
        raise ReferenceDataError(f"{where}: subcategory must be a mapping or string")
    return FrameworkSubcategory(
        code=code,
        name=str(raw.get("name", code)),
        description=str(raw.get("description", "")),
        controls=_parse_str_list(raw.get("controls"), where, "controls"),
        remediation=_parse_str_list(raw.get("remediation"), where, "remediation"),
    )


def parse_taxonomy(document: dict[str, Any]) -> FrameworkTaxonomy:
    """Validate a taxonomy document and build a ``FrameworkTaxonomy``.

    Raises:
        ReferenceDataError: Naming the first offending category.
    """
    categories = document.get("categories")
    if not isinstance(categories, dict):
        raise ReferenceDataError("Taxonomy must contain a 'categories' mapping")

    parsed: dict[str, FrameworkCategory] = {}
    for main_code, raw in categories.items():
        where = f"category {main_code!r}"
        if not isinstance(raw, dict):
            raise ReferenceDataError(f"{where}: entry must be a mapping")
        subs_raw = raw.get("subcategories") or {}
        if not isinstance(subs_raw, dict):
            raise ReferenceDataError(f"{where}: subcategories must be a mapping")
        subs = {
            str(code): _parse_subcategory(str(code), sub, f"{where} / {code!r}")
            for code, sub in subs_raw.items()
        }
        parsed[str(main_code)] = FrameworkCategory(
            code=str(main_code),
            name=str(raw.get("name", main_code)),
            description=str(raw.get("description", "")),
            subcategories=subs,
        )
    return FrameworkTaxonomy(parsed)


# ---------------------------------------------------------------------------
# Bundle loading
# ---------------------------------------------------------------------------


def _load_blocking(source: str | Path) -> dict[str, Any]:
    if isinstance(source, str) and is_remote(source):
        return asyncio.run(fetch_document(source))
    return read_document(source)


def load_catalog(source: str | Path | None = None) -> PermissionCatalog:
    """Load only a catalog from a path or URL (bundled when None)."""
    return parse_catalog(_load_blocking(source or default_catalog_path()))


def load_taxonomy(source: str | Path | None = None) -> FrameworkTaxonomy:
    """Load only a taxonomy from a path or URL (bundled when None)."""
    return parse_taxonomy(_load_blocking(source or default_taxonomy_path()))


async def load_reference_data(
    catalog_source: str | None = None,
    taxonomy_source: str | None = None,
) -> ReferenceData:
    """Load the catalog and taxonomy concurrently into one immutable bundle.

    Args:
        catalog_source: Path or URL of the catalog; None for the bundled one.
        taxonomy_source: Path or URL of the taxonomy; None for the bundled one.

    Returns:
        A ``ReferenceData`` holding both documents.

    Raises:
        ReferenceDataError: If either document fails to load or validate.
    """
    catalog_src = catalog_source or str(default_catalog_path())
    taxonomy_src = taxonomy_source or str(default_taxonomy_path())

    catalog_doc, taxonomy_doc = await asyncio.gather(
        fetch_document(catalog_src),
        fetch_document(taxonomy_src),
    )
    catalog = parse_catalog(catalog_doc)
    taxonomy = parse_taxonomy(taxonomy_doc)
    logger.info(
        "Loaded %d permissions from %s and %d framework categories from %s",
        len(catalog), catalog_source or BUNDLED,
        len(taxonomy), taxonomy_source or BUNDLED,
    )
    return ReferenceData(
        catalog=catalog,
        taxonomy=taxonomy,
        catalog_source=catalog_source or BUNDLED,
        taxonomy_source=taxonomy_source or BUNDLED,
    )


def load_reference_data_sync(
    catalog_source: str | None = None,
    taxonomy_source: str | None = None,
) -> ReferenceData:
    """Blocking wrapper around ``load_reference_data`` for CLI and scripts."""
    return asyncio.run(load_reference_data(catalog_source, taxonomy_source))
