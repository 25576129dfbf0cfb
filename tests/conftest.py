"""Shared fixtures for permrisk tests.

Provides a small in-memory permission catalog and framework taxonomy so
analyzer tests do not depend on the bundled reference data, plus a fixed
clock for reproducible timestamps.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from permrisk.core.analyzer import RiskAnalyzer
from permrisk.core.reference import (
    FrameworkTaxonomy,
    PermissionCatalog,
    ReferenceData,
    parse_catalog,
    parse_taxonomy,
)

FIXED_NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def catalog_document() -> dict[str, Any]:
    """Six-permission catalog covering every risk level."""
    return {
        "permissions": {
            "User.Read.All": {
                "riskLevel": "medium",
                "riskScore": 5,
                "description": "Read all users' full profiles",
                "permissionTypes": ["Application", "Delegated"],
                "consentType": "Admin",
                "csfMapping": ["PR.AC", "ID.AM"],
            },
            "User.ReadWrite.All": {
                "riskLevel": "high",
                "riskScore": 8,
                "description": "Read and write all users' full profiles",
                "csfMapping": ["PR.AC", "ID.AM", "PR.DS"],
            },
            "Directory.ReadWrite.All": {
                "riskLevel": "critical",
                "riskScore": 10,
                "description": "Read and write directory data",
                "impact": "Full control of the tenant directory",
                "csfMapping": ["PR.AC", "GV.RM"],
            },
            "Mail.Send": {
                "riskLevel": "high",
                "riskScore": 7,
                "description": "Send mail as any user",
                "csfMapping": ["PR.AC", "RS.CO"],
            },
            "Calendars.Read": {
                "riskLevel": "low",
                "riskScore": 2,
                "description": "Read user calendars",
                "csfMapping": ["PR.DS"],
            },
            "Files.Read.All": {
                "riskLevel": "low",
                "riskScore": 3,
                "description": "Read all files that user can access",
                "csfMapping": ["PR.DS"],
            },
        }
    }


def taxonomy_document() -> dict[str, Any]:
    """Taxonomy with gaps: no DE function, and RS knows only RS.CO."""
    return {
        "categories": {
            "GV": {
                "name": "Govern",
                "description": "Risk management strategy and policy",
                "subcategories": {
                    "GV.RM": {"name": "Risk Management Strategy", "description": ""},
                },
            },
            "ID": {
                "name": "Identify",
                "subcategories": {
                    "ID.AM": {
                        "name": "Asset Management",
                        "description": "Assets are identified and managed",
                    },
                },
            },
            "PR": {
                "name": "Protect",
                "subcategories": {
                    "PR.AC": {
                        "name": "Identity Management and Access Control",
                        "description": "Access is limited to authorized users",
                        "controls": ["Least privilege", "Conditional access"],
                        "remediation": ["Review role assignments quarterly"],
                    },
                    "PR.DS": "Data Security",
                },
            },
            "RS": {
                "name": "Respond",
                "subcategories": {
                    "RS.CO": {
                        "name": "Incident Response Reporting and Communication",
                        "description": "Response activities are coordinated",
                    },
                },
            },
        }
    }


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def catalog_doc() -> dict[str, Any]:
    return catalog_document()


@pytest.fixture
def taxonomy_doc() -> dict[str, Any]:
    return taxonomy_document()


@pytest.fixture
def catalog() -> PermissionCatalog:
    return parse_catalog(catalog_document())


@pytest.fixture
def taxonomy() -> FrameworkTaxonomy:
    return parse_taxonomy(taxonomy_document())


@pytest.fixture
def reference(catalog: PermissionCatalog, taxonomy: FrameworkTaxonomy) -> ReferenceData:
    return ReferenceData(catalog=catalog, taxonomy=taxonomy)


@pytest.fixture
def analyzer(reference: ReferenceData) -> RiskAnalyzer:
    """Analyzer over the fixture reference data with a fixed clock."""
    return RiskAnalyzer(reference, clock=lambda: FIXED_NOW)


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    """The fixture catalog written to disk as JSON."""
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(catalog_document()))
    return path


@pytest.fixture
def taxonomy_file(tmp_path: Path) -> Path:
    """The fixture taxonomy written to disk as JSON."""
    path = tmp_path / "taxonomy.json"
    path.write_text(json.dumps(taxonomy_document()))
    return path
