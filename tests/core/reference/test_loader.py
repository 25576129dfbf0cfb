"""Tests for reference document decoding, validation and loading.

Verifies:
    - JSON and YAML decoding by suffix.
    - Catalog and taxonomy validation errors name the offending entry.
    - The bundled documents load and are consistent.
    - Concurrent loading from local paths and (mocked) URLs.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest
import yaml

from permrisk.core.reference import (
    PermissionType,
    RiskLevel,
    load_catalog,
    load_reference_data,
    load_reference_data_sync,
    load_taxonomy,
    parse_catalog,
    parse_taxonomy,
)
from permrisk.core.reference.loader import (
    BUNDLED,
    decode_document,
    read_document,
)
from permrisk.exceptions import ReferenceDataError


def _single(entry: dict[str, Any]) -> dict[str, Any]:
    return {"permissions": {"Test.Perm": entry}}


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


class TestDecodeDocument:
    def test_json(self) -> None:
        assert decode_document('{"a": 1}', "x.json") == {"a": 1}

    def test_yaml_by_suffix(self) -> None:
        assert decode_document("a: 1\n", "x.yaml") == {"a": 1}

    def test_yaml_url_suffix(self) -> None:
        doc = decode_document("a: 1\n", "https://example.com/ref/x.yml?rev=2")
        assert doc == {"a": 1}

    def test_invalid_json(self) -> None:
        with pytest.raises(ReferenceDataError, match="Could not decode"):
            decode_document("{not json", "x.json")

    def test_top_level_must_be_mapping(self) -> None:
        with pytest.raises(ReferenceDataError, match="mapping"):
            decode_document("[1, 2]", "x.json")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ReferenceDataError, match="Reference file not found"):
            read_document(tmp_path / "missing.json")

    def test_byte_order_mark_is_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "bom.json"
        path.write_bytes(b"\xef\xbb\xbf" + b'{"a": 1}')
        assert read_document(path) == {"a": 1}


# ---------------------------------------------------------------------------
# Catalog validation
# ---------------------------------------------------------------------------


class TestParseCatalog:
    def test_valid(self, catalog_doc: dict[str, Any]) -> None:
        catalog = parse_catalog(catalog_doc)
        entry = catalog.get("User.Read.All")
        assert entry is not None
        assert entry.risk_level is RiskLevel.MEDIUM
        assert entry.permission_types == frozenset(
            {PermissionType.APPLICATION, PermissionType.DELEGATED}
        )
        assert entry.consent_type == "Admin"
        assert entry.csf_mapping == ("PR.AC", "ID.AM")

    def test_missing_permissions_key(self) -> None:
        with pytest.raises(ReferenceDataError, match="'permissions'"):
            parse_catalog({"perms": {}})

    def test_unknown_risk_level_names_entry(self) -> None:
        with pytest.raises(ReferenceDataError, match="permission 'Test.Perm'"):
            parse_catalog(_single({"riskLevel": "severe", "riskScore": 3}))

    def test_missing_risk_level(self) -> None:
        with pytest.raises(ReferenceDataError, match="riskLevel"):
            parse_catalog(_single({"riskScore": 3}))

    @pytest.mark.parametrize("score", [11, -1, 7.5, "7", True])
    def test_invalid_risk_score(self, score: object) -> None:
        with pytest.raises(ReferenceDataError, match="riskScore"):
            parse_catalog(_single({"riskLevel": "low", "riskScore": score}))

    def test_whole_float_score_accepted(self) -> None:
        catalog = parse_catalog(_single({"riskLevel": "high", "riskScore": 7.0}))
        assert catalog.get("Test.Perm").risk_score == 7  # type: ignore[union-attr]

    def test_missing_score_is_zero(self) -> None:
        catalog = parse_catalog(_single({"riskLevel": "low"}))
        assert catalog.get("Test.Perm").risk_score == 0  # type: ignore[union-attr]

    def test_single_permission_type_string(self) -> None:
        catalog = parse_catalog(
            _single({"riskLevel": "low", "permissionTypes": "delegated"})
        )
        entry = catalog.get("Test.Perm")
        assert entry is not None
        assert entry.permission_types == frozenset({PermissionType.DELEGATED})

    def test_unknown_permission_type(self) -> None:
        with pytest.raises(ReferenceDataError, match="permission type"):
            parse_catalog(_single({"riskLevel": "low", "permissionTypes": ["Robot"]}))

    def test_csf_mapping_must_be_strings(self) -> None:
        with pytest.raises(ReferenceDataError, match="csfMapping"):
            parse_catalog(_single({"riskLevel": "low", "csfMapping": "PR.AC"}))


# ---------------------------------------------------------------------------
# Taxonomy validation
# ---------------------------------------------------------------------------


class TestParseTaxonomy:
    def test_valid(self, taxonomy_doc: dict[str, Any]) -> None:
        taxonomy = parse_taxonomy(taxonomy_doc)
        assert len(taxonomy) == 4
        _, sub = taxonomy.lookup("PR.DS")
        assert sub is not None and sub.name == "Data Security"

    def test_missing_categories_key(self) -> None:
        with pytest.raises(ReferenceDataError, match="'categories'"):
            parse_taxonomy({})

    def test_bad_subcategories(self) -> None:
        with pytest.raises(ReferenceDataError, match="category 'PR'"):
            parse_taxonomy({"categories": {"PR": {"subcategories": ["PR.AC"]}}})

    def test_bad_controls(self) -> None:
        doc = {"categories": {"PR": {"subcategories": {"PR.AC": {"controls": "x"}}}}}
        with pytest.raises(ReferenceDataError, match="controls"):
            parse_taxonomy(doc)


# ---------------------------------------------------------------------------
# Bundled data
# ---------------------------------------------------------------------------


class TestBundledData:
    def test_catalog_loads(self) -> None:
        catalog = load_catalog()
        assert len(catalog) >= 20
        entry = catalog.get("Directory.ReadWrite.All")
        assert entry is not None and entry.risk_level is RiskLevel.CRITICAL

    def test_taxonomy_has_six_functions(self) -> None:
        taxonomy = load_taxonomy()
        assert {c.code for c in taxonomy} == {"GV", "ID", "PR", "DE", "RS", "RC"}

    def test_catalog_mappings_resolve_in_taxonomy(self) -> None:
        taxonomy = load_taxonomy()
        for entry in load_catalog():
            for code in entry.csf_mapping:
                _, sub = taxonomy.lookup(code)
                assert sub is not None, f"{entry.name} maps to unknown {code}"

    def test_sync_bundle(self) -> None:
        reference = load_reference_data_sync()
        assert reference.catalog_source == BUNDLED
        assert reference.taxonomy_source == BUNDLED


# ---------------------------------------------------------------------------
# Loading from custom sources
# ---------------------------------------------------------------------------


class TestCustomSources:
    def test_local_json_and_yaml(
        self,
        tmp_path: Path,
        catalog_file: Path,
        taxonomy_doc: dict[str, Any],
    ) -> None:
        taxonomy_path = tmp_path / "taxonomy.yaml"
        taxonomy_path.write_text(yaml.safe_dump(taxonomy_doc))
        reference = load_reference_data_sync(str(catalog_file), str(taxonomy_path))
        assert len(reference.catalog) == 6
        assert "RS" in reference.taxonomy
        assert reference.catalog_source == str(catalog_file)

    def test_one_bad_document_fails_the_bundle(self, tmp_path: Path) -> None:
        with pytest.raises(ReferenceDataError):
            load_reference_data_sync(str(tmp_path / "missing.json"))

    def test_remote_catalog(
        self, catalog_doc: dict[str, Any], taxonomy_file: Path
    ) -> None:
        url = "https://example.com/ref/catalog.json"
        with patch(
            "permrisk.core.reference.loader.fetch_text",
            new_callable=AsyncMock,
            return_value=json.dumps(catalog_doc),
        ) as mock_fetch:
            reference = asyncio.run(load_reference_data(url, str(taxonomy_file)))
        mock_fetch.assert_awaited_once_with(url)
        assert len(reference.catalog) == 6
        assert reference.catalog_source == url

    def test_load_catalog_from_url(self, catalog_doc: dict[str, Any]) -> None:
        with patch(
            "permrisk.core.reference.loader.fetch_text",
            new_callable=AsyncMock,
            return_value=yaml.safe_dump(catalog_doc),
        ):
            catalog = load_catalog("https://example.com/catalog.yaml")
        assert "Mail.Send" in catalog

    def test_remote_failure_propagates(self, taxonomy_file: Path) -> None:
        with patch(
            "permrisk.core.reference.loader.fetch_text",
            new_callable=AsyncMock,
            side_effect=ReferenceDataError("HTTP 404 fetching x"),
        ):
            with pytest.raises(ReferenceDataError, match="HTTP 404"):
                load_reference_data_sync(
                    "https://example.com/catalog.json", str(taxonomy_file)
                )
