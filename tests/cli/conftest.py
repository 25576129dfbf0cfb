"""Shared fixtures for CLI tests.

Provides plan files with known risk profiles and the reference-data
arguments that point the CLI at the fixture catalog and taxonomy.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def ref_args(catalog_file: Path, taxonomy_file: Path) -> list[str]:
    """Options selecting the fixture reference data."""
    return ["--catalog", str(catalog_file), "--taxonomy", str(taxonomy_file)]


@pytest.fixture
def high_plan(tmp_path: Path) -> Path:
    """A plan that scores 60/100 (HIGH) against the fixture catalog."""
    path = tmp_path / "hr-sync.md"
    path.write_text("# HR sync\n\nWe need to read all users and send mail\n")
    return path


@pytest.fixture
def critical_plan(tmp_path: Path) -> Path:
    """A plan that scores 100/100 (CRITICAL)."""
    path = tmp_path / "tenant-admin.txt"
    path.write_text("Grant Directory.ReadWrite.All with global admin rights.\n")
    return path


@pytest.fixture
def benign_plan(tmp_path: Path) -> Path:
    """A plan with nothing to detect."""
    path = tmp_path / "lunch.md"
    path.write_text("Weekly team lunch rota\n")
    return path
