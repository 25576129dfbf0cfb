"""``permrisk permissions`` and ``permrisk categories`` -- Inspect reference data.

Lists the permission catalog (optionally filtered by minimum risk level)
or the framework taxonomy that ``permrisk analyze`` would use, so reviewers
can check which permissions and categories the analysis knows about.

Exit Codes:
    0 -- Listing printed.
    2 -- The reference document could not be loaded.
"""

from __future__ import annotations

import json

import click

from permrisk.cli.analyze import LEVEL_CHOICES, fail
from permrisk.core.reference import RiskLevel, load_catalog, load_taxonomy
from permrisk.exceptions import PermRiskError


@click.command("permissions")
@click.option(
    "--catalog",
    envvar="PERMRISK_CATALOG",
    default=None,
    help="Permission catalog path or URL (default: bundled catalog).",
)
@click.option(
    "--level",
    type=click.Choice(LEVEL_CHOICES),
    default="low",
    help="Only list permissions at or above this level.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def permissions_command(catalog: str | None, level: str, output_format: str) -> None:
    """List the permissions in the catalog and their risk metadata."""
    try:
        entries = load_catalog(catalog).by_level(RiskLevel.from_label(level))
    except PermRiskError as exc:
        fail(str(exc), output_format)
        return

    if output_format == "json":
        click.echo(json.dumps([
            {
                "name": e.name,
                "risk_level": e.risk_level.label,
                "risk_score": e.risk_score,
                "description": e.description,
                "csf_mapping": list(e.csf_mapping),
            }
            for e in entries
        ], indent=2))
    else:
        from permrisk.cli.output import print_permissions

        print_permissions(entries)


@click.command("categories")
@click.option(
    "--taxonomy",
    envvar="PERMRISK_TAXONOMY",
    default=None,
    help="Framework taxonomy path or URL (default: bundled NIST CSF 2.0).",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def categories_command(taxonomy: str | None, output_format: str) -> None:
    """List the framework categories known to the taxonomy."""
    try:
        loaded = load_taxonomy(taxonomy)
    except PermRiskError as exc:
        fail(str(exc), output_format)
        return

    if output_format == "json":
        click.echo(json.dumps([
            {
                "code": sub.code,
                "function": parent.name,
                "name": sub.name,
                "description": sub.description,
            }
            for parent, sub in loaded.subcategories()
        ], indent=2))
    else:
        from permrisk.cli.output import print_categories

        print_categories(loaded)
