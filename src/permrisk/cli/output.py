"""Rich output formatting helpers for the permrisk CLI.

Provides consistent, level-colored terminal output for analysis results
and reference-data listings.

Level Color Mapping:
    CRITICAL = bold red, HIGH = yellow, MEDIUM = cyan, LOW = green
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from permrisk.core.analyzer import AnalysisResult
from permrisk.core.reference import FrameworkTaxonomy, PermissionCatalogEntry, RiskLevel

_LEVEL_STYLES: dict[RiskLevel, str] = {
    RiskLevel.CRITICAL: "bold red",
    RiskLevel.HIGH: "yellow",
    RiskLevel.MEDIUM: "cyan",
    RiskLevel.LOW: "green",
}

console = Console()


def level_style(level: RiskLevel) -> str:
    """Return the Rich style string for a given risk level."""
    return _LEVEL_STYLES.get(level, "white")


def level_text(level: RiskLevel) -> Text:
    return Text(level.name, style=level_style(level))


def _plain(value: str) -> Text:
    """Wrap plan or catalog text so Rich prints it literally, never as markup."""
    return Text(value)


def print_analysis(result: AnalysisResult, source: str) -> None:
    """Print the full assessment for one plan.

    Args:
        result: Analysis result to display.
        source: Name of the analyzed plan, shown in the header.
    """
    overall = result.overall_risk
    header = Text.assemble(
        ("Plan: ", "bold"), (source, ""),
        ("  Score: ", "bold"), (f"{overall.score}/100", level_style(overall.level)),
        ("  Level: ", "bold"), level_text(overall.level),
    )
    console.print(Panel(header, title="Risk Assessment"))

    if result.detected_permissions:
        table = Table(title="Detected Permissions", show_header=True)
        table.add_column("Permission", style="bold")
        table.add_column("Level", justify="center")
        table.add_column("Score", justify="right")
        table.add_column("Detection", style="dim")
        table.add_column("Description")
        for p in result.detected_permissions:
            table.add_row(
                _plain(p.name), level_text(p.risk_level), f"{p.risk_score}/10",
                p.detected.value, _plain(p.description),
            )
        console.print(table)
    else:
        console.print("[dim]No permissions detected.[/dim]")

    if result.csf_mappings:
        table = Table(title="NIST CSF 2.0 Categories", show_header=True)
        table.add_column("Code", style="bold")
        table.add_column("Function")
        table.add_column("Category")
        table.add_column("Severity", justify="center")
        for c in result.csf_mappings:
            table.add_row(
                _plain(c.category), _plain(c.main_category), _plain(c.name),
                level_text(c.severity),
            )
        console.print(table)

    if result.risk_indicators:
        table = Table(title="Risk Indicators", show_header=True)
        table.add_column("Level", justify="center")
        table.add_column("Indicator", style="bold")
        table.add_column("Evidence", style="dim")
        for i in result.risk_indicators:
            table.add_row(
                level_text(i.level), _plain(i.indicator), _plain((i.evidence or "-")[:80])
            )
        console.print(table)

    table = Table(title="Recommendations", show_header=True)
    table.add_column("Priority", justify="center")
    table.add_column("Recommendation", style="bold")
    table.add_column("Details")
    for r in result.recommendations:
        table.add_row(level_text(r.priority), r.title, r.description)
    console.print(table)

    console.print(
        f"[bold]{overall.total_permissions}[/bold] permissions | "
        f"{overall.total_indicators} indicators | "
        f"{len(result.csf_mappings)} categories"
    )


def print_permissions(entries: list[PermissionCatalogEntry]) -> None:
    """Print a table of catalog entries."""
    if not entries:
        console.print("[dim]No permissions match.[/dim]")
        return
    table = Table(title="Permission Catalog", show_header=True)
    table.add_column("Permission", style="bold")
    table.add_column("Level", justify="center")
    table.add_column("Score", justify="right")
    table.add_column("CSF", style="dim")
    for e in entries:
        table.add_row(_plain(e.name), level_text(e.risk_level), str(e.risk_score),
                      _plain(", ".join(e.csf_mapping)))
    console.print(table)


def print_categories(taxonomy: FrameworkTaxonomy) -> None:
    """Print every taxonomy subcategory grouped under its function."""
    table = Table(title="Framework Categories", show_header=True)
    table.add_column("Code", style="bold")
    table.add_column("Function")
    table.add_column("Name")
    for parent, sub in taxonomy.subcategories():
        table.add_row(_plain(sub.code), _plain(parent.name), _plain(sub.name))
    console.print(table)
