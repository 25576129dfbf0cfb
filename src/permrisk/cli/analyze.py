"""``permrisk analyze <plan>`` -- Assess the permission risk of a project plan.

Reads the plan (a file, or ``-`` for stdin), loads the permission catalog
and framework taxonomy, runs the five-phase analysis and reports the result
as a terminal summary, a JSON report, or a self-contained HTML report.

Exit Codes:
    0 -- Overall risk is below the ``--fail-on`` level.
    1 -- Overall risk is at or above the ``--fail-on`` level.
    2 -- The plan or the reference data could not be loaded.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from permrisk.core.analyzer import AnalysisResult, RiskAnalyzer
from permrisk.core.reference import RiskLevel, load_reference_data_sync
from permrisk.exceptions import PermRiskError
from permrisk.inputs import read_plan, read_plan_stream

LEVEL_CHOICES = ["low", "medium", "high", "critical"]
DEFAULT_HTML_NAME = "permrisk-report.html"


def _read_text(plan: str) -> tuple[str, str]:
    """Return ``(display_name, text)`` for a plan path or ``-``."""
    if plan == "-":
        return "<stdin>", read_plan_stream(click.get_binary_stream("stdin"))
    return Path(plan).name, read_plan(plan)


def fail(message: str, output_format: str) -> None:
    """Report an error in the requested format and exit with code 2."""
    if output_format == "json":
        click.echo(json.dumps({"error": message}))
    else:
        click.echo(f"Error: {message}")
    sys.exit(2)


def _emit(
    result: AnalysisResult,
    source: str,
    output_format: str,
    output: str | None,
) -> None:
    """Dispatch a result to the appropriate output formatter."""
    if output_format == "json":
        from permrisk.report import encode_json_report, write_json_report

        if output:
            path = write_json_report(output, result)
            click.echo(f"JSON report written to: {path}")
        else:
            click.echo(encode_json_report(result))
    elif output_format == "html":
        from permrisk.report import ReportGenerator

        path = ReportGenerator().write(output or Path.cwd() / DEFAULT_HTML_NAME, result)
        click.echo(f"HTML report written to: {path}")
    else:
        from permrisk.cli.output import print_analysis

        print_analysis(result, source)


@click.command("analyze")
@click.argument(
    "plan",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True),
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json", "html"]),
    default="text",
    help="Output format: text (default), json, or html.",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the json/html report to this file (not valid with text).",
)
@click.option(
    "--catalog",
    envvar="PERMRISK_CATALOG",
    default=None,
    help="Permission catalog path or URL (default: bundled catalog).",
)
@click.option(
    "--taxonomy",
    envvar="PERMRISK_TAXONOMY",
    default=None,
    help="Framework taxonomy path or URL (default: bundled NIST CSF 2.0).",
)
@click.option(
    "--fail-on",
    type=click.Choice(LEVEL_CHOICES),
    default="high",
    help="Exit with code 1 when overall risk reaches this level (default: high).",
)
def analyze_command(
    plan: str,
    output_format: str,
    output: str | None,
    catalog: str | None,
    taxonomy: str | None,
    fail_on: str,
) -> None:
    """Analyze a project plan for permission and compliance risk.

    PLAN is a .md, .txt or .json file, or - to read from stdin.

    Exit code 0 if the overall risk is below --fail-on, 1 otherwise.
    """
    if output and output_format == "text":
        raise click.UsageError("--output requires --format json or html.")

    try:
        source, text = _read_text(plan)
        reference = load_reference_data_sync(catalog, taxonomy)
        result = RiskAnalyzer(reference).analyze(text)
        _emit(result, source, output_format, output)
    except PermRiskError as exc:
        fail(str(exc), output_format)
        return

    threshold = RiskLevel.from_label(fail_on)
    sys.exit(1 if result.overall_risk.level >= threshold else 0)
