"""permrisk CLI -- Permission risk assessment for application project plans.

Entry point for the ``permrisk`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    analyze     -- Assess a project plan and report the risk.
    permissions -- List the permission catalog.
    categories  -- List the framework taxonomy.

Usage::

    permrisk analyze ./plans/hr-sync.md
    permrisk analyze ./plans/hr-sync.md --format html -o report.html
    cat plan.txt | permrisk analyze - --format json
    permrisk permissions --level high
    permrisk categories
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from permrisk import __version__
from permrisk.cli.analyze import analyze_command
from permrisk.cli.catalog_cmd import categories_command, permissions_command


def configure_logging(verbose: bool) -> None:
    """Send library logs to stderr through Rich; DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """permrisk: Security-risk assessment for application permission requests.

    Detect the Microsoft Graph permissions a project plan implies, map
    them to NIST CSF 2.0 categories, flag risk indicators, and score the
    overall risk with prioritized recommendations.
    """
    configure_logging(verbose)


# Register all subcommands
cli.add_command(analyze_command)
cli.add_command(permissions_command)
cli.add_command(categories_command)
