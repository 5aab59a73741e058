"""Entrypoint de la CLI.

La CLI solo parsea opciones, pasa los settings al processor y muestra el
reporte resultante; todo el chequeo ocurre en el Core.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from csaf_checker.adapters.checks import build_checks
from csaf_checker.adapters.json_exporter import export_report_json
from csaf_checker.adapters.report_exporter import export_report_html
from csaf_checker.cli import doctor
from csaf_checker.cli.ui_components import print_banner, print_report
from csaf_checker.core.config import CheckerSettings
from csaf_checker.core.errors import CheckerError
from csaf_checker.core.services.processor import Processor

app = typer.Typer(no_args_is_help=True, help="Check CSAF trusted-provider distribution sites.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def configure_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _build_processor(settings: CheckerSettings) -> Processor:
    return Processor(settings)


@app.command()
def check(
    domains: list[str] = typer.Argument(..., help="Domains (host names or base URLs) to check."),
    insecure: bool = typer.Option(False, "--insecure", help="Do not validate TLS certificates."),
    only: Optional[list[int]] = typer.Option(None, "--only", help="Run only this requirement number (repeatable)."),
    json_path: Optional[Path] = typer.Option(None, "--json", help="Write the report as JSON."),
    html_path: Optional[Path] = typer.Option(None, "--html", help="Write the report as HTML."),
    fail_on_findings: bool = typer.Option(False, "--fail-on-findings", help="Exit with 1 if any requirement fails."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Do not print the banner and tables."),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="-v info, -vv debug."),
) -> None:
    """Run the compliance checks against DOMAINS."""

    configure_logging(verbose)
    settings = CheckerSettings()
    if insecure:
        settings = settings.model_copy(update={"insecure": True})

    if not quiet:
        print_banner(_console)

    try:
        checks = build_checks(only or None)
        with _build_processor(settings) as processor:
            report = processor.run(checks, domains)
    except CheckerError as exc:
        _console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if not quiet:
        print_report(_console, report)
    if json_path is not None:
        _console.print(f"[green]JSON report:[/green] {export_report_json(report=report, output_path=json_path)}")
    if html_path is not None:
        _console.print(f"[green]HTML report:[/green] {export_report_html(report=report, output_path=html_path)}")

    if fail_on_findings and report.has_findings:
        raise typer.Exit(code=1)


def run() -> None:
    app()
