"""Exportación HTML del reporte.

Por qué está en adapters:
- HTML es un detalle de infraestructura (templates Jinja2).
- El Core solo conoce el agregado `Report`.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from csaf_checker.core.domain.models import Report

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )


def render_report_html(*, report: Report, generated_at: datetime | None = None) -> str:
    """Renderiza un HTML autocontenido para `report`."""

    generated_at = generated_at or datetime.now(timezone.utc)
    domains_compliant = sum(1 for d in report.domains if d.compliant)
    template = _get_env().get_template("report.html")
    return template.render(
        report=report,
        generated_at=generated_at.isoformat(timespec="seconds"),
        domains_total=len(report.domains),
        domains_compliant=domains_compliant,
    )


def export_report_html(*, report: Report, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_report_html(report=report), encoding="utf-8")
    return output_path
