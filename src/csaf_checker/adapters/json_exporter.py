"""Exportación JSON del reporte.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines.
- Permite persistir evidencia sin depender del render HTML.
"""

from __future__ import annotations

import json
from pathlib import Path

from csaf_checker.core.domain.models import Report


def render_report_json(*, report: Report) -> str:
    payload = report.model_dump(mode="json")
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def export_report_json(*, report: Report, output_path: Path) -> Path:
    """Exporta `report` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_report_json(report=report), encoding="utf-8")
    return output_path
