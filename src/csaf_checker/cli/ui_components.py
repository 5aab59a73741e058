"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from csaf_checker.core.domain.models import Domain, Report


def print_banner(console: Console) -> None:
    """Banner de bienvenida; se omite en modos no interactivos (JSON)."""

    title = Text("CSAF CHECKER", style="bold cyan")
    subtitle = Text("Trusted provider compliance • TLS • Metadata • Signatures", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_domain_table(domain: Domain) -> Table:
    """Una fila por requisito de `domain`."""

    table = Table(title=domain.name)
    table.add_column("#", style="cyan", no_wrap=True, justify="right")
    table.add_column("Requirement", style="white")
    table.add_column("Status", no_wrap=True)
    table.add_column("Messages", style="dim")
    for requirement in domain.requirements:
        status = Text("OK", style="green") if requirement.compliant else Text("FAIL", style="bold red")
        table.add_row(
            str(requirement.num),
            requirement.description,
            status,
            "\n".join(requirement.messages),
        )
    return table


def print_report(console: Console, report: Report) -> None:
    for domain in report.domains:
        console.print(build_domain_table(domain))
