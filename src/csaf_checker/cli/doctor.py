"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from csaf_checker.adapters.dns_resolver import DNSLookupError, DNSResolver
from csaf_checker.adapters.http_client import RedirectTracker, build_client
from csaf_checker.adapters.openpgp import Keyring
from csaf_checker.core.config import CheckerSettings
from csaf_checker.core.errors import KeyringError

app = typer.Typer(no_args_is_help=False, invoke_without_command=True, help="Environment diagnostics.")

_console = Console()


def _check_http(settings: CheckerSettings, url: str) -> tuple[bool, str]:
    client = build_client(settings, tracker=RedirectTracker())
    try:
        response = client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)
    finally:
        client.close()


def _check_dns(settings: CheckerSettings, name: str) -> tuple[bool, str]:
    try:
        addresses = DNSResolver(timeout_seconds=settings.dns_timeout_seconds)(name)
    except DNSLookupError as exc:
        return False, str(exc)
    if not addresses:
        return False, f"{name} did not resolve"
    return True, ", ".join(addresses)


def _check_gpg(settings: CheckerSettings) -> tuple[bool, str]:
    try:
        keyring = Keyring(gpg_binary=settings.gpg_binary)
    except KeyringError as exc:
        return False, str(exc)
    keyring.close()
    return True, settings.gpg_binary


@app.callback()
def run(
    url: str = typer.Option("https://www.example.org", help="URL used to test HTTP connectivity."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = CheckerSettings()

    table = Table(title="CSAF Checker Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("TLS validation", "OFF" if settings.insecure else "ON", "CSAF_CHECKER_INSECURE")

    ok_gpg, detail_gpg = _check_gpg(settings)
    table.add_row("GnuPG", "OK" if ok_gpg else "FAIL", detail_gpg)

    ok_dns, detail_dns = _check_dns(settings, "www.example.org")
    table.add_row("DNS resolution", "OK" if ok_dns else "FAIL", detail_dns)

    ok_http, detail_http = _check_http(settings, url)
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_gpg:
        _console.print(
            "\n[yellow]Note:[/yellow] Without GnuPG, runs abort as soon as a provider publishes OpenPGP keys."
        )
