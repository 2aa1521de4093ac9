"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

import logging

from rich.align import Align
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import AliasBundle
from core.services.alias_writer import WriteReport


def configure_logging(*, verbose: bool = False, console: Console | None = None) -> None:
    """Instala un `RichHandler` en el logger raíz (solo desde la CLI)."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, rich_tracebacks=True)],
        force=True,
    )


def print_banner(console: Console) -> None:
    title = Text("drush-aliases", style="bold cyan")
    subtitle = Text("Acquia Cloud • Drush site aliases", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_aliases_table(bundle: AliasBundle, report: WriteReport | None = None) -> Table:
    """Tabla de aliases derivados; con `report`, añade el fichero escrito."""

    table = Table(title="Drush Aliases")
    table.add_column("Site", style="cyan", no_wrap=True)
    table.add_column("Environment", style="white")
    table.add_column("URI", style="magenta")
    table.add_column("SSH", style="green")
    if report is not None:
        table.add_column("File", style="dim")

    for site_id, aliases in bundle.items():
        for env_name, descriptor in aliases.items():
            row = [site_id, env_name, descriptor.uri, f"{descriptor.user}@{descriptor.host}"]
            if report is not None:
                written = report.written.get(site_id)
                row.append(str(written) if written else "-")
            table.add_row(*row)
    return table


def build_failures_table(report: WriteReport) -> Table:
    table = Table(title="Write Failures")
    table.add_column("Site", style="cyan", no_wrap=True)
    table.add_column("Path", style="white")
    table.add_column("Error", style="red")
    for failure in report.failures:
        table.add_row(failure.site_id, str(failure.path or "-"), failure.error)
    return table
