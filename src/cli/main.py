"""CLI principal (Typer).

Comandos:
- `generate`: descarga aplicación + entornos y escribe los `*.site.yml`.
- `doctor`: diagnóstico de configuración y setup de credenciales.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from cli import doctor
from cli.ui_components import (
    build_aliases_table,
    build_failures_table,
    configure_logging,
    print_banner,
)
from core.domain.errors import AliasError
from core.services.alias_pipeline import build_settings, generate_site_aliases

app = typer.Typer(
    no_args_is_help=True,
    help="Generate Drush site aliases from Acquia Cloud environments.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.command()
def generate(
    key: Optional[str] = typer.Option(None, "--key", help="Acquia API key (DRUSH_ALIAS_CLIENT_KEY)."),
    secret: Optional[str] = typer.Option(
        None, "--secret", help="Acquia API secret (DRUSH_ALIAS_CLIENT_SECRET)."
    ),
    uuid: Optional[str] = typer.Option(
        None, "--uuid", help="Application UUID (DRUSH_ALIAS_APPLICATION_UUID)."
    ),
    alias_path: Optional[Path] = typer.Option(
        None,
        "--alias-path",
        help="Existing directory for *.site.yml files (DRUSH_ALIAS_ALIAS_PATH).",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Derive aliases without writing files."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Do not print the banner."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Write one Drush alias file per site of the application."""

    configure_logging(verbose=verbose, console=_console)
    if not no_banner:
        print_banner(_console)

    try:
        settings = build_settings(
            client_key=key,
            client_secret=secret,
            application_uuid=uuid,
            alias_path=alias_path,
        )
        result = generate_site_aliases(settings=settings, dry_run=dry_run)
    except AliasError as exc:
        _console.print(f"[red]Error:[/red] {exc}", soft_wrap=True)
        raise typer.Exit(code=1) from exc

    if not result.environments:
        _console.print("[yellow]No environments found for this application.[/yellow]")
        return
    if not result.bundle:
        _console.print("[yellow]No aliases could be derived from the environments.[/yellow]")
        return

    _console.print(build_aliases_table(result.bundle, None if dry_run else result.report))
    if dry_run:
        _console.print("[dim]Dry run: no files written.[/dim]")
        return

    # Fallos por sitio: se informan pero no cambian el exit code.
    if result.report.failures:
        _console.print(build_failures_table(result.report))
    _console.print(
        f"[green]Wrote {len(result.report.written)} alias file(s)[/green] to {settings.alias_path}",
        soft_wrap=True,
    )


def run() -> None:
    app()


if __name__ == "__main__":
    run()
