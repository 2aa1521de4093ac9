"""Doctor command for configuration diagnostics."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from adapters.acquia_cloud import AcquiaCloudClient
from core.config import AppSettings, load_settings, write_user_env_vars
from core.domain.errors import RemoteAPIError

app = typer.Typer(no_args_is_help=True, help="Configuration checks and credential setup.")

_console = Console()


def _check_api(settings: AppSettings) -> tuple[bool, str]:
    if not settings.client_key or not settings.client_secret:
        return False, "Credentials not configured"
    try:
        with AcquiaCloudClient(
            client_key=settings.client_key,
            client_secret=settings.client_secret,
            settings=settings,
        ) as client:
            client.authenticate()
        return True, f"Authenticated against {settings.auth_url}"
    except RemoteAPIError as exc:
        return False, str(exc)


def _check_alias_path(path: Path | None) -> tuple[str, str]:
    if path is None:
        return "MISSING", "Set DRUSH_ALIAS_ALIAS_PATH"
    if not path.is_dir():
        return "FAIL", f"{path} does not exist (it is never created automatically)"
    return "OK", str(path)


def build_doctor_table(settings: AppSettings, *, check_api: bool = True) -> tuple[Table, bool]:
    """Tabla de diagnóstico y si todo está listo para `generate`."""

    table = Table(title="drush-aliases Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    ready = True
    missing = set(settings.missing_task_config())
    for name in ("client_key", "client_secret", "application_uuid"):
        if name in missing:
            ready = False
            table.add_row(name, "MISSING", f"Set DRUSH_ALIAS_{name.upper()}")
        else:
            table.add_row(name, "OK", "configured")

    status, detail = _check_alias_path(settings.alias_path)
    ready = ready and status == "OK"
    table.add_row("alias_path", status, detail)

    table.add_row("API base_url", "OK", settings.api_base_url)
    if check_api:
        ok_api, detail_api = _check_api(settings)
        ready = ready and ok_api
        table.add_row("API authentication", "OK" if ok_api else "FAIL", detail_api)

    return table, ready


@app.command()
def run(
    offline: bool = typer.Option(False, "--offline", help="Skip the API authentication check."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = load_settings()
    table, ready = build_doctor_table(settings, check_api=not offline)
    _console.print(table)
    if not ready:
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive credential setup (stores config in the user config .env)."""

    key = typer.prompt("Acquia API key").strip()
    secret = typer.prompt("Acquia API secret", hide_input=True, confirmation_prompt=False).strip()
    uuid = typer.prompt("Application UUID").strip()
    alias_path = typer.prompt("Drush alias directory", default="drush/sites", show_default=True).strip()

    if not key or not secret or not uuid:
        raise typer.BadParameter("key, secret and application UUID are required")

    env_path = write_user_env_vars(
        {
            "DRUSH_ALIAS_CLIENT_KEY": key,
            "DRUSH_ALIAS_CLIENT_SECRET": secret,
            "DRUSH_ALIAS_APPLICATION_UUID": uuid,
            "DRUSH_ALIAS_ALIAS_PATH": alias_path,
        }
    )

    _console.print(f"[green]Saved configuration to:[/green] {env_path}")
