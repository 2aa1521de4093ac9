"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/YAML) y servicios lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.errors import ConfigurationError


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "drush-aliases"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "drush-aliases"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "drush-aliases"
    return Path.home() / ".config" / "drush-aliases"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# drush-aliases user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Las cuatro entradas de la tarea (key, secret, uuid, alias_path) son
    opcionales al cargar para que `doctor` pueda diagnosticar qué falta;
    `require_task_config` las exige antes de generar aliases.
    """

    model_config = SettingsConfigDict(
        env_prefix="DRUSH_ALIAS_",
        extra="ignore",
        case_sensitive=False,
        # El .env global de usuario se añade en `load_settings`.
        env_file=".env",
        env_file_encoding="utf-8",
    )

    client_key: str | None = Field(
        default=None,
        description="API key de Acquia Cloud (OAuth client id).",
    )
    client_secret: str | None = Field(
        default=None,
        description="API secret de Acquia Cloud (OAuth client secret).",
    )
    application_uuid: str | None = Field(
        default=None,
        description="UUID de la aplicación cuyos entornos se exportan.",
    )
    alias_path: Path | None = Field(
        default=None,
        description="Directorio (existente) donde se escriben los ficheros *.site.yml.",
    )

    api_base_url: str = Field(
        default="https://cloud.acquia.com/api",
        min_length=8,
        description="Base URL de la API de Acquia Cloud.",
    )
    auth_url: str = Field(
        default="https://accounts.acquia.com/api/auth/oauth/token",
        min_length=8,
        description="Endpoint OAuth2 (client credentials).",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="drush-aliases/0.1",
        min_length=1,
        description="User-Agent para las peticiones a la API.",
    )

    # Constantes del alias (document root y opciones SSH de Acquia).
    doc_root_prefix: str = Field(
        default="/var/www/html",
        min_length=1,
        description="Prefijo del document root remoto.",
    )
    doc_root_suffix: str = Field(
        default="docroot",
        min_length=1,
        description="Sufijo del document root remoto.",
    )
    ssh_options: str = Field(
        default="-p 22",
        description="Opciones SSH escritas en cada alias.",
    )
    dump_dir: str = Field(
        default="/mnt/tmp",
        min_length=1,
        description="Directorio remoto para dumps (paths.dump-dir).",
    )

    def missing_task_config(self) -> list[str]:
        """Nombres de las entradas obligatorias que no tienen valor."""

        missing: list[str] = []
        for name in ("client_key", "client_secret", "application_uuid", "alias_path"):
            value = getattr(self, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)
        return missing

    def require_task_config(self) -> None:
        missing = self.missing_task_config()
        if missing:
            env_names = ", ".join(f"DRUSH_ALIAS_{name.upper()}" for name in missing)
            raise ConfigurationError(f"Missing required configuration: {env_names}.")


def load_settings(**values: object) -> AppSettings:
    """Carga settings desde el entorno, `.env` del proyecto y `.env` del usuario.

    El fichero de usuario se resuelve aquí (no al importar) para respetar
    `XDG_CONFIG_HOME`/`APPDATA` vigentes en el momento de la carga.
    Orden: proyecto primero (dev), luego config global de usuario.
    """

    return AppSettings(_env_file=(".env", str(get_user_env_file())), **values)
