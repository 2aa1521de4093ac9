"""Exportación YAML de aliases de Drush.

Por qué YAML:
- Drush lee los aliases de ficheros `<site>.site.yml`.
- `safe_dump` en estilo bloque y sin reordenar claves: el fichero queda en el
  mismo orden en el que se construyó el alias.
"""

from __future__ import annotations

from typing import Any, Mapping

import yaml

from core.domain.models import ConnectionDescriptor


def dump_site_aliases(aliases: Mapping[str, ConnectionDescriptor]) -> str:
    """Serializa el mapa entorno -> alias de un sitio."""

    payload = {env: descriptor.to_alias_dict() for env, descriptor in aliases.items()}
    return yaml.safe_dump(
        payload,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


def load_site_aliases(text: str) -> dict[str, dict[str, Any]]:
    """Lee un fichero `*.site.yml` (vacío -> dict vacío)."""

    data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Alias file must contain a mapping of environment names.")
    return data
