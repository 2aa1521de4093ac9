"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta de los payloads de la API en el borde, sin acoplar el
  Core a httpx.
- Serialización estable (`model_dump(by_alias=True)`) hacia el YAML de Drush.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.hosting import HostingType


class ApplicationMetadata(BaseModel):
    """Aplicación alojada en la nube (solo lo que necesita la derivación)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    uuid: str | None = Field(
        default=None,
        description="UUID de la aplicación.",
    )
    name: str | None = Field(
        default=None,
        description="Nombre legible de la aplicación.",
    )
    hosting_type: str = Field(
        ...,
        description="Modelo de hosting ('ace', 'acp', 'acsf' u otro).",
    )
    hosting_id: str = Field(
        ...,
        description="Identificador de hosting separado por ':' (p.ej. 'prod:sitecode').",
    )

    @property
    def hosting(self) -> HostingType | None:
        """Hosting reconocido, o None si el modelo no está soportado."""

        return HostingType.parse(self.hosting_type)

    @property
    def site_id(self) -> str | None:
        """Segundo segmento de `hosting_id` (sitio único de ace/acp)."""

        parts = self.hosting_id.split(":")
        if len(parts) < 2 or not parts[1]:
            return None
        return parts[1]


class Environment(BaseModel):
    """Entorno desplegado (dev/stage/prod) accesible por SSH."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(
        ...,
        min_length=1,
        description="Nombre del entorno; es la clave del alias dentro del fichero.",
    )
    domains: tuple[str, ...] = Field(
        default=(),
        description="Dominios del entorno en el orden de la API (puede incluir comodines).",
    )
    ssh_url: str = Field(
        ...,
        description="Destino SSH con forma 'user@host'.",
    )


class AliasPaths(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    dump_dir: str = Field(..., alias="dump-dir")


class AliasSsh(BaseModel):
    model_config = ConfigDict(frozen=True)

    options: str = ""


class ConnectionDescriptor(BaseModel):
    """Alias de Drush para un par (sitio, entorno).

    El orden de los campos es el orden en el que se escriben en el YAML.
    """

    model_config = ConfigDict(frozen=True)

    uri: str = Field(..., min_length=1)
    host: str = Field(..., min_length=1)
    options: dict[str, Any] = Field(default_factory=dict)
    paths: AliasPaths
    root: str = Field(..., min_length=1)
    user: str = Field(..., min_length=1)
    ssh: AliasSsh = Field(default_factory=AliasSsh)

    def to_alias_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class AliasCollision:
    """Un alias sobrescrito por otro con la misma clave (sitio, entorno)."""

    site_id: str
    environment: str
    dropped_uri: str
    kept_uri: str


@dataclass
class AliasBundle:
    """Mapa explícito de dos niveles: site_id -> entorno -> alias.

    Política de colisión: la última escritura gana. Cada sobrescritura queda
    registrada en `collisions` para que no se pierda información en silencio.
    """

    _sites: dict[str, dict[str, ConnectionDescriptor]] = field(default_factory=dict)
    collisions: list[AliasCollision] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def put(self, site_id: str, environment: str, descriptor: ConnectionDescriptor) -> None:
        aliases = self._sites.setdefault(site_id, {})
        previous = aliases.get(environment)
        if previous is not None:
            self.collisions.append(
                AliasCollision(
                    site_id=site_id,
                    environment=environment,
                    dropped_uri=previous.uri,
                    kept_uri=descriptor.uri,
                )
            )
        aliases[environment] = descriptor

    def get(self, site_id: str, environment: str) -> ConnectionDescriptor | None:
        return self._sites.get(site_id, {}).get(environment)

    def site_ids(self) -> list[str]:
        return list(self._sites)

    def aliases_for(self, site_id: str) -> dict[str, ConnectionDescriptor]:
        return dict(self._sites.get(site_id, {}))

    def items(self) -> Iterator[tuple[str, dict[str, ConnectionDescriptor]]]:
        for site_id, aliases in self._sites.items():
            yield site_id, dict(aliases)

    def to_dict(self) -> dict[str, dict[str, dict[str, Any]]]:
        return {
            site_id: {env: descriptor.to_alias_dict() for env, descriptor in aliases.items()}
            for site_id, aliases in self._sites.items()
        }

    def __len__(self) -> int:
        return len(self._sites)

    def __bool__(self) -> bool:
        return bool(self._sites)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AliasBundle):
            return NotImplemented
        return self._sites == other._sites
