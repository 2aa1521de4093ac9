"""Jerarquía de errores del dominio.

Reglas de propagación:
- `ConfigurationError` y los errores de entrada malformada detienen toda la
  derivación.
- Los fallos de escritura por sitio NO son excepciones: se recogen en el
  `WriteReport` (ver `core.services.alias_writer`).
- `RemoteAPIError` sube hasta quien invoca la tarea.
"""

from __future__ import annotations


class AliasError(Exception):
    """Base error for alias generation."""


class ConfigurationError(AliasError):
    """Missing task configuration or missing alias output directory."""


class MalformedEnvironmentError(AliasError):
    """Environment payload cannot produce a correct alias.

    Attributes:
        environment: Name of the offending environment
    """

    def __init__(self, environment: str, reason: str) -> None:
        self.environment = environment
        self.reason = reason
        super().__init__(f"Environment '{environment}': {reason}")


class MalformedApplicationError(AliasError):
    """Application hosting metadata cannot produce a site id."""


class RemoteAPIError(AliasError):
    """Fetching data from the cloud API failed.

    Attributes:
        status_code: HTTP status when the server answered, else None
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
