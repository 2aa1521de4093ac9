"""Contrato del cliente de la API de la nube.

Por qué Protocol:
- El pipeline solo necesita dos lecturas; cualquier objeto que las ofrezca
  (cliente HTTP real, fake de tests) sirve sin herencia rígida.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import ApplicationMetadata, Environment


@runtime_checkable
class CloudAPI(Protocol):
    """Lecturas consumidas por el resolver y el lister.

    Reglas de diseño:
    - Llamadas síncronas y bloqueantes; sin reintentos.
    - Los fallos se señalan con `core.domain.errors.RemoteAPIError`.
    """

    def get_application(self, uuid: str) -> ApplicationMetadata:
        ...

    def get_environments(self, application_uuid: str) -> list[Environment]:
        ...
