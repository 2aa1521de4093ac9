"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts y headers para todas las llamadas a la API.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings, load_settings


def build_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` síncrono con defaults seguros.

    Sin reintentos: la tarea se ejecuta una vez y los fallos suben al caller.
    """

    settings = settings or load_settings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    return httpx.Client(
        base_url=settings.api_base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
