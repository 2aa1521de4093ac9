"""Cliente de la API de Acquia Cloud (v2).

Responsabilidad:
- Obtener un token OAuth2 (client credentials) con la key/secret.
- Leer la aplicación y sus entornos, normalizados como modelos del dominio.
- Traducir fallos de transporte, HTTP o de payload a `RemoteAPIError`.

Sin reintentos ni paginación: una aplicación tiene pocos entornos y la API
los devuelve todos en `_embedded.items`.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from adapters.http_client import build_client
from core.config import AppSettings, load_settings
from core.domain.errors import RemoteAPIError
from core.domain.models import ApplicationMetadata, Environment


class AcquiaCloudClient:
    """Implementa `core.interfaces.cloud_api.CloudAPI` sobre httpx."""

    def __init__(
        self,
        *,
        client_key: str,
        client_secret: str,
        settings: AppSettings | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings or load_settings()
        self._client_key = client_key
        self._client_secret = client_secret
        self._http = build_client(self._settings, transport=transport)
        self._token: str | None = None

    def __enter__(self) -> "AcquiaCloudClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def authenticate(self) -> str:
        """Pide (una vez) el access token y lo reutiliza en adelante."""

        if self._token is not None:
            return self._token

        payload = self._send(
            "POST",
            self._settings.auth_url,
            authenticated=False,
            data={
                "grant_type": "client_credentials",
                "client_id": self._client_key,
                "client_secret": self._client_secret,
            },
        )
        token = payload.get("access_token")
        if not isinstance(token, str) or not token:
            raise RemoteAPIError("Authentication response did not include an access token.")
        self._token = token
        return token

    def get_application(self, uuid: str) -> ApplicationMetadata:
        payload = self._send("GET", f"/applications/{uuid}")
        hosting = payload.get("hosting")
        if not isinstance(hosting, dict):
            raise RemoteAPIError(f"Application {uuid} has no hosting information.")
        try:
            return ApplicationMetadata(
                uuid=payload.get("uuid") or uuid,
                name=payload.get("name"),
                hosting_type=hosting.get("type"),
                hosting_id=hosting.get("id"),
            )
        except ValidationError as exc:
            raise RemoteAPIError(f"Invalid application payload for {uuid}: {exc}") from exc

    def get_environments(self, application_uuid: str) -> list[Environment]:
        payload = self._send("GET", f"/applications/{application_uuid}/environments")
        embedded = payload.get("_embedded")
        items = embedded.get("items", []) if isinstance(embedded, dict) else []
        if not isinstance(items, list):
            raise RemoteAPIError(f"Invalid environments payload for {application_uuid}.")

        environments: list[Environment] = []
        for item in items:
            try:
                environments.append(Environment.model_validate(item))
            except ValidationError as exc:
                raise RemoteAPIError(
                    f"Invalid environment payload for {application_uuid}: {exc}"
                ) from exc
        return environments

    def _send(
        self,
        method: str,
        url: str,
        *,
        authenticated: bool = True,
        data: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        headers: dict[str, str] = {}
        if authenticated:
            headers["Authorization"] = f"Bearer {self.authenticate()}"

        try:
            response = self._http.request(method, url, headers=headers, data=data)
        except httpx.HTTPError as exc:
            raise RemoteAPIError(f"{method} {url} failed: {exc}") from exc

        if response.status_code >= 400:
            raise RemoteAPIError(
                f"{method} {url} returned HTTP {response.status_code}: {_error_message(response)}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise RemoteAPIError(
                f"{method} {url} returned a non-JSON body.",
                status_code=response.status_code,
            ) from exc
        if not isinstance(body, dict):
            raise RemoteAPIError(
                f"{method} {url} returned an unexpected body.",
                status_code=response.status_code,
            )
        return body


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()[:200] or response.reason_phrase
    if isinstance(body, dict):
        for key in ("message", "error_description", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return response.reason_phrase
