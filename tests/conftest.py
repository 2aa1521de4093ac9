"""Shared fixtures for the alias generation tests.

The fake collaborators mirror the two protocols the pipeline depends on
(`CloudAPI`, `FileSystem`) so tests never touch the network.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import httpx
import pytest

from core.config import AppSettings
from core.domain.models import ApplicationMetadata, Environment

APP_UUID = "a47ac10b-58cc-4372-a567-0e02b2c3d470"


class FakeCloudAPI:
    def __init__(self, application: ApplicationMetadata, environments: list[Environment]) -> None:
        self.application = application
        self.environments = environments
        self.calls: list[tuple[str, str]] = []

    def get_application(self, uuid: str) -> ApplicationMetadata:
        self.calls.append(("get_application", uuid))
        return self.application

    def get_environments(self, application_uuid: str) -> list[Environment]:
        self.calls.append(("get_environments", application_uuid))
        return list(self.environments)


class RecordingFileSystem:
    """In-memory file system; paths whose name is in `fail_names` raise OSError."""

    def __init__(self, existing: set[Path] | None = None, fail_names: set[str] | None = None) -> None:
        self.existing = set(existing or ())
        self.fail_names = set(fail_names or ())
        self.files: dict[Path, str] = {}

    def exists(self, path: Path) -> bool:
        return path in self.existing

    def write_text(self, path: Path, content: str) -> None:
        if path.name in self.fail_names:
            raise OSError(f"Permission denied: '{path}'")
        self.files[path] = content


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    return AppSettings(
        _env_file=None,
        client_key="key",
        client_secret="secret",
        application_uuid=APP_UUID,
        alias_path=tmp_path,
    )


@pytest.fixture
def ace_application() -> ApplicationMetadata:
    return ApplicationMetadata(uuid=APP_UUID, name="Example", hosting_type="ace", hosting_id="org:sitecode")


@pytest.fixture
def acsf_application() -> ApplicationMetadata:
    return ApplicationMetadata(uuid=APP_UUID, name="Factory", hosting_type="acsf", hosting_id="prod:factory")


@pytest.fixture
def dev_environment() -> Environment:
    return Environment(name="dev", domains=["dev.example.com"], ssh_url="devuser@dev.example.com")


def acquia_payloads(
    *,
    hosting_type: str = "ace",
    hosting_id: str = "org:sitecode",
    environments: list[dict] | None = None,
) -> dict[str, dict]:
    if environments is None:
        environments = [
            {
                "id": "1-dev",
                "name": "dev",
                "domains": ["dev.example.com", "*.example.com"],
                "ssh_url": "sitecode.dev@sitecodedev.ssh.prod.acquia-sites.com",
            },
            {
                "id": "2-prod",
                "name": "prod",
                "domains": ["www.example.com"],
                "ssh_url": "sitecode.prod@sitecode.ssh.prod.acquia-sites.com",
            },
        ]
    return {
        "application": {
            "uuid": APP_UUID,
            "name": "Example",
            "hosting": {"type": hosting_type, "id": hosting_id},
        },
        "environments": {"total": len(environments), "_embedded": {"items": environments}},
    }


@pytest.fixture
def acquia_handler() -> Callable[..., Callable[[httpx.Request], httpx.Response]]:
    """Factory of MockTransport handlers emulating the Acquia Cloud API."""

    def make(payloads: dict[str, dict] | None = None, *, requests: list[httpx.Request] | None = None):
        payloads = payloads or acquia_payloads()

        def handler(request: httpx.Request) -> httpx.Response:
            if requests is not None:
                requests.append(request)
            path = request.url.path
            if path.endswith("/oauth/token"):
                return httpx.Response(200, json={"access_token": "token-123", "expires_in": 300})
            if request.headers.get("Authorization") != "Bearer token-123":
                return httpx.Response(401, json={"error": "unauthorized", "message": "Bad token"})
            if path == f"/api/applications/{APP_UUID}":
                return httpx.Response(200, json=payloads["application"])
            if path == f"/api/applications/{APP_UUID}/environments":
                return httpx.Response(200, json=payloads["environments"])
            return httpx.Response(404, content=json.dumps({"message": "Not found"}).encode())

        return handler

    return make
