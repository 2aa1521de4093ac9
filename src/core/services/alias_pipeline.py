"""Site alias generation pipeline.

Resolver -> lister -> deriver -> writer, strictly in that order and with no
retries. The CLI only deals with presentation; everything that decides what
gets written lives here so it can be reused from tests or other entry-points.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from adapters.acquia_cloud import AcquiaCloudClient
from core.config import AppSettings, load_settings
from core.domain.models import AliasBundle, ApplicationMetadata, Environment
from core.interfaces.cloud_api import CloudAPI
from core.interfaces.filesystem import FileSystem
from core.services.alias_deriver import AliasDefaults, derive_aliases
from core.services.alias_writer import WriteReport, write_aliases

logger = logging.getLogger(__name__)


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers."""

    site_written: Callable[[str, Path], None] | None = None


@dataclass
class PipelineResult:
    """Output of a pipeline invocation."""

    application: ApplicationMetadata
    environments: list[Environment]
    bundle: AliasBundle = field(default_factory=AliasBundle)
    report: WriteReport = field(default_factory=WriteReport)
    warnings: list[str] = field(default_factory=list)


def build_settings(
    settings: AppSettings | None = None,
    *,
    client_key: str | None = None,
    client_secret: str | None = None,
    application_uuid: str | None = None,
    alias_path: Path | None = None,
) -> AppSettings:
    """Apply explicit task arguments on top of the loaded settings."""

    settings = settings or load_settings()
    overrides = {
        "client_key": client_key,
        "client_secret": client_secret,
        "application_uuid": application_uuid,
        "alias_path": alias_path,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if not overrides:
        return settings
    return settings.model_copy(update=overrides)


def generate_site_aliases(
    *,
    settings: AppSettings,
    api: CloudAPI | None = None,
    fs: FileSystem | None = None,
    hooks: PipelineHooks | None = None,
    dry_run: bool = False,
) -> PipelineResult:
    """Fetch the application and its environments, then write the alias files.

    Raises `ConfigurationError` when an input is missing or the alias
    directory does not exist, `RemoteAPIError` when a fetch fails and
    `MalformedEnvironmentError` / `MalformedApplicationError` for payloads
    that cannot produce correct aliases. Per-site write failures are
    returned in ``result.report``.
    """

    hooks = hooks or PipelineHooks()
    settings.require_task_config()
    assert settings.application_uuid is not None and settings.alias_path is not None

    if api is None:
        assert settings.client_key is not None and settings.client_secret is not None
        with AcquiaCloudClient(
            client_key=settings.client_key,
            client_secret=settings.client_secret,
            settings=settings,
        ) as client:
            return generate_site_aliases(
                settings=settings, api=client, fs=fs, hooks=hooks, dry_run=dry_run
            )

    application = api.get_application(settings.application_uuid)
    logger.info(
        "Application %s uses hosting %s (%s)",
        application.name or settings.application_uuid,
        application.hosting_type,
        application.hosting_id,
    )
    environments = api.get_environments(application.uuid or settings.application_uuid)
    result = PipelineResult(application=application, environments=environments)

    if not environments:
        logger.info("No environments found; nothing to write.")
        return result

    result.bundle = derive_aliases(
        application,
        environments,
        defaults=AliasDefaults.from_settings(settings),
    )
    result.warnings.extend(result.bundle.warnings)

    if dry_run:
        return result

    result.report = write_aliases(
        result.bundle,
        settings.alias_path,
        fs=fs,
        on_written=hooks.site_written,
    )
    return result
