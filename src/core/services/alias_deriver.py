"""Drush alias derivation.

Turns an application's hosting metadata plus its environment list into an
`AliasBundle` (site id -> environment name -> alias). This module is pure:
no HTTP, no files. Warnings (unsupported hosting models, overwritten
aliases) are logged and also collected on the returned bundle so the CLI
can show them.

Wildcard domains are filtered twice. The site-factory branch drops domains
containing ``*.`` before deriving a site id, and `build_descriptor` drops
any uri containing ``*.`` or ``:*``. The second check is redundant for the
site factory but is the only filter for single-site hosting.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from core.config import AppSettings
from core.domain.errors import MalformedApplicationError, MalformedEnvironmentError
from core.domain.hosting import HostingType
from core.domain.models import (
    AliasBundle,
    AliasPaths,
    AliasSsh,
    ApplicationMetadata,
    ConnectionDescriptor,
    Environment,
)

logger = logging.getLogger(__name__)

_WILDCARD_MARKERS: tuple[str, ...] = (":*", "*.")


@dataclass(frozen=True)
class AliasDefaults:
    """Fixed values written into every alias."""

    doc_root_prefix: str = "/var/www/html"
    doc_root_suffix: str = "docroot"
    ssh_options: str = "-p 22"
    dump_dir: str = "/mnt/tmp"

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "AliasDefaults":
        return cls(
            doc_root_prefix=settings.doc_root_prefix,
            doc_root_suffix=settings.doc_root_suffix,
            ssh_options=settings.ssh_options,
            dump_dir=settings.dump_dir,
        )

    def document_root(self, remote_user: str) -> str:
        return f"{self.doc_root_prefix.rstrip('/')}/{remote_user}/{self.doc_root_suffix.strip('/')}"


def split_ssh_url(environment: Environment) -> tuple[str, str]:
    """Return ``(user, host)`` from ``user@host``.

    Raises `MalformedEnvironmentError` unless there is exactly one ``@`` with
    text on both sides.
    """

    parts = environment.ssh_url.split("@")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise MalformedEnvironmentError(
            environment.name,
            f"ssh_url {environment.ssh_url!r} is not of the form 'user@host'",
        )
    return parts[0], parts[1]


def is_wildcard(uri: str) -> bool:
    return any(marker in uri for marker in _WILDCARD_MARKERS)


def build_descriptor(
    *,
    uri: str,
    remote_host: str,
    remote_user: str,
    defaults: AliasDefaults | None = None,
) -> ConnectionDescriptor | None:
    """Build the alias for one uri, or None when the uri is a wildcard."""

    if is_wildcard(uri):
        return None

    defaults = defaults or AliasDefaults()
    return ConnectionDescriptor(
        uri=uri,
        host=remote_host,
        options={},
        paths=AliasPaths(dump_dir=defaults.dump_dir),
        root=defaults.document_root(remote_user),
        user=remote_user,
        ssh=AliasSsh(options=defaults.ssh_options),
    )


def _single_site_id(application: ApplicationMetadata) -> str:
    site_id = application.site_id
    if site_id is None:
        raise MalformedApplicationError(
            f"hosting id {application.hosting_id!r} has no site segment after ':'"
        )
    return site_id


def _factory_site_id(environment: Environment, domain: str) -> str:
    site_id = domain.split(".", 1)[0]
    if not site_id:
        raise MalformedEnvironmentError(
            environment.name,
            f"domain {domain!r} has an empty first label",
        )
    return site_id


def _warn(bundle: AliasBundle, message: str) -> None:
    logger.warning(message)
    bundle.warnings.append(message)


def derive_aliases(
    application: ApplicationMetadata,
    environments: Iterable[Environment],
    *,
    defaults: AliasDefaults | None = None,
) -> AliasBundle:
    """Derive every Drush alias for the application's environments.

    Environments are processed in input order; a later alias with the same
    ``(site_id, environment)`` key replaces the earlier one and the
    replacement is recorded in ``bundle.collisions``.
    """

    defaults = defaults or AliasDefaults()
    bundle = AliasBundle()
    hosting = application.hosting

    for environment in environments:
        remote_user, remote_host = split_ssh_url(environment)

        if hosting in (HostingType.ACE, HostingType.ACP):
            site_id = _single_site_id(application)
            if not environment.domains:
                raise MalformedEnvironmentError(environment.name, "environment has no domains")
            uri = environment.domains[0]
            descriptor = build_descriptor(
                uri=uri,
                remote_host=remote_host,
                remote_user=remote_user,
                defaults=defaults,
            )
            if descriptor is None:
                logger.debug("Skipping wildcard uri %s for %s", uri, environment.name)
                continue
            bundle.put(site_id, environment.name, descriptor)

        elif hosting is HostingType.ACSF:
            for domain in environment.domains:
                if "*." in domain:
                    continue
                site_id = _factory_site_id(environment, domain)
                descriptor = build_descriptor(
                    uri=domain,
                    remote_host=remote_host,
                    remote_user=remote_user,
                    defaults=defaults,
                )
                if descriptor is None:
                    logger.debug("Skipping wildcard uri %s for %s", domain, environment.name)
                    continue
                bundle.put(site_id, environment.name, descriptor)

        else:
            _warn(
                bundle,
                f"Unsupported hosting model {application.hosting_type!r}: "
                f"no aliases for environment '{environment.name}'.",
            )

    for collision in bundle.collisions:
        _warn(
            bundle,
            f"Alias {collision.site_id}.{collision.environment}: "
            f"{collision.kept_uri} replaced {collision.dropped_uri}.",
        )

    return bundle
