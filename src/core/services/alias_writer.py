"""Alias file writer.

One ``<site_id>.site.yml`` per site in the bundle. The output directory must
already exist; it is never created here. Each site is written independently:
a failure is recorded as a `WriteFailure` and the loop moves on, so the
caller inspects `WriteReport.failures` once everything has been attempted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping

from adapters.alias_yaml import dump_site_aliases
from adapters.filesystem import LocalFileSystem
from core.domain.errors import ConfigurationError
from core.domain.models import AliasBundle, ConnectionDescriptor
from core.interfaces.filesystem import FileSystem

logger = logging.getLogger(__name__)

ALIAS_FILE_SUFFIX = ".site.yml"

Serializer = Callable[[Mapping[str, ConnectionDescriptor]], str]


@dataclass(frozen=True)
class WriteFailure:
    site_id: str
    path: Path | None
    error: str


@dataclass
class WriteReport:
    """Per-site outcome of a write run."""

    written: dict[str, Path] = field(default_factory=dict)
    failures: list[WriteFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def alias_file_path(output_dir: Path, site_id: str) -> Path:
    """Path of the alias file for ``site_id``.

    Raises ValueError for ids that would escape ``output_dir`` or produce
    a hidden/empty file name.
    """

    if not site_id or site_id in (".", "..") or "/" in site_id or "\\" in site_id:
        raise ValueError(f"Site id {site_id!r} is not a valid file name.")
    return output_dir / f"{site_id}{ALIAS_FILE_SUFFIX}"


def check_alias_directory(output_dir: Path, fs: FileSystem | None = None) -> None:
    fs = fs or LocalFileSystem()
    if not fs.exists(output_dir):
        raise ConfigurationError(
            f"Drush alias directory {output_dir} does not exist. Please create the directory."
        )


def write_aliases(
    bundle: AliasBundle,
    output_dir: Path,
    *,
    fs: FileSystem | None = None,
    serializer: Serializer = dump_site_aliases,
    on_written: Callable[[str, Path], None] | None = None,
) -> WriteReport:
    """Write every site of ``bundle`` under ``output_dir``.

    Existing files are overwritten without merge or backup.
    """

    fs = fs or LocalFileSystem()
    check_alias_directory(output_dir, fs)

    report = WriteReport()
    for site_id, aliases in bundle.items():
        path: Path | None = None
        try:
            path = alias_file_path(output_dir, site_id)
            fs.write_text(path, serializer(aliases))
        except (OSError, ValueError) as exc:
            logger.error("Could not write aliases for site %s: %s", site_id, exc)
            report.failures.append(WriteFailure(site_id=site_id, path=path, error=str(exc)))
            continue

        logger.debug("Wrote %d alias(es) to %s", len(aliases), path)
        report.written[site_id] = path
        if on_written:
            on_written(site_id, path)

    return report
