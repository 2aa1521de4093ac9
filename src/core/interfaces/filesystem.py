"""Contrato mínimo de sistema de ficheros usado por el writer."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    def exists(self, path: Path) -> bool:
        ...

    def write_text(self, path: Path, content: str) -> None:
        """Escribe `content` en `path`, sobrescribiendo. Lanza `OSError` si falla."""

        ...
