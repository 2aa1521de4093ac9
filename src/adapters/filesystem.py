"""Sistema de ficheros local para los aliases.

La escritura es atómica: se escribe un temporal en el mismo directorio y se
renombra con `os.replace`, así un fallo nunca deja un `*.site.yml` a medias.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


class LocalFileSystem:
    def exists(self, path: Path) -> bool:
        return path.exists()

    def write_text(self, path: Path, content: str) -> None:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
            # mkstemp crea el fichero con 0600.
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
