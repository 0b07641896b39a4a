"""Local document store — reads and writes notes inside a vault directory.

Handles are paths relative to the vault root (absolute paths are used
as-is).  Writes are atomic: write-to-temp-then-rename, so a crash never
leaves a half-written note behind.  Text is read and written as UTF-8 with
newlines untouched, so lines the updater did not rewrite survive
byte-for-byte.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalDocumentStore:
    """Read and persist documents under a vault root directory."""

    def __init__(self, root: str | Path = ".", vault_name: str | None = None) -> None:
        self._root = Path(root).expanduser()
        self._vault_name = vault_name

    @property
    def vault_name(self) -> str:
        """Name used in back-links; defaults to the root directory's name."""
        return self._vault_name or self._root.resolve().name

    def resolve(self, handle: str | Path) -> Path:
        return self._root / handle

    def read(self, handle: str | Path) -> str | None:
        """Return the document text, or ``None`` if it does not exist."""
        path = self.resolve(handle)
        if not path.is_file():
            logger.debug("Document not found: %s", path)
            return None
        with open(path, encoding="utf-8", newline="") as fh:
            return fh.read()

    def write(self, handle: str | Path, text: str) -> None:
        """Replace the document with *text* atomically (temp file then rename).

        Symlinks are followed so the link target is rewritten, and an
        existing note keeps its permission bits.
        """
        path = self.resolve(handle).resolve()
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
        try:
            with open(fd, "w", encoding="utf-8", newline="") as fh:
                fh.write(text)
            if path.exists():
                shutil.copymode(path, tmp_path)
            Path(tmp_path).replace(path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

        logger.info("Wrote %d characters to %s", len(text), path)
