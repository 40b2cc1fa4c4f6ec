# src/ddp/core/managers/cache_manager.py
import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

LOCAL_DIRECTORY = "local"
REMOTE_DIRECTORY = "remote"


class CacheManager:
    """
    Scratch space for the canonicalized documents: one tree per side, keyed by
    the page's relative path, so a recursive diff can line them up.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    @property
    def local_root(self) -> Path:
        return self.root / LOCAL_DIRECTORY

    @property
    def remote_root(self) -> Path:
        return self.root / REMOTE_DIRECTORY

    def prepare(self) -> None:
        """Creates an empty cache directory."""
        self.remove()
        self.local_root.mkdir(parents=True, exist_ok=True)
        self.remote_root.mkdir(parents=True, exist_ok=True)
        logger.debug("Cache prepared at %s", self.root)

    @staticmethod
    def _write(path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    def write_pair(self, relative_path: str, local_html: str, remote_html: str) -> None:
        self._write(self.local_root / relative_path, local_html)
        self._write(self.remote_root / relative_path, remote_html)

    def remove(self) -> None:
        if self.root.exists():
            shutil.rmtree(self.root, ignore_errors=True)
            logger.debug("Cache removed at %s", self.root)

    def __enter__(self):
        self.prepare()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.remove()
