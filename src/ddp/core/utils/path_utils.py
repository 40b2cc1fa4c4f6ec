# src/ddp/core/utils/path_utils.py
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for the paths the tool reads from and writes to.
    """

    @staticmethod
    def get_package_root() -> Path:
        """Directory of the `ddp` package (holds settings.json)."""
        return Path(__file__).resolve().parents[2]

    @staticmethod
    def get_settings_file() -> Path:
        return PathUtils.get_package_root() / "settings.json"

    @staticmethod
    def get_templates_dir() -> Path:
        return PathUtils.get_package_root() / "core" / "templates"

    @staticmethod
    def get_cache_root(directory_name: str = ".ddp-cache", base_dir: Path | None = None) -> Path:
        """
        Returns the scratch cache directory, relative to the working directory
        unless a base directory is given (e.g. ./.ddp-cache).
        """
        root = base_dir if base_dir else Path.cwd()
        return root / directory_name

    @staticmethod
    def relative_posix(path: Path, base: Path) -> str:
        """`path` relative to `base`, always with forward slashes."""
        return path.relative_to(base).as_posix()
