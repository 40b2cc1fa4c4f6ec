# src/ddp/core/services/diff_service.py
import logging
import shutil
import subprocess
from pathlib import Path

from ddp.core.errors import DiffError, MissingExecutableError

logger = logging.getLogger(__name__)

DIFF_EXECUTABLE = "diff"

# -N  treat absent files as empty
# -u  output 3 lines of unified context
# -r  recursively compare any subdirectories found
# -w  ignore all white space
DIFF_FLAGS = "-Nurw"


def has_bin(executable: str) -> bool:
    """Checks whether an executable is available on PATH."""
    return shutil.which(executable) is not None


def ensure_diff_available(executable: str = DIFF_EXECUTABLE) -> None:
    if not has_bin(executable):
        raise MissingExecutableError(
            f'This tool requires "{executable}" be installed and available in your path.\n'
            "brew install diffutils  # if on macOS"
        )


def run_diff(cwd: Path, left: str, right: str, executable: str = DIFF_EXECUTABLE) -> str:
    """
    Runs a recursive unified diff between two directories inside `cwd` and
    returns its output. Exit status 1 only means differences were found.
    """
    logger.debug("Running %s %s %s %s in %s", executable, DIFF_FLAGS, left, right, cwd)
    try:
        result = subprocess.run(
            [executable, DIFF_FLAGS, left, right],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        raise DiffError(f'Error in running "{executable}" against our two directories: {e}') from e

    if result.returncode not in (0, 1):
        raise DiffError(
            f'Error in running "{executable}" against our two directories '
            f"(exit status {result.returncode}): {result.stderr.strip()}"
        )
    return result.stdout
