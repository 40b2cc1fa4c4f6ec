# src/crawler/managers/progress_manager.py
import sys
from tqdm import tqdm
import logging

logger = logging.getLogger(__name__)


class ProgressManager:
    """
    Manages the lifecycle of a tqdm progress bar. A disabled manager draws nothing.
    """

    def __init__(self, total: int, desc: str, unit: str = "it", enabled: bool = True):
        self.pbar = None
        if enabled:
            self.pbar = tqdm(
                total=max(total, 0),
                desc=desc,
                unit=f" {unit}",
                dynamic_ncols=True,
                mininterval=0.5,
                postfix={"failures": 0},
                bar_format="{l_bar}{bar}| {n_fmt}/{total_fmt} [{elapsed}<{remaining}] {postfix}",
                file=sys.stdout
            )

    def advance(self, steps: int = 1, failures_count: int = None):
        """Increments the bar and optionally updates the failure counter."""
        if not self.pbar:
            return
        self.pbar.update(steps)
        if failures_count is not None:
            self.pbar.set_postfix({"failures": failures_count}, refresh=False)

    def close(self):
        if not self.pbar:
            return
        try:
            self.pbar.close()
            logger.debug("ProgressManager: Progress bar closed.")
        except Exception as e:
            logger.error(f"Error encountered while closing progress bar: {e}")
