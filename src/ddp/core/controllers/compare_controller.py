# src/ddp/core/controllers/compare_controller.py
import logging
import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from tqdm.auto import tqdm

from canonicalizer.model import CanonicalizeOptions
from crawler.controllers.async_fetch_controller import AsyncFetchController
from crawler.model import FetchSettings, PageSource
from crawler.services.local_document_service import LocalDocumentService
from ddp.core.errors import DDPError
from ddp.core.managers.cache_manager import CacheManager, LOCAL_DIRECTORY, REMOTE_DIRECTORY
from ddp.core.services.diff_service import DIFF_EXECUTABLE, run_diff
from ddp.core.utils.parallel_workers import WorkerResult, canonicalize_page_worker

logger = logging.getLogger(__name__)

LOCAL_SIDE = "local"
REMOTE_SIDE = "remote"

CanonicalKey = Tuple[str, str]


class CompareController:
    """
    Orchestrates one comparison run:

    1. Read the built pages and fetch their deployed counterparts.
    2. Canonicalize both sides of every page (multiprocess).
    3. Write the canonical text to the scratch cache and diff the two trees.
    """

    def __init__(
            self,
            root_domain: str,
            build_directory: Path,
            options: CanonicalizeOptions,
            cache_root: Path,
            *,
            fetch_settings: Optional[FetchSettings] = None,
            diff_executable: str = DIFF_EXECUTABLE,
            workers: Optional[int] = None,
            show_progress: bool = True,
    ) -> None:
        self.root_domain = root_domain
        self.build_directory = Path(build_directory)
        self.options = options
        self.cache = CacheManager(cache_root)
        self.fetch_settings = fetch_settings or FetchSettings()
        self.diff_executable = diff_executable
        self.workers = int(workers or os.cpu_count() or 4)
        self.show_progress = show_progress

    # --- Step 1: sources ---

    def collect_pages(self) -> List[PageSource]:
        pages = LocalDocumentService(self.build_directory, self.root_domain).load()
        if not pages:
            logger.warning("No HTML files found in %s.", self.build_directory)
            return pages
        AsyncFetchController(self.fetch_settings, show_progress=self.show_progress).run(pages)
        return pages

    # --- Step 2: canonicalization ---

    def _jobs(self, pages: List[PageSource]) -> List[Tuple[str, str, str]]:
        jobs = []
        for side, attr in ((LOCAL_SIDE, "local_html"), (REMOTE_SIDE, "remote_html")):
            logger.info("Preparing %s files...", side)
            for page in pages:
                html = getattr(page, attr)
                if html is None:
                    logger.warning("Skipping %s as it didn't return any HTML", page.url)
                    continue
                jobs.append((page.relative_path, side, html))
        return jobs

    @staticmethod
    def _collect_result(result: WorkerResult, canonical: Dict[CanonicalKey, str]) -> None:
        relative_path, side, text, error = result
        if error is not None:
            raise DDPError(f"Could not prepare {side} file {relative_path}: {error}")
        canonical[(relative_path, side)] = text

    def canonicalize_pages(self, pages: List[PageSource]) -> Dict[CanonicalKey, str]:
        jobs = self._jobs(pages)
        canonical: Dict[CanonicalKey, str] = {}
        if not jobs:
            return canonical

        if self.workers <= 1:
            iterator = jobs if not self.show_progress else tqdm(jobs, desc="Canonicalizing", unit=" doc")
            for relative_path, side, html in iterator:
                self._collect_result(
                    canonicalize_page_worker(relative_path, side, html, self.options), canonical
                )
            return canonical

        with ProcessPoolExecutor(max_workers=self.workers) as pool:
            futures = [
                pool.submit(canonicalize_page_worker, relative_path, side, html, self.options)
                for relative_path, side, html in jobs
            ]
            iterator = as_completed(futures)
            if self.show_progress:
                iterator = tqdm(iterator, total=len(futures), desc="Canonicalizing", unit=" doc")
            for fut in iterator:
                self._collect_result(fut.result(), canonical)
        return canonical

    # --- Step 3: diff ---

    def compute_diff(self, pages: List[PageSource], canonical: Dict[CanonicalKey, str]) -> str:
        logger.info("Computing differences...")
        with self.cache:
            written = 0
            for page in pages:
                local_text = canonical.get((page.relative_path, LOCAL_SIDE))
                remote_text = canonical.get((page.relative_path, REMOTE_SIDE))
                if local_text is None or remote_text is None:
                    continue
                self.cache.write_pair(page.relative_path, local_text, remote_text)
                written += 1
            logger.debug("Wrote %d page pair(s) to %s.", written, self.cache.root)
            diff_output = run_diff(self.cache.root, LOCAL_DIRECTORY, REMOTE_DIRECTORY, self.diff_executable)
        logger.info("Done computing all differences!")
        return diff_output

    def run(self) -> str:
        """Returns the unified diff between the canonical local and remote pages."""
        pages = self.collect_pages()
        canonical = self.canonicalize_pages(pages)
        return self.compute_diff(pages, canonical)
