# src/ddp/core/utils/parallel_workers.py
import logging
from typing import Optional, Tuple

from canonicalizer.errors import CanonicalizationError
from canonicalizer.model import CanonicalizeOptions
from canonicalizer.pipeline import canonicalize

logger = logging.getLogger(__name__)

# (relative_path, side, canonical text, error message)
WorkerResult = Tuple[str, str, Optional[str], Optional[str]]


def canonicalize_page_worker(
    relative_path: str,
    side: str,
    html: str,
    options: CanonicalizeOptions,
) -> WorkerResult:
    """
    Worker function canonicalizing one document.
    Engine errors are returned as text so they cross the process boundary intact.
    """
    try:
        return relative_path, side, canonicalize(html, options), None
    except CanonicalizationError as e:
        logger.debug("Canonicalization of %s (%s) failed: %s", relative_path, side, e)
        return relative_path, side, None, str(e)
