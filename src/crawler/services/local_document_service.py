# src/crawler/services/local_document_service.py
import logging
from pathlib import Path
from typing import List, Optional

from crawler.model import PageSource
from crawler.utils.url_utils import UrlUtils

logger = logging.getLogger(__name__)


class LocalDocumentService:
    """
    Lists the HTML files of a build directory and reads them from disk.
    """

    def __init__(self, build_directory: Path, root_domain: str):
        self.build_directory = Path(build_directory)
        self.root_domain = root_domain

    def collect_pages(self) -> List[PageSource]:
        """One PageSource per `**/*.html` file, sorted by relative path."""
        pages: List[PageSource] = []
        for file_path in sorted(self.build_directory.rglob("*.html")):
            if not file_path.is_file():
                continue
            relative_url = UrlUtils.get_relative_url(self.build_directory, file_path)
            pages.append(PageSource(
                relative_path=file_path.relative_to(self.build_directory).as_posix(),
                url=UrlUtils.build_url(self.root_domain, relative_url),
                local_path=file_path,
            ))
        logger.debug("Found %d HTML file(s) in %s.", len(pages), self.build_directory)
        return pages

    @staticmethod
    def read_html(page: PageSource) -> Optional[str]:
        try:
            return page.local_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", page.local_path, e)
            return None

    def load(self) -> List[PageSource]:
        """Collects the pages and fills in their local HTML."""
        pages = self.collect_pages()
        for page in pages:
            page.local_html = self.read_html(page)
        return pages
