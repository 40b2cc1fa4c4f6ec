# src/crawler/utils/url_utils.py
import logging
import re
from pathlib import Path
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


class UrlUtils:
    """A collection of static methods for turning build files and domains into URLs."""

    @staticmethod
    def normalize_root_domain(root_domain: str) -> str:
        """
        Trims the domain, removes trailing slashes and prepends https:// when
        no http(s) scheme is present.
        """
        root_domain = str(root_domain).strip()
        root_domain = re.sub(r"/+$", "", root_domain)
        if not re.match(r"^https?://", root_domain, re.IGNORECASE):
            root_domain = f"https://{root_domain}"
        return root_domain

    @staticmethod
    def get_domain_without_subdomain(root_domain: str) -> str:
        """'https://www.example.com' -> 'example.com'."""
        hostname = urlparse(root_domain).hostname or ""
        return ".".join(hostname.split(".")[-2:])

    @staticmethod
    def get_relative_url(build_directory: Path, file_path: Path) -> str:
        """
        Maps a built file onto its URL path: 'build/blog/index.html' -> '/blog/'.
        """
        relative = file_path.relative_to(build_directory).as_posix()
        relative = relative.replace("\\", "/")
        relative = re.sub(r"index\.html$", "", relative, flags=re.IGNORECASE)
        return f"/{relative}"

    @staticmethod
    def build_url(root_domain: str, relative_url: str) -> str:
        return f"{root_domain}{relative_url}"
