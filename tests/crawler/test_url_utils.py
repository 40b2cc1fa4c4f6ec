# tests/crawler/test_url_utils.py
from pathlib import Path

import pytest

from crawler.utils.url_utils import UrlUtils


@pytest.mark.parametrize("raw, expected", [
    ("example.com", "https://example.com"),
    ("  https://example.com/  ", "https://example.com"),
    ("http://example.com//", "http://example.com"),
    ("HTTPS://Example.com", "HTTPS://Example.com"),
])
def test_normalize_root_domain(raw, expected):
    assert UrlUtils.normalize_root_domain(raw) == expected


def test_domain_without_subdomain():
    assert UrlUtils.get_domain_without_subdomain("https://www.example.com") == "example.com"
    assert UrlUtils.get_domain_without_subdomain("https://example.com") == "example.com"


@pytest.mark.parametrize("file_path, expected", [
    ("build/index.html", "/"),
    ("build/blog/index.html", "/blog/"),
    ("build/about.html", "/about.html"),
    ("build/docs/api/v1.html", "/docs/api/v1.html"),
])
def test_relative_url(file_path, expected):
    assert UrlUtils.get_relative_url(Path("build"), Path(file_path)) == expected


def test_build_url():
    assert UrlUtils.build_url("https://example.com", "/blog/") == "https://example.com/blog/"
