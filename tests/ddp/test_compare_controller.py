# tests/ddp/test_compare_controller.py
from unittest.mock import patch

import pytest

from canonicalizer.model import CanonicalizeOptions, CleaningConfiguration
from ddp.core.controllers.compare_controller import CompareController, LOCAL_SIDE, REMOTE_SIDE
from ddp.core.errors import DDPError
from ddp.core.utils.parallel_workers import canonicalize_page_worker

REMOTE = {
    "https://example.com/": "<html><body><p>Home</p><p>Deployed</p></body></html>",
    "https://example.com/about.html": "<html><body><p class='b' id='a'>About</p></body></html>",
}


@pytest.fixture
def build_dir(tmp_path):
    build = tmp_path / "build"
    build.mkdir()
    (build / "index.html").write_text("<html><body><p>Home</p></body></html>", encoding="utf-8")
    (build / "about.html").write_text("<html><body><p id='a' class='b'>About</p></body></html>", encoding="utf-8")
    (build / "new.html").write_text("<html><body><p>New</p></body></html>", encoding="utf-8")
    return build


def _fake_fetch(pages):
    for page in pages:
        page.remote_html = REMOTE.get(page.url)
    return pages


def _controller(build_dir, tmp_path, options=None):
    return CompareController(
        root_domain="https://example.com",
        build_directory=build_dir,
        options=options or CanonicalizeOptions(),
        cache_root=tmp_path / ".ddp-cache",
        workers=1,
        show_progress=False,
    )


@patch("ddp.core.controllers.compare_controller.AsyncFetchController")
def test_collect_pages(mock_fetch_class, build_dir, tmp_path):
    mock_fetch_class.return_value.run.side_effect = _fake_fetch

    pages = _controller(build_dir, tmp_path).collect_pages()

    assert [page.relative_path for page in pages] == ["about.html", "index.html", "new.html"]
    assert [page.is_complete for page in pages] == [True, True, False]


@patch("ddp.core.controllers.compare_controller.run_diff")
@patch("ddp.core.controllers.compare_controller.AsyncFetchController")
def test_run_diffs_only_complete_pairs(mock_fetch_class, mock_run_diff, build_dir, tmp_path):
    mock_fetch_class.return_value.run.side_effect = _fake_fetch
    seen = {}

    def _diff(cwd, left, right, executable):
        seen["files"] = sorted(p.relative_to(cwd).as_posix() for p in cwd.rglob("*.html"))
        seen["remote_index"] = (cwd / right / "index.html").read_text(encoding="utf-8")
        return "the diff"

    mock_run_diff.side_effect = _diff
    controller = _controller(build_dir, tmp_path)

    assert controller.run() == "the diff"
    assert seen["files"] == [
        "local/about.html", "local/index.html",
        "remote/about.html", "remote/index.html",
    ]
    assert "Deployed" in seen["remote_index"].splitlines()
    assert not controller.cache.root.exists()


@patch("ddp.core.controllers.compare_controller.AsyncFetchController")
def test_missing_remote_html_is_skipped_with_a_warning(mock_fetch_class, build_dir, tmp_path, caplog):
    mock_fetch_class.return_value.run.side_effect = _fake_fetch
    controller = _controller(build_dir, tmp_path)
    pages = controller.collect_pages()

    canonical = controller.canonicalize_pages(pages)

    assert ("new.html", LOCAL_SIDE) in canonical
    assert ("new.html", REMOTE_SIDE) not in canonical
    assert canonical[("about.html", LOCAL_SIDE)] == canonical[("about.html", REMOTE_SIDE)]
    assert "Skipping https://example.com/new.html as it didn't return any HTML" in caplog.text


@patch("ddp.core.controllers.compare_controller.AsyncFetchController")
def test_broken_rule_aborts_the_run(mock_fetch_class, build_dir, tmp_path):
    mock_fetch_class.return_value.run.side_effect = _fake_fetch
    clean_config = CleaningConfiguration.model_validate({"elements": [{"selector": "p[["}]})
    controller = _controller(build_dir, tmp_path, CanonicalizeOptions(clean_config=clean_config))

    with pytest.raises(DDPError, match="Invalid `element_to_clean` passed"):
        controller.canonicalize_pages(controller.collect_pages())


@patch("ddp.core.controllers.compare_controller.AsyncFetchController")
def test_empty_build_directory_fetches_nothing(mock_fetch_class, tmp_path):
    empty = tmp_path / "empty"
    empty.mkdir()
    controller = _controller(empty, tmp_path)

    assert controller.collect_pages() == []
    mock_fetch_class.assert_not_called()
    assert controller.canonicalize_pages([]) == {}


def test_worker_reports_errors_as_text():
    relative_path, side, text, error = canonicalize_page_worker(
        "index.html", LOCAL_SIDE, "<div><span></div", CanonicalizeOptions()
    )
    assert (relative_path, side, text) == ("index.html", LOCAL_SIDE, None)
    assert "Parse Error" in error


def test_worker_returns_canonical_text():
    _, _, text, error = canonicalize_page_worker("index.html", REMOTE_SIDE, "<p>x</p>", CanonicalizeOptions())
    assert error is None
    assert "x" in text.splitlines()
