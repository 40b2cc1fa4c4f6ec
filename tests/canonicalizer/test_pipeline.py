# tests/canonicalizer/test_pipeline.py
import pytest

from canonicalizer.errors import InvalidRuleError, MinifyError
from canonicalizer.model import CanonicalizeOptions, CleaningConfiguration
from canonicalizer.pipeline import canonicalize


def _options(elements=None, attributes=None, **kwargs):
    clean_config = CleaningConfiguration.model_validate({
        "elements": elements or [],
        "attributes": attributes or [],
    })
    return CanonicalizeOptions(clean_config=clean_config, **kwargs)


def _lines(text):
    return [line for line in text.splitlines() if line]


PAGE = (
    "<!DOCTYPE html>\n"
    "<html>\n"
    "  <head>\n"
    "    <title>Home</title>\n"
    "  </head>\n"
    "  <body>\n"
    "    <!-- generated at 12:00 -->\n"
    '    <div id="main" class="page">\n'
    "      <p>Hello <b>world</b></p>\n"
    "    </div>\n"
    "  </body>\n"
    "</html>\n"
)


def test_output_has_one_node_per_line_without_indentation():
    lines = _lines(canonicalize(PAGE))

    assert lines[0] == "<html>"
    assert lines[-1] == "</html>"
    assert "<title>" in lines
    assert "Home" in lines
    assert '<div class="page" id="main">' in lines
    assert all(line == line.lstrip() for line in lines)
    assert not any("generated at" in line for line in lines)


def test_formatting_differences_disappear():
    compact = (
        '<html><head><title>Home</title></head><body>'
        '<div class="page" id="main"><p>Hello <b>world</b></p></div>'
        '</body></html>'
    )
    assert canonicalize(compact) == canonicalize(PAGE)


def test_attribute_order_does_not_matter():
    left = '<html><body><a href="/x" class="link" title="X">x</a></body></html>'
    right = '<html><body><a title="X" class="link" href="/x">x</a></body></html>'
    assert canonicalize(left) == canonicalize(right)


def test_canonicalize_is_idempotent():
    once = canonicalize(PAGE)
    assert canonicalize(once) == once


def test_remove_script_by_content():
    html = "<body><footer>Copyright</footer><script>reportAnalytics()</script></body>"
    options = _options(elements=[{"selector": "script", "contains": "reportAnalytics", "remove": True}])

    text = canonicalize(html, options)
    lines = _lines(text)
    assert "<script" not in text
    assert "reportAnalytics()" not in text
    assert lines.index("<footer>") < lines.index("Copyright") < lines.index("</footer>")


def test_script_without_the_content_is_kept():
    html = "<body><script>initMenu()</script></body>"
    options = _options(elements=[{"selector": "script", "contains": "reportAnalytics", "remove": True}])
    assert "initMenu()" in canonicalize(html, options)


def test_emptied_element_keeps_the_replacement_comment():
    html = '<body><span class="build">Build 4711, 2024-01-01</span></body>'
    options = _options(elements=[{"selector": ".build", "empty": True, "replacement": "build info"}])

    lines = _lines(canonicalize(html, options))
    assert '<span class="build">' in lines
    assert "<!-- build info -->" in lines
    assert not any("4711" in line for line in lines)


def test_replacement_with_a_comment_terminator_stays_one_comment():
    html = '<body><span class="build">Build 4711</span></body>'
    options = _options(elements=[{"selector": ".build", "empty": True, "replacement": "a-->b"}])

    lines = _lines(canonicalize(html, options))
    assert "<!-- a- ->b -->" in lines
    assert not any("&gt;" in line for line in lines)


def test_volatile_attribute_is_removed():
    html = '<body><div data-reactid="42" class="a">x</div></body>'
    options = _options(attributes=[{"attribute": "data-reactid"}])
    assert '<div class="a">' in _lines(canonicalize(html, options))


def test_attribute_empty_wins_over_remove():
    html = '<body><div id="x-193">x</div></body>'
    options = _options(attributes=[{"attribute": "id", "remove": True, "empty": True}])
    assert '<div id="">' in _lines(canonicalize(html, options))


def test_head_is_reordered_when_asked():
    html = (
        "<html><head><script>boot()</script><link rel='stylesheet' href='a.css'>"
        "<title>T</title><meta charset='utf-8'></head><body></body></html>"
    )
    lines = _lines(canonicalize(html, CanonicalizeOptions(reorder_head_tags=True)))

    def position(prefix):
        return next(i for i, line in enumerate(lines) if line.startswith(prefix))

    assert position("<title>") < position("<meta") < position("<link") < position("<script")


def test_head_order_is_kept_by_default():
    html = "<html><head><script>boot()</script><title>T</title></head><body></body></html>"
    lines = _lines(canonicalize(html))
    script = next(i for i, line in enumerate(lines) if line.startswith("<script"))
    assert script < lines.index("<title>")


def test_sloppy_end_tags_are_tolerated():
    lines = _lines(canonicalize("<html><body><div><span>x</div></p></body></html>"))
    assert lines.index("<div>") < lines.index("<span>") < lines.index("x") < lines.index("</span>")
    assert lines.index("</div>") < lines.index("<p>") < lines.index("</p>")


def test_truncated_markup_raises_by_default():
    with pytest.raises(MinifyError):
        canonicalize("<html><body><p>x</p")


def test_truncated_markup_is_tidied_when_asked():
    lines = _lines(canonicalize("<html><body><p>x</p", CanonicalizeOptions(tidy_on_bad_html=True)))
    assert lines.index("<p>") < lines.index("x") < lines.index("</p>")
    assert not any("&lt;" in line for line in lines)


def test_invalid_rule_aborts():
    options = _options(elements=[{"selector": "p[", "remove": True}])
    with pytest.raises(InvalidRuleError, match="Invalid `element_to_clean` passed"):
        canonicalize("<body><p>x</p></body>", options)


def test_documents_without_html_root_get_one():
    lines = _lines(canonicalize("<p>Just a fragment</p>"))
    assert lines[:4] == ["<html>", "<head>", "</head>", "<body>"]
    assert "Just a fragment" in lines
