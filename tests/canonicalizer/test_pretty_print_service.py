# tests/canonicalizer/test_pretty_print_service.py
from canonicalizer.model import PrettyPrintOptions
from canonicalizer.services.pretty_print_service import pretty_print, strip_indentation


def test_one_node_per_line_indented_by_depth():
    lines = pretty_print("<div><p>x</p></div>").splitlines()
    assert lines == ["<div>", " <p>", "  x", " </p>", "</div>"]


def test_indent_size_is_configurable():
    lines = pretty_print("<div><p>x</p></div>", PrettyPrintOptions(indent_size=4)).splitlines()
    assert lines[1] == "    <p>"


def test_unformatted_elements_keep_their_contents():
    html = "<div><script>if (a) {\n  b();\n}</script></div>"
    assert "<script>if (a) {\n  b();\n}</script>" in pretty_print(html)


def test_comments_get_their_own_line():
    lines = [line.strip() for line in pretty_print("<div><!-- note --></div>").splitlines()]
    assert "<!-- note -->" in lines


def test_strip_indentation_removes_leading_whitespace_only():
    assert strip_indentation("<a>\n  <b>\n\t text here \n</a>") == "<a>\n<b>\ntext here \n</a>"


def test_textarea_contents_are_never_reflowed():
    html = "<form><textarea>  a\n  b </textarea></form>"
    assert "<textarea>  a\n  b </textarea>" in pretty_print(html)
    assert "<textarea>  a\n  b </textarea>" in pretty_print(html, PrettyPrintOptions(content_unformatted=[]))
