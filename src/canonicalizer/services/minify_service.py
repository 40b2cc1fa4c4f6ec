# src/canonicalizer/services/minify_service.py
import logging
import re
from html.parser import HTMLParser
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup, Comment, NavigableString, Tag
from bs4.element import PreformattedString

from canonicalizer.errors import MinifyError
from canonicalizer.model import MinifyOptions

logger = logging.getLogger(__name__)

VOID_ELEMENTS = {
    "area", "base", "br", "col", "embed", "hr", "img", "input", "keygen",
    "link", "meta", "param", "source", "track", "wbr",
}

# Unmatched end tags that still produce an element; every other one is dropped.
STRAY_END_TAG_REPLACEMENTS = {"p": "<p></p>", "br": "<br>"}

# Raw text elements: their content has to be closed by a matching end tag.
RAW_TEXT_TAGS = {"script", "style"}

# Text inside these elements is kept byte for byte.
WHITESPACE_SENSITIVE_TAGS = {"pre", "textarea", "script", "style", "plaintext", "xmp"}

INLINE_TAGS = {
    "a", "abbr", "acronym", "b", "bdi", "bdo", "big", "button", "cite", "code",
    "data", "del", "dfn", "em", "font", "i", "img", "input", "ins", "kbd",
    "label", "mark", "math", "nobr", "object", "q", "rp", "rt", "rtc", "ruby",
    "s", "samp", "select", "small", "span", "strike", "strong", "sub", "sup",
    "svg", "textarea", "time", "tt", "u", "var", "wbr",
}

# HTML whitespace only; a non-breaking space is content.
_WHITESPACE_RUN = re.compile(r"[ \t\n\r\f]+")

# Left over after tokenizing: the start of a tag, end tag, comment or declaration.
_UNTERMINATED_MARKUP = re.compile(r"<[a-zA-Z/!?]")


class MarkupValidator(HTMLParser):
    """
    Streams the markup once, keeping a stack of open elements.

    An end tag closes every element down to the matching open one. End tags
    with no open match are recorded in `stray_end_tags` as (line, column, tag)
    so they can be dropped (or, for </p> and </br>, turned into elements).
    """

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.open_elements: List[str] = []
        self.stray_end_tags: List[Tuple[int, int, str]] = []

    def handle_starttag(self, tag, attrs):
        if tag not in VOID_ELEMENTS:
            self.open_elements.append(tag)

    def handle_startendtag(self, tag, attrs):
        # <tag/> opens and closes in one go
        pass

    def handle_endtag(self, tag):
        if tag in self.open_elements:
            while self.open_elements.pop() != tag:
                pass
            return
        line, column = self.getpos()
        self.stray_end_tags.append((line, column, tag))


def check_well_formed(html: str) -> MarkupValidator:
    """
    Tokenizes the markup and returns the finished validator.
    Raises MinifyError when input ends inside a tag, a comment or a raw text element.
    """
    validator = MarkupValidator()
    validator.feed(html)

    leftover = validator.rawdata
    if leftover and (validator.cdata_elem in RAW_TEXT_TAGS or _UNTERMINATED_MARKUP.match(leftover)):
        line, column = validator.getpos()
        raise MinifyError(f"Parse Error: {leftover[:60]}", line, column)

    validator.close()
    return validator


def repair_stray_end_tags(html: str, stray_end_tags: List[Tuple[int, int, str]]) -> str:
    """Drops unmatched end tags; a stray </p> becomes an empty paragraph and </br> a line break."""
    if not stray_end_tags:
        return html

    line_starts = [0] + [match.end() for match in re.finditer("\n", html)]
    pieces = []
    last = 0
    for line, column, tag in stray_end_tags:
        start = line_starts[line - 1] + column
        end = html.find(">", start) + 1
        pieces.append(html[last:start])
        pieces.append(STRAY_END_TAG_REPLACEMENTS.get(tag, ""))
        last = end
    pieces.append(html[last:])
    return "".join(pieces)


def _is_whitespace_sensitive(node: NavigableString) -> bool:
    return any(parent.name in WHITESPACE_SENSITIVE_TAGS for parent in node.parents)


def _is_inline(node) -> bool:
    if node is None:
        return False
    if isinstance(node, Tag):
        return node.name in INLINE_TAGS
    return not isinstance(node, PreformattedString)


def _collapse_text(node: NavigableString, options: MinifyOptions) -> None:
    text = _WHITESPACE_RUN.sub(" ", str(node))
    if options.collapse_inline_tag_whitespace:
        text = text.strip(" ")
    else:
        if not _is_inline(node.previous_sibling):
            text = text.lstrip(" ")
        if not _is_inline(node.next_sibling):
            text = text.rstrip(" ")

    if not text:
        node.extract()
    elif text != str(node):
        node.replace_with(NavigableString(text))


def minify_soup(soup: BeautifulSoup, options: Optional[MinifyOptions] = None) -> BeautifulSoup:
    """Strips comments and collapses whitespace on a parsed tree, in place."""
    options = options or MinifyOptions()
    # Materialized up front: extraction and replacement mutate the tree.
    for node in list(soup.descendants):
        if not isinstance(node, NavigableString):
            continue
        if isinstance(node, Comment):
            if options.remove_comments:
                node.extract()
            continue
        if isinstance(node, PreformattedString):
            continue
        if options.collapse_whitespace and not _is_whitespace_sensitive(node):
            _collapse_text(node, options)
    return soup


def minify(html: str, options: Optional[MinifyOptions] = None) -> str:
    """
    Minifies an HTML string.

    Comments are stripped (unless `remove_comments` is off), whitespace is
    collapsed outside of whitespace-sensitive elements and entities are decoded
    into characters. End tags that close nothing are dropped.
    Raises MinifyError on markup that cannot be tokenized.
    """
    options = options or MinifyOptions()
    validator = check_well_formed(html)
    html = repair_stray_end_tags(html, validator.stray_end_tags)

    soup = BeautifulSoup(html, "html.parser", multi_valued_attributes=None)
    minify_soup(soup, options)

    formatter = "minimal" if options.decode_entities else "html"
    return soup.decode(formatter=formatter)


def tidy(html: str) -> str:
    """
    Parses tag soup the way a browser would and returns the root element's markup.
    """
    soup = BeautifulSoup(html, "html5lib", multi_valued_attributes=None)
    root = soup.html or soup
    return root.decode(formatter="minimal")
