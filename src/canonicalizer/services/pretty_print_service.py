# src/canonicalizer/services/pretty_print_service.py
import re
from typing import Optional

from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from canonicalizer.model import PrettyPrintOptions

_LEADING_WHITESPACE = re.compile(r"^\s*", re.MULTILINE)

# Kept verbatim on top of `content_unformatted`, as in the minify pass.
ALWAYS_UNFORMATTED_TAGS = {"textarea"}


def build_formatter(options: PrettyPrintOptions) -> HTMLFormatter:
    return HTMLFormatter(
        entity_substitution=EntitySubstitution.substitute_xml,
        indent=options.indent_size,
    )


def pretty_print(html: str, options: Optional[PrettyPrintOptions] = None) -> str:
    """
    Puts every tag, text run and comment on its own line, indented by nesting depth.
    Contents of `content_unformatted` elements and of <textarea> are emitted untouched.
    """
    options = options or PrettyPrintOptions()
    soup = BeautifulSoup(
        html,
        "html.parser",
        multi_valued_attributes=None,
        preserve_whitespace_tags=set(options.content_unformatted) | ALWAYS_UNFORMATTED_TAGS,
    )
    return soup.prettify(formatter=build_formatter(options))


def strip_indentation(text: str) -> str:
    """Removes leading whitespace from every line."""
    return _LEADING_WHITESPACE.sub("", text)
