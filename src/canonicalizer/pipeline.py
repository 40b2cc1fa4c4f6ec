# src/canonicalizer/pipeline.py
"""
Turns raw HTML into canonical text that can be compared line by line.

The steps run in a fixed order:

1. Minify (strip comments, collapse whitespace, decode entities)
2. Parse the minified markup into a document
3. Prune elements, then attributes, per the clean config
4. Optionally sort the children of <head>
5. Sort the attributes of every element
6. Minify again, this time keeping comments (replacements live in comments)
7. Pretty-print with one tag per line
8. Remove all indentation
"""
import logging
from typing import Optional

from bs4 import BeautifulSoup

from canonicalizer.dom.attribute_canonicalizer import sort_attributes_on_dom_tree_in_place
from canonicalizer.dom.attribute_pruner import prune_attributes
from canonicalizer.dom.element_pruner import prune_elements
from canonicalizer.dom.head_canonicalizer import reorder_head_tags
from canonicalizer.errors import MinifyError
from canonicalizer.model import CanonicalizeOptions
from canonicalizer.services.minify_service import minify, tidy
from canonicalizer.services.pretty_print_service import pretty_print, strip_indentation

logger = logging.getLogger(__name__)


def _initial_minify(html: str, options: CanonicalizeOptions) -> str:
    try:
        return minify(html, options.minify)
    except MinifyError as e:
        # Broken markup is reported by default: a CMS or browser quietly fixing
        # the build output is exactly the kind of difference worth seeing.
        if not options.tidy_on_bad_html:
            raise
        logger.info("Minify failed (%s); tidying the markup and retrying.", e)
        return minify(tidy(html), options.minify)


def parse_document(html: str) -> BeautifulSoup:
    """Parses markup the way a browser does, always yielding html/head/body."""
    return BeautifulSoup(html, "html5lib", multi_valued_attributes=None)


def canonicalize(html: str, options: Optional[CanonicalizeOptions] = None) -> str:
    """
    Prepares an HTML string for a useful comparison against another one.

    Args:
        html (str): The raw HTML document.
        options (Optional[CanonicalizeOptions]): Clean config and pass switches.

    Returns:
        str: The canonical text, one tag or text run per line, no indentation.

    Raises:
        MinifyError: The markup is malformed and `tidy_on_bad_html` is off.
        InvalidRuleError: A rule of the clean config could not be applied.
    """
    options = options or CanonicalizeOptions()

    minified_html = _initial_minify(html, options)
    document = parse_document(minified_html)

    clean_config = options.clean_config
    prune_elements(document, clean_config.elements)
    prune_attributes(document, clean_config.attributes)

    if options.reorder_head_tags:
        reorder_head_tags(document)

    root = document.html or document
    sort_attributes_on_dom_tree_in_place(root)

    keep_comments = options.minify.model_copy(update={"remove_comments": False})
    minified_html = minify(root.decode(formatter="minimal"), keep_comments)

    formatted_html = pretty_print(minified_html, options.pretty_print)
    return strip_indentation(formatted_html)
