# src/canonicalizer/dom/head_canonicalizer.py
import logging
from typing import List, Tuple

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

# @link https://htmlhead.dev/#elements
HEAD_SORT_ORDER = ["TITLE", "META", "BASE", "LINK", "STYLE", "SCRIPT", "NOSCRIPT"]
UNKNOWN_RANK = len(HEAD_SORT_ORDER)


def head_sort_key(element: Tag) -> Tuple[int, str]:
    """Category rank first, then the element's full markup."""
    tag_name = element.name.upper()
    outer_html = element.decode()
    if tag_name in HEAD_SORT_ORDER:
        return HEAD_SORT_ORDER.index(tag_name), outer_html

    logger.warning("Unknown tag type in HEAD: %s. %s", tag_name, outer_html)
    return UNKNOWN_RANK, outer_html


def reorder_head_tags(soup: BeautifulSoup) -> BeautifulSoup:
    """
    Sorts the element children of <head> into TITLE, META, BASE, LINK, STYLE,
    SCRIPT, NOSCRIPT order and rebuilds the head from the sorted markup.
    Anything else in the head ends up last.
    """
    head = soup.head
    if head is None:
        return soup

    head_children: List[Tag] = [child for child in head.children if isinstance(child, Tag)]
    head_children.sort(key=head_sort_key)

    sorted_head_html = "\n".join(child.decode() for child in head_children)

    head.clear()
    fragment = BeautifulSoup(sorted_head_html, "html.parser", multi_valued_attributes=None)
    for node in list(fragment.contents):
        head.append(node.extract())

    return soup
