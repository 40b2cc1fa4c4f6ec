# src/canonicalizer/dom/walker.py
from typing import Iterator

from bs4 import PageElement, Tag


def walk_the_dom(node: PageElement) -> Iterator[PageElement]:
    """
    Pre-order walk: the node itself, then each child subtree from left to right.
    """
    yield node
    if isinstance(node, Tag):
        yield from node.descendants


def iter_elements(node: PageElement) -> Iterator[Tag]:
    """Same walk, restricted to element nodes."""
    for item in walk_the_dom(node):
        if isinstance(item, Tag):
            yield item
