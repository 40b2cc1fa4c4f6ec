# src/canonicalizer/dom/attribute_canonicalizer.py
from bs4 import PageElement, Tag

from .walker import walk_the_dom


def reorder_attributes_on_node(node: PageElement) -> None:
    """Re-adds the attributes of an element in alphabetical order. Non-elements are left alone."""
    if not isinstance(node, Tag) or not node.attrs:
        return

    attrs_sorted = sorted(node.attrs.items())

    for name, _ in attrs_sorted:
        del node[name]

    for name, value in attrs_sorted:
        node[name] = value


def sort_attributes_on_dom_tree_in_place(root: PageElement) -> PageElement:
    """
    Sorts the attributes of every element below (and including) `root`, so that
    `<a href="#" class="link">` and `<a class="link" href="#">` serialize identically.
    """
    for node in walk_the_dom(root):
        reorder_attributes_on_node(node)
    return root
