# src/canonicalizer/dom/element_pruner.py
import logging
import re
from typing import Iterable, List

from bs4 import BeautifulSoup, Comment, Tag

from canonicalizer.errors import InvalidRuleError
from canonicalizer.model import ElementRule
from canonicalizer.services.rule_matcher import RuleMatcher

logger = logging.getLogger(__name__)

# "--" may not appear inside an HTML comment.
_DOUBLE_HYPHEN = re.compile(r"-(?=-)")


def prune_element(element: Tag, rule: ElementRule) -> None:
    """Removes the element, or empties it and leaves the replacement as a comment."""
    if rule.should_remove:
        element.extract()
    elif rule.should_empty:
        element.clear()
        if rule.replacement:
            text = _DOUBLE_HYPHEN.sub("- ", rule.replacement)
            element.append(Comment(f" {text} "))


def apply_element_rule(soup: BeautifulSoup, rule: ElementRule) -> int:
    """
    Applies a single element rule and returns how many elements it pruned.
    The selection is a list taken before any mutation, so pruning one match
    never changes which other elements get visited.
    """
    if not rule.selector:
        return 0

    try:
        matcher = RuleMatcher(rule.contains, rule.contains_regex, rule.contains_regex_flags)
        elements: List[Tag] = soup.select(rule.selector)

        pruned = 0
        for element in elements:
            if not matcher.is_unconditional and not matcher.matches(element.decode_contents()):
                continue
            prune_element(element, rule)
            pruned += 1
    except Exception as e:
        raise InvalidRuleError("element_to_clean", rule) from e

    logger.debug("Element rule %s pruned %d of %d element(s).", rule.to_json(), pruned, len(elements))
    return pruned


def prune_elements(soup: BeautifulSoup, rules: Iterable[ElementRule]) -> BeautifulSoup:
    """Applies the element rules in order; each rule sees the tree left by the previous one."""
    for rule in rules:
        apply_element_rule(soup, rule)
    return soup
