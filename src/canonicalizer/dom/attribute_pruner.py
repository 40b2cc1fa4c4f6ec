# src/canonicalizer/dom/attribute_pruner.py
import logging
from typing import Iterable, List

from bs4 import BeautifulSoup, Tag

from canonicalizer.errors import InvalidRuleError
from canonicalizer.model import AttributeRule
from canonicalizer.services.rule_matcher import RuleMatcher

logger = logging.getLogger(__name__)


def prune_attribute(element: Tag, rule: AttributeRule) -> None:
    """Empties (or replaces) the attribute value, or drops the attribute entirely."""
    if rule.should_empty:
        element[rule.attribute] = rule.replacement or ""
    elif rule.should_remove:
        del element[rule.attribute]


def apply_attribute_rule(soup: BeautifulSoup, rule: AttributeRule) -> int:
    """Applies a single attribute rule and returns how many attributes it pruned."""
    if not rule.attribute:
        return 0

    try:
        matcher = RuleMatcher(rule.contains, rule.contains_regex, rule.contains_regex_flags)
        elements: List[Tag] = soup.select(rule.effective_selector)

        pruned = 0
        for element in elements:
            if not element.has_attr(rule.attribute):
                continue

            value = element.get(rule.attribute)
            if isinstance(value, list):
                value = " ".join(value)
            if not matcher.matches("" if value is None else str(value)):
                continue

            prune_attribute(element, rule)
            pruned += 1
    except Exception as e:
        raise InvalidRuleError("attribute_to_clean", rule) from e

    logger.debug("Attribute rule %s pruned %d attribute(s).", rule.to_json(), pruned)
    return pruned


def prune_attributes(soup: BeautifulSoup, rules: Iterable[AttributeRule]) -> BeautifulSoup:
    """Applies the attribute rules in order."""
    for rule in rules:
        apply_attribute_rule(soup, rule)
    return soup
