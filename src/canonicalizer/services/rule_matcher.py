# src/canonicalizer/services/rule_matcher.py
import json
import logging
import re
from typing import Optional, Pattern

logger = logging.getLogger(__name__)

# Regex flag letters as written in a clean config, mapped onto `re` flags.
# 'g' has no meaning for a single search and 'u' is the default for str patterns.
REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "u": 0,
    "g": 0,
    "y": 0,
}


class RuleMatcher:
    """
    Content filter of a single rule.

    A candidate passes when it contains `contains` literally AND the regex
    finds a match in it. Filters that are not set always pass. An invalid
    pattern is reported once and then ignored, so the rule keeps applying.
    """

    def __init__(
            self,
            contains: Optional[str] = None,
            regex_source: Optional[str] = None,
            regex_flags: Optional[str] = None,
    ):
        self.contains = contains if isinstance(contains, str) and contains else None
        self.sticky = False
        self.pattern = self._compile(regex_source, regex_flags)

    def _compile(self, source: Optional[str], flags: Optional[str]) -> Optional[Pattern]:
        if not source or not isinstance(source, str):
            return None
        flags = flags if isinstance(flags, str) else ""
        try:
            re_flags = 0
            for letter in flags:
                if letter not in REGEX_FLAGS:
                    raise re.error(f"invalid flag {letter!r}")
                if flags.count(letter) > 1:
                    raise re.error(f"duplicate flag {letter!r}")
                re_flags |= REGEX_FLAGS[letter]
            pattern = re.compile(source, re_flags)
        except re.error as e:
            logger.warning("Invalid regular expression: %s", e)
            logger.warning("new RegExp(%s, %s)", json.dumps(source), json.dumps(flags or None))
            return None
        self.sticky = "y" in flags
        return pattern

    @property
    def is_unconditional(self) -> bool:
        return self.contains is None and self.pattern is None

    def matches(self, candidate: Optional[str]) -> bool:
        text = candidate or ""
        if self.contains is not None and self.contains not in text:
            return False
        if self.pattern is not None:
            found = self.pattern.match(text) if self.sticky else self.pattern.search(text)
            if not found:
                return False
        return True


def matches(
        candidate: Optional[str],
        contains: Optional[str] = None,
        regex_source: Optional[str] = None,
        regex_flags: Optional[str] = None,
) -> bool:
    """One-shot form of `RuleMatcher(...).matches(candidate)`."""
    return RuleMatcher(contains, regex_source, regex_flags).matches(candidate)
