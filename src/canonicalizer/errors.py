# src/canonicalizer/errors.py
import json
from typing import Any, Optional


class CanonicalizationError(Exception):
    """Base class for every error raised by the canonicalization engine."""


class MinifyError(CanonicalizationError):
    """Raised when the minifier refuses malformed markup."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class InvalidRuleError(CanonicalizationError):
    """
    Raised when a cleaning rule cannot be applied at all, e.g. because its
    selector is not valid CSS. The offending rule travels with the error so
    the caller can point at the broken configuration entry.
    """

    def __init__(self, kind: str, rule: Any):
        self.kind = kind
        self.rule = rule
        self.rule_json = _rule_to_json(rule)
        super().__init__(f"Invalid `{kind}` passed: {self.rule_json}")


def _rule_to_json(rule: Any) -> str:
    if hasattr(rule, "to_json"):
        return rule.to_json()
    try:
        return json.dumps(rule, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(rule)
