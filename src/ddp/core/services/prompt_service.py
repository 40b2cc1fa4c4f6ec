# src/ddp/core/services/prompt_service.py
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.validation import Validator

from canonicalizer.model import CleaningConfiguration

logger = logging.getLogger(__name__)

FILTER_CHOICES = [
    ("string", "Filter based on simple string matching"),
    ("regex", "Filter based on a regular expression"),
    ("none", "Do not filter"),
]


class PromptService:
    """
    Asks the user for anything the command line did not provide.
    All questions go through one prompt_toolkit session.
    """

    def __init__(self, session: Optional[PromptSession] = None):
        self.session = session or PromptSession()

    def input(self, message: str, default: str = "", required_message: Optional[str] = None) -> str:
        validator = None
        if required_message:
            validator = Validator.from_callable(
                lambda text: bool(text.strip()),
                error_message=required_message,
                move_cursor_to_end=True,
            )
        answer = self.session.prompt(f"{message} ", default=default, validator=validator)
        return answer.strip()

    def confirm(self, message: str, default: bool = False) -> bool:
        suffix = "(Y/n)" if default else "(y/N)"
        validator = Validator.from_callable(
            lambda text: text.strip().lower() in ("", "y", "yes", "n", "no"),
            error_message="Please answer y or n.",
        )
        answer = self.session.prompt(f"{message} {suffix} ", validator=validator).strip().lower()
        if not answer:
            return default
        return answer in ("y", "yes")

    def choice(self, message: str, choices: Sequence[Tuple[str, str]]) -> str:
        """Shows numbered choices and returns the value of the picked one."""
        values = [value for value, _ in choices]
        lines = [message] + [f"  {i}) {label} [{value}]" for i, (value, label) in enumerate(choices, 1)]

        def _resolve(text: str) -> Optional[str]:
            text = text.strip()
            if text.isdigit() and 1 <= int(text) <= len(values):
                return values[int(text) - 1]
            return text if text in values else None

        validator = Validator.from_callable(
            lambda text: _resolve(text) is not None,
            error_message=f"Pick 1-{len(values)} or one of: {', '.join(values)}",
        )
        answer = self.session.prompt(
            "\n".join(lines) + "\n> ",
            completer=WordCompleter(values),
            validator=validator,
        )
        return _resolve(answer)

    # --- Clean config builders ---

    def _ask_filter(self, subject: str) -> Dict[str, Any]:
        kind = self.choice(f"Filter the {subject} based on its contents?", FILTER_CHOICES)
        rule: Dict[str, Any] = {}
        if kind == "string":
            contains = self.input(f"Filter the {subject} based on this string:")
            if contains:
                rule["contains"] = contains
        elif kind == "regex":
            regex = self.input(f"Enter the regex with no surrounding '/' (e.g. \"jQuery v\\d\"):")
            flags = self.input('Enter any optional regular expression flags (e.g. "i"):')
            if regex:
                rule["containsRegex"] = regex
            if flags:
                rule["containsRegexFlags"] = flags
        return rule

    def ask_element_rule(self) -> Dict[str, Any]:
        selector = self.input(
            "Enter the selector of the elements to empty / remove:",
            required_message="You must enter a value for the selector.",
        )
        rule: Dict[str, Any] = {"selector": selector}
        rule.update(self._ask_filter("elements"))

        action = self.choice(
            "Remove the element entirely, or merely empty its contents?",
            [("remove", "Remove the element"), ("empty", "Empty its contents")],
        )
        rule[action] = True

        replacement = self.input(
            "Replace the emptied elements contents with some value? (can be left blank):"
            if action == "empty" else
            "Replace the removed element with some value? (can be left blank):"
        )
        if replacement:
            rule["replacement"] = replacement
        return rule

    def ask_attribute_rule(self) -> Dict[str, Any]:
        attribute = self.input(
            "Enter the name of the attribute to clean:",
            required_message="You must enter an attribute.",
        )
        rule: Dict[str, Any] = {"attribute": attribute}

        selector = self.input(
            "Filter attributes on the following elements based on a DOM selector? (can be left blank):"
        )
        if selector:
            rule["selector"] = selector
        rule.update(self._ask_filter("attributes"))

        action = self.choice(
            "Remove the attribute entirely, or merely empty its contents?",
            [("remove", "Remove the attribute"), ("empty", "Empty its contents")],
        )
        rule[action] = True

        if action == "empty":
            replacement = self.input(
                "Replace the emptied attribute's value with a replacement? (can be left blank):"
            )
            if replacement:
                rule["replacement"] = replacement
        return rule

    def build_clean_config(self) -> CleaningConfiguration:
        """Walks the user through element rules, then attribute rules."""
        elements: List[Dict[str, Any]] = []
        attributes: List[Dict[str, Any]] = []

        more = self.confirm("Select certain elements to clean?", default=False)
        while more:
            elements.append(self.ask_element_rule())
            more = self.confirm("Select more elements to clean?", default=False)

        more = self.confirm("Select certain attributes to clean?", default=False)
        while more:
            attributes.append(self.ask_attribute_rule())
            more = self.confirm("Select more attributes to clean?", default=False)

        logger.debug("Interactive clean config: %d element rule(s), %d attribute rule(s).",
                     len(elements), len(attributes))
        return CleaningConfiguration.model_validate({"elements": elements, "attributes": attributes})
