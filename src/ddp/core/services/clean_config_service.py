# src/ddp/core/services/clean_config_service.py
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import ValidationError

from canonicalizer.model import CleaningConfiguration
from ddp.core.errors import CleanConfigError

logger = logging.getLogger(__name__)

STDIN_SOURCE = "stdin"


def read_stdin() -> str:
    """Reads piped input; an interactive terminal yields an empty string."""
    if sys.stdin is None or sys.stdin.isatty():
        return ""
    return sys.stdin.read()


def _parse_json(raw: str, error_message: str, hint: Optional[str] = None) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        message = f"{error_message} ({e})"
        if hint:
            message = f"{message}\n{hint}"
        raise CleanConfigError(message) from e


def parse_clean_config(data: Any) -> CleaningConfiguration:
    """
    Validates the shape of a decoded clean config. Only the 'elements' and
    'attributes' keys are kept; both must be lists when present.
    """
    if not isinstance(data, dict):
        raise CleanConfigError('The "clean-config" flag must be a plain object.')

    picked = {}
    for key in ("elements", "attributes"):
        if data.get(key):
            if not isinstance(data[key], list):
                raise CleanConfigError(f'The clean-config "{key}" key must be an iterable Array.')
            picked[key] = [rule if isinstance(rule, dict) else {} for rule in data[key]]

    try:
        return CleaningConfiguration.model_validate(picked)
    except ValidationError as e:
        raise CleanConfigError(f"The clean config contains an invalid rule:\n{e}") from e


def load_clean_config(
        value: Optional[str],
        stdin_reader: Callable[[], str] = read_stdin,
) -> Optional[CleaningConfiguration]:
    """
    Resolves the --clean-config flag, which can be:
    - 'stdin': JSON piped into the process
    - a path to a JSON file
    - inline JSON
    """
    if not value:
        return None

    if value == STDIN_SOURCE:
        data = _parse_json(stdin_reader(), "The piped input from stdin was not valid JSON.")
    elif Path(value).is_file():
        try:
            raw = Path(value).read_text(encoding="utf-8")
        except OSError as e:
            raise CleanConfigError(f'The file "{value}" could not be read: {e}') from e
        data = _parse_json(raw, f'The file "{value}" does not contain valid JSON.')
    else:
        data = _parse_json(
            value,
            'The "clean-config" flag is not valid JSON.',
            hint=f'If you meant to load a JSON file, confirm that "{value}" exists.',
        )

    config = parse_clean_config(data)
    logger.debug("Loaded clean config with %d element rule(s) and %d attribute rule(s).",
                 len(config.elements), len(config.attributes))
    return config
