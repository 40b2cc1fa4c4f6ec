# tests/ddp/test_prompt_service.py
from unittest.mock import MagicMock

import pytest

from ddp.core.services.prompt_service import PromptService


@pytest.fixture
def session():
    return MagicMock()


def _prompts(session, *answers):
    session.prompt.side_effect = list(answers)
    return PromptService(session=session)


def test_input_strips_the_answer(session):
    assert _prompts(session, "  build  ").input("Build folder?", default="build") == "build"
    assert session.prompt.call_args.kwargs["default"] == "build"


def test_required_input_gets_a_validator(session):
    _prompts(session, "x").input("Domain?", required_message="Required.")
    assert session.prompt.call_args.kwargs["validator"] is not None


@pytest.mark.parametrize("answer, default, expected", [
    ("y", False, True),
    ("YES", False, True),
    ("n", True, False),
    ("", True, True),
    ("", False, False),
])
def test_confirm(session, answer, default, expected):
    assert _prompts(session, answer).confirm("Continue?", default=default) is expected


def test_choice_by_number_or_value(session):
    prompts = _prompts(session, "2", "none")
    choices = [("string", "String"), ("regex", "Regex"), ("none", "Nothing")]
    assert prompts.choice("Filter?", choices) == "regex"
    assert prompts.choice("Filter?", choices) == "none"


def test_build_empty_clean_config(session):
    config = _prompts(session, "n", "n").build_clean_config()
    assert config.is_empty


def test_build_clean_config(session):
    prompts = _prompts(
        session,
        # elements
        "y", "script", "2", "jQuery v\\d", "i", "empty", "jquery", "n",
        # attributes
        "y", "data-build", "", "1", "cache-buster", "remove", "",
    )
    config = prompts.build_clean_config()

    element = config.elements[0]
    assert element.selector == "script"
    assert element.contains_regex == "jQuery v\\d"
    assert element.contains_regex_flags == "i"
    assert element.empty is True
    assert element.replacement == "jquery"

    attribute = config.attributes[0]
    assert attribute.attribute == "data-build"
    assert attribute.selector is None
    assert attribute.contains == "cache-buster"
    assert attribute.remove is True
    assert attribute.replacement is None
