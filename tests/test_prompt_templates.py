"""
Unit tests for the YAML prompt templates
"""

import sys
from pathlib import Path

import pytest

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hustle.prompts.loader import get_prompts, list_available_templates, validate_template
from hustle.prompts.validation import TemplateValidator
from hustle.prompts.yaml_template import format_amount


def _template_dict(**overrides):
    data = {
        "name": "Test",
        "description": "Test template",
        "version": "1.0.0",
        "author": "Tester",
        "created_date": "2025-01-01",
        "metadata": {"item_type": "ideas"},
        "prompts": {"hustle": "Skills: {user_skills} Amount: {target_amount}"},
    }
    data.update(overrides)
    return data


class TestBundledTemplate:
    """The template shipped with the app"""

    def test_loads_and_interpolates_settings(self):
        prompts = get_prompts("daily_hustle")
        assert prompts.ITEM_TYPE == "daily hustle ideas"
        assert prompts.MIN_IDEAS == 5
        for placeholder in ("{requirements}", "{min_ideas}", "{max_websites}"):
            assert placeholder not in prompts.HUSTLE_PROMPT
        assert "at least 5 ideas" in prompts.HUSTLE_PROMPT
        assert "{user_skills}" in prompts.HUSTLE_PROMPT
        assert "{target_amount}" in prompts.HUSTLE_PROMPT

    def test_validates_without_warnings(self):
        is_valid, warnings = validate_template("daily_hustle")
        assert is_valid is True
        assert warnings == []

    def test_listed(self):
        templates = list_available_templates()
        assert "daily_hustle" in templates
        assert "error" not in templates["daily_hustle"]
        assert templates["daily_hustle"]["name"] == "Daily Hustle Ideas"

    def test_format_keeps_json_example_braces(self):
        prompt = get_prompts("daily_hustle").format_hustle_prompt("sewing", 4)
        assert '{"ideas": [{"idea":' in prompt
        assert "Skills: sewing" in prompt


def test_unknown_template_raises():
    with pytest.raises(ValueError):
        get_prompts("no_such_template")
    is_valid, errors = validate_template("no_such_template")
    assert is_valid is False
    assert errors


@pytest.mark.parametrize("overrides", [
    {"version": "1.0"},
    {"version": "one.two.three"},
    {"created_date": "01/01/2025"},
    {"prompts": {}},
])
def test_invalid_templates_rejected(overrides):
    with pytest.raises(ValueError):
        TemplateValidator.validate_dict(_template_dict(**overrides))


def test_missing_placeholders_are_warnings():
    template = TemplateValidator.validate_dict(_template_dict(prompts={"hustle": "Give me ideas"}))
    warnings = TemplateValidator.check_prompt_interpolation(template)
    assert len(warnings) == 2


@pytest.mark.parametrize("amount,expected", [(3, "3"), (3.0, "3"), (2.5, "2.50"), (0.01, "0.01")])
def test_format_amount(amount, expected):
    assert format_amount(amount) == expected
