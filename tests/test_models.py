import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).parent.parent))

from hustle.models import (
    AMOUNT_TOO_SMALL_MESSAGE,
    INVALID_NUMBER_MESSAGE,
    SKILLS_REQUIRED_MESSAGE,
    HustleIdeasInput,
    HustleIdeasOutput,
    IdeaSuggestion,
    field_errors,
)


def _errors(payload):
    with pytest.raises(ValidationError) as exc_info:
        HustleIdeasInput.model_validate(payload)
    return field_errors(exc_info.value)


def test_valid_input_is_coerced_and_trimmed():
    params = HustleIdeasInput.model_validate({"userSkills": "  writing, design ", "targetAmount": "3"})
    assert params.user_skills == "writing, design"
    assert params.target_amount == 3.0


def test_input_accepts_field_names():
    params = HustleIdeasInput(user_skills="baking", target_amount=2.5)
    assert params.target_amount == 2.5


def test_empty_skills_rejected_with_form_message():
    errors = _errors({"userSkills": "   ", "targetAmount": 3})
    assert errors == {"userSkills": SKILLS_REQUIRED_MESSAGE}


@pytest.mark.parametrize("amount", [0, -5, 0.001])
def test_non_positive_amount_rejected(amount):
    errors = _errors({"userSkills": "writing", "targetAmount": amount})
    assert errors == {"targetAmount": AMOUNT_TOO_SMALL_MESSAGE}


@pytest.mark.parametrize("amount", ["abc", "", None, True, "nan"])
def test_non_numeric_amount_rejected(amount):
    errors = _errors({"userSkills": "writing", "targetAmount": amount})
    assert errors == {"targetAmount": INVALID_NUMBER_MESSAGE}


def test_missing_fields_reported_per_field():
    errors = _errors({})
    assert errors == {"userSkills": SKILLS_REQUIRED_MESSAGE, "targetAmount": INVALID_NUMBER_MESSAGE}


def test_suggestion_rejects_invalid_urls():
    with pytest.raises(ValidationError) as exc_info:
        IdeaSuggestion.model_validate({"idea": "Sell stickers", "suggestedWebsites": ["etsy.com", "not a url"]})
    assert "invalid URLs" in str(exc_info.value)


def test_output_serializes_with_wire_names():
    output = HustleIdeasOutput.model_validate(
        {"ideas": [{"idea": "Proofread essays", "suggestedWebsites": ["upwork.com"]}]}
    )
    assert output.ideas[0].suggested_websites == ["upwork.com"]
    assert output.to_wire() == {"ideas": [{"idea": "Proofread essays", "suggestedWebsites": ["upwork.com"]}]}


def test_output_defaults_to_empty_list():
    assert HustleIdeasOutput().ideas == []
