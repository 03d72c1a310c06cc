from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from hustle.config import MIN_TARGET_AMOUNT
from hustle.links import is_valid_website

SKILLS_REQUIRED_MESSAGE = "Please enter at least one skill."
INVALID_NUMBER_MESSAGE = "Please enter a valid number."
AMOUNT_TOO_SMALL_MESSAGE = f"Target amount must be at least ${MIN_TARGET_AMOUNT:.2f}."
INVALID_URLS_MESSAGE = "Response contains invalid URLs"


class HustleIdeasInput(BaseModel):
    """
    Input for the idea-generation flow.
    """
    model_config = ConfigDict(populate_by_name=True)

    user_skills: str = Field(..., alias="userSkills",
                             description="A comma-separated list of skills that the user possesses.")
    target_amount: float = Field(..., alias="targetAmount",
                                 description="The amount of money the user wants to earn per day.")

    @field_validator("user_skills", mode="before")
    @classmethod
    def validate_skills(cls, v):
        if not isinstance(v, str) or not v.strip():
            raise ValueError(SKILLS_REQUIRED_MESSAGE)
        return v.strip()

    @field_validator("target_amount", mode="before")
    @classmethod
    def validate_amount(cls, v):
        if isinstance(v, bool):
            raise ValueError(INVALID_NUMBER_MESSAGE)
        try:
            amount = float(v)
        except (TypeError, ValueError):
            raise ValueError(INVALID_NUMBER_MESSAGE)
        if amount != amount or amount in (float("inf"), float("-inf")):
            raise ValueError(INVALID_NUMBER_MESSAGE)
        if amount < MIN_TARGET_AMOUNT:
            raise ValueError(AMOUNT_TOO_SMALL_MESSAGE)
        return amount


class IdeaSuggestion(BaseModel):
    """A single idea as returned by the provider."""
    model_config = ConfigDict(populate_by_name=True)

    idea: str = Field(..., description="A task or activity that could earn the target amount per day.")
    suggested_websites: List[str] = Field(
        default_factory=list,
        alias="suggestedWebsites",
        description="Websites where the idea can be pursued, as hostnames or full http(s) URLs.",
    )

    @field_validator("suggested_websites")
    @classmethod
    def validate_websites(cls, v):
        bad = [url for url in v if not is_valid_website(url)]
        if bad:
            raise ValueError(f"{INVALID_URLS_MESSAGE}: {bad}")
        return v


class HustleIdeasOutput(BaseModel):
    ideas: List[IdeaSuggestion] = Field(default_factory=list)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class Idea(BaseModel):
    """
    An idea as displayed and saved: provider text plus a display-time id.
    """
    id: str
    text: str
    websites: List[str] = Field(default_factory=list)


class AffiliateOffer(BaseModel):
    url: str
    title: str
    description: str
    category: Optional[str] = None


class Notice(BaseModel):
    """User-facing notification shown after an action."""
    title: str
    description: str
    variant: str = "default"


def field_errors(exc: ValidationError) -> Dict[str, str]:
    """Map a pydantic ValidationError to {field alias: first message}."""
    errors: Dict[str, str] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err.get("loc") else "__root__"
        message = err.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        elif err.get("type") == "missing":
            message = SKILLS_REQUIRED_MESSAGE if field == "userSkills" else INVALID_NUMBER_MESSAGE
        errors.setdefault(field, message)
    return errors
