"""
Idea-generation flow.

``generate_daily_hustle_ideas`` is the single entry point that talks to the
provider. ``run_generation`` is its caller on the page side: it turns the
result (or the failure) into display records, a notice and a featured
affiliate offer.
"""

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from hustle.affiliates import get_offers, other_offers, pick_highlighted_offer
from hustle.errors import HustleGenerationError, IdeaValidationError, PromptBlockedError
from hustle.links import is_valid_website, website_links
from hustle.llm import HustleIdeator
from hustle.models import AffiliateOffer, HustleIdeasInput, HustleIdeasOutput, Idea, Notice

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "An error occurred while generating ideas. Please try again."
BLOCKED_FAILURE = "The request was blocked by safety settings. Try modifying your input."
INVALID_URLS_FAILURE = "The AI returned some invalid website links. We're showing the ideas anyway."
NO_IDEAS_NOTICE = "No ideas came back this time. Try adding more skills or a different amount."

_ideator: Optional[HustleIdeator] = None


def get_ideator() -> HustleIdeator:
    """Shared ideator, created on first use."""
    global _ideator
    if _ideator is None:
        _ideator = HustleIdeator()
    return _ideator


def generate_daily_hustle_ideas(request: Union[HustleIdeasInput, Dict[str, Any]],
                                ideator: Optional[HustleIdeator] = None) -> HustleIdeasOutput:
    """
    Generate daily hustle ideas for a user's skills and target amount.

    Accepts either a validated HustleIdeasInput or the raw
    ``{"userSkills": ..., "targetAmount": ...}`` mapping. Raises
    pydantic.ValidationError for bad input and HustleGenerationError for
    provider or schema failures. The returned ``ideas`` is always a list.
    """
    if not isinstance(request, HustleIdeasInput):
        request = HustleIdeasInput.model_validate(request)
    return (ideator or get_ideator()).generate_ideas(request)


def make_idea_records(items: List[Tuple[str, List[str]]],
                      prefix: str = "gen",
                      now_ms: Optional[int] = None) -> List[Idea]:
    """Give each (text, websites) pair a display id: <prefix>-<epoch ms>-<index>."""
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return [
        Idea(id=f"{prefix}-{stamp}-{index}", text=text, websites=list(websites))
        for index, (text, websites) in enumerate(items)
    ]


def salvage_ideas(payload: Any) -> List[Tuple[str, List[str]]]:
    """
    Best-effort extraction of ideas from a payload that failed validation.

    Items without a string ``idea`` are skipped; websites that are not
    strings or do not parse as http(s) URLs are dropped.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("ideas"), list):
        return []

    salvaged = []
    for item in payload["ideas"]:
        if not isinstance(item, dict) or not isinstance(item.get("idea"), str):
            continue
        websites = item.get("suggestedWebsites")
        if isinstance(websites, list):
            websites = [w for w in websites if isinstance(w, str) and is_valid_website(w)]
        else:
            websites = []
        salvaged.append((item["idea"], websites))
    return salvaged


def idea_to_display(idea: Idea) -> dict:
    """Idea record plus its rendered website links."""
    data = idea.model_dump()
    data["links"] = [link.model_dump() for link in website_links(idea.websites)]
    return data


@dataclass
class GenerationResult:
    status: str
    ideas: List[Idea] = field(default_factory=list)
    notice: Optional[Notice] = None
    highlighted_offer: Optional[AffiliateOffer] = None
    more_offers: List[AffiliateOffer] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "ideas": [idea_to_display(idea) for idea in self.ideas],
            "notice": self.notice.model_dump() if self.notice else None,
            "highlighted_offer": self.highlighted_offer.model_dump() if self.highlighted_offer else None,
            "more_offers": [offer.model_dump() for offer in self.more_offers],
        }


def _failure_description(error: HustleGenerationError) -> str:
    if isinstance(error, PromptBlockedError) or "prompt was blocked" in error.message:
        return BLOCKED_FAILURE
    if "invalid URLs" in error.message:
        return INVALID_URLS_FAILURE
    return GENERIC_FAILURE


def run_generation(request: HustleIdeasInput,
                   ideator: Optional[HustleIdeator] = None,
                   offers=None,
                   rng: Optional[random.Random] = None) -> GenerationResult:
    """
    Run one generation for the page and describe the outcome.

    Never raises HustleGenerationError: failures become a destructive
    notice, plus salvaged ideas when the reply only had bad website links.
    """
    offers = get_offers() if offers is None else offers

    def featuring(result: GenerationResult, highlight: bool) -> GenerationResult:
        if highlight:
            result.highlighted_offer = pick_highlighted_offer(offers, rng)
        result.more_offers = other_offers(offers, result.highlighted_offer)
        return result

    try:
        output = generate_daily_hustle_ideas(request, ideator=ideator)
    except HustleGenerationError as e:
        logger.error(f"Error generating ideas: {e.message}")
        description = _failure_description(e)
        notice = Notice(title="Error Generating Ideas", description=description, variant="destructive")

        if isinstance(e, IdeaValidationError) and e.has_invalid_urls:
            salvaged = salvage_ideas(e.partial)
            if salvaged:
                logger.info(f"Salvaged {len(salvaged)} ideas from a reply with invalid URLs")
                return featuring(GenerationResult(
                    status="partial",
                    ideas=make_idea_records(salvaged, prefix="gen-err"),
                    notice=notice,
                ), highlight=True)
        return featuring(GenerationResult(status="error", notice=notice), highlight=False)

    if not output.ideas:
        return featuring(GenerationResult(
            status="success",
            notice=Notice(title="No Ideas", description=NO_IDEAS_NOTICE),
        ), highlight=False)

    records = make_idea_records([(s.idea, s.suggested_websites) for s in output.ideas])
    return featuring(GenerationResult(status="success", ideas=records), highlight=True)
