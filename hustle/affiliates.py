# Static affiliate offers rendered next to generated ideas

import logging
import random
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

import yaml

from hustle.models import AffiliateOffer

logger = logging.getLogger(__name__)

OFFERS_PATH = Path(__file__).parent / "data" / "affiliate_offers.yaml"


def load_offers(path: Path = OFFERS_PATH) -> List[AffiliateOffer]:
    """Load and validate the offer list from YAML."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in {path}: {e}")

    raw_offers = data.get("offers") if isinstance(data, dict) else None
    if not isinstance(raw_offers, list):
        raise ValueError(f"{path} must contain an 'offers' list")
    return [AffiliateOffer(**offer) for offer in raw_offers]


@lru_cache(maxsize=1)
def get_offers() -> tuple:
    """Bundled offers, loaded once per process."""
    offers = tuple(load_offers())
    logger.info(f"Loaded {len(offers)} affiliate offers")
    return offers


def pick_highlighted_offer(offers, rng: Optional[random.Random] = None) -> Optional[AffiliateOffer]:
    """Pick one offer at random to feature after a generation, or None if there are none."""
    if not offers:
        return None
    chooser = rng or random
    return chooser.choice(list(offers))


def other_offers(offers, highlighted: Optional[AffiliateOffer]) -> List[AffiliateOffer]:
    """All offers except the highlighted one (matched by URL)."""
    if highlighted is None:
        return list(offers)
    return [offer for offer in offers if offer.url != highlighted.url]
