from abc import ABC
import json
import logging
from typing import Any, Dict, Optional

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import ValidationError

from hustle.config import (
    DEFAULT_MODEL,
    DEFAULT_PROMPT_TEMPLATE,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_P,
    MAX_OUTPUT_TOKENS,
    get_api_key,
)
from hustle.errors import IdeaValidationError, PromptBlockedError, ProviderError
from hustle.models import INVALID_URLS_MESSAGE, HustleIdeasInput, HustleIdeasOutput
from hustle.prompts.loader import get_prompts

logger = logging.getLogger(__name__)

# Candidate finish reasons that mean the reply was withheld by content filters
BLOCKED_FINISH_REASONS = frozenset({
    types.FinishReason.SAFETY,
    types.FinishReason.BLOCKLIST,
    types.FinishReason.PROHIBITED_CONTENT,
    types.FinishReason.SPII,
})

# Wire schema sent to the provider. Mirrors HustleIdeasOutput by alias.
IDEAS_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "ideas": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "idea": {"type": "STRING"},
                    "suggestedWebsites": {"type": "ARRAY", "items": {"type": "STRING"}},
                },
                "required": ["idea", "suggestedWebsites"],
            },
        },
    },
    "required": ["ideas"],
}


class LLMWrapper(ABC):
    """Base class for LLM interactions"""
    MAX_TOKENS = MAX_OUTPUT_TOKENS

    def __init__(self,
                 provider: str = "google_generative_ai",
                 model_name: str = DEFAULT_MODEL,
                 temperature: float = DEFAULT_TEMPERATURE,
                 top_p: float = DEFAULT_TOP_P,
                 api_key: Optional[str] = None,
                 agent_name: str = ""):
        self.provider = provider
        self.model_name = model_name
        self.temperature = temperature
        self.top_p = top_p
        self.api_key = api_key
        self.total_token_count = 0
        self.input_token_count = 0
        self.output_token_count = 0
        self.agent_name = agent_name
        self.client = None
        logger.info(f"Initializing {agent_name or 'LLM'} with model {model_name}, temperature {temperature}")
        self._setup_provider()

    def _setup_provider(self):
        if self.provider == "google_generative_ai":
            api_key = self.api_key or get_api_key()
            if not api_key:
                logger.warning("GEMINI_API_KEY not found. Generation requests will fail until it is set.")
                return
            self.client = genai.Client(api_key=api_key)
        # Add other providers here

    def generate_text(self,
                      prompt: str,
                      temperature: Optional[float] = None,
                      response_schema: Optional[Any] = None) -> str:
        """
        Send a single prompt to the provider and return the reply text.

        No retry: a failed call surfaces immediately as a ProviderError or
        PromptBlockedError. Returns an empty string when the provider sends
        back no text.
        """
        if self.provider != "google_generative_ai":
            raise ProviderError(f"Unsupported provider: {self.provider}")
        if self.client is None:
            raise ProviderError("Missing GEMINI_API_KEY environment variable")

        config = self._get_generation_config(temperature, response_schema)
        try:
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=config,
            )
        except genai_errors.APIError as e:
            raise ProviderError(f"Provider request failed: {e}") from e
        except httpx.HTTPError as e:
            raise ProviderError(f"Could not reach the provider: {e}") from e

        self._track_usage(response)
        self._check_blocked(response)
        return response.text or ""

    def _get_generation_config(self,
                               temperature: Optional[float],
                               response_schema: Optional[Any] = None) -> types.GenerateContentConfig:
        actual_temp = temperature if temperature is not None else self.temperature
        config = {
            "temperature": actual_temp,
            "top_p": self.top_p,
            "max_output_tokens": self.MAX_TOKENS,
        }
        if response_schema:
            config["response_schema"] = response_schema
            config["response_mime_type"] = "application/json"
        logger.debug(f"{self.agent_name} generation config: {config}")
        return types.GenerateContentConfig(**config)

    def _track_usage(self, response) -> None:
        usage = getattr(response, "usage_metadata", None)
        if usage is None:
            return
        self.total_token_count += usage.total_token_count or 0
        self.input_token_count += usage.prompt_token_count or 0
        self.output_token_count += usage.candidates_token_count or 0
        logger.info(f"Total tokens {self.agent_name}: {self.total_token_count} "
                    f"(Input: {self.input_token_count}, Output: {self.output_token_count})")

    @staticmethod
    def _check_blocked(response) -> None:
        feedback = getattr(response, "prompt_feedback", None)
        if feedback is not None and feedback.block_reason:
            raise PromptBlockedError(f"The prompt was blocked by safety settings ({feedback.block_reason})")
        for candidate in getattr(response, "candidates", None) or []:
            if candidate.finish_reason in BLOCKED_FINISH_REASONS:
                raise PromptBlockedError("The prompt was blocked: the reply was stopped by safety settings")

    def get_total_token_count(self) -> dict:
        return {
            "total": self.total_token_count,
            "input": self.input_token_count,
            "output": self.output_token_count,
        }


def _extract_json(text: str) -> Optional[Any]:
    """
    Decode the provider reply. Returns None for an empty reply and raises
    IdeaValidationError when there is text but no JSON object in it.
    """
    t = (text or "").strip()
    if not t:
        return None
    try:
        return json.loads(t)
    except json.JSONDecodeError:
        start, end = t.find("{"), t.rfind("}")
        if start == -1 or end <= start:
            raise IdeaValidationError("Provider reply is not valid JSON")
        try:
            return json.loads(t[start:end + 1])
        except json.JSONDecodeError as e:
            raise IdeaValidationError(f"Provider reply is not valid JSON: {e}") from e


def parse_ideas_response(text: str) -> HustleIdeasOutput:
    """
    Validate a provider reply against the ideas schema.

    An empty reply yields an empty idea list. Schema failures raise
    IdeaValidationError carrying the decoded payload for salvage.
    """
    payload = _extract_json(text)
    if payload is None:
        return HustleIdeasOutput()

    try:
        return HustleIdeasOutput.model_validate(payload)
    except ValidationError as e:
        if INVALID_URLS_MESSAGE in str(e):
            message = "Schema validation failed: the reply contains invalid URLs"
        else:
            message = f"Schema validation failed: {e.error_count()} error(s) in the reply"
        raise IdeaValidationError(message, partial=payload) from e


class HustleIdeator(LLMWrapper):
    """Turns a user's skills and target amount into daily hustle ideas"""
    agent_name = "Ideator"

    def __init__(self, template_name: str = DEFAULT_PROMPT_TEMPLATE, **kwargs):
        self.template_name = template_name
        super().__init__(agent_name=self.agent_name, **kwargs)

    def build_prompt(self, request: HustleIdeasInput) -> str:
        prompts = get_prompts(self.template_name)
        return prompts.format_hustle_prompt(request.user_skills, request.target_amount)

    def generate_ideas(self, request: HustleIdeasInput) -> HustleIdeasOutput:
        """Single prompt call, validated against the ideas schema"""
        prompt = self.build_prompt(request)
        logger.debug(f"Ideator prompt:\n{prompt}")
        text = self.generate_text(prompt, response_schema=IDEAS_RESPONSE_SCHEMA)
        result = parse_ideas_response(text)
        logger.info(f"Ideator returned {len(result.ideas)} ideas")
        return result
