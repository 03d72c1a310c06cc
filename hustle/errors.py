# Error types raised by the idea-generation flow

from typing import Any, Optional


class HustleGenerationError(Exception):
    """Base class for failures of a single idea-generation request."""

    def __init__(self, message: str, partial: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        # Decoded provider payload, when one exists, for best-effort salvage
        self.partial = partial


class ProviderError(HustleGenerationError):
    """The provider could not be reached or rejected the request."""


class PromptBlockedError(HustleGenerationError):
    """The provider's safety filters blocked the prompt or the reply."""


class IdeaValidationError(HustleGenerationError):
    """The provider replied, but the reply does not match the ideas schema."""

    @property
    def has_invalid_urls(self) -> bool:
        return "invalid URLs" in self.message
