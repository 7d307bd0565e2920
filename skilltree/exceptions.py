"""Error taxonomy for research, AI generation and persistence."""

from typing import Optional


class SkillTreeError(Exception):
    """Base class for all SkillTree errors."""
    pass


# ============== Research ==============

class ResearchSourceError(SkillTreeError):
    """A single research provider failed to search or fetch."""

    def __init__(self, message: str, source_type: Optional[str] = None):
        super().__init__(message)
        self.source_type = source_type


# ============== AI Providers ==============

class AIProviderError(SkillTreeError):
    """Base class for AI provider failures."""
    pass


class AIProviderNotFoundError(AIProviderError):
    """No provider is registered for the requested agent type."""
    pass


class AIProviderUnavailableError(AIProviderError):
    """Provider exists but is not configured, inactive or missing credentials."""
    pass


class AIProviderCallError(AIProviderError):
    """The vendor call itself failed (transport, auth, quota)."""
    pass


class RateLimitExceededError(AIProviderCallError):
    """The provider's configured requests-per-minute budget is used up."""

    def __init__(self, message: str, retry_after: Optional[int] = None):
        super().__init__(message)
        self.retry_after = retry_after


# ============== Persistence ==============

class SourceLinkError(SkillTreeError):
    """Failed to persist a single domain-source link."""
    pass


class DomainCreationError(SkillTreeError):
    """Domain name collision or persistence failure while creating a domain."""
    pass


class DomainNotFoundError(SkillTreeError):
    pass


# ============== Pipeline ==============

class GenerationError(SkillTreeError):
    """
    A generation run failed.

    Carries the stage the run had reached so callers can report where it stopped.
    """

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.stage = stage
