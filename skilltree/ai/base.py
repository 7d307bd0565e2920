"""Base class for generative AI providers."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
import logging

from .config_store import AIConfigStore
from .credentials import decrypt_credentials
from .rate_limiter import RateLimiter
from ..db.models import AIAgentConfig
from ..exceptions import AIProviderError, AIProviderCallError, RateLimitExceededError
from ..models.content import AIAgentType


logger = logging.getLogger(__name__)

SOURCE_CONTEXT_EXCERPT = 500

ANALYZE_SOURCES_TEMPERATURE = 0.2


class AIProvider(ABC):
    """
    Abstract base class for AI vendor integrations.

    Configuration (endpoint, model, credentials, limits) is read from the
    config store on every call. Subclasses only implement the vendor request.
    """

    display_name = "AI"

    def __init__(
        self,
        config_store: AIConfigStore,
        credentials_key: Optional[str] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ):
        self.config_store = config_store
        self.credentials_key = credentials_key
        self.rate_limiter = rate_limiter or RateLimiter()

    @property
    @abstractmethod
    def agent_type(self) -> AIAgentType:
        pass

    @abstractmethod
    async def _complete(
        self,
        config: AIAgentConfig,
        api_key: str,
        prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """Send one prompt to the vendor and return the generated text."""
        pass

    async def generate_content(
        self,
        prompt: str,
        sources: Optional[Sequence] = None,
        max_tokens: int = 4096,
        temperature: float = 0.7,
    ) -> str:
        """
        Generate text for a prompt, with optional sources appended as context.

        Raises:
            AIProviderCallError: configuration missing or the vendor call failed
        """
        full_prompt = prompt
        if sources:
            full_prompt = f"{prompt}\n\n{self.format_source_context(sources)}"

        config = self._get_config()
        return await self._call(config, full_prompt, max_tokens, temperature, action="generate content")

    async def analyze_sources(self, sources: Sequence, extraction_prompt: str) -> str:
        """Extract structured information from a set of sources."""
        config = self._get_config()
        prompt = f"{extraction_prompt}\n\n{self.format_source_context(sources)}"

        return await self._call(
            config,
            prompt,
            config.max_tokens,
            ANALYZE_SOURCES_TEMPERATURE,
            action="analyze sources",
        )

    async def is_available(self) -> bool:
        """Configured, active and holding credentials. Never raises."""
        try:
            config = self._get_config()
            return bool(config.active and config.encrypted_credentials and config.encrypted_credentials.strip())
        except Exception:
            return False

    async def _call(
        self,
        config: AIAgentConfig,
        prompt: str,
        max_tokens: int,
        temperature: float,
        action: str,
    ) -> str:
        limited, info = self.rate_limiter.is_rate_limited(self.agent_type.value, config.rate_limit)
        if limited:
            raise RateLimitExceededError(
                f"{self.display_name} rate limit exceeded ({info['limit']}/min)",
                retry_after=info.get('retry_after'),
            )

        try:
            api_key = decrypt_credentials(config.encrypted_credentials or "", self.credentials_key)
            logger.info(f"{self.display_name}: {action} with {config.default_model} (max_tokens={max_tokens})")
            text = await self._complete(config, api_key, prompt, max_tokens, temperature)
        except AIProviderError:
            raise
        except Exception as e:
            raise AIProviderCallError(f"Failed to {action} with {self.display_name}: {e}") from e

        if not text:
            raise AIProviderCallError(f"Failed to {action} with {self.display_name}: empty response")
        return text

    def _get_config(self) -> AIAgentConfig:
        config = self.config_store.find_by_agent_type(self.agent_type)
        if config is None:
            raise AIProviderCallError(f"{self.display_name} configuration not found")
        return config

    @staticmethod
    def format_source_context(sources: Sequence) -> str:
        """Numbered reference list the model can cite."""
        lines = ["Reference sources:"]
        for i, source in enumerate(sources, 1):
            lines.append(f"[{i}] {source.title} ({source.url})")
            summary = getattr(source, "summary", None)
            if summary:
                lines.append(summary[:SOURCE_CONTEXT_EXCERPT])
        return "\n".join(lines)
