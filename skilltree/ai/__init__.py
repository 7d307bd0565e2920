"""Generative AI providers."""

from typing import Optional

from .base import AIProvider
from .config_store import AIConfigStore, seed_agent_configs
from .credentials import encrypt_credentials, decrypt_credentials
from .gemini import GeminiAIProvider
from .openai_provider import OpenAIProvider
from .rate_limiter import RateLimiter
from ..models.content import AIAgentType


# Agent types with a provider implementation, in registration order
SUPPORTED_AGENTS = (AIAgentType.GEMINI, AIAgentType.OPENAI)


def create_default_providers(
    config_store: AIConfigStore,
    credentials_key: Optional[str] = None,
) -> list[AIProvider]:
    """All provider implementations, sharing one rate limiter."""
    limiter = RateLimiter()
    return [
        GeminiAIProvider(config_store, credentials_key, limiter),
        OpenAIProvider(config_store, credentials_key, limiter),
    ]


__all__ = [
    "AIProvider",
    "AIConfigStore",
    "seed_agent_configs",
    "GeminiAIProvider",
    "OpenAIProvider",
    "RateLimiter",
    "encrypt_credentials",
    "decrypt_credentials",
    "create_default_providers",
    "SUPPORTED_AGENTS",
]
