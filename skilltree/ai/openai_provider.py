"""OpenAI chat-completions provider."""

from openai import AsyncOpenAI

from .base import AIProvider
from ..db.models import AIAgentConfig
from ..models.content import AIAgentType


class OpenAIProvider(AIProvider):
    """
    OpenAI (or any OpenAI-compatible endpoint set as api_endpoint).
    """

    display_name = "OpenAI"

    @property
    def agent_type(self) -> AIAgentType:
        return AIAgentType.OPENAI

    async def _complete(
        self,
        config: AIAgentConfig,
        api_key: str,
        prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        client = AsyncOpenAI(api_key=api_key, base_url=config.api_endpoint or None)

        messages = []
        if config.system_prompt:
            messages.append({"role": "system", "content": config.system_prompt})
        messages.append({"role": "user", "content": prompt})

        response = await client.chat.completions.create(
            model=config.default_model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature,
        )

        return response.choices[0].message.content
