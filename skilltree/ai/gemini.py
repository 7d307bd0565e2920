"""Google Gemini provider."""

from google import genai
from google.genai import types

from .base import AIProvider
from ..db.models import AIAgentConfig
from ..models.content import AIAgentType


class GeminiAIProvider(AIProvider):
    """Gemini via the google-genai async client."""

    display_name = "Gemini"

    @property
    def agent_type(self) -> AIAgentType:
        return AIAgentType.GEMINI

    async def _complete(
        self,
        config: AIAgentConfig,
        api_key: str,
        prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        client = genai.Client(api_key=api_key)

        response = await client.aio.models.generate_content(
            model=config.default_model,
            contents=prompt,
            config=types.GenerateContentConfig(
                max_output_tokens=max_tokens,
                temperature=temperature,
                system_instruction=config.system_prompt or None,
            ),
        )

        return response.text
