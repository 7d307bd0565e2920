"""
Domain Generation Pipeline - research a topic, ask an AI provider for a
skill tree, and persist the domain with links to the sources it used.

Usage:
    python -m skilltree.pipeline.domain_generation --topic "Quantum Computing"
    python -m skilltree.pipeline.domain_generation --topic "Rust" --agent openai --max-sources 6
"""

import asyncio
import argparse
import logging
from datetime import datetime
from enum import Enum
from typing import Optional

from .prompts import build_domain_prompt
from ..ai import SUPPORTED_AGENTS
from ..ai.base import AIProvider
from ..db.models import Domain, Source
from ..exceptions import (
    AIProviderNotFoundError,
    AIProviderUnavailableError,
    GenerationError,
)
from ..models.content import AIAgentType, EXCERPT_MAX_LENGTH
from ..models.generation import DomainGenerationRequest, DomainGenerationResponse
from ..research.aggregator import SourceAggregator
from ..services.domain_service import DomainService
from ..services.source_service import SourceService


logger = logging.getLogger(__name__)

SOURCE_LINK_RELEVANCE = 0.8
STORED_PROMPT_LENGTH = 1000


class GenerationStage(str, Enum):
    STARTED = "started"
    RESEARCHED = "researched"
    PROVIDER_VALIDATED = "provider_validated"
    GENERATED = "generated"
    PERSISTED = "persisted"
    FAILED = "failed"


class DomainGenerationPipeline:
    """
    Orchestrates one generation run:

    1. Research the topic across all providers
    2. Select and validate the requested AI provider
    3. Generate the skill tree text with the researched sources as context
    4. Create the domain and link every researched source to it

    The AI response is stored as the domain prompt; it is not parsed into
    categories or skills.
    """

    def __init__(
        self,
        aggregator: SourceAggregator,
        ai_providers: list[AIProvider],
        domain_service: DomainService,
        source_service: SourceService,
    ):
        self.aggregator = aggregator
        self.ai_providers = list(ai_providers)
        self.domain_service = domain_service
        self.source_service = source_service

        self.stage: Optional[GenerationStage] = None
        self.stage_history: list[tuple[GenerationStage, datetime]] = []

    async def generate_domain(
        self,
        topic: str,
        ai_agent_type: AIAgentType,
        max_sources: int = 10,
    ) -> Domain:
        """
        Run the whole pipeline for a topic.

        Raises whatever stopped the run; the stage it stopped at is
        recorded as FAILED in stage_history.
        """
        self.stage_history = []
        self._advance(GenerationStage.STARTED, topic)

        try:
            sources = await self.aggregator.research_topic(topic, max_sources)
            self._advance(GenerationStage.RESEARCHED, f"{len(sources)} sources")

            provider = self.select_provider(ai_agent_type)
            if not await provider.is_available():
                raise AIProviderUnavailableError(
                    f"AI provider {ai_agent_type.value} is not available"
                )
            self._advance(GenerationStage.PROVIDER_VALIDATED, ai_agent_type.value)

            prompt = build_domain_prompt(topic, sources)
            response = await provider.generate_content(prompt, sources)
            self._advance(GenerationStage.GENERATED, f"{len(response)} chars")

            domain = self._create_domain_from_response(topic, response, sources)
            self._advance(GenerationStage.PERSISTED, f"domain {domain.id}")

            return domain

        except Exception as e:
            logger.error(f"Domain generation failed for '{topic}' after {self.stage.value}: {e}")
            self._advance(GenerationStage.FAILED, str(e))
            raise

    async def run(self, request: DomainGenerationRequest) -> DomainGenerationResponse:
        """
        Boundary entry point.
        Raises GenerationError carrying the last stage reached.
        """
        try:
            domain = await self.generate_domain(
                request.topic,
                request.ai_agent_type,
                request.max_sources,
            )
        except Exception as e:
            reached = self.stage_history[-2][0].value if len(self.stage_history) > 1 else None
            raise GenerationError(f"Failed to generate domain '{request.topic}': {e}", stage=reached) from e

        return DomainGenerationResponse.from_domain(domain)

    def select_provider(self, ai_agent_type: AIAgentType) -> AIProvider:
        for provider in self.ai_providers:
            if provider.agent_type == ai_agent_type:
                return provider
        raise AIProviderNotFoundError(f"AI provider not found for type: {ai_agent_type.value}")

    def _create_domain_from_response(self, topic: str, response: str, sources: list[Source]) -> Domain:
        created = self.domain_service.create_domain(
            name=topic,
            description=f"AI-generated domain for {topic}",
            prompt=response[:STORED_PROMPT_LENGTH],
        )
        domain = self.domain_service.get_domain(created.id)

        linked = 0
        seen_ids = set()
        for source in sources:
            # Providers can return the same URL; link each source once per run
            if source.id in seen_ids:
                continue
            seen_ids.add(source.id)

            try:
                self.source_service.link_source_to_domain(
                    source,
                    domain,
                    relevance_score=SOURCE_LINK_RELEVANCE,
                    relevant_excerpt=source.summary[:EXCERPT_MAX_LENGTH] if source.summary else None,
                    used_for_generation=True,
                )
                linked += 1
            except Exception as e:
                logger.error(f"Skipping link of source {source.id} to domain {domain.id}: {e}")

        logger.info(f"Linked {linked}/{len(seen_ids)} sources to domain {domain.id}")

        return self.domain_service.get_domain(domain.id)

    def _advance(self, stage: GenerationStage, detail: str = ""):
        self.stage = stage
        self.stage_history.append((stage, datetime.now()))
        logger.info(f"[{stage.value}] {detail}")


def build_pipeline(session_factory, settings) -> DomainGenerationPipeline:
    """Wire a pipeline with the default research sources and AI providers."""
    from ..ai import AIConfigStore, create_default_providers, seed_agent_configs
    from ..research import create_default_research_sources

    config_store = AIConfigStore(session_factory)
    seed_agent_configs(config_store, settings)

    source_service = SourceService(session_factory)
    aggregator = SourceAggregator(create_default_research_sources(settings), source_service)

    return DomainGenerationPipeline(
        aggregator=aggregator,
        ai_providers=create_default_providers(config_store, settings.credentials_key),
        domain_service=DomainService(session_factory),
        source_service=source_service,
    )


async def run_generation(topic: str, agent: AIAgentType, max_sources: int) -> DomainGenerationResponse:
    from ..config.settings import get_settings
    from ..db.models import init_db, get_session_factory

    settings = get_settings()
    engine = init_db(settings.database_url)
    pipeline = build_pipeline(get_session_factory(engine), settings)

    request = DomainGenerationRequest(topic=topic, ai_agent_type=agent, max_sources=max_sources)
    return await pipeline.run(request)


def main():
    from ..utils.logger import configure_logging
    from ..config.settings import get_settings

    parser = argparse.ArgumentParser(description="SkillTree Domain Generation")
    parser.add_argument(
        "--topic",
        required=True,
        help="Topic to research and generate a domain for",
    )
    parser.add_argument(
        "--agent",
        choices=[t.value for t in SUPPORTED_AGENTS],
        default=None,
        help="AI provider (defaults to DEFAULT_AGENT)",
    )
    parser.add_argument(
        "--max-sources",
        type=int,
        default=10,
        help="Maximum number of research sources",
    )

    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_dir)

    agent = AIAgentType(args.agent) if args.agent else settings.default_agent

    try:
        result = asyncio.run(run_generation(args.topic, agent, args.max_sources))
    except GenerationError as e:
        print(f"\nGeneration failed at stage {e.stage}: {e}")
        raise SystemExit(1)

    print("\n" + "=" * 60)
    print("DOMAIN GENERATED")
    print("=" * 60)
    print(f"Domain: {result.domain_name} (id {result.domain_id})")
    print(f"Sources used: {result.sources_used}")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    main()
