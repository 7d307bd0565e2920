"""Source Aggregator: concurrent research fan-out across all providers."""

import asyncio
from datetime import datetime
from typing import Optional
import logging

from .base import ResearchSource
from ..db.models import Source
from ..models.content import SourceType
from ..services.source_service import SourceService


logger = logging.getLogger(__name__)


def per_provider_quota(max_sources: int, provider_count: int) -> int:
    """Results requested from each provider; never less than one."""
    return max(1, max_sources // max(1, provider_count))


class SourceAggregator:
    """
    Fans a topic out to every configured research source concurrently,
    persists what comes back (upsert by URL) and bounds the result.
    """

    def __init__(self, research_sources: list[ResearchSource], source_service: SourceService):
        self.research_sources = list(research_sources)
        self.source_service = source_service
        self.last_research: Optional[datetime] = None
        self.total_sources_found = 0

    async def research_topic(self, topic: str, max_sources: int) -> list[Source]:
        """
        Research a topic across all sources.

        Order of the result is provider registration order, then each
        provider's own order. No ranking happens here.
        """
        logger.info(f"Researching topic: {topic}")

        if not self.research_sources:
            logger.warning("No research sources configured")
            return []

        quota = per_provider_quota(max_sources, len(self.research_sources))

        tasks = [
            research_source.search_with_tracking(topic, quota)
            for research_source in self.research_sources
        ]

        # gather preserves task order regardless of completion order
        results = await asyncio.gather(*tasks, return_exceptions=True)

        candidates = []
        for research_source, result in zip(self.research_sources, results):
            if isinstance(result, list):
                candidates.extend(result)
            elif isinstance(result, BaseException):
                logger.error(f"Failed to search {research_source.source_type.value}: {result}")

        persisted = []
        for candidate in candidates:
            try:
                persisted.append(self.source_service.create_source(candidate))
            except Exception as e:
                logger.error(f"Failed to save source {candidate.url}: {e}")

        self.last_research = datetime.now()
        self.total_sources_found += len(persisted)

        logger.info(
            f"Found {len(persisted)} sources from {len(self.research_sources)} providers "
            f"(quota {quota} each)"
        )

        return persisted[:max_sources]

    async def fetch_details(self, url: str) -> Optional[Source]:
        """
        Fetch a single URL through the provider that recognizes it and persist it.
        Specific providers win over general web search.
        """
        provider = self.provider_for_url(url)
        if provider is None:
            logger.warning(f"No research source can handle {url}")
            return None

        data = await provider.fetch_details(url)
        if data is None:
            return None

        return self.source_service.create_source(data)

    def provider_for_url(self, url: str) -> Optional[ResearchSource]:
        matching = [s for s in self.research_sources if s.can_handle(url)]
        specific = [s for s in matching if s.source_type != SourceType.WEB_SEARCH]
        if specific:
            return specific[0]
        return matching[0] if matching else None

    def get_stats(self) -> dict:
        return {
            "total_providers": len(self.research_sources),
            "last_research": self.last_research.isoformat() if self.last_research else None,
            "total_sources_found": self.total_sources_found,
            "providers": [s.get_stats() for s in self.research_sources],
        }
