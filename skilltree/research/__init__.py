"""Research source providers and the fan-out aggregator."""

from .base import ResearchSource, HTTPResearchSource
from .web_search import WebSearchResearchSource
from .wikipedia import WikipediaResearchSource
from .arxiv import ArxivResearchSource
from .aggregator import SourceAggregator, per_provider_quota
from ..config.settings import get_settings


def create_default_research_sources(settings=None) -> list[ResearchSource]:
    """Web search, encyclopedia and preprint archive, in that registration order."""
    settings = settings or get_settings()
    http_options = {
        "timeout": settings.http_timeout_seconds,
        "user_agent": settings.research_user_agent,
    }

    return [
        WebSearchResearchSource(api_key=settings.exa_api_key, **http_options),
        WikipediaResearchSource(**http_options),
        ArxivResearchSource(**http_options),
    ]


__all__ = [
    "ResearchSource",
    "HTTPResearchSource",
    "WebSearchResearchSource",
    "WikipediaResearchSource",
    "ArxivResearchSource",
    "SourceAggregator",
    "per_provider_quota",
    "create_default_research_sources",
]
