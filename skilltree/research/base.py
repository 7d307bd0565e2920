"""Base class for research source providers."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
import httpx
import logging

from ..models.content import SourceData, SourceType


logger = logging.getLogger(__name__)


class ResearchSource(ABC):
    """
    Abstract base class for research providers.
    Each implementation queries one external corpus (web search,
    encyclopedia, preprint archive) and normalizes hits to SourceData.
    """

    def __init__(self):
        self.last_search: Optional[datetime] = None
        self.search_count = 0
        self.error_count = 0
        self.last_error: Optional[str] = None

    @property
    @abstractmethod
    def source_type(self) -> SourceType:
        pass

    @abstractmethod
    async def search(self, query: str, max_results: int = 10) -> list[SourceData]:
        """
        Search the corpus for a query.

        Args:
            query: Search query
            max_results: Maximum number of results to return

        Returns:
            List of unsaved SourceData items

        Raises:
            ResearchSourceError: if the request or response handling fails
        """
        pass

    @abstractmethod
    async def fetch_details(self, url: str) -> Optional[SourceData]:
        """
        Fetch a single detailed source by URL.
        Returns None when the URL is not something this provider can resolve.
        """
        pass

    @abstractmethod
    def can_handle(self, url: str) -> bool:
        """Check (without I/O) whether this provider recognizes the URL."""
        pass

    async def search_with_tracking(self, query: str, max_results: int = 10) -> list[SourceData]:
        """
        Search with error tracking.
        Never raises: a failed provider contributes no results.
        """
        try:
            logger.info(f"Searching {self.source_type.value} for '{query}' (limit={max_results})")
            results = await self.search(query, max_results)
            self.last_search = datetime.now()
            self.search_count += 1
            logger.info(f"Found {len(results)} items from {self.source_type.value}")
            return results
        except Exception as e:
            self.error_count += 1
            self.last_error = str(e)
            logger.error(f"Failed to search {self.source_type.value}: {e}")
            return []

    def get_stats(self) -> dict:
        return {
            "source_type": self.source_type.value,
            "last_search": self.last_search.isoformat() if self.last_search else None,
            "search_count": self.search_count,
            "error_count": self.error_count,
            "last_error": self.last_error,
        }


class HTTPResearchSource(ResearchSource):
    """
    Research source backed by an HTTP API.
    A transport can be injected (e.g. httpx.MockTransport) for offline use.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = "SkillTreeResearchBot/1.0",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__()
        self.timeout = timeout
        self.user_agent = user_agent
        self.transport = transport

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self.transport,
            headers={"User-Agent": self.user_agent},
            follow_redirects=True,
        )
