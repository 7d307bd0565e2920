"""General web search research source (Exa neural search + page scraping)."""

import asyncio
import re
from datetime import date
from typing import Optional
import logging

from exa_py import Exa

from .base import HTTPResearchSource
from ..exceptions import ResearchSourceError
from ..models.content import SourceData, SourceType


logger = logging.getLogger(__name__)

TITLE_PATTERN = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE | re.DOTALL)
META_DESCRIPTION_PATTERN = re.compile(
    r"<meta[^>]*name=[\"']description[\"'][^>]*content=[\"']([^\"']*)[\"']",
    re.IGNORECASE,
)
PARAGRAPH_PATTERN = re.compile(r"<p[^>]*>(.*?)</p>", re.IGNORECASE | re.DOTALL)

NO_DESCRIPTION = "No description available"


class WebSearchResearchSource(HTTPResearchSource):
    """
    Research source for the open web.

    Search goes through Exa (semantic search, better at finding substantive
    articles than keyword engines). Details for an arbitrary URL are scraped
    directly from the page's title and meta description.
    """

    def __init__(self, api_key: Optional[str] = None, exa_client: Optional[Exa] = None, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key
        self._client: Optional[Exa] = exa_client

    @property
    def source_type(self) -> SourceType:
        return SourceType.WEB_SEARCH

    @property
    def client(self) -> Exa:
        """Lazy load the Exa client."""
        if self._client is None:
            if not self.api_key:
                raise ResearchSourceError("EXA_API_KEY not set", self.source_type.value)
            self._client = Exa(api_key=self.api_key)
        return self._client

    async def search(self, query: str, max_results: int = 10) -> list[SourceData]:
        try:
            # exa_py is synchronous; keep it off the event loop
            response = await asyncio.to_thread(
                self.client.search_and_contents,
                query,
                type="neural",
                num_results=max_results,
                text=True,
                highlights=True,
            )
        except ResearchSourceError:
            raise
        except Exception as e:
            raise ResearchSourceError(f"Failed to perform web search: {e}", self.source_type.value) from e

        items = []
        for result in response.results:
            try:
                item = self._parse_result(result)
                if item:
                    items.append(item)
            except Exception as e:
                logger.debug(f"Error parsing web search result: {e}")

        return items[:max_results]

    async def fetch_details(self, url: str) -> Optional[SourceData]:
        try:
            async with self._http_client() as client:
                response = await client.get(url)
                response.raise_for_status()
                html = response.text
        except Exception as e:
            raise ResearchSourceError(f"Failed to fetch web page details: {e}", self.source_type.value) from e

        description = self.extract_description(html)
        return SourceData.with_excerpt(
            title=self.extract_title(html, url),
            url=url,
            source_type=SourceType.WEB_SEARCH,
            summary=description,
        )

    def can_handle(self, url: str) -> bool:
        return url.startswith("http://") or url.startswith("https://")

    def _parse_result(self, result) -> Optional[SourceData]:
        url = getattr(result, "url", None)
        if not url:
            return None

        highlights = getattr(result, "highlights", None) or []
        text = getattr(result, "text", None) or ""
        summary = highlights[0] if highlights else text[:1000]

        return SourceData.with_excerpt(
            title=getattr(result, "title", None) or url,
            url=url,
            source_type=SourceType.WEB_SEARCH,
            summary=summary or None,
            authors=getattr(result, "author", None),
            publication_date=self._parse_date(getattr(result, "published_date", None)),
            relevance_score=getattr(result, "score", None),
        )

    def _parse_date(self, published: Optional[str]) -> Optional[date]:
        if not published:
            return None
        try:
            return date.fromisoformat(published[:10])
        except ValueError:
            return None

    @staticmethod
    def extract_title(html: str, fallback_url: str) -> str:
        match = TITLE_PATTERN.search(html)
        if match:
            title = strip_html(match.group(1))
            if title:
                return title
        return fallback_url

    @staticmethod
    def extract_description(html: str) -> str:
        """Meta description, else the first substantial paragraph."""
        meta = META_DESCRIPTION_PATTERN.search(html)
        if meta:
            return meta.group(1).strip()

        for paragraph in PARAGRAPH_PATTERN.finditer(html):
            text = strip_html(paragraph.group(1))
            if len(text) > 50:
                return text[:1000]

        return NO_DESCRIPTION


def strip_html(text: str) -> str:
    """Basic HTML tag stripping."""
    # Remove HTML tags
    clean = re.sub(r"<[^>]+>", "", text)
    # Decode common HTML entities
    clean = clean.replace("&nbsp;", " ")
    clean = clean.replace("&amp;", "&")
    clean = clean.replace("&lt;", "<")
    clean = clean.replace("&gt;", ">")
    clean = clean.replace("&quot;", '"')
    clean = clean.replace("&#39;", "'")
    # Clean up whitespace
    return re.sub(r"\s+", " ", clean).strip()
