"""Wikipedia encyclopedia research source using the MediaWiki API."""

import re
from typing import Optional
from urllib.parse import unquote
import logging

from .base import HTTPResearchSource
from ..exceptions import ResearchSourceError
from ..models.content import SourceData, SourceType


logger = logging.getLogger(__name__)

WIKIPEDIA_API_URL = "https://en.wikipedia.org/w/api.php"
WIKI_TITLE_PATTERN = re.compile(r"wikipedia\.org/wiki/([^#?]+)")


class WikipediaResearchSource(HTTPResearchSource):
    """
    Research source for English Wikipedia.
    Uses OpenSearch for discovery and the extracts API for page details.
    """

    @property
    def source_type(self) -> SourceType:
        return SourceType.ENCYCLOPEDIA

    async def search(self, query: str, max_results: int = 10) -> list[SourceData]:
        params = {
            "action": "opensearch",
            "search": query,
            "limit": max_results,
            "namespace": 0,
            "format": "json",
        }

        try:
            async with self._http_client() as client:
                response = await client.get(WIKIPEDIA_API_URL, params=params)
                response.raise_for_status()
                data = response.json()
            return self._parse_search_response(data)[:max_results]
        except Exception as e:
            raise ResearchSourceError(f"Failed to search Wikipedia: {e}", self.source_type.value) from e

    async def fetch_details(self, url: str) -> Optional[SourceData]:
        title = self.extract_page_title(url)
        if not title:
            return None

        params = {
            "action": "query",
            "prop": "extracts|info",
            "exintro": "true",
            "explaintext": "true",
            "titles": title,
            "inprop": "url",
            "format": "json",
        }

        try:
            async with self._http_client() as client:
                response = await client.get(WIKIPEDIA_API_URL, params=params)
                response.raise_for_status()
                data = response.json()
        except Exception as e:
            raise ResearchSourceError(f"Failed to fetch Wikipedia details: {e}", self.source_type.value) from e

        return self._parse_details_response(data, url)

    def can_handle(self, url: str) -> bool:
        return "wikipedia.org" in url

    @staticmethod
    def extract_page_title(url: str) -> Optional[str]:
        match = WIKI_TITLE_PATTERN.search(url)
        if not match:
            return None
        return unquote(match.group(1)).replace("_", " ")

    def _parse_search_response(self, data) -> list[SourceData]:
        """
        OpenSearch returns [query, [titles], [descriptions], [urls]].
        Entries missing a title or URL are skipped.
        """
        if not isinstance(data, list) or len(data) < 4:
            raise ValueError("Unexpected OpenSearch response shape")

        titles, descriptions, urls = data[1], data[2], data[3]
        items = []

        for i, title in enumerate(titles):
            try:
                description = descriptions[i] if i < len(descriptions) else ""
                url = urls[i] if i < len(urls) else ""

                if not title or not str(title).strip() or not url or not str(url).strip():
                    continue

                items.append(
                    SourceData.with_excerpt(
                        title=str(title),
                        url=str(url),
                        source_type=SourceType.ENCYCLOPEDIA,
                        summary=str(description or ""),
                    )
                )
            except Exception as e:
                logger.debug(f"Error parsing Wikipedia result {i}: {e}")

        return items

    def _parse_details_response(self, data: dict, url: str) -> Optional[SourceData]:
        pages = data.get("query", {}).get("pages", {})

        for page in pages.values():
            title = page.get("title", "")
            if not title.strip():
                continue

            extract = page.get("extract", "") or ""
            return SourceData(
                title=title,
                url=url,
                source_type=SourceType.ENCYCLOPEDIA,
                summary=extract[:1000],
                excerpt=extract,
            )

        return None
