"""arXiv preprint archive research source using the public Atom API."""

import re
from datetime import date
from typing import Optional
import feedparser
import logging

from .base import HTTPResearchSource
from ..exceptions import ResearchSourceError
from ..models.content import SourceData, SourceType


logger = logging.getLogger(__name__)

ARXIV_API_URL = "http://export.arxiv.org/api/query"
ARXIV_ID_PATTERN = re.compile(r"arxiv\.org/(?:abs|pdf)/(\d+\.\d+)")


class ArxivResearchSource(HTTPResearchSource):
    """
    Research source for arXiv preprints.
    Free, no API key required. Responses are Atom feeds parsed with feedparser.
    """

    @property
    def source_type(self) -> SourceType:
        return SourceType.PREPRINT_ARCHIVE

    async def search(self, query: str, max_results: int = 10) -> list[SourceData]:
        """Search all arXiv fields, most relevant first."""
        params = {
            "search_query": f"all:{query}",
            "max_results": max_results,
            "sortBy": "relevance",
            "sortOrder": "descending",
        }

        try:
            async with self._http_client() as client:
                response = await client.get(ARXIV_API_URL, params=params)
                response.raise_for_status()
            return self._parse_feed(response.text)[:max_results]
        except Exception as e:
            raise ResearchSourceError(f"Failed to search arXiv: {e}", self.source_type.value) from e

    async def fetch_details(self, url: str) -> Optional[SourceData]:
        arxiv_id = self.extract_arxiv_id(url)
        if not arxiv_id:
            return None

        try:
            async with self._http_client() as client:
                response = await client.get(ARXIV_API_URL, params={"id_list": arxiv_id})
                response.raise_for_status()
            entries = self._parse_feed(response.text)
        except Exception as e:
            raise ResearchSourceError(f"Failed to fetch arXiv details: {e}", self.source_type.value) from e

        return entries[0] if entries else None

    def can_handle(self, url: str) -> bool:
        return "arxiv.org" in url

    @staticmethod
    def extract_arxiv_id(url: str) -> Optional[str]:
        match = ARXIV_ID_PATTERN.search(url)
        return match.group(1) if match else None

    def _parse_feed(self, xml_text: str) -> list[SourceData]:
        """Parse an Atom response; malformed entries are skipped."""
        feed = feedparser.parse(xml_text)

        if feed.bozo and not feed.entries:
            raise ValueError(f"Unparseable arXiv response: {feed.bozo_exception}")

        items = []
        for entry in feed.entries:
            try:
                item = self._parse_entry(entry)
                if item:
                    items.append(item)
            except Exception as e:
                logger.debug(f"Error parsing arXiv entry: {e}")

        return items

    def _parse_entry(self, entry: dict) -> Optional[SourceData]:
        title = _collapse_whitespace(entry.get("title", ""))
        entry_id = entry.get("id")
        if not title or not entry_id:
            return None

        summary = _collapse_whitespace(entry.get("summary", ""))
        authors = ", ".join(
            author.get("name", "") for author in entry.get("authors", []) if author.get("name")
        )

        return SourceData.with_excerpt(
            title=title,
            url=entry_id,
            source_type=SourceType.PREPRINT_ARCHIVE,
            summary=summary,
            authors=authors or None,
            publication_date=self._parse_date(entry.get("published")),
        )

    def _parse_date(self, published: Optional[str]) -> Optional[date]:
        if not published:
            return None
        try:
            return date.fromisoformat(published[:10])
        except ValueError:
            return None


def _collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip()
