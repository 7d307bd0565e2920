"""
Content models for the research pipeline.
Unified value objects for sources found by any research provider.
"""

from datetime import date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator


EXCERPT_MAX_LENGTH = 500


class SourceType(str, Enum):
    """Kinds of external references a Source can point at."""
    WEB_SEARCH = "web_search"
    ENCYCLOPEDIA = "encyclopedia"
    PREPRINT_ARCHIVE = "preprint_archive"
    VIDEO = "video"
    COURSE_PLATFORM = "course_platform"
    TEXTBOOK = "textbook"
    PAPER = "paper"
    BLOG = "blog"
    DOCUMENTATION = "documentation"
    OTHER = "other"


class AIAgentType(str, Enum):
    """Generative AI vendor families."""
    GEMINI = "gemini"
    OPENAI = "openai"
    CLAUDE = "claude"
    HUGGINGFACE = "huggingface"
    COHERE = "cohere"
    CUSTOM = "custom"


class SourceData(BaseModel):
    """
    Unsaved source returned by a research provider.
    Every result (arXiv entry, Wikipedia page, web hit) gets normalized
    to this shape before it is persisted by URL.
    """

    title: str
    url: str
    source_type: SourceType = Field(..., description="Research provider that found it")

    summary: Optional[str] = None
    authors: Optional[str] = None
    publication_date: Optional[date] = None
    relevance_score: Optional[float] = None
    excerpt: Optional[str] = None
    metadata: Optional[dict] = None

    @field_validator("excerpt")
    @classmethod
    def _bound_excerpt(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value[:EXCERPT_MAX_LENGTH]

    @classmethod
    def with_excerpt(cls, **kwargs) -> "SourceData":
        """Build a SourceData whose excerpt is derived from the summary."""
        summary = kwargs.get("summary")
        if summary and not kwargs.get("excerpt"):
            kwargs["excerpt"] = summary[:EXCERPT_MAX_LENGTH]
        return cls(**kwargs)
