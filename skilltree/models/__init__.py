"""Data models for the generation pipeline."""

from .content import SourceData, SourceType, AIAgentType, EXCERPT_MAX_LENGTH
from .generation import (
    GenerationStatus,
    DomainGenerationRequest,
    DomainGenerationResponse,
)

__all__ = [
    # Content models
    "SourceData",
    "SourceType",
    "AIAgentType",
    "EXCERPT_MAX_LENGTH",
    # Generation boundary
    "GenerationStatus",
    "DomainGenerationRequest",
    "DomainGenerationResponse",
]
