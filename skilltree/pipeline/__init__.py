"""Domain generation pipeline."""

from .prompts import build_domain_prompt
from .domain_generation import DomainGenerationPipeline, GenerationStage, build_pipeline

__all__ = [
    "build_domain_prompt",
    "DomainGenerationPipeline",
    "GenerationStage",
    "build_pipeline",
]
