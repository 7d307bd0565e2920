"""Request/response models for the domain generation boundary."""

from enum import Enum
from pydantic import BaseModel, Field, field_validator

from .content import AIAgentType


class GenerationStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class DomainGenerationRequest(BaseModel):
    """Input for a generation run."""

    topic: str = Field(..., description="Subject area to research and generate")
    ai_agent_type: AIAgentType = AIAgentType.GEMINI
    max_sources: int = Field(default=10, ge=1, le=50)

    # Accepted for forward compatibility; the pipeline does not decompose yet
    generate_categories: bool = True
    generate_subcategories: bool = True
    generate_skills: bool = True
    generate_microskills: bool = True

    @field_validator("topic")
    @classmethod
    def _topic_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Topic is required")
        return value


class DomainGenerationResponse(BaseModel):
    """Outcome of a generation run."""

    domain_id: int
    domain_name: str
    sources_used: int
    categories_created: int = 0
    subcategories_created: int = 0
    skills_created: int = 0
    microskills_created: int = 0
    status: GenerationStatus = GenerationStatus.COMPLETED

    @classmethod
    def from_domain(cls, domain) -> "DomainGenerationResponse":
        return cls(
            domain_id=domain.id,
            domain_name=domain.name,
            sources_used=len(domain.sources),
            categories_created=len(domain.categories),
            status=GenerationStatus.COMPLETED,
        )

    @classmethod
    def failed(cls, topic: str) -> "DomainGenerationResponse":
        return cls(
            domain_id=0,
            domain_name=topic,
            sources_used=0,
            status=GenerationStatus.FAILED,
        )
