"""Persistence layer."""

from .models import (
    Base,
    Source,
    Domain,
    Category,
    DomainSource,
    AIAgentConfig,
    init_db,
    get_session_factory,
)

__all__ = [
    "Base",
    "Source",
    "Domain",
    "Category",
    "DomainSource",
    "AIAgentConfig",
    "init_db",
    "get_session_factory",
]
