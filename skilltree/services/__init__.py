"""Persistence-backed services the pipeline collaborates with."""

from .source_service import SourceService, source_to_dict
from .domain_service import DomainService, domain_to_dict

__all__ = [
    "SourceService",
    "DomainService",
    "source_to_dict",
    "domain_to_dict",
]
