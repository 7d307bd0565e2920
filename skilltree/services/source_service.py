"""
Source Service
Persists research sources (upsert by URL) and their provenance links to domains.
"""

import json
import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload

from ..db.models import Source, Domain, DomainSource
from ..exceptions import SourceLinkError
from ..models.content import SourceData


logger = logging.getLogger(__name__)


class SourceService:
    def __init__(self, session_factory):
        self.Session = session_factory

    def create_source(self, data: SourceData) -> Source:
        """
        Persist a source, or return the existing row with the same URL.

        The insert is attempted first and the UNIQUE constraint on url decides
        the winner; a loser rolls back and reads the winner's row.
        """
        db = self.Session()
        try:
            source = Source(
                title=data.title[:500],
                url=data.url,
                source_type=data.source_type,
                summary=data.summary,
                authors=data.authors,
                publication_date=data.publication_date,
                relevance_score=data.relevance_score,
                excerpt=data.excerpt,
                extra_metadata=json.dumps(data.metadata) if data.metadata else None,
            )
            db.add(source)
            try:
                db.commit()
                logger.debug(f"Created source {source.id}: {source.url}")
                return source
            except IntegrityError:
                db.rollback()

            existing = db.query(Source).filter_by(url=data.url).one()
            logger.debug(f"Source already exists ({existing.id}): {data.url}")
            return existing
        finally:
            db.close()

    def find_by_url(self, url: str) -> Optional[Source]:
        db = self.Session()
        try:
            return db.query(Source).filter_by(url=url).first()
        finally:
            db.close()

    def get_source_by_id(self, source_id: int) -> Optional[Source]:
        db = self.Session()
        try:
            return db.get(Source, source_id)
        finally:
            db.close()

    def get_all_sources(self) -> list[Source]:
        db = self.Session()
        try:
            return db.query(Source).order_by(Source.id).all()
        finally:
            db.close()

    def link_source_to_domain(
        self,
        source: Source,
        domain: Domain,
        relevance_score: float,
        relevant_excerpt: Optional[str],
        used_for_generation: bool = False,
    ) -> DomainSource:
        """Create one provenance link between a domain and a source."""
        db = self.Session()
        try:
            link = DomainSource(
                domain_id=domain.id,
                source_id=source.id,
                relevance_score=relevance_score,
                relevant_excerpt=relevant_excerpt,
                used_for_generation=used_for_generation,
            )
            db.add(link)
            db.commit()
            return link
        except SQLAlchemyError as e:
            db.rollback()
            raise SourceLinkError(
                f"Failed to link source {source.id} to domain {domain.id}: {e}"
            ) from e
        finally:
            db.close()

    def get_sources_for_domain(self, domain_id: int) -> list[dict]:
        """Sources linked to a domain, with the link's relevance data."""
        db = self.Session()
        try:
            links = (
                db.query(DomainSource)
                .options(selectinload(DomainSource.source))
                .filter(DomainSource.domain_id == domain_id)
                .order_by(DomainSource.id)
                .all()
            )

            return [
                {
                    **source_to_dict(link.source),
                    'relevance_score': link.relevance_score,
                    'relevant_excerpt': link.relevant_excerpt,
                    'used_for_generation': link.used_for_generation,
                }
                for link in links
            ]
        finally:
            db.close()


def source_to_dict(source: Source) -> dict:
    """Public projection of a Source row."""
    return {
        'id': source.id,
        'title': source.title,
        'url': source.url,
        'source_type': source.source_type.value if source.source_type else None,
        'summary': source.summary,
        'authors': source.authors,
        'publication_date': source.publication_date.isoformat() if source.publication_date else None,
        'excerpt': source.excerpt,
        'created_at': source.created_at.isoformat() if source.created_at else None,
    }
