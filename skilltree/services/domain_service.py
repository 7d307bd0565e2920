"""
Domain Service
Taxonomy-creation interface used by the generation pipeline.
"""

import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload

from ..db.models import Domain, DomainSource
from ..exceptions import DomainCreationError, DomainNotFoundError


logger = logging.getLogger(__name__)


class DomainService:
    def __init__(self, session_factory):
        self.Session = session_factory

    def create_domain(
        self,
        name: str,
        description: Optional[str] = None,
        prompt: Optional[str] = None,
    ) -> Domain:
        """
        Create a new domain.
        Raises DomainCreationError on a name collision or any persistence failure.
        """
        logger.info(f"Creating domain: {name}")

        db = self.Session()
        try:
            if db.query(Domain.id).filter_by(name=name).first():
                raise DomainCreationError(f"Domain with name '{name}' already exists")

            domain = Domain(name=name, description=description, prompt=prompt)
            db.add(domain)
            db.commit()

            logger.info(f"Domain created successfully with ID: {domain.id}")
            return domain
        except IntegrityError as e:
            db.rollback()
            raise DomainCreationError(f"Domain with name '{name}' already exists") from e
        except SQLAlchemyError as e:
            db.rollback()
            raise DomainCreationError(f"Failed to create domain '{name}': {e}") from e
        finally:
            db.close()

    def get_domain(self, domain_id: int) -> Domain:
        """Fetch a domain with its categories and source links loaded."""
        db = self.Session()
        try:
            domain = (
                db.query(Domain)
                .options(
                    selectinload(Domain.sources).selectinload(DomainSource.source),
                    selectinload(Domain.categories),
                )
                .filter(Domain.id == domain_id)
                .first()
            )
            if not domain:
                logger.error(f"Domain not found with ID: {domain_id}")
                raise DomainNotFoundError(f"Domain not found with ID: {domain_id}")
            return domain
        finally:
            db.close()

    def get_all_domains(self) -> list[Domain]:
        db = self.Session()
        try:
            return db.query(Domain).order_by(Domain.name.asc()).all()
        finally:
            db.close()

    def delete_domain(self, domain_id: int) -> bool:
        """Delete a domain and its owned links. Sources are left untouched."""
        db = self.Session()
        try:
            domain = db.get(Domain, domain_id)
            if not domain:
                raise DomainNotFoundError(f"Domain not found with ID: {domain_id}")
            db.delete(domain)
            db.commit()
            logger.info(f"Domain deleted successfully with ID: {domain_id}")
            return True
        except SQLAlchemyError:
            db.rollback()
            raise
        finally:
            db.close()


def domain_to_dict(domain: Domain) -> dict:
    return {
        'id': domain.id,
        'name': domain.name,
        'description': domain.description,
        'created_at': domain.created_at.isoformat() if domain.created_at else None,
        'updated_at': domain.updated_at.isoformat() if domain.updated_at else None,
    }
