"""
Unit tests for domain persistence.
"""

import pytest


class TestCreateDomain:

    def test_create_domain(self, domain_service):
        domain = domain_service.create_domain(
            "Linear Algebra",
            description="AI-generated domain for Linear Algebra",
            prompt="Vectors, matrices",
        )

        assert domain.id is not None
        assert domain.name == "Linear Algebra"
        assert domain.created_at is not None

    def test_duplicate_name_rejected(self, domain_service):
        from skilltree.exceptions import DomainCreationError

        domain_service.create_domain("Statistics")

        with pytest.raises(DomainCreationError, match="already exists"):
            domain_service.create_domain("Statistics")

    def test_unique_constraint_backs_the_precheck(self, domain_service, db_session):
        """A row slipping past the existence check still hits the constraint."""
        from unittest.mock import patch
        from skilltree.db import Domain
        from skilltree.exceptions import DomainCreationError

        db_session.add(Domain(name="Topology"))
        db_session.commit()

        with patch("sqlalchemy.orm.Query.first", return_value=None):
            with pytest.raises(DomainCreationError):
                domain_service.create_domain("Topology")


class TestGetDomain:

    def test_get_domain_loads_links(self, domain_service, source_service):
        from conftest import make_source_data

        created = domain_service.create_domain("Optics")
        source = source_service.create_source(make_source_data("Lenses"))
        source_service.link_source_to_domain(source, created, 0.8, None, True)

        domain = domain_service.get_domain(created.id)

        # Relationships are usable after the session has closed
        assert len(domain.sources) == 1
        assert domain.sources[0].source.title == "Lenses"
        assert domain.categories == []

    def test_missing_domain_raises(self, domain_service):
        from skilltree.exceptions import DomainNotFoundError

        with pytest.raises(DomainNotFoundError):
            domain_service.get_domain(12345)

    def test_get_all_domains_sorted_by_name(self, domain_service):
        for name in ["Zoology", "Algebra", "Music"]:
            domain_service.create_domain(name)

        assert [d.name for d in domain_service.get_all_domains()] == ["Algebra", "Music", "Zoology"]

    def test_delete_domain_keeps_sources(self, domain_service, source_service):
        from conftest import make_source_data

        domain = domain_service.create_domain("Ephemeral")
        source = source_service.create_source(make_source_data("Keeper"))
        source_service.link_source_to_domain(source, domain, 0.8, None)

        assert domain_service.delete_domain(domain.id) is True

        assert source_service.get_source_by_id(source.id) is not None
        assert source_service.get_sources_for_domain(domain.id) == []
