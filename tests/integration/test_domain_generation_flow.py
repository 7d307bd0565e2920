"""
Integration tests for a full generation run against a real SQLite database.
Research providers and the AI vendor are stubbed.
"""

import pytest

from conftest import StubAIProvider
from skilltree.models.content import AIAgentType, SourceType


AI_RESPONSE = "Domain: Quantum Computing\n" + "Category: Foundations\n" * 80


@pytest.mark.integration
class TestQuantumComputingScenario:

    @pytest.fixture
    def pipeline(self, research_sources, source_service, domain_service):
        from skilltree.pipeline import DomainGenerationPipeline
        from skilltree.research import SourceAggregator

        return DomainGenerationPipeline(
            SourceAggregator(research_sources, source_service),
            [StubAIProvider(AIAgentType.GEMINI, response=AI_RESPONSE)],
            domain_service,
            source_service,
        )

    @pytest.mark.asyncio
    async def test_end_to_end(self, pipeline, source_service, db_session):
        from skilltree.db import Domain, DomainSource, Source

        domain = await pipeline.generate_domain("Quantum Computing", AIAgentType.GEMINI, max_sources=10)

        assert domain.name == "Quantum Computing"
        assert domain.description == "AI-generated domain for Quantum Computing"
        assert domain.prompt == AI_RESPONSE[:1000]

        assert db_session.query(Domain).count() == 1
        assert db_session.query(Source).count() == 4
        assert db_session.query(DomainSource).count() == 4

        links = domain.sources
        assert len(links) == 4
        assert all(link.relevance_score == 0.8 for link in links)
        assert all(link.used_for_generation for link in links)

        # Registration order: web, encyclopedia, then both preprints
        assert [link.source.source_type for link in links] == [
            SourceType.WEB_SEARCH,
            SourceType.ENCYCLOPEDIA,
            SourceType.PREPRINT_ARCHIVE,
            SourceType.PREPRINT_ARCHIVE,
        ]

        excerpts = [link.relevant_excerpt for link in links]
        assert excerpts[0] == "Qubits and gates."
        assert excerpts[3] is None

    @pytest.mark.asyncio
    async def test_sources_reused_across_runs(self, pipeline, db_session):
        """A second topic finding the same URLs links the existing rows."""
        from skilltree.db import DomainSource, Source

        await pipeline.generate_domain("Quantum Computing", AIAgentType.GEMINI)
        await pipeline.generate_domain("Quantum Information", AIAgentType.GEMINI)

        assert db_session.query(Source).count() == 4
        assert db_session.query(DomainSource).count() == 8

    @pytest.mark.asyncio
    async def test_linked_sources_listing(self, pipeline, source_service):
        domain = await pipeline.generate_domain("Quantum Computing", AIAgentType.GEMINI)

        listed = source_service.get_sources_for_domain(domain.id)

        assert [s['title'] for s in listed] == [
            "Quantum Computing Explained",
            "Quantum computing",
            "Quantum Error Correction",
            "Variational Quantum Algorithms",
        ]
        assert listed[2]['source_type'] == "preprint_archive"


@pytest.mark.integration
class TestTwoProviderScenario:

    @pytest.mark.asyncio
    async def test_two_providers_two_sources_each(self, source_service, domain_service):
        from conftest import StubResearchSource, make_source_data
        from skilltree.pipeline import DomainGenerationPipeline
        from skilltree.research import SourceAggregator

        text = "z" * 2500
        providers = [
            StubResearchSource(SourceType.WEB_SEARCH, [make_source_data("Web 1"), make_source_data("Web 2")]),
            StubResearchSource(
                SourceType.ENCYCLOPEDIA,
                [
                    make_source_data("Wiki 1", source_type=SourceType.ENCYCLOPEDIA),
                    make_source_data("Wiki 2", source_type=SourceType.ENCYCLOPEDIA),
                ],
            ),
        ]
        pipeline = DomainGenerationPipeline(
            SourceAggregator(providers, source_service),
            [StubAIProvider(AIAgentType.GEMINI, response=text)],
            domain_service,
            source_service,
        )

        domain = await pipeline.generate_domain("Quantum Computing", AIAgentType.GEMINI, max_sources=10)

        assert domain.name == "Quantum Computing"
        assert domain.prompt == text[:1000]
        assert [link.source.title for link in domain.sources] == ["Web 1", "Web 2", "Wiki 1", "Wiki 2"]
        assert all(link.relevance_score == 0.8 and link.used_for_generation for link in domain.sources)
