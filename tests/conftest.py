"""
Pytest configuration and fixtures for SkillTree tests.
"""

import os
import sys
import asyncio
import pytest
from pathlib import Path
from typing import Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Set test environment before settings are first loaded
os.environ['TESTING'] = '1'
os.environ['LOG_DIR'] = ''
os.environ.pop('EXA_API_KEY', None)
os.environ.pop('CREDENTIALS_KEY', None)

from skilltree.ai.base import AIProvider
from skilltree.models.content import AIAgentType, SourceData, SourceType
from skilltree.research.base import ResearchSource


# ============================================================
# Database Fixtures
# ============================================================

@pytest.fixture(scope="function")
def engine(tmp_path):
    """Create a fresh test database for each test."""
    from skilltree.db import init_db

    engine = init_db(f"sqlite:///{tmp_path / 'test_db.sqlite'}")
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    from skilltree.db import get_session_factory
    return get_session_factory(engine)


@pytest.fixture
def db_session(session_factory):
    """Get a database session."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def source_service(session_factory):
    from skilltree.services import SourceService
    return SourceService(session_factory)


@pytest.fixture
def domain_service(session_factory):
    from skilltree.services import DomainService
    return DomainService(session_factory)


@pytest.fixture
def config_store(session_factory):
    from skilltree.ai import AIConfigStore
    return AIConfigStore(session_factory)


@pytest.fixture
def gemini_config(config_store):
    """An active Gemini config with plaintext credentials."""
    return config_store.save_config(
        AIAgentType.GEMINI,
        api_endpoint="https://generativelanguage.googleapis.com",
        default_model="gemini-2.0-flash",
        encrypted_credentials="test-gemini-key",
        active=True,
    )


# ============================================================
# Research / AI stubs
# ============================================================

def make_source_data(
    title: str,
    url: Optional[str] = None,
    source_type: SourceType = SourceType.WEB_SEARCH,
    summary: Optional[str] = "A short summary.",
) -> SourceData:
    return SourceData.with_excerpt(
        title=title,
        url=url or f"https://example.com/{title.lower().replace(' ', '-')}",
        source_type=source_type,
        summary=summary,
    )


class StubResearchSource(ResearchSource):
    """Returns canned results, optionally after a delay or by raising."""

    def __init__(
        self,
        source_type: SourceType,
        results: Optional[list[SourceData]] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
        ignore_limit: bool = False,
    ):
        super().__init__()
        self._source_type = source_type
        self.results = results or []
        self.error = error
        self.delay = delay
        self.ignore_limit = ignore_limit
        self.requested_limits: list[int] = []

    @property
    def source_type(self) -> SourceType:
        return self._source_type

    async def search(self, query: str, max_results: int = 10) -> list[SourceData]:
        self.requested_limits.append(max_results)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        if self.ignore_limit:
            return list(self.results)
        return self.results[:max_results]

    async def fetch_details(self, url: str) -> Optional[SourceData]:
        for result in self.results:
            if result.url == url:
                return result
        return None

    def can_handle(self, url: str) -> bool:
        return any(result.url == url for result in self.results)


class StubAIProvider(AIProvider):
    """Provider that never touches a vendor or the config store."""

    def __init__(
        self,
        agent_type: AIAgentType = AIAgentType.GEMINI,
        response: str = "Generated skill tree",
        available: bool = True,
        error: Optional[Exception] = None,
    ):
        super().__init__(config_store=None)
        self._agent_type = agent_type
        self.response = response
        self.available = available
        self.error = error
        self.calls: list[tuple[str, list]] = []

    @property
    def agent_type(self) -> AIAgentType:
        return self._agent_type

    async def is_available(self) -> bool:
        return self.available

    async def generate_content(self, prompt, sources=None, max_tokens=4096, temperature=0.7) -> str:
        self.calls.append((prompt, list(sources or [])))
        if self.error:
            raise self.error
        return self.response

    async def _complete(self, config, api_key, prompt, max_tokens, temperature) -> str:
        return self.response


@pytest.fixture
def sample_sources():
    """Four results across three providers, as in a typical research run."""
    return {
        SourceType.WEB_SEARCH: [
            make_source_data("Quantum Computing Explained", summary="Qubits and gates."),
        ],
        SourceType.ENCYCLOPEDIA: [
            make_source_data(
                "Quantum computing",
                url="https://en.wikipedia.org/wiki/Quantum_computing",
                source_type=SourceType.ENCYCLOPEDIA,
                summary="A quantum computer exploits quantum mechanical phenomena.",
            ),
        ],
        SourceType.PREPRINT_ARCHIVE: [
            make_source_data(
                "Quantum Error Correction",
                url="http://arxiv.org/abs/2101.00001v1",
                source_type=SourceType.PREPRINT_ARCHIVE,
                summary="Surface codes at scale.",
            ),
            make_source_data(
                "Variational Quantum Algorithms",
                url="http://arxiv.org/abs/2101.00002v1",
                source_type=SourceType.PREPRINT_ARCHIVE,
                summary="",
            ),
        ],
    }


@pytest.fixture
def research_sources(sample_sources):
    return [
        StubResearchSource(source_type, results)
        for source_type, results in sample_sources.items()
    ]
