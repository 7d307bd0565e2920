"""
Integration tests for the HTTP API using FastAPI's TestClient.
"""

import pytest
from fastapi.testclient import TestClient

from conftest import StubAIProvider
from skilltree.models.content import AIAgentType


@pytest.fixture
def make_client(session_factory, research_sources):
    from skilltree.app.main import create_app

    def _make(provider=None):
        app = create_app(
            session_factory=session_factory,
            research_sources=research_sources,
            ai_providers=[provider or StubAIProvider(AIAgentType.GEMINI)],
        )
        return TestClient(app)

    return _make


@pytest.mark.integration
class TestHealth:

    def test_health(self, make_client):
        response = make_client().get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["services"]["Database"] == "available"


@pytest.mark.integration
class TestGenerationRoute:

    def test_generate_domain(self, make_client):
        response = make_client().post("/api/generation/domain", json={"topic": "Quantum Computing"})

        assert response.status_code == 200
        data = response.json()
        assert data["domain_name"] == "Quantum Computing"
        assert data["sources_used"] == 4
        assert data["status"] == "completed"
        assert data["domain_id"] > 0

    def test_blank_topic_is_422(self, make_client):
        response = make_client().post("/api/generation/domain", json={"topic": "   "})
        assert response.status_code == 422

    def test_max_sources_out_of_range_is_422(self, make_client):
        response = make_client().post("/api/generation/domain", json={"topic": "Topic", "max_sources": 0})
        assert response.status_code == 422

    def test_unavailable_provider_is_500_with_failed_body(self, make_client):
        client = make_client(StubAIProvider(AIAgentType.GEMINI, available=False))

        response = client.post("/api/generation/domain", json={"topic": "Quantum Computing"})

        assert response.status_code == 500
        assert response.json() == {
            "domain_id": 0,
            "domain_name": "Quantum Computing",
            "sources_used": 0,
            "categories_created": 0,
            "subcategories_created": 0,
            "skills_created": 0,
            "microskills_created": 0,
            "status": "failed",
        }
        assert client.get("/api/domains").json() == []

    def test_unknown_agent_is_500(self, make_client):
        response = make_client().post(
            "/api/generation/domain",
            json={"topic": "Quantum Computing", "ai_agent_type": "openai"},
        )
        assert response.status_code == 500
        assert response.json()["status"] == "failed"


@pytest.mark.integration
class TestReadRoutes:

    @pytest.fixture
    def client_with_domain(self, make_client):
        client = make_client()
        domain_id = client.post("/api/generation/domain", json={"topic": "Quantum Computing"}).json()["domain_id"]
        return client, domain_id

    def test_list_sources(self, client_with_domain):
        client, _ = client_with_domain

        sources = client.get("/api/sources").json()
        assert len(sources) == 4
        assert sources[0]["title"] == "Quantum Computing Explained"

    def test_get_source(self, client_with_domain):
        client, _ = client_with_domain
        source_id = client.get("/api/sources").json()[1]["id"]

        response = client.get(f"/api/sources/{source_id}")
        assert response.status_code == 200
        assert response.json()["source_type"] == "encyclopedia"

    def test_get_missing_source(self, make_client):
        assert make_client().get("/api/sources/999").status_code == 404

    def test_sources_for_domain(self, client_with_domain):
        client, domain_id = client_with_domain

        linked = client.get(f"/api/sources/domain/{domain_id}").json()
        assert len(linked) == 4
        assert all(s["relevance_score"] == 0.8 for s in linked)
        assert all(s["used_for_generation"] for s in linked)

    def test_list_and_get_domain(self, client_with_domain):
        client, domain_id = client_with_domain

        assert [d["name"] for d in client.get("/api/domains").json()] == ["Quantum Computing"]

        domain = client.get(f"/api/domains/{domain_id}").json()
        assert domain["description"] == "AI-generated domain for Quantum Computing"
        assert domain["source_count"] == 4
        assert domain["prompt"] == "Generated skill tree"

    def test_get_missing_domain(self, make_client):
        assert make_client().get("/api/domains/999").status_code == 404
