"""
SkillTree - domain generation API
"""

from typing import Optional
from fastapi import FastAPI
from dotenv import load_dotenv

from skilltree.ai import AIConfigStore, create_default_providers, seed_agent_configs
from skilltree.app.routers import generation, sources, domains
from skilltree.config import get_settings
from skilltree.config.startup_validation import run_startup_validation
from skilltree.db import init_db, get_session_factory
from skilltree.pipeline import DomainGenerationPipeline
from skilltree.research import SourceAggregator, create_default_research_sources
from skilltree.services import SourceService, DomainService
from skilltree.utils import configure_logging

load_dotenv(override=True)


def create_app(
    session_factory=None,
    research_sources: Optional[list] = None,
    ai_providers: Optional[list] = None,
) -> FastAPI:
    """
    Build the app. Anything not injected is wired from settings.
    """
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_dir)

    if session_factory is None:
        engine = init_db(settings.database_url)
        session_factory = get_session_factory(engine)
    else:
        engine = session_factory.kw.get("bind")

    config_store = AIConfigStore(session_factory)
    if ai_providers is None:
        seed_agent_configs(config_store, settings)
        ai_providers = create_default_providers(config_store, settings.credentials_key)
    if research_sources is None:
        research_sources = create_default_research_sources(settings)

    source_service = SourceService(session_factory)
    domain_service = DomainService(session_factory)

    app = FastAPI(title="SkillTree", version="1.0.0")

    app.state.source_service = source_service
    app.state.domain_service = domain_service
    app.state.pipeline_factory = lambda: DomainGenerationPipeline(
        aggregator=SourceAggregator(research_sources, source_service),
        ai_providers=ai_providers,
        domain_service=domain_service,
        source_service=source_service,
    )

    if engine is not None:
        app.state.validation = run_startup_validation(engine, config_store, settings)

    app.include_router(generation.router, prefix="/api/generation")
    app.include_router(sources.router, prefix="/api/sources")
    app.include_router(domains.router, prefix="/api/domains")

    @app.get("/health")
    async def health():
        validation = getattr(app.state, "validation", None)
        return {
            "status": "healthy",
            "services": {
                name: result.status.value
                for name, result in (validation.services.items() if validation else [])
            },
        }

    return app


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run("skilltree.app.main:create_app", factory=True, host=settings.host, port=settings.port)
