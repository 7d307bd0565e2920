"""Configuration repository for AI providers, keyed by agent type."""

import logging
from typing import Optional

from .credentials import encrypt_credentials
from ..config.settings import AGENT_DEFAULTS
from ..db.models import AIAgentConfig
from ..models.content import AIAgentType


logger = logging.getLogger(__name__)


class AIConfigStore:
    """
    Reads and writes AIAgentConfig rows.
    Injected into each provider and queried on every call, so config
    changes take effect without restarting.
    """

    def __init__(self, session_factory):
        self.Session = session_factory

    def find_by_agent_type(self, agent_type: AIAgentType) -> Optional[AIAgentConfig]:
        db = self.Session()
        try:
            return db.query(AIAgentConfig).filter_by(agent_type=agent_type).first()
        finally:
            db.close()

    def save_config(self, agent_type: AIAgentType, **fields) -> AIAgentConfig:
        """Create the config for an agent type, or update the fields given."""
        db = self.Session()
        try:
            config = db.query(AIAgentConfig).filter_by(agent_type=agent_type).first()
            if config is None:
                config = AIAgentConfig(agent_type=agent_type, **fields)
                db.add(config)
                logger.info(f"Created AI config for {agent_type.value}")
            else:
                for key, value in fields.items():
                    setattr(config, key, value)
                logger.info(f"Updated AI config for {agent_type.value}")
            db.commit()
            return config
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


def seed_agent_configs(config_store: AIConfigStore, settings) -> list[AIAgentType]:
    """
    Create configs for vendors whose API key is set in the environment.
    Existing records are left alone. Returns the agent types seeded.
    """
    keys = {
        AIAgentType.GEMINI: settings.gemini_api_key,
        AIAgentType.OPENAI: settings.openai_api_key,
    }

    seeded = []
    for agent_type, api_key in keys.items():
        if not api_key or config_store.find_by_agent_type(agent_type) is not None:
            continue
        config_store.save_config(
            agent_type,
            encrypted_credentials=encrypt_credentials(api_key, settings.credentials_key),
            active=True,
            **AGENT_DEFAULTS[agent_type],
        )
        seeded.append(agent_type)
    return seeded
