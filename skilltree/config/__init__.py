"""Application configuration."""

from .settings import Settings, get_settings, AGENT_DEFAULTS

__all__ = ["Settings", "get_settings", "AGENT_DEFAULTS"]
