"""
Startup Validation Module for SkillTree.

Checks the database, the research API key and each AI agent configuration
on startup. Missing optional services degrade the app instead of stopping it.
"""

import sys
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any
from enum import Enum

from sqlalchemy import text

from .settings import Settings, get_settings
from ..ai import SUPPORTED_AGENTS
from ..ai.config_store import AIConfigStore
from ..ai.credentials import decrypt_credentials
from ..models.content import AIAgentType

logger = logging.getLogger(__name__)


class ServiceStatus(Enum):
    """Status of a validated service."""
    AVAILABLE = "available"
    DEGRADED = "degraded"
    UNAVAILABLE = "unavailable"


@dataclass
class ValidationResult:
    """Result of a single validation check."""
    service: str
    status: ServiceStatus
    message: str
    required: bool = True
    details: Optional[Dict[str, Any]] = None


@dataclass
class StartupValidation:
    """Complete startup validation results."""
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    services: Dict[str, ValidationResult] = field(default_factory=dict)

    def add_result(self, result: ValidationResult):
        """Add a validation result."""
        self.services[result.service] = result

        if result.status == ServiceStatus.UNAVAILABLE:
            if result.required:
                self.is_valid = False
                self.errors.append(f"[{result.service}] {result.message}")
            else:
                self.warnings.append(f"[{result.service}] {result.message}")
        elif result.status == ServiceStatus.DEGRADED:
            self.warnings.append(f"[{result.service}] {result.message}")

    def log_summary(self):
        for service, result in self.services.items():
            logger.info(f"{service}: {result.status.value}")

        for error in self.errors:
            logger.error(error)
        for warning in self.warnings:
            logger.warning(warning)

        if self.is_valid:
            logger.info("Startup validation passed")
        else:
            logger.error("Startup validation failed")


def validate_database(engine) -> ValidationResult:
    """The database must accept a trivial query."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return ValidationResult(
            service="Database",
            status=ServiceStatus.AVAILABLE,
            message="Database connection OK",
            details={"url": engine.url.render_as_string(hide_password=True)},
        )
    except Exception as e:
        return ValidationResult(
            service="Database",
            status=ServiceStatus.UNAVAILABLE,
            message=f"Database connection failed: {e}",
            required=True,
        )


def validate_exa(settings: Optional[Settings] = None) -> ValidationResult:
    """Validate the Exa API key used by web search."""
    settings = settings or get_settings()

    if not settings.exa_api_key:
        return ValidationResult(
            service="Exa Search",
            status=ServiceStatus.DEGRADED,
            message="EXA_API_KEY not set. Web search disabled; "
                    "encyclopedia and preprint research still work.",
            required=False,
        )

    return ValidationResult(
        service="Exa Search",
        status=ServiceStatus.AVAILABLE,
        message="Exa API key configured",
    )


def validate_ai_agent(
    config_store: AIConfigStore,
    agent_type: AIAgentType,
    credentials_key: Optional[str] = None,
) -> ValidationResult:
    """An agent is usable when its config exists, is active and its credentials decrypt."""
    service = f"AI agent {agent_type.value}"

    try:
        config = config_store.find_by_agent_type(agent_type)
    except Exception as e:
        return ValidationResult(
            service=service,
            status=ServiceStatus.UNAVAILABLE,
            message=f"Failed to read configuration: {e}",
            required=False,
        )

    if config is None:
        return ValidationResult(
            service=service,
            status=ServiceStatus.UNAVAILABLE,
            message="No configuration record. Set the vendor API key to seed one.",
            required=False,
        )

    if not config.active:
        return ValidationResult(
            service=service,
            status=ServiceStatus.DEGRADED,
            message="Configuration is inactive",
            required=False,
        )

    if not (config.encrypted_credentials or "").strip():
        return ValidationResult(
            service=service,
            status=ServiceStatus.UNAVAILABLE,
            message="Configuration has no credentials",
            required=False,
        )

    try:
        decrypt_credentials(config.encrypted_credentials, credentials_key)
    except ValueError as e:
        return ValidationResult(
            service=service,
            status=ServiceStatus.UNAVAILABLE,
            message=str(e),
            required=False,
        )

    return ValidationResult(
        service=service,
        status=ServiceStatus.AVAILABLE,
        message=f"Configured with model {config.default_model}",
        details={"model": config.default_model, "rate_limit": config.rate_limit},
    )


def run_startup_validation(
    engine,
    config_store: AIConfigStore,
    settings: Optional[Settings] = None,
    require_default_agent: bool = False,
    exit_on_failure: bool = False,
) -> StartupValidation:
    """
    Run complete startup validation.

    Args:
        engine: SQLAlchemy engine to check
        config_store: Source of AI agent configurations
        settings: Settings to validate (defaults to the cached settings)
        require_default_agent: Fail validation if DEFAULT_AGENT is not usable
        exit_on_failure: Exit process if validation fails

    Returns:
        StartupValidation with all results
    """
    settings = settings or get_settings()
    validation = StartupValidation()

    validation.add_result(validate_database(engine))
    validation.add_result(validate_exa(settings))

    for agent_type in SUPPORTED_AGENTS:
        result = validate_ai_agent(config_store, agent_type, settings.credentials_key)
        if agent_type == settings.default_agent:
            result.required = require_default_agent
        validation.add_result(result)

    validation.log_summary()

    if exit_on_failure and not validation.is_valid:
        logger.error("Startup validation failed. Exiting.")
        sys.exit(1)

    return validation
