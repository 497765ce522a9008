"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Numeric bounds are validated at load time; a missing
DATABASE_URL is reported when a session is first requested.
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.domain.enums import AssignmentRule


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults. Without database_url the API
    starts but every database-backed endpoint answers 503.
    """

    # App
    app_name: str = "crm-workflow-engine"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (SQLAlchemy async URL, e.g. postgresql+asyncpg://... or sqlite+aiosqlite://...)
    database_url: str = ""
    database_echo: bool = False
    # Optional pool/driver overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Tenant
    tenant_header_name: str = "X-Tenant-ID"

    # Outbound webhooks (webhook_call action)
    webhook_timeout_seconds: float = 10.0

    # Workflow engine
    workflow_delayed_actions_enabled: bool = True
    workflow_delayed_actions_batch_size: int = 100
    workflow_execution_retention_days: int = 90
    workflow_default_assignment_rule: str = AssignmentRule.RANDOM.value

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("workflow_default_assignment_rule")
    @classmethod
    def validate_assignment_rule(cls, value: str) -> str:
        if value not in AssignmentRule.values():
            raise ValueError(
                f"workflow_default_assignment_rule must be one of {AssignmentRule.values()}, "
                f"got: {value!r}"
            )
        return value

    @model_validator(mode="after")
    def validate_bounds(self) -> "Settings":
        """Validate numeric bounds."""
        if self.webhook_timeout_seconds <= 0:
            raise ValueError("WEBHOOK_TIMEOUT_SECONDS must be positive")
        if self.workflow_delayed_actions_batch_size < 1:
            raise ValueError("WORKFLOW_DELAYED_ACTIONS_BATCH_SIZE must be at least 1")
        if self.workflow_execution_retention_days < 1:
            raise ValueError("WORKFLOW_EXECUTION_RETENTION_DAYS must be at least 1")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
