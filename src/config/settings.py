"""
Centralized settings management using pydantic-settings.

All environment variables and configuration values are defined here.
Use get_settings() to access the singleton settings instance.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from config.constants import DISCOVERY_FUNCTION_PATH, MAX_DISCOVERY_BATCH


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Required environment variables:
        - SUPABASE_URL: Supabase project URL
        - SUPABASE_SERVICE_KEY: Supabase service role key
        - SUPABASE_JWT_SECRET: JWT secret used to verify user tokens

    Optional environment variables:
        - HOST: Server host (default: 0.0.0.0)
        - PORT: Server port (default: 8080)
        - ENVIRONMENT: Environment name (development, staging, production)
        - RULE_DISCOVERY_URL: Override for the rule discovery endpoint
        - RULE_DISCOVERY_ENABLED: Toggle background rule discovery
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")

    # ==========================================================================
    # Server Configuration
    # ==========================================================================
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")

    cors_origins: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ],
        description="Allowed CORS origins"
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # ==========================================================================
    # Supabase Configuration
    # ==========================================================================
    supabase_url: str = Field(..., description="Supabase project URL")
    supabase_service_key: str = Field(..., description="Supabase service role key")
    supabase_jwt_secret: str = Field(..., description="JWT secret for token verification (from Supabase dashboard)")

    # ==========================================================================
    # Ingredient Rule Discovery
    # ==========================================================================
    rule_discovery_enabled: bool = Field(
        default=True,
        description="Send unmatched ingredient names to the rule discovery endpoint"
    )
    rule_discovery_url: Optional[str] = Field(
        default=None,
        description="Rule discovery endpoint (defaults to the Supabase edge function)"
    )
    rule_discovery_batch_size: int = Field(
        default=MAX_DISCOVERY_BATCH,
        ge=1,
        le=MAX_DISCOVERY_BATCH,
        description="Max unmatched names sent per discovery call"
    )
    rule_discovery_timeout_seconds: float = Field(
        default=10.0,
        description="HTTP timeout for the discovery call (seconds)"
    )

    @property
    def discovery_endpoint(self) -> str:
        if self.rule_discovery_url:
            return self.rule_discovery_url
        return f"{self.supabase_url.rstrip('/')}{DISCOVERY_FUNCTION_PATH}"


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses lru_cache to ensure only one instance is created.
    Settings are loaded from environment variables and .env file.

    Returns:
        Settings: The application settings instance

    Raises:
        ValidationError: If required environment variables are missing
    """
    env_file = Path(__file__).parent.parent.parent / ".env"
    if env_file.exists():
        os.environ.setdefault("ENV_FILE", str(env_file))

    return Settings(_env_file=env_file if env_file.exists() else None)


def get_settings_for_testing(**overrides) -> Settings:
    """
    Create a settings instance for testing with optional overrides.

    This bypasses the cache to allow different settings in tests.
    """
    test_defaults = {
        "supabase_url": "https://test.supabase.co",
        "supabase_service_key": "test-key",
        "supabase_jwt_secret": "test-jwt-secret",
        "environment": "testing",
        "debug": True,
    }
    test_defaults.update(overrides)

    return Settings(**test_defaults)
