"""
Application settings with environment-based configuration.

Priority (highest to lowest):
1. Environment variables (from .env or system)
2. Environment-specific YAML config file (development.yaml, test.yaml)
3. Default YAML config file (default.yaml)
4. Pydantic defaults
"""

import os
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gardien.domain.value_objects.platform import Platform


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All sensitive values (secrets, database credentials) should come from
    environment variables, not from YAML files.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",
    )

    # Application
    APP_NAME: str = "Gardien"
    APP_VERSION: str = "0.1.0"
    ENV: str = Field(default="development", description="Environment name")
    DEBUG: bool = Field(default=False, description="Debug mode")

    # API Server
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8000, ge=1024, le=65535)
    API_RELOAD: bool = Field(default=False)

    # CORS Configuration
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # Verification
    SERVICE_NAME: str = Field(
        default="CDP Platform",
        description="Service name embedded in signed messages",
    )
    SUPPORTED_PLATFORMS: List[str] = Field(
        default=["discord", "telegram"],
        description="Chat platforms allowed to request challenges",
    )
    CHALLENGE_TTL_SECONDS: int = Field(default=600, ge=30)
    RATE_LIMIT_ATTEMPTS: int = Field(default=5, ge=1)
    RATE_LIMIT_WINDOW_SECONDS: int = Field(default=3600, ge=1)

    # Session tokens (from environment - REQUIRED in production)
    SESSION_SECRET_KEY: str = Field(..., description="Session signing secret")
    SESSION_ALGORITHM: str = Field(default="HS256")
    SESSION_EXPIRATION_DAYS: int = Field(default=30, ge=1)

    # Chat command layers (from environment - REQUIRED)
    SERVICE_API_KEY: str = Field(
        ..., min_length=16, description="Bearer key for chat command layers"
    )

    # Redis
    REDIS_ENABLED: bool = Field(default=True)
    REDIS_HOST: str = Field(default="localhost")
    REDIS_PORT: int = Field(default=6379, ge=1024, le=65535)
    REDIS_DB: int = Field(default=0, ge=0, le=15)
    REDIS_PASSWORD: Optional[str] = Field(default=None)
    STORE_TIMEOUT_SECONDS: float = Field(
        default=2.0,
        gt=0,
        description="Key-value store call timeout in seconds",
    )

    # Database (from environment - REQUIRED in production)
    DATABASE_URL: str = Field(..., description="Database connection URL")
    DATABASE_ECHO: bool = Field(default=False)
    DATABASE_TIMEOUT: float = Field(
        default=10.0,
        gt=0,
        description="Database query timeout in seconds",
    )
    BINDING_BACKEND: str = Field(
        default="database",
        description="Binding registry backend: database or cache",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    # Observability - Metrics
    METRICS_ENABLED: bool = Field(
        default=True,
        description="Expose Prometheus metrics on /metrics",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"Invalid LOG_LEVEL. Must be one of: {allowed}")
        return v_upper

    @field_validator("SUPPORTED_PLATFORMS")
    @classmethod
    def validate_platforms(cls, v: List[str]) -> List[str]:
        """Validate platform tags against known platforms."""
        if not v:
            raise ValueError("SUPPORTED_PLATFORMS cannot be empty")
        return [Platform.parse(tag).value for tag in v]

    @field_validator("BINDING_BACKEND")
    @classmethod
    def validate_binding_backend(cls, v: str) -> str:
        """Validate binding registry backend."""
        allowed = ["database", "cache"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid BINDING_BACKEND. Must be one of: {allowed}")
        return v_lower

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.ENV == "production"


def load_config(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
    env: Optional[str] = None,
) -> Settings:
    """
    Load configuration from YAML files and environment variables.

    Priority: ENV vars > environment-specific YAML > default YAML > defaults

    Args:
        config_file: Optional YAML config filename override
        env_file: Optional .env filename (e.g., ".env.development")
        env: Optional environment name override (e.g., "development", "test")

    Returns:
        Settings instance

    Raises:
        ValidationError: If required fields are missing
    """
    current_file = Path(__file__).resolve()
    project_root = current_file.parent.parent.parent.parent
    config_dir = project_root / "config"

    environment = env or os.getenv("ENV", "production")

    env_map = {
        "production": (".env.production", "production.yaml"),
        "development": (".env.development", "development.yaml"),
        "test": (".env.test", "test.yaml"),
    }

    if env_file is None:
        default_env_file, default_config_file = env_map.get(
            environment, (".env.production", "production.yaml")
        )
        env_file = default_env_file
        if config_file is None:
            config_file = default_config_file

    env_file_path = project_root / env_file
    if env_file_path.exists():
        load_dotenv(env_file_path, override=True)

    default_config_path = config_dir / "default.yaml"
    merged_config = {}

    if default_config_path.exists():
        with open(default_config_path, "r") as f:
            loaded = yaml.safe_load(f)
            if loaded:
                merged_config = loaded

    if config_file:
        env_config_path = config_dir / config_file
        if env_config_path.exists():
            with open(env_config_path, "r") as f:
                loaded = yaml.safe_load(f)
                if loaded:
                    merged_config.update(loaded)

    # Init kwargs outrank env vars in pydantic-settings
    yaml_values = {
        key: value for key, value in merged_config.items() if key not in os.environ
    }

    return Settings(**yaml_values)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or initialize global settings singleton."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(new_settings: Settings) -> None:
    """Override global settings (for testing)."""
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to force re-initialization (for testing)."""
    global _settings
    _settings = None
