"""Configuration management for the SiYuan MCP server."""

import os
from typing import List, Optional
from pathlib import Path
from pydantic import BaseModel, Field, field_validator
from dotenv import load_dotenv

from core.exceptions import ConfigurationError

# Load .env, honouring ENV_FILE_PATH first
_env_loaded = False

env_file = os.getenv('ENV_FILE_PATH')
if env_file and Path(env_file).exists():
    load_dotenv(env_file, override=False)
    _env_loaded = True
else:
    possible_paths = [
        Path.cwd() / '.env',
        Path(__file__).parent.parent.parent / '.env',  # project root
    ]
    for env_path in possible_paths:
        if env_path.exists():
            load_dotenv(str(env_path), override=False)
            _env_loaded = True
            break

if not _env_loaded:
    load_dotenv()


DEFAULT_SIYUAN_URL = "http://127.0.0.1:6806"


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, failing with ConfigurationError."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}", {"variable": name})


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}", {"variable": name})


def _env_bool(name: str, default: bool = False) -> bool:
    return os.getenv(name, "true" if default else "false").lower() == "true"


class SiyuanConfig(BaseModel):
    """Connection settings for the SiYuan kernel HTTP API."""

    base_url: str = Field(default=DEFAULT_SIYUAN_URL, description="SiYuan kernel base URL")
    token: Optional[str] = Field(default=None, description="API token from SiYuan settings > About")
    timeout: float = Field(default=30.0, description="Request timeout in seconds")

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return value.rstrip("/")

    @classmethod
    def from_env(cls) -> "SiyuanConfig":
        """Create configuration from environment variables."""
        try:
            return cls(
                base_url=os.getenv("SIYUAN_API_URL", DEFAULT_SIYUAN_URL),
                token=os.getenv("SIYUAN_API_TOKEN") or None,
                timeout=_env_float("SIYUAN_TIMEOUT", 30.0),
            )
        except ValueError as e:
            # pydantic.ValidationError is a ValueError
            raise ConfigurationError(f"Invalid SiYuan configuration: {e}")

    @property
    def has_token(self) -> bool:
        return bool(self.token)


DEVELOPMENT_ORIGINS = ["http://localhost:3000", "http://localhost:8000"]


class HTTPConfig(BaseModel):
    """HTTP server configuration including rate limiting and CORS."""

    host: str = Field(default="0.0.0.0", description="Bind address for HTTP mode")
    port: int = Field(default=8000, description="Port for HTTP mode")
    rate_limit_default: str = Field(
        default="100/minute",
        description="Default rate limit for all endpoints"
    )
    cors_preflight_max_age: int = Field(
        default=600,
        description="CORS preflight max age in seconds"
    )
    cors_allowed_origins: List[str] = Field(
        default_factory=list,
        description="Origins allowed for cross-origin requests"
    )
    environment: str = Field(default="development", description="development or production")

    def resolve_allowed_origins(self) -> List[str]:
        """Configured CORS origins; localhost defaults only in development."""
        if self.cors_allowed_origins:
            return list(self.cors_allowed_origins)
        if self.environment == "development":
            return list(DEVELOPMENT_ORIGINS)
        return []

    @classmethod
    def from_env(cls) -> "HTTPConfig":
        """Create HTTP configuration from environment variables."""
        cors_env = os.getenv("CORS_ALLOWED_ORIGINS", "")
        return cls(
            host=os.getenv("HTTP_HOST", "0.0.0.0"),
            port=_env_int("HTTP_PORT", 8000),
            rate_limit_default=os.getenv("RATE_LIMIT_DEFAULT", "100/minute"),
            cors_preflight_max_age=_env_int("CORS_PREFLIGHT_MAX_AGE", 600),
            cors_allowed_origins=[origin.strip() for origin in cors_env.split(",") if origin.strip()],
            environment=os.getenv("ENVIRONMENT", "development"),
        )


class AppConfig(BaseModel):
    """Application configuration combining all configs."""

    siyuan: SiyuanConfig = Field(default_factory=SiyuanConfig)
    http_config: HTTPConfig = Field(default_factory=HTTPConfig)
    server_name: str = Field(default="siyuan-mcp-server", description="MCP server name identifier")
    server_version: str = Field(default="0.1.0", description="Version advertised to MCP clients")
    log_level: str = Field(default="INFO", description="Root logging level")
    expose_sensitive_info: bool = False  # Control whether health checks reveal the kernel URL

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unsupported log level: {value}")
        return level

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create full application configuration from environment variables."""
        try:
            return cls(
                siyuan=SiyuanConfig.from_env(),
                http_config=HTTPConfig.from_env(),
                server_name=os.getenv("MCP_SERVER_NAME", "siyuan-mcp-server"),
                server_version=os.getenv("MCP_SERVER_VERSION", "0.1.0"),
                log_level=os.getenv("LOG_LEVEL", "INFO"),
                expose_sensitive_info=_env_bool("EXPOSE_SENSITIVE_INFO"),
            )
        except ConfigurationError:
            raise
        except ValueError as e:
            raise ConfigurationError(f"Invalid application configuration: {e}")
