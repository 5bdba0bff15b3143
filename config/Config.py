# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-19
# Description: Config
# -----------------------------------------------------------------------------

import os
from dataclasses import dataclass, field
from typing import Dict, List, Tuple
from urllib.parse import urlparse

from dotenv import load_dotenv, find_dotenv

# Load .env once globally
load_dotenv(find_dotenv(usecwd=True), override=True)


class ConfigError(ValueError):
    """Raised when required configuration is missing or malformed."""


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _is_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


@dataclass(frozen=True)
class Config:
    # Azure Cosmos DB (NoSQL API with vector search)
    cosmos_endpoint: str
    cosmos_key: str
    cosmos_database: str

    # Azure OpenAI text embedding deployment
    openai_azure_api_key: str
    openai_azure_embedding_endpoint: str

    # Optional / defaulted
    port: int = 8000
    cosmos_container: str = "productsContainer"
    embedding_dimensions: int = 1536
    cors_allow_origins: Tuple[str, ...] = field(default=("*",))

    # ---- Single source of truth: field_name -> ENV VAR NAME ----
    ENV_VARS = {
        # Cosmos DB
        "cosmos_endpoint": "AZURE_COSMOS_DB_ENDPOINT",
        "cosmos_key": "AZURE_COSMOS_DB_KEY",
        "cosmos_database": "AZURE_COSMOS_DB",

        # Azure OpenAI
        "openai_azure_api_key": "AZURE_OPENAI_API_KEY",
        "openai_azure_embedding_endpoint": "AZURE_OPENAI_TEXT_EMBEDDING_MODEL_ENDPOINT",

        # Server / tuning
        "port": "PORT",
        "cosmos_container": "AZURE_COSMOS_CONTAINER",
        "embedding_dimensions": "EMBEDDING_DIMENSIONS",
        "cors_allow_origins": "CORS_ALLOW_ORIGINS",
    }

    REQUIRED_FIELDS = (
        "cosmos_endpoint",
        "cosmos_key",
        "cosmos_database",
        "openai_azure_api_key",
        "openai_azure_embedding_endpoint",
    )

    URL_FIELDS = (
        "cosmos_endpoint",
        "openai_azure_embedding_endpoint",
    )

    @staticmethod
    def from_env() -> "Config":
        """Build Config object from environment variables."""
        problems: List[str] = []
        kwargs: Dict[str, object] = {
            field_name: _env(Config.ENV_VARS[field_name])
            for field_name in Config.REQUIRED_FIELDS
        }

        for field_name, default in (("port", 8000), ("embedding_dimensions", 1536)):
            env_name = Config.ENV_VARS[field_name]
            raw = _env(env_name)
            if raw == "":
                kwargs[field_name] = default
                continue
            try:
                kwargs[field_name] = int(raw)
            except ValueError:
                problems.append(f"{env_name} must be an int, got {raw!r}")

        container = _env(Config.ENV_VARS["cosmos_container"])
        if container:
            kwargs["cosmos_container"] = container

        origins = _env(Config.ENV_VARS["cors_allow_origins"])
        if origins:
            kwargs["cors_allow_origins"] = tuple(o.strip() for o in origins.split(",") if o.strip())

        if problems:
            raise ConfigError(f"Invalid environment variables: {problems}")

        return Config(**kwargs)

    def __post_init__(self):
        """
        Fail fast if any required config is missing or malformed.
        The process must not start with a partial configuration.
        """
        missing_fields = [f for f in self.REQUIRED_FIELDS if not getattr(self, f)]
        if missing_fields:
            missing_env_vars = [self.ENV_VARS[f] for f in missing_fields]
            raise ConfigError(f"Missing required environment variables: {missing_env_vars}")

        problems: List[str] = []
        for f in self.URL_FIELDS:
            if not _is_url(getattr(self, f)):
                problems.append(f"{self.ENV_VARS[f]} must be an http(s) URL")

        if not 0 < self.port < 65536:
            problems.append(f"{self.ENV_VARS['port']} must be a valid TCP port, got {self.port}")
        if self.embedding_dimensions <= 0:
            problems.append(
                f"{self.ENV_VARS['embedding_dimensions']} must be positive, got {self.embedding_dimensions}"
            )

        if problems:
            raise ConfigError(f"Invalid environment variables: {problems}")

    def summary(self) -> dict:
        """Return a safe, non-sensitive summary for logging."""
        return {
            "cosmos_endpoint": self.cosmos_endpoint,
            "cosmos_database": self.cosmos_database,
            "cosmos_container": self.cosmos_container,
            "openai_azure_embedding_endpoint": self.openai_azure_embedding_endpoint,
            "embedding_dimensions": self.embedding_dimensions,
            "port": self.port,
            "cors_allow_origins": list(self.cors_allow_origins),
        }
