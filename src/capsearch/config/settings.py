"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified)
  2. Environment variables (CAPSEARCH_ prefix)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class ConnectorConfig(BaseModel):
    """Configuration for a single backend connector."""

    enabled: bool = Field(default=True, description="Whether this connector is active")
    hosts: list[str] = Field(default_factory=list, description="Backend host URLs")
    index: str | None = Field(default=None, description="Index/collection holding the records")
    api_key: str | None = Field(default=None, description="API key authentication")
    filterable_attributes: list[str] = Field(
        default_factory=list, description="Attributes the backend can filter on by equality"
    )
    extra: dict[str, Any] = Field(default_factory=dict, description="Connector-specific options")

    @field_validator("hosts", "filterable_attributes", mode="before")
    @classmethod
    def _parse_list(cls, v: Any) -> list[str]:
        """Parse a list from a JSON string (env var), a comma-separated string or a list."""
        if isinstance(v, str):
            import json

            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return [str(h) for h in parsed]
            except (json.JSONDecodeError, TypeError):
                pass
            return [part.strip() for part in v.split(",") if part.strip()]
        return list(v)


class SearchSettings(BaseModel):
    """Search behavior configuration."""

    default_connector: str = Field(default="memory", description="Default backend connector name")
    connectors: dict[str, ConnectorConfig] = Field(default_factory=dict, description="Connector configurations")
    import_batch_size: int = Field(default=100, gt=0, description="Records per page during a full import")
    default_filter_page_size: int = Field(
        default=20, gt=0, description="Page size for filtered searches when the caller gives none"
    )


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the CAPSEARCH_ prefix.
    Nested settings use double underscores: CAPSEARCH_SEARCH__IMPORT_BATCH_SIZE=500

    Example:
        CAPSEARCH_SEARCH__DEFAULT_CONNECTOR=meilisearch
        CAPSEARCH_SEARCH__DEFAULT_FILTER_PAGE_SIZE=50
        CAPSEARCH_OBSERVABILITY__LOG_FORMAT=console
    """

    model_config = {
        "env_prefix": "CAPSEARCH_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    app_name: str = Field(default="capsearch", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    search: SearchSettings = Field(default_factory=SearchSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are passed as init arguments; environment
        variables fill in any top-level section the file leaves out.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
