"""Configuration loading."""

from capsearch.config.settings import ConnectorConfig, ObservabilitySettings, SearchSettings, Settings

__all__ = ["ConnectorConfig", "ObservabilitySettings", "SearchSettings", "Settings"]
