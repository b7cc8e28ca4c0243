"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from capsearch.config.settings import ConnectorConfig, SearchSettings, Settings


class TestDefaults:
    def test_defaults(self, settings: Settings) -> None:
        assert settings.app_name == "capsearch"
        assert settings.search.import_batch_size == 100
        assert settings.search.default_filter_page_size == 20
        assert settings.search.default_connector == "memory"
        assert settings.observability.log_format == "json"

    def test_sizes_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            SearchSettings(import_batch_size=0)
        with pytest.raises(ValidationError):
            SearchSettings(default_filter_page_size=-1)


class TestEnvironment:
    def test_nested_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CAPSEARCH_SEARCH__IMPORT_BATCH_SIZE", "500")
        monkeypatch.setenv("CAPSEARCH_OBSERVABILITY__LOG_FORMAT", "console")
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.search.import_batch_size == 500
        assert settings.observability.log_format == "console"


class TestConnectorConfig:
    def test_hosts_from_json_string(self) -> None:
        config = ConnectorConfig(hosts='["http://a:7700", "http://b:7700"]')
        assert config.hosts == ["http://a:7700", "http://b:7700"]

    def test_hosts_from_plain_string(self) -> None:
        assert ConnectorConfig(hosts="http://a:7700").hosts == ["http://a:7700"]

    def test_filterable_from_comma_list(self) -> None:
        assert ConnectorConfig(filterable_attributes="team, city").filterable_attributes == ["team", "city"]

    def test_empty_string(self) -> None:
        assert ConnectorConfig(hosts="").hosts == []


class TestYaml:
    def test_from_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "capsearch.yaml"
        path.write_text(
            "search:\n"
            "  default_connector: meilisearch\n"
            "  import_batch_size: 250\n"
            "  connectors:\n"
            "    meilisearch:\n"
            "      hosts: ['http://localhost:7700']\n"
            "      index: accounts\n"
            "      filterable_attributes: [team]\n"
            "observability:\n"
            "  log_level: debug\n"
        )
        settings = Settings.from_yaml(path)
        assert settings.search.default_connector == "meilisearch"
        assert settings.search.import_batch_size == 250
        assert settings.search.connectors["meilisearch"].index == "accounts"
        assert settings.observability.log_level == "debug"

    def test_empty_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert Settings.from_yaml(path).search.import_batch_size == 100

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Settings.from_yaml(tmp_path / "absent.yaml")
