"""
Tests for configuration models and loading.
"""

import json

import pytest
from pydantic import ValidationError

from graphql_search import ConfigLoader, FetcherConfig, LoggingConfig, LogLevel, SearchConfig


class TestFetcherConfig:
    """Test FetcherConfig validation."""

    def test_defaults(self):
        config = FetcherConfig(endpoint="https://rest.example.com/graphql/")

        assert config.endpoint_url == "https://rest.example.com/graphql/"
        assert config.application_key is None
        assert config.timeout is None
        assert config.headers == {}

    def test_endpoint_kept_verbatim(self):
        config = FetcherConfig(endpoint=" https://api.example.com ")

        assert config.endpoint_url == "https://api.example.com"

    def test_invalid_endpoint(self):
        with pytest.raises(ValidationError):
            FetcherConfig(endpoint="not a url")

    def test_non_positive_timeout(self):
        with pytest.raises(ValidationError):
            FetcherConfig(endpoint="https://api.example.com/graphql", timeout=0)

    def test_application_key_assignment_validated(self):
        config = FetcherConfig(endpoint="https://api.example.com/graphql")

        config.application_key = "  secret  "
        assert config.application_key == "secret"

        config.application_key = "   "
        assert config.application_key is None

    @pytest.mark.parametrize("header", ["Content-Type", "x-application-key"])
    def test_reserved_headers_rejected(self, header):
        with pytest.raises(ValidationError):
            FetcherConfig(endpoint="https://api.example.com/graphql", headers={header: "x"})

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            FetcherConfig(endpoint="https://api.example.com/graphql", retries=3)


class TestConfigLoader:
    """Test ConfigLoader sources and precedence."""

    def test_environment_only(self, tmp_path):
        loader = ConfigLoader(search_paths=[tmp_path / "missing.yaml"])

        config = loader.load_config(
            environ={
                "GRAPHQL_SEARCH_ENDPOINT": "https://api.example.com/graphql",
                "GRAPHQL_SEARCH_APPLICATION_KEY": "12345",
                "GRAPHQL_SEARCH_TIMEOUT": "7.5",
                "GRAPHQL_SEARCH_LOG_LEVEL": "DEBUG",
            }
        )

        assert isinstance(config, SearchConfig)
        assert config.fetcher.endpoint_url == "https://api.example.com/graphql"
        assert config.fetcher.application_key == "12345"
        assert config.fetcher.timeout == 7.5
        assert config.logging.level == LogLevel.DEBUG

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "graphql_search.yaml"
        path.write_text(
            "fetcher:\n"
            "  endpoint: https://api.example.com/graphql\n"
            "  timeout: 12\n"
            "  headers:\n"
            "    User-Agent: places-app/1.0\n"
            "logging:\n"
            "  enable_structured: true\n",
            encoding="utf-8",
        )

        config = ConfigLoader(search_paths=[path]).load_config(environ={})

        assert config.fetcher.timeout == 12.0
        assert config.fetcher.headers == {"User-Agent": "places-app/1.0"}
        assert config.logging.enable_structured is True

    def test_environment_overrides_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps(
                {"fetcher": {"endpoint": "https://file.example.com/graphql", "application_key": "from-file"}}
            ),
            encoding="utf-8",
        )

        config = ConfigLoader().load_config(
            path, environ={"GRAPHQL_SEARCH_APPLICATION_KEY": "from-env"}
        )

        assert config.fetcher.endpoint_url == "https://file.example.com/graphql"
        assert config.fetcher.application_key == "from-env"

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("endpoint = 'x'", encoding="utf-8")

        with pytest.raises(ValueError, match="Unsupported"):
            ConfigLoader().load_config(path, environ={})

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ValueError, match="Failed to parse"):
            ConfigLoader().load_config(path, environ={})

    def test_missing_endpoint(self, tmp_path):
        with pytest.raises(ValidationError):
            ConfigLoader(search_paths=[]).load_config(environ={})

    def test_logging_defaults(self):
        config = LoggingConfig()

        assert config.level == LogLevel.WARNING
        assert config.mask_credentials is True
