"""Tests for broobot.config module."""

import pytest
import yaml

from broobot.config import (
    DEFAULT_LISTING_URL,
    DEFAULT_READER_URL,
    DEFAULT_SEARCH_URL,
    BrooBotConfig,
)


class TestBrooBotConfigFromDict:
    """Tests for BrooBotConfig.from_dict()."""

    def test_default_values(self):
        """Empty dict should use sensible defaults."""
        config = BrooBotConfig.from_dict({})

        assert config.port == 3001
        assert config.mock_mode is False
        assert config.listing_url == DEFAULT_LISTING_URL
        assert config.reader_url == DEFAULT_READER_URL
        assert config.search_url == DEFAULT_SEARCH_URL
        assert config.scrape_timeout == 15.0
        assert config.cache_ttl == 86400
        assert config.default_limit == 5
        assert config.max_sources == 5
        assert config.models["fast"] == "claude-3-haiku-20240307"
        assert config.log_level == "INFO"

    def test_sections(self):
        """Should read every section."""
        config = BrooBotConfig.from_dict({
            "server": {"port": 8080, "frontend_url": "https://app.example", "mock_mode": True},
            "tools": {"cache_ttl": 600, "default_limit": 3},
            "research": {"max_sources": 2, "serper_api_key": "serper-key"},
            "llm": {"api_key": "sk-test", "models": {"quality": "claude-custom"}},
            "logging": {"level": "DEBUG", "file": "broobot.log"},
        })

        assert config.port == 8080
        assert config.frontend_url == "https://app.example"
        assert config.mock_mode is True
        assert config.cache_ttl == 600
        assert config.default_limit == 3
        assert config.max_sources == 2
        assert config.serper_api_key == "serper-key"
        assert config.anthropic_api_key == "sk-test"
        assert config.log_level == "DEBUG"
        assert config.log_file == "broobot.log"

    def test_models_merge_with_defaults(self):
        """Overriding one tier should keep the other."""
        config = BrooBotConfig.from_dict({"llm": {"models": {"quality": "claude-custom"}}})
        assert config.models == {
            "fast": "claude-3-haiku-20240307",
            "quality": "claude-custom",
        }


class TestBrooBotConfigLoad:
    """Tests for BrooBotConfig.load()."""

    def test_load_yaml(self, tmp_path):
        """Config loads from a YAML file."""
        path = tmp_path / "broobot.yaml"
        path.write_text(yaml.safe_dump({"server": {"port": 4000}}))

        config = BrooBotConfig.load(str(path))

        assert config.port == 4000

    def test_load_empty_file(self, tmp_path):
        """An empty file gives defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert BrooBotConfig.load(str(path)).port == 3001

    def test_load_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            BrooBotConfig.load(str(tmp_path / "missing.yaml"))


class TestEnvironment:
    """Tests for environment overrides."""

    def test_apply_env(self):
        """Environment variables override file values."""
        config = BrooBotConfig()
        config.apply_env({
            "ANTHROPIC_API_KEY": "sk-env",
            "SERPER_API_KEY": "serper-env",
            "USE_MOCK_MODE": "true",
            "PORT": "5000",
            "FRONTEND_URL": "https://ui.example",
            "LOG_LEVEL": "WARNING",
        })

        assert config.anthropic_api_key == "sk-env"
        assert config.serper_api_key == "serper-env"
        assert config.mock_mode is True
        assert config.port == 5000
        assert config.frontend_url == "https://ui.example"
        assert config.log_level == "WARNING"

    def test_mock_mode_false_value(self):
        """MOCK_MODE=false keeps mock mode off."""
        config = BrooBotConfig(mock_mode=True)
        config.apply_env({"USE_MOCK_MODE": "false"})
        assert config.mock_mode is False

    def test_empty_values_ignored(self):
        """Empty environment values are ignored."""
        config = BrooBotConfig(anthropic_api_key="sk-file")
        config.apply_env({"ANTHROPIC_API_KEY": "", "PORT": ""})
        assert config.anthropic_api_key == "sk-file"
        assert config.port == 3001

    def test_from_env_overlays_file(self, tmp_path):
        """from_env applies env on top of the file."""
        path = tmp_path / "broobot.yaml"
        path.write_text(yaml.safe_dump({"server": {"port": 4000}, "tools": {"cache_ttl": 60}}))

        config = BrooBotConfig.from_env(str(path), environ={"PORT": "4500"})

        assert config.port == 4500
        assert config.cache_ttl == 60

    def test_from_env_without_file(self):
        """from_env works with no file."""
        config = BrooBotConfig.from_env(environ={})
        assert config.port == 3001


class TestDerived:
    def test_llm_enabled(self):
        """The LLM is enabled only with a key and outside mock mode."""
        assert BrooBotConfig(anthropic_api_key="sk").llm_enabled is True
        assert BrooBotConfig().llm_enabled is False
        assert BrooBotConfig(anthropic_api_key="sk", mock_mode=True).llm_enabled is False

    def test_cors_origins(self):
        """CORS origins come from the frontend URL."""
        assert BrooBotConfig(frontend_url="https://ui").cors_origins == ["https://ui"]

    def test_to_dict_excludes_secrets(self):
        """API keys are not serialized."""
        data = BrooBotConfig(anthropic_api_key="sk-secret", serper_api_key="serper").to_dict()

        assert "sk-secret" not in str(data)
        assert "serper_api_key" not in data["research"]
        assert data["server"]["port"] == 3001
        assert data["tools"]["cache_ttl"] == 86400

    def test_to_dict_round_trip(self):
        """to_dict output loads back to an equal config."""
        config = BrooBotConfig(port=9000, cache_ttl=30, log_level="DEBUG")
        restored = BrooBotConfig.from_dict(config.to_dict())

        assert restored.port == 9000
        assert restored.cache_ttl == 30
        assert restored.log_level == "DEBUG"
