"""Unit tests for configuration models and ConfigManager."""

import os

import pytest
from pydantic import ValidationError

from mailcraft.config import ConfigManager
from mailcraft.models.config import (
    DEFAULT_WELCOME_MESSAGE,
    AssistantConfig,
    Config,
    LLMConfig,
)


def write_config(path, text, mode=0o600):
    """Write a config file with the given permissions."""
    path.write_text(text)
    os.chmod(path, mode)
    return path


LLM_YAML = """
assistant:
  engine: llm
  history_limit: 4
llm:
  endpoint: https://api.openai.com/v1
  api_key: sk-test
  model: gpt-4o-mini
"""


class TestLLMConfig:
    """Test LLM configuration model."""

    def test_valid_llm_config(self):
        """Test creating valid LLM config."""
        config = LLMConfig(
            endpoint="https://api.openai.com/v1",
            api_key="sk-test-key",
            model="gpt-4o-mini"
        )

        assert "api.openai.com/v1" in str(config.endpoint)
        assert config.temperature == 0.7

    def test_invalid_endpoint(self):
        with pytest.raises(ValidationError):
            LLMConfig(endpoint="not a url", api_key="k", model="m")

    def test_llm_config_immutable(self):
        """Test that LLM config is frozen (immutable)."""
        config = LLMConfig(endpoint="https://api.openai.com/v1", api_key="sk-test", model="gpt-4")

        with pytest.raises(ValidationError):
            config.api_key = "new-key"


class TestAssistantConfig:
    """Test assistant configuration defaults and bounds."""

    def test_defaults(self):
        config = AssistantConfig()

        assert config.engine == "keyword"
        assert config.response_delay == 1.5
        assert config.generation_timeout == 30.0
        assert config.history_limit == 6
        assert config.welcome_message == DEFAULT_WELCOME_MESSAGE

    def test_timeout_can_be_disabled(self):
        assert AssistantConfig(generation_timeout=None).generation_timeout is None

    @pytest.mark.parametrize("field,value", [
        ("engine", "oracle"),
        ("response_delay", -1),
        ("generation_timeout", 0),
        ("history_limit", -2),
        ("welcome_message", ""),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            AssistantConfig(**{field: value})


class TestConfig:
    """Test root config and file loading."""

    def test_llm_engine_requires_llm_section(self):
        """Selecting the llm engine without llm settings is an error."""
        with pytest.raises(ValidationError, match="no llm section"):
            Config(assistant={"engine": "llm"})

    def test_load_valid_file(self, tmp_path):
        """A valid file loads into typed sections."""
        path = write_config(tmp_path / "config.yaml", LLM_YAML)

        config = Config.load(path)

        assert config.assistant.engine == "llm"
        assert config.assistant.history_limit == 4
        assert config.llm.model == "gpt-4o-mini"

    def test_load_empty_file_gives_defaults(self, tmp_path):
        path = write_config(tmp_path / "config.yaml", "")

        assert Config.load(path) == Config()

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            Config.load(tmp_path / "missing.yaml")

    def test_load_rejects_open_permissions(self, tmp_path):
        """Group/world readable files are refused."""
        path = write_config(tmp_path / "config.yaml", LLM_YAML, mode=0o644)

        with pytest.raises(PermissionError, match="chmod 600"):
            Config.load(path)

    def test_load_invalid_yaml(self, tmp_path):
        path = write_config(tmp_path / "config.yaml", "assistant: [unclosed")

        with pytest.raises(ValueError, match="Invalid YAML"):
            Config.load(path)

    def test_load_non_mapping(self, tmp_path):
        path = write_config(tmp_path / "config.yaml", "- just\n- a list\n")

        with pytest.raises(ValueError, match="must contain a mapping"):
            Config.load(path)


class TestConfigManager:
    """Test ConfigManager loading and lazy sections."""

    def test_missing_file_allowed(self, tmp_path):
        """allow_missing falls back to built-in defaults."""
        manager = ConfigManager.load_from_path(tmp_path / "missing.yaml", allow_missing=True)

        assert manager.assistant.engine == "keyword"

    def test_missing_file_not_allowed(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigManager.load_from_path(tmp_path / "missing.yaml")

    def test_validation_error_becomes_value_error(self, tmp_path):
        """Schema errors surface as ValueError."""
        path = write_config(tmp_path / "config.yaml", "assistant:\n  engine: oracle\n")

        with pytest.raises(ValueError, match="Configuration validation failed"):
            ConfigManager.load_from_path(path)

    def test_permission_error_propagates(self, tmp_path):
        path = write_config(tmp_path / "config.yaml", LLM_YAML, mode=0o640)

        with pytest.raises(PermissionError):
            ConfigManager.load_from_path(path)

    def test_llm_section(self, tmp_path):
        path = write_config(tmp_path / "config.yaml", LLM_YAML)

        manager = ConfigManager.load_from_path(path)

        assert manager.llm.api_key == "sk-test"

    def test_llm_section_missing(self):
        """Asking for llm settings that are not configured raises."""
        manager = ConfigManager(Config())

        with pytest.raises(ValueError, match="LLM configuration missing"):
            manager.llm

    def test_missing_llm_section_fails_at_load(self, tmp_path):
        """Selecting the llm engine without llm settings fails when the file is loaded."""
        path = write_config(tmp_path / "config.yaml", "assistant:\n  engine: llm\n")

        with pytest.raises(ValueError, match="no llm section"):
            ConfigManager.load_from_path(path)

    def test_sections_reflect_loaded_config(self, tmp_path):
        """Section accessors return the validated sections of the loaded file."""
        path = write_config(tmp_path / "config.yaml", LLM_YAML)

        manager = ConfigManager.load_from_path(path)

        assert manager.assistant is manager.config.assistant
        assert manager.llm is manager.config.llm
