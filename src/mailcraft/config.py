"""Configuration management."""

from pathlib import Path
from typing import Optional

from mailcraft.models.config import AssistantConfig, Config, LLMConfig
from mailcraft.utils.logging import get_logger


logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "mailcraft" / "config.yaml"


class ConfigManager:
    """
    Configuration manager.

    The whole file is validated when it is loaded, so a config that selects
    the llm engine without an llm section fails at startup. Sections are then
    handed out as plain accessors; `llm` raises if it was never configured.

    Example:
        >>> config_mgr = ConfigManager.load_default()
        >>> config_mgr.assistant.engine
        'keyword'
    """

    def __init__(self, config: Config):
        """
        Initialize config manager with loaded config.

        Args:
            config: Loaded and validated Config instance
        """
        self._config = config

    @property
    def config(self) -> Config:
        """The wrapped root configuration."""
        return self._config

    @classmethod
    def load_default(cls, allow_missing: bool = True) -> "ConfigManager":
        """
        Load configuration from ~/.config/mailcraft/config.yaml.

        Args:
            allow_missing: Fall back to built-in defaults if the file is absent

        Returns:
            ConfigManager instance

        Raises:
            FileNotFoundError: If the file is missing and allow_missing is False
            PermissionError: If config file has wrong permissions
            ValueError: If config is invalid
        """
        return cls.load_from_path(DEFAULT_CONFIG_PATH, allow_missing=allow_missing)

    @classmethod
    def load_from_path(cls, path: Path, allow_missing: bool = False) -> "ConfigManager":
        """
        Load configuration from specific path.

        Args:
            path: Path to config.yaml file
            allow_missing: Fall back to built-in defaults if the file is absent

        Returns:
            ConfigManager instance with loaded config

        Raises:
            FileNotFoundError: If config file doesn't exist and allow_missing is False
            PermissionError: If config file has wrong permissions
            ValueError: If config is invalid
        """
        logger.info("config_loading", path=str(path))

        if allow_missing and not path.exists():
            logger.info("config_defaults_used", path=str(path))
            return cls(Config())

        try:
            config = Config.load(path)
            logger.info("config_loaded", path=str(path))
            return cls(config)

        except FileNotFoundError as e:
            logger.error("config_not_found", path=str(path), error=str(e))
            raise

        except PermissionError as e:
            logger.error("config_permission_error", path=str(path), error=str(e))
            raise

        except Exception as e:
            logger.error("config_validation_error", path=str(path), error=str(e))
            raise ValueError(f"Configuration validation failed: {e}") from e

    @property
    def assistant(self) -> AssistantConfig:
        """Assistant configuration (defaults if not specified)."""
        return self._config.assistant

    @property
    def llm(self) -> LLMConfig:
        """
        Get LLM configuration.

        Returns:
            Validated LLM configuration

        Raises:
            ValueError: If no llm section is configured
        """
        llm: Optional[LLMConfig] = self._config.llm
        if llm is None:
            logger.error("llm_config_missing")
            raise ValueError(
                "LLM configuration missing: add an 'llm' section with "
                "endpoint, api_key and model to config.yaml"
            )
        return llm
