"""Configuration models for Mailcraft."""

from pydantic import BaseModel, Field, HttpUrl, model_validator
from pathlib import Path
from typing import Literal, Optional
import yaml
import os
import stat


DEFAULT_WELCOME_MESSAGE = (
    "Hi! I'm your Email AI Assistant. I can help you build beautiful newsletters. "
    "Just tell me what you need, for example: 'Create a welcome email for a tech "
    "newsletter' or 'Add a product section about new sneakers'."
)


class LLMConfig(BaseModel):
    """Configuration for LLM API connection."""

    endpoint: HttpUrl = Field(
        ...,
        description="OpenAI-compatible API endpoint URL"
    )

    api_key: str = Field(
        ...,
        description="API key for authentication"
    )

    model: str = Field(
        ...,
        description="Model identifier (e.g., 'gpt-4o-mini')"
    )

    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature"
    )

    model_config = {"frozen": True}


class AssistantConfig(BaseModel):
    """Configuration for the suggestion assistant."""

    engine: Literal["keyword", "llm"] = Field(
        default="keyword",
        description="Suggestion engine backend"
    )

    response_delay: float = Field(
        default=1.5,
        ge=0.0,
        le=30.0,
        description="Simulated latency of the keyword engine, in seconds"
    )

    generation_timeout: Optional[float] = Field(
        default=30.0,
        gt=0.0,
        description="Seconds before a generation counts as failed (None disables)"
    )

    history_limit: int = Field(
        default=6,
        ge=0,
        le=50,
        description="Number of prior messages sent to the LLM engine as context"
    )

    welcome_message: str = Field(
        default=DEFAULT_WELCOME_MESSAGE,
        min_length=1,
        description="Greeting shown at the top of every conversation"
    )

    model_config = {"frozen": True}


class Config(BaseModel):
    """Root configuration for Mailcraft."""

    assistant: AssistantConfig = Field(
        default_factory=AssistantConfig,
        description="Assistant settings"
    )
    llm: Optional[LLMConfig] = Field(
        default=None,
        description="LLM API settings (required for the llm engine)"
    )

    @model_validator(mode="after")
    def _llm_engine_needs_llm(self) -> "Config":
        if self.assistant.engine == "llm" and self.llm is None:
            raise ValueError(
                "assistant.engine is 'llm' but no llm section is configured"
            )
        return self

    @classmethod
    def load(cls, path: Path) -> "Config":
        """
        Load configuration from YAML file.

        Validates file permissions before loading, since the file may hold
        an API key.

        Args:
            path: Path to config.yaml file

        Returns:
            Validated Config instance

        Raises:
            PermissionError: If file is group/world accessible
            FileNotFoundError: If config file doesn't exist
            ValueError: If YAML is invalid or validation fails
        """
        if not path.exists():
            raise FileNotFoundError(
                f"Configuration file not found at {path}\n\n"
                f"Create it with the following format:\n\n"
                f"assistant:\n"
                f"  engine: llm\n\n"
                f"llm:\n"
                f"  endpoint: https://api.openai.com/v1\n"
                f"  api_key: YOUR_API_KEY_HERE\n"
                f"  model: gpt-4o-mini\n"
            )

        mode = os.stat(path).st_mode
        if mode & (stat.S_IRWXG | stat.S_IRWXO):
            raise PermissionError(
                f"Config file has overly permissive permissions: {oct(mode)}\n"
                f"Run: chmod 600 {path}"
            )

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")

        return cls(**data)

    model_config = {"frozen": True}
