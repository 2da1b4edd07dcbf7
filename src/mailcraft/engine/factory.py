"""Factory for creating suggestion engines."""

from mailcraft.config import ConfigManager
from mailcraft.engine.base import SuggestionEngine


def create_suggestion_engine(config: ConfigManager) -> SuggestionEngine:
    """Create the suggestion engine named in the assistant config.

    Args:
        config: Loaded configuration

    Returns:
        SuggestionEngine instance

    Raises:
        ValueError: If the engine type is not supported or its settings are missing
    """
    engine = config.assistant.engine

    if engine == "keyword":
        from mailcraft.engine.keyword import KeywordSuggestionEngine
        return KeywordSuggestionEngine(delay=config.assistant.response_delay)

    elif engine == "llm":
        from mailcraft.engine.llm import LLMSuggestionEngine
        from mailcraft.services.llm_client import LLMClient
        return LLMSuggestionEngine(
            LLMClient(config.llm),
            history_limit=config.assistant.history_limit,
        )

    raise ValueError(
        f"Unsupported suggestion engine: {engine}. "
        f"Supported engines: keyword, llm"
    )
