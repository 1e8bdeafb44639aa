"""LLM client factory."""

from config.settings import Settings

from .base_client import BaseLLMClient
from .deepseek_client import DeepSeekClient


def create_llm_client(settings: Settings) -> BaseLLMClient:
    """
    Create the completion client described by `settings`.

    Args:
        settings: Application settings carrying the API key, URL and model

    Returns:
        Configured LLM client

    Raises:
        ConfigError: If no API key is configured
    """
    return DeepSeekClient(
        api_key=settings.deepseek_api_key,
        api_url=settings.deepseek_api_url,
        model=settings.llm_model,
        timeout=settings.request_timeout,
    )
