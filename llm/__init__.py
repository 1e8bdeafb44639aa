"""LLM client abstraction layer."""

from .base_client import BaseLLMClient, Message, LLMResponse
from .deepseek_client import DeepSeekClient

__all__ = [
    "BaseLLMClient",
    "Message",
    "LLMResponse",
    "DeepSeekClient",
]
