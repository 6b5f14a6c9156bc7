# src/ai_pr_review/providers/__init__.py
from .base import LLMProvider, ProviderName
from .claude import ClaudeProvider
from .factory import get_provider, parse_provider_name
from .gemini import GeminiProvider
from .gpt import OpenAIProvider
from .yandex import YandexProvider

__all__ = [
    "LLMProvider",
    "ProviderName",
    "ClaudeProvider",
    "GeminiProvider",
    "OpenAIProvider",
    "YandexProvider",
    "get_provider",
    "parse_provider_name",
]
