# src/ai_pr_review/providers/factory.py
from ai_pr_review.config import Settings
from ai_pr_review.errors import ConfigError
from .base import LLMProvider, ProviderName
from .claude import ClaudeProvider
from .gemini import GeminiProvider
from .gpt import OpenAIProvider
from .yandex import YandexProvider


def parse_provider_name(value: str) -> ProviderName:
    try:
        return ProviderName(value)
    except ValueError:
        accepted = ", ".join(name.value for name in ProviderName)
        raise ConfigError(f"Invalid ai-model: {value}. Accepted values are: {accepted}") from None


def get_provider(settings: Settings) -> LLMProvider:
    """Build the LLM provider selected by settings.ai_model.

    Raises ConfigError before any network call when the selector is unknown
    or its credentials are missing.
    """
    name = parse_provider_name(settings.ai_model)

    if name is ProviderName.CLAUDE:
        if not settings.anthropic_api_key:
            raise ConfigError("ANTHROPIC_API_KEY is required for claude-3.5-sonnet")
        return ClaudeProvider(api_key=settings.anthropic_api_key)
    if name is ProviderName.GPT:
        if not settings.openai_api_key:
            raise ConfigError("OPENAI_API_KEY is required for gpt-3.5")
        return OpenAIProvider(api_key=settings.openai_api_key)
    if name is ProviderName.GEMINI:
        if not settings.gemini_api_key:
            raise ConfigError("GEMINI_API_KEY is required for gemini")
        return GeminiProvider(api_key=settings.gemini_api_key)
    if not settings.yandex_api_key or not settings.yandex_folder_id:
        raise ConfigError("YANDEX_API_KEY and YANDEX_FOLDER_ID are required for yandex")
    return YandexProvider(api_key=settings.yandex_api_key, folder_id=settings.yandex_folder_id)
