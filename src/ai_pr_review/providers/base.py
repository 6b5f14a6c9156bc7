# src/ai_pr_review/providers/base.py
from enum import Enum
from typing import Protocol, runtime_checkable


class ProviderName(str, Enum):
    CLAUDE = "claude-3.5-sonnet"
    GPT = "gpt-3.5"
    GEMINI = "gemini"
    YANDEX = "yandex"


@runtime_checkable
class LLMProvider(Protocol):
    async def call(self, prompt: str) -> str:
        """Send prompt to the model and return its raw reply text.

        Raises BackendError when the provider cannot be reached or answers
        with a non-success status.
        """
        ...
