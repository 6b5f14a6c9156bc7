# src/ai_pr_review/providers/gpt.py
import logging
from openai import AsyncOpenAI, OpenAIError
from ai_pr_review.errors import BackendError


logger = logging.getLogger(__name__)


class OpenAIProvider:
    MODEL = "gpt-3.5-turbo"
    SYSTEM_MESSAGE = "You are a code review assistant."

    def __init__(self, api_key: str, max_tokens: int = 4000):
        self.api_key = api_key
        self.max_tokens = max_tokens
        self.client = AsyncOpenAI(api_key=api_key)

    async def call(self, prompt: str) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=self.MODEL,
                messages=[
                    {"role": "system", "content": self.SYSTEM_MESSAGE},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=self.max_tokens,
            )
        except OpenAIError as e:
            raise BackendError(f"OpenAI request failed: {e}") from e

        try:
            text = response.choices[0].message.content or ""
        except (IndexError, AttributeError, TypeError) as e:
            raise BackendError(f"OpenAI returned malformed response: {response}") from e
        logger.debug(f"OpenAI response length: {len(text)} chars")
        if not text.strip():
            raise BackendError("OpenAI returned empty response")
        return text
