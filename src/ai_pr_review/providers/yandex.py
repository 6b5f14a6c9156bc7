# src/ai_pr_review/providers/yandex.py
import logging
from openai import AsyncOpenAI, OpenAIError
from ai_pr_review.errors import BackendError


logger = logging.getLogger(__name__)


class YandexProvider:
    BASE_URL = "https://llm.api.cloud.yandex.net/v1"

    def __init__(self, api_key: str, folder_id: str):
        self.api_key = api_key
        self.folder_id = folder_id
        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=self.BASE_URL,
            default_headers={"x-folder-id": folder_id},
        )

    async def call(self, prompt: str) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=f"gpt://{self.folder_id}/yandexgpt/latest",
                messages=[{"role": "user", "content": prompt}],
                temperature=0.5,
                max_tokens=8000,
            )
        except OpenAIError as e:
            raise BackendError(f"Yandex request failed: {e}") from e

        try:
            text = response.choices[0].message.content or ""
        except (IndexError, AttributeError, TypeError) as e:
            raise BackendError(f"Yandex returned malformed response: {response}") from e
        logger.info(f"Yandex response length: {len(text)} chars")

        if not text.strip():
            raise BackendError(f"Yandex returned empty response. Full API response: {response}")
        return text
