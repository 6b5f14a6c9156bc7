# src/ai_pr_review/providers/claude.py
import httpx
from ai_pr_review.errors import BackendError


class ClaudeProvider:
    API_URL = "https://api.anthropic.com/v1/messages"
    MODEL = "claude-3-5-sonnet-20240620"
    API_VERSION = "2023-06-01"

    def __init__(self, api_key: str, max_tokens: int = 4000):
        self.api_key = api_key
        self.max_tokens = max_tokens

    def _headers(self) -> dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": self.API_VERSION,
        }

    async def call(self, prompt: str) -> str:
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.API_URL,
                    headers=self._headers(),
                    json={
                        "model": self.MODEL,
                        "max_tokens": self.max_tokens,
                        "messages": [{"role": "user", "content": prompt}],
                    },
                    timeout=120.0,
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise BackendError(f"Anthropic request failed: {e}") from e

        try:
            data = response.json()
            text = "".join(
                block.get("text", "") for block in data["content"] if block.get("type") == "text"
            )
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise BackendError(f"Anthropic returned malformed response: {response.text[:200]}") from e
        if not text.strip():
            raise BackendError(f"Anthropic returned empty response: {data}")
        return text
