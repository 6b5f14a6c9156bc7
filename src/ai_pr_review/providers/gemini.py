# src/ai_pr_review/providers/gemini.py
import httpx
from ai_pr_review.errors import BackendError


class GeminiProvider:
    API_URL = "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.5-flash:generateContent"

    def __init__(self, api_key: str):
        self.api_key = api_key

    async def call(self, prompt: str) -> str:
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    f"{self.API_URL}?key={self.api_key}",
                    json={
                        "contents": [{
                            "parts": [{"text": prompt}]
                        }]
                    },
                    timeout=60.0
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise BackendError(f"Gemini request failed: {e}") from e

        try:
            data = response.json()
            return data["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise BackendError(f"Gemini returned malformed response: {response.text[:200]}") from e
