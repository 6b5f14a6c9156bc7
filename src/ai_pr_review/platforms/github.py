from typing import Any
from urllib.parse import quote
import httpx
from .base import GitPlatform


class GitHubClient(GitPlatform):
    API_VERSION = "2022-11-28"

    def __init__(self, token: str, base_url: str = "https://api.github.com"):
        self.token = token
        self.api_url = base_url.rstrip("/")

    def _headers(self, accept: str = "application/vnd.github+json") -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": accept,
            "X-GitHub-Api-Version": self.API_VERSION,
        }

    async def get_pr_info(self, owner: str, repo: str, pull_number: int) -> dict[str, Any]:
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{self.api_url}/repos/{owner}/{repo}/pulls/{pull_number}",
                headers=self._headers(),
                timeout=30.0,
            )
            response.raise_for_status()
            return response.json()

    async def get_pr_diff(self, owner: str, repo: str, pull_number: int) -> str:
        """Get the whole pull request as a unified diff."""
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{self.api_url}/repos/{owner}/{repo}/pulls/{pull_number}",
                headers=self._headers(accept="application/vnd.github.diff"),
                timeout=60.0,
            )
            response.raise_for_status()
            return response.text

    async def get_file_content(self, owner: str, repo: str, file_path: str, ref: str) -> str:
        encoded_path = quote(file_path)
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{self.api_url}/repos/{owner}/{repo}/contents/{encoded_path}",
                params={"ref": ref},
                headers=self._headers(accept="application/vnd.github.raw+json"),
                timeout=30.0,
            )
            response.raise_for_status()
            return response.text

    async def get_repo_config(self, owner: str, repo: str, ref: str) -> str | None:
        """Get .ai-review.yaml content, returns None if not found."""
        try:
            return await self.get_file_content(owner, repo, ".ai-review.yaml", ref)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return None
            raise

    async def submit_review(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        body: str,
        event: str,
        comments: list[dict[str, Any]],
        commit_id: str | None = None,
    ) -> None:
        payload: dict[str, Any] = {"body": body, "event": event, "comments": comments}
        if commit_id:
            payload["commit_id"] = commit_id

        async with httpx.AsyncClient() as client:
            response = await client.post(
                f"{self.api_url}/repos/{owner}/{repo}/pulls/{pull_number}/reviews",
                headers=self._headers(),
                json=payload,
                timeout=60.0,
            )
            response.raise_for_status()
