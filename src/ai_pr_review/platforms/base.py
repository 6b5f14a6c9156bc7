from abc import ABC, abstractmethod
from typing import Any


class GitPlatform(ABC):
    @abstractmethod
    async def get_pr_info(self, owner: str, repo: str, pull_number: int) -> dict[str, Any]:
        pass

    @abstractmethod
    async def get_pr_diff(self, owner: str, repo: str, pull_number: int) -> str:
        pass

    @abstractmethod
    async def get_file_content(self, owner: str, repo: str, file_path: str, ref: str) -> str:
        pass

    @abstractmethod
    async def get_repo_config(self, owner: str, repo: str, ref: str) -> str | None:
        pass

    @abstractmethod
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
        pass
