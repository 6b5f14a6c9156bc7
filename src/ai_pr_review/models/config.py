from pydantic import BaseModel, Field


class RepoConfig(BaseModel):
    """Per-repository settings read from .ai-review.yaml on the PR head."""
    language: str | None = None
    exclude: list[str] = Field(
        default_factory=lambda: [
            "*.lock",
            "*.min.js",
            "*.min.css",
            "*.generated.*",
            "package-lock.json",
            "yarn.lock",
            "pnpm-lock.yaml",
        ]
    )
