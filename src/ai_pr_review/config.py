# src/ai_pr_review/config.py
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env")

    # GitHub
    github_api_url: str = "https://api.github.com"
    github_token: str
    github_webhook_secret: str | None = None

    # LLM Providers
    ai_model: str = "claude-3.5-sonnet"
    anthropic_api_key: str | None = None
    openai_api_key: str | None = None
    gemini_api_key: str | None = None
    yandex_api_key: str | None = None
    yandex_folder_id: str | None = None

    # Review behaviour
    strict: bool = False
    ignore_patterns: list[str] = Field(default_factory=list)
    comment_anchor: Literal["position", "line"] = "position"
    max_concurrency: int | None = None

    # Defaults
    default_language: str = "en"
    reviewer_name: str = "AI Review"
    log_dir: str | None = None
    log_level: str = "INFO"
