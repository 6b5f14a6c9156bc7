# src/ai_pr_review/main.py
import hashlib
import hmac
import re
import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from fastapi import FastAPI, Header, HTTPException, BackgroundTasks, Request
from pydantic import BaseModel, ValidationError, model_validator

from ai_pr_review import __version__
from ai_pr_review.config import Settings
from ai_pr_review.errors import ConfigError
from ai_pr_review.models.webhook import GitHubIssueCommentEvent, GitHubPullRequestEvent
from ai_pr_review.platforms.github import GitHubClient
from ai_pr_review.providers.base import LLMProvider
from ai_pr_review.providers.factory import get_provider
from ai_pr_review.review.engine import ReviewEngine


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

REVIEW_ACTIONS = ("opened", "synchronize", "reopened", "ready_for_review")


@lru_cache
def get_settings() -> Settings:
    return Settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.getLogger().setLevel(get_settings().log_level)
    logger.info("AI PR Review starting...")
    yield
    logger.info("AI PR Review shutting down...")


app = FastAPI(title="AI PR Review", lifespan=lifespan)


class WebhookResponse(BaseModel):
    status: str
    message: str | None = None


class ReviewRequest(BaseModel):
    url: str | None = None
    owner: str | None = None
    repo: str | None = None
    pull_number: int | None = None

    @model_validator(mode="after")
    def check_params(self):
        if not self.url and not (self.owner and self.repo and self.pull_number):
            raise ValueError("Either url or owner+repo+pull_number required")
        return self


class ReviewResponse(BaseModel):
    status: str
    owner: str | None = None
    repo: str | None = None
    pull_number: int | None = None
    comments_posted: int | None = None
    failed_files: list[str] | None = None
    summary: str | None = None
    error: str | None = None


def parse_github_pr_url(url: str) -> tuple[str, str, int]:
    """Parse GitHub PR URL -> (owner, repo, pull_number)."""
    match = re.match(r"https?://[^/]+/([^/]+)/([^/]+)/pull/(\d+)", url)
    if not match:
        raise ValueError(f"Invalid GitHub pull request URL: {url}")
    return match.group(1), match.group(2), int(match.group(3))


def verify_signature(secret: str, body: bytes, signature: str | None) -> bool:
    """Check the X-Hub-Signature-256 header against the raw request body."""
    if not signature or not signature.startswith("sha256="):
        return False
    expected = hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(f"sha256={expected}", signature)


def build_engine(settings: Settings, provider: LLMProvider, github: GitHubClient) -> ReviewEngine:
    return ReviewEngine(
        provider=provider,
        platform=github,
        language=settings.default_language,
        reviewer_name=settings.reviewer_name,
        ignore_patterns=settings.ignore_patterns,
        strict=settings.strict,
        comment_anchor=settings.comment_anchor,
        max_concurrency=settings.max_concurrency,
        log_dir=settings.log_dir,
    )


@app.get("/health")
async def health():
    return {"status": "ok", "version": __version__}


@app.post("/webhook/github", response_model=WebhookResponse)
async def github_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    x_github_event: str = Header(...),
    x_hub_signature_256: str | None = Header(None),
):
    settings = get_settings()
    raw_body = await request.body()

    # Verify webhook signature
    if settings.github_webhook_secret and not verify_signature(
        settings.github_webhook_secret, raw_body, x_hub_signature_256
    ):
        raise HTTPException(status_code=401, detail="Invalid webhook signature")

    body = await request.json()

    if x_github_event == "pull_request":
        event = GitHubPullRequestEvent(**body)

        if event.action in REVIEW_ACTIONS and not event.pull_request.draft:
            background_tasks.add_task(
                run_review,
                owner=event.repository.owner.login,
                repo=event.repository.name,
                pull_number=event.pull_request.number,
            )
            return WebhookResponse(status="accepted", message="Review scheduled")

    elif x_github_event == "issue_comment":
        event = GitHubIssueCommentEvent(**body)

        if (
            event.action == "created"
            and event.issue.pull_request is not None
            and "/review" in event.comment.body
        ):
            background_tasks.add_task(
                run_review,
                owner=event.repository.owner.login,
                repo=event.repository.name,
                pull_number=event.issue.number,
            )
            return WebhookResponse(status="accepted", message="Review scheduled")

    return WebhookResponse(status="ignored", message="Event not relevant")


@app.post("/api/review", response_model=ReviewResponse)
async def trigger_review(request: ReviewRequest):
    """Manually trigger a review for a pull request."""
    settings = get_settings()

    try:
        # Backend selection is validated before anything is fetched
        provider = get_provider(settings)

        if request.url:
            owner, repo, pull_number = parse_github_pr_url(request.url)
        else:
            owner, repo, pull_number = request.owner, request.repo, request.pull_number

        github = GitHubClient(token=settings.github_token, base_url=settings.github_api_url)
        engine = build_engine(settings, provider, github)
        result = await engine.review_pr(owner=owner, repo=repo, pull_number=pull_number)

        return ReviewResponse(
            status="completed",
            owner=owner,
            repo=repo,
            pull_number=pull_number,
            comments_posted=result.comments_count,
            failed_files=result.failed_files,
            summary=result.summary or "No issues found",
        )

    except (ConfigError, ValueError) as e:
        return ReviewResponse(status="error", error=str(e))
    except Exception as e:
        logger.exception(f"Review failed: {e}")
        return ReviewResponse(status="error", error=str(e))


async def run_review(owner: str, repo: str, pull_number: int) -> None:
    """Background task to run the review."""
    try:
        settings = get_settings()
        provider = get_provider(settings)
    except (ConfigError, ValidationError) as e:
        logger.error(f"Invalid configuration: {e}")
        return

    github = GitHubClient(token=settings.github_token, base_url=settings.github_api_url)
    engine = build_engine(settings, provider, github)

    try:
        result = await engine.review_pr(owner=owner, repo=repo, pull_number=pull_number)
        logger.info(
            f"Review completed for {owner}/{repo}#{pull_number}: "
            f"{result.comments_count} comments, {len(result.failed_files)} files failed"
        )
    except Exception as e:
        logger.exception(f"Review failed for {owner}/{repo}#{pull_number}: {e}")
