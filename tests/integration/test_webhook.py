# tests/integration/test_webhook.py
import hashlib
import hmac
import json
import pytest
from httpx import AsyncClient, ASGITransport
from unittest.mock import patch
from ai_pr_review.main import app, verify_signature


SECRET = "test-secret"

REPOSITORY = {"name": "repo", "full_name": "octo/repo", "owner": {"login": "octo"}}


def _signed(payload: dict) -> tuple[bytes, str]:
    body = json.dumps(payload).encode()
    digest = hmac.new(SECRET.encode(), body, hashlib.sha256).hexdigest()
    return body, f"sha256={digest}"


async def _post(event: str, payload: dict, signature: str | None = None):
    transport = ASGITransport(app=app)
    body, valid_signature = _signed(payload)

    with patch("ai_pr_review.main.get_settings") as mock_settings, \
         patch("ai_pr_review.main.run_review") as mock_run_review:
        mock_settings.return_value.github_webhook_secret = SECRET

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.post(
                "/webhook/github",
                headers={
                    "X-GitHub-Event": event,
                    "X-Hub-Signature-256": signature or valid_signature,
                    "Content-Type": "application/json",
                },
                content=body,
            )

    return response, mock_run_review


def test_verify_signature():
    body, signature = _signed({"a": 1})

    assert verify_signature(SECRET, body, signature) is True
    assert verify_signature(SECRET, body + b" ", signature) is False
    assert verify_signature(SECRET, body, None) is False
    assert verify_signature(SECRET, body, "md5=abc") is False


@pytest.mark.integration
@pytest.mark.asyncio
async def test_webhook_rejects_invalid_signature():
    response, mock_run_review = await _post("pull_request", {"action": "opened"}, signature="sha256=bad")

    assert response.status_code == 401
    mock_run_review.assert_not_called()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_webhook_accepts_pull_request_event():
    response, mock_run_review = await _post("pull_request", {
        "action": "opened",
        "number": 7,
        "pull_request": {"number": 7, "title": "Add y", "state": "open", "draft": False},
        "repository": REPOSITORY,
    })

    assert response.status_code == 200
    assert response.json()["status"] == "accepted"
    mock_run_review.assert_called_once_with(owner="octo", repo="repo", pull_number=7)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_webhook_ignores_draft_pull_request():
    response, mock_run_review = await _post("pull_request", {
        "action": "synchronize",
        "number": 7,
        "pull_request": {"number": 7, "title": "WIP", "state": "open", "draft": True},
        "repository": REPOSITORY,
    })

    assert response.json()["status"] == "ignored"
    mock_run_review.assert_not_called()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_webhook_triggers_on_review_command():
    response, mock_run_review = await _post("issue_comment", {
        "action": "created",
        "issue": {"number": 9, "pull_request": {"url": "https://api.github.com/repos/octo/repo/pulls/9"}},
        "comment": {"body": "/review please", "user": {"login": "dev"}},
        "repository": REPOSITORY,
    })

    assert response.json()["status"] == "accepted"
    mock_run_review.assert_called_once_with(owner="octo", repo="repo", pull_number=9)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_webhook_ignores_comments_on_issues():
    response, mock_run_review = await _post("issue_comment", {
        "action": "created",
        "issue": {"number": 3},
        "comment": {"body": "/review", "user": {"login": "dev"}},
        "repository": REPOSITORY,
    })

    assert response.json()["status"] == "ignored"
    mock_run_review.assert_not_called()
