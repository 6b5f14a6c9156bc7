# src/ai_pr_review/__main__.py
"""One-shot review for a GitHub Actions job triggered by a pull request."""
import asyncio
import json
import logging
import os

from ai_pr_review.main import run_review


logger = logging.getLogger("ai_pr_review")


def main() -> None:
    event_path = os.environ.get("GITHUB_EVENT_PATH")
    if not event_path:
        logger.error("GITHUB_EVENT_PATH is not set")
        return

    with open(event_path, encoding="utf-8") as f:
        event = json.load(f)

    pull_request = event.get("pull_request")
    if not pull_request:
        logger.info("This action only runs on pull request events.")
        return

    owner = event["repository"]["owner"]["login"]
    repo = event["repository"]["name"]
    logger.info(f"Reviewing PR #{pull_request['number']} in {owner}/{repo}")

    # A failed review never fails the job
    asyncio.run(run_review(owner=owner, repo=repo, pull_number=pull_request["number"]))


if __name__ == "__main__":
    main()
