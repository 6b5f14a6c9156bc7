# src/ai_pr_review/review/engine.py
import asyncio
import fnmatch
import re
import yaml
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Literal
import httpx
from ai_pr_review.errors import BackendError, ParseError
from ai_pr_review.models.config import RepoConfig
from ai_pr_review.models.review import ChangedFile, Remark, Review
from ai_pr_review.platforms.base import GitPlatform
from ai_pr_review.providers.base import LLMProvider
from .parser import number_diff, parse_diff
from .positions import map_remarks
from .prompts import build_review_prompt, build_summary_prompt
from .response import parse_review_response


logger = logging.getLogger(__name__)

NO_CHANGES_SUMMARY = "No changes reviewed."
NO_RESULTS_SUMMARY = "No file reviews could be produced for this pull request."

FileOutcome = tuple[str, Review | Exception]


@dataclass
class EngineReviewResult:
    """Result of running review on a pull request."""
    comments_count: int
    summary: str
    failed_files: list[str] = field(default_factory=list)


class ReviewEngine:
    def __init__(
        self,
        provider: LLMProvider,
        platform: GitPlatform | None = None,
        language: str = "en",
        reviewer_name: str = "AI Review",
        ignore_patterns: list[str] | None = None,
        strict: bool = False,
        comment_anchor: Literal["position", "line"] = "position",
        max_concurrency: int | None = None,
        log_dir: str | None = None,
    ):
        self.provider = provider
        self.platform = platform
        self.language = language
        self.reviewer_name = reviewer_name
        self.ignore_patterns = ignore_patterns or []
        self.strict = strict
        self.comment_anchor = comment_anchor
        self.max_concurrency = max_concurrency
        self.log_dir = Path(log_dir) if log_dir else None
        if self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)
        self._prompt_logs: list[str] = []

    async def review_file(self, path: str, diff: str, content: str, language: str | None = None) -> Review:
        """Review one file. Raises BackendError or ParseError."""
        prompt = build_review_prompt(
            file_path=path,
            diff_content=diff,
            file_content=content,
            language=language or self.language,
        )
        self._prompt_logs.append(self._strip_file_content(path, prompt))

        text = await self.provider.call(prompt)
        response = parse_review_response(text, path=path)

        return Review(
            summary=response.summary,
            remarks=[Remark(path=path, position=r.position, body=r.body) for r in response.remarks],
        )

    async def review_all(self, files: list[ChangedFile], language: str | None = None) -> list[FileOutcome]:
        """Review all files concurrently; results keep the input order."""
        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None

        async def run(file: ChangedFile) -> FileOutcome:
            try:
                if semaphore is None:
                    review = await self.review_file(file.path, file.diff, file.content, language)
                else:
                    async with semaphore:
                        review = await self.review_file(file.path, file.diff, file.content, language)
            except ParseError as e:
                logger.error(f"Could not parse review for {file.path}: {e}")
                logger.debug(f"Raw response for {file.path}: {e.raw[:500]}")
                return file.path, e
            except BackendError as e:
                logger.error(f"LLM review failed for {file.path}: {e}")
                return file.path, e
            except Exception as e:
                logger.exception(f"Unexpected error reviewing {file.path}: {e}")
                return file.path, e
            return file.path, review

        return list(await asyncio.gather(*(run(file) for file in files)))

    async def combine_reviews(self, outcomes: list[FileOutcome], language: str | None = None) -> Review:
        """Merge per-file reviews into one pull-request-level review."""
        reviews = [(path, result) for path, result in outcomes if isinstance(result, Review)]
        remarks = [remark for _, review in reviews for remark in review.remarks]

        if not outcomes:
            return Review(summary=NO_CHANGES_SUMMARY, remarks=[])
        if not reviews:
            return Review(summary=NO_RESULTS_SUMMARY, remarks=[])

        summaries = [(path, review.summary) for path, review in reviews]
        prompt = build_summary_prompt(summaries, language=language or self.language)

        try:
            text = await self.provider.call(prompt)
            summary = parse_review_response(text).summary
        except (BackendError, ParseError) as e:
            logger.warning(f"Summary synthesis failed, using per-file summaries: {e}")
            summary = self._concat_summaries(summaries)
        except Exception as e:
            logger.exception(f"Unexpected error during summary synthesis: {e}")
            summary = self._concat_summaries(summaries)

        return Review(summary=summary, remarks=remarks)

    async def review_pr(self, owner: str, repo: str, pull_number: int) -> EngineReviewResult:
        """Run AI review on a pull request and submit it."""
        if self.platform is None:
            raise ValueError("ReviewEngine.review_pr requires a platform client")
        self._prompt_logs = []

        pr_info = await self.platform.get_pr_info(owner, repo, pull_number)
        head_sha = pr_info["head"]["sha"]

        config = await self._load_config(owner, repo, head_sha)
        language = config.language or self.language
        patterns = self.ignore_patterns + config.exclude

        diff_text = await self.platform.get_pr_diff(owner, repo, pull_number)
        diff_files = parse_diff(diff_text)
        logger.info(f"Found {len(diff_files)} changed files in {owner}/{repo}#{pull_number}")

        files: list[ChangedFile] = []
        for diff_file in diff_files:
            if diff_file.is_deleted or diff_file.hunk_count == 0:
                continue
            if self._is_excluded(diff_file.path, patterns):
                continue

            # Get file content for context
            try:
                file_content = await self.platform.get_file_content(owner, repo, diff_file.path, head_sha)
            except httpx.HTTPError as e:
                logger.warning(f"Could not get file content for {diff_file.path}: {e}")
                file_content = ""

            files.append(ChangedFile(
                path=diff_file.path,
                diff=number_diff(diff_file.diff),
                content=file_content,
            ))
        logger.info(f"Reviewing {len(files)} files after applying ignore patterns")

        outcomes = await self.review_all(files, language=language)
        review = await self.combine_reviews(outcomes, language=language)
        self._save_review_log(owner, repo, pull_number)

        comments, unmapped = map_remarks(
            review.remarks,
            {file.path: file.diff for file in files},
            anchor=self.comment_anchor,
        )
        if unmapped:
            logger.warning(f"{len(unmapped)} remarks could not be anchored to the diff")

        body = self._format_body(review.summary, unmapped)
        event = "REQUEST_CHANGES" if self.strict else "COMMENT"

        try:
            await self.platform.submit_review(
                owner, repo, pull_number,
                body=body, event=event, comments=comments, commit_id=head_sha,
            )
        except httpx.HTTPStatusError as e:
            if e.response.status_code != 422 or not comments:
                raise
            # GitHub rejects the whole batch if any anchor is invalid
            logger.warning(f"Inline comments rejected, posting remarks in review body: {e}")
            body = self._format_body(review.summary, review.remarks)
            await self.platform.submit_review(
                owner, repo, pull_number,
                body=body, event=event, comments=[], commit_id=head_sha,
            )
            comments = []

        return EngineReviewResult(
            comments_count=len(comments),
            summary=body,
            failed_files=[path for path, result in outcomes if not isinstance(result, Review)],
        )

    async def _load_config(self, owner: str, repo: str, ref: str) -> RepoConfig:
        """Load .ai-review.yaml from repo or use defaults."""
        yaml_content = await self.platform.get_repo_config(owner, repo, ref)
        if yaml_content is None:
            return RepoConfig()

        try:
            data = yaml.safe_load(yaml_content) or {}
            return RepoConfig(**data)
        except Exception as e:
            logger.warning(f"Invalid .ai-review.yaml: {e}")
            return RepoConfig()

    def _is_excluded(self, file_path: str, patterns: list[str]) -> bool:
        """Check if file matches any exclude pattern."""
        return any(fnmatch.fnmatch(file_path, pattern) for pattern in patterns)

    def _concat_summaries(self, summaries: list[tuple[str, str]]) -> str:
        blocks = "\n\n".join(f"**{path}**: {summary}" for path, summary in summaries)
        return f"## {self.reviewer_name} Summary\n\n{blocks}"

    def _format_body(self, summary: str, remarks: list[Remark]) -> str:
        if not remarks:
            return summary
        lines = [f"- `{remark.path}` (diff line {remark.position}): {remark.body}" for remark in remarks]
        return f"{summary}\n\n### Additional remarks\n\n" + "\n".join(lines)

    def _strip_file_content(self, file_path: str, prompt: str) -> str:
        """Strip file content from prompt, keep everything else."""
        stripped = re.sub(
            r"(Full file content:\n```\n).*?(\n```)",
            r"\1[file content omitted]\2",
            prompt,
            flags=re.DOTALL,
        )
        return f"{'=' * 60}\nFILE: {file_path}\n{'=' * 60}\n\n{stripped}"

    def _save_review_log(self, owner: str, repo: str, pull_number: int) -> None:
        """Save all prompts from one review run into a single log file."""
        if not self.log_dir or not self._prompt_logs:
            return
        try:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"{timestamp}_{owner}_{repo}_pr{pull_number}.txt"
            log_path = self.log_dir / filename

            header = (
                f"Review: {owner}/{repo}#{pull_number}\nTime: {timestamp}\n"
                f"Files: {len(self._prompt_logs)}\n\n"
            )
            log_path.write_text(header + "\n\n".join(self._prompt_logs), encoding="utf-8")
            logger.info(f"Review log saved: {log_path}")
        except OSError as e:
            logger.warning(f"Failed to save review log: {e}")
