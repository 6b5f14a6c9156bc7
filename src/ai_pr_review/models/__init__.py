from .config import RepoConfig
from .review import ChangedFile, Remark, RemarkDraft, Review, ReviewResponse
from .webhook import GitHubIssueCommentEvent, GitHubPullRequestEvent

__all__ = [
    "RepoConfig",
    "ChangedFile",
    "Remark",
    "RemarkDraft",
    "Review",
    "ReviewResponse",
    "GitHubIssueCommentEvent",
    "GitHubPullRequestEvent",
]
