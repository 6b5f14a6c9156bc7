from pydantic import BaseModel


class GitHubUser(BaseModel):
    login: str


class GitHubRepository(BaseModel):
    name: str
    full_name: str
    owner: GitHubUser


class GitHubPullRequest(BaseModel):
    number: int
    title: str
    state: str
    draft: bool = False


class GitHubPullRequestEvent(BaseModel):
    action: str
    number: int
    pull_request: GitHubPullRequest
    repository: GitHubRepository


class GitHubIssuePullRequestLink(BaseModel):
    url: str


class GitHubIssue(BaseModel):
    number: int
    pull_request: GitHubIssuePullRequestLink | None = None  # only set on PRs


class GitHubComment(BaseModel):
    body: str
    user: GitHubUser


class GitHubIssueCommentEvent(BaseModel):
    action: str
    issue: GitHubIssue
    comment: GitHubComment
    repository: GitHubRepository
