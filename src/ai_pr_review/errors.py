# src/ai_pr_review/errors.py


class ReviewError(Exception):
    """Base class for failures that degrade a review instead of aborting it."""


class ConfigError(ReviewError):
    """Unsupported backend selector or missing credentials."""


class BackendError(ReviewError):
    """The model provider could not be reached or answered with an error."""


class ParseError(ReviewError):
    """The model reply is not a well-formed review object."""

    def __init__(self, message: str, raw: str, path: str | None = None):
        super().__init__(message)
        self.raw = raw
        self.path = path

    def __str__(self) -> str:
        where = self.path or "summary"
        return f"{self.args[0]} ({where})"
