# src/ai_pr_review/review/parser.py
from dataclasses import dataclass
from unidiff import PatchSet


@dataclass
class DiffFile:
    path: str
    diff: str
    is_new: bool
    is_deleted: bool
    hunk_count: int


def parse_diff(diff_text: str) -> list[DiffFile]:
    """Split a pull request's unified diff into per-file diffs."""
    patch = PatchSet(diff_text)
    files = []

    for patched_file in patch:
        files.append(DiffFile(
            path=patched_file.path,
            diff=str(patched_file),
            is_new=patched_file.is_added_file,
            is_deleted=patched_file.is_removed_file,
            hunk_count=len(patched_file),
        ))

    return files


def number_diff(diff: str) -> str:
    """Render a single-file diff in the line-numbered form sent to the model.

    Header lines before the first hunk marker are dropped; every remaining
    line, hunk markers included, is prefixed with "<n>: " starting at 1.
    """
    lines = diff.split("\n")
    for start, line in enumerate(lines):
        if line.startswith("@@"):
            break
    else:
        return ""

    body = lines[start:]
    if body and body[-1] == "":
        body.pop()
    return "\n".join(f"{i}: {line}" for i, line in enumerate(body, start=1))
