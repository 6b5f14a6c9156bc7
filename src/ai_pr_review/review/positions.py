# src/ai_pr_review/review/positions.py
"""Translation of numbered-diff line references into GitHub comment anchors.

Numbered line 1 is always the first hunk marker, so numbered line ``n`` is
GitHub's diff ``position`` ``n - 1``. The ``line``/``side`` anchor is derived
from the hunk headers for the newer review-comment API.
"""
import re
from dataclasses import dataclass
from typing import Any, Literal

from ai_pr_review.models.review import Remark


NUMBERED_LINE = re.compile(r"^(\d+): ?(.*)$")
HUNK_HEADER = re.compile(r"^@@ -(\d+)(?:,\d+)? \+(\d+)(?:,\d+)? @@")

Side = Literal["LEFT", "RIGHT"]


@dataclass(frozen=True)
class DiffLine:
    number: int
    text: str
    is_hunk_header: bool
    old_line: int | None = None
    new_line: int | None = None


class PositionMapper:
    def __init__(self, numbered_diff: str):
        self.lines: dict[int, DiffLine] = {}
        old_no = new_no = 0

        for raw in numbered_diff.split("\n"):
            match = NUMBERED_LINE.match(raw)
            if not match:
                continue
            number, text = int(match.group(1)), match.group(2)

            header = HUNK_HEADER.match(text)
            if header:
                old_no, new_no = int(header.group(1)), int(header.group(2))
                self.lines[number] = DiffLine(number, text, is_hunk_header=True)
            elif text.startswith("+"):
                self.lines[number] = DiffLine(number, text, False, new_line=new_no)
                new_no += 1
            elif text.startswith("-"):
                self.lines[number] = DiffLine(number, text, False, old_line=old_no)
                old_no += 1
            elif text.startswith("\\"):
                # "\ No newline at end of file"
                self.lines[number] = DiffLine(number, text, False)
            else:
                self.lines[number] = DiffLine(number, text, False, old_line=old_no, new_line=new_no)
                old_no += 1
                new_no += 1

    def _addressable(self, position: int) -> DiffLine | None:
        line = self.lines.get(position)
        if line is None or line.is_hunk_header:
            return None
        return line

    def to_position(self, position: int) -> int | None:
        """GitHub diff position for a numbered line, or None if not commentable."""
        line = self._addressable(position)
        if line is None or (line.old_line is None and line.new_line is None):
            return None
        return position - 1

    def to_line(self, position: int) -> tuple[int, Side] | None:
        """(line, side) anchor for a numbered line, or None if not commentable."""
        line = self._addressable(position)
        if line is None:
            return None
        if line.new_line is not None:
            return line.new_line, "RIGHT"
        if line.old_line is not None:
            return line.old_line, "LEFT"
        return None


def map_remarks(
    remarks: list[Remark],
    diffs: dict[str, str],
    anchor: Literal["position", "line"] = "position",
) -> tuple[list[dict[str, Any]], list[Remark]]:
    """Build review comment payloads for remarks.

    Returns the comments plus the remarks that could not be anchored in
    their file's diff.
    """
    mappers = {path: PositionMapper(diff) for path, diff in diffs.items()}
    comments: list[dict[str, Any]] = []
    unmapped: list[Remark] = []

    for remark in remarks:
        mapper = mappers.get(remark.path)
        if mapper is None:
            unmapped.append(remark)
            continue

        if anchor == "line":
            target = mapper.to_line(remark.position)
            if target is None:
                unmapped.append(remark)
                continue
            line, side = target
            comments.append({"path": remark.path, "line": line, "side": side, "body": remark.body})
        else:
            position = mapper.to_position(remark.position)
            if position is None:
                unmapped.append(remark)
                continue
            comments.append({"path": remark.path, "position": position, "body": remark.body})

    return comments, unmapped
