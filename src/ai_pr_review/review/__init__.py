from .parser import parse_diff, number_diff, DiffFile
from .prompts import build_review_prompt, build_summary_prompt
from .response import parse_review_response
from .positions import PositionMapper, map_remarks
from .engine import ReviewEngine, EngineReviewResult

__all__ = [
    "parse_diff",
    "number_diff",
    "DiffFile",
    "build_review_prompt",
    "build_summary_prompt",
    "parse_review_response",
    "PositionMapper",
    "map_remarks",
    "ReviewEngine",
    "EngineReviewResult",
]
