# src/ai_pr_review/review/response.py
import json
import re
from pydantic import ValidationError
from ai_pr_review.errors import ParseError
from ai_pr_review.models.review import ReviewResponse


# Outermost fence around a JSON object
FENCED_JSON = re.compile(r'```(?:json)?\s*(\{.*\})\s*```', re.DOTALL)


def parse_review_response(text: str, path: str | None = None) -> ReviewResponse:
    """Parse a model reply into a validated review response.

    Raises ParseError carrying the raw text when the reply is not a JSON
    object with a summary and a list of {position, body} remarks.
    """
    try:
        data = json.loads(text.strip())
    except json.JSONDecodeError as e:
        # Reply may be wrapped in ```json or just ```, possibly with prose around it
        json_match = FENCED_JSON.search(text)
        if not json_match:
            raise ParseError(f"Response is not valid JSON: {e}", raw=text, path=path) from e
        try:
            data = json.loads(json_match.group(1))
        except json.JSONDecodeError as fenced_error:
            raise ParseError(
                f"Response is not valid JSON: {fenced_error}", raw=text, path=path
            ) from fenced_error

    if not isinstance(data, dict):
        raise ParseError("Response is not a JSON object", raw=text, path=path)

    try:
        return ReviewResponse.model_validate(data)
    except ValidationError as e:
        raise ParseError(f"Response does not match review schema: {e}", raw=text, path=path) from e
