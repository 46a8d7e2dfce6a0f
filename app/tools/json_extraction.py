"""Recover a JSON object from free-form model output.

Hosted models wrap the requested JSON in commentary or markdown fences often
enough that the text is never parsed directly. Everything between the first
`{` and the last `}` is taken as the payload.
"""
import json
from typing import Any, Dict

from app.core.errors import UnparseableResponseError
from app.schemas.portfolio import PortfolioCode


def extract_json_object(raw_text: str) -> Dict[str, Any]:
    """Parse the substring from the first '{' to the last '}' (inclusive) as a JSON object.

    Raises UnparseableResponseError when no braces are found, when the bracketed
    text is not valid JSON, or when it decodes to something other than an object.
    """
    text = raw_text or ""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise UnparseableResponseError("Could not find a valid JSON object in the AI response")

    try:
        parsed = json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        raise UnparseableResponseError(f"AI response contained malformed JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise UnparseableResponseError("AI response JSON is not an object")
    return parsed


def parse_portfolio_code(raw_text: str) -> PortfolioCode:
    """Extract the html/css/js triple. Missing or null fields become empty strings."""
    data = extract_json_object(raw_text)

    fields = {}
    for key in ("html", "css", "js"):
        value = data.get(key)
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise UnparseableResponseError(f"AI response field '{key}' is not a string")
        fields[key] = value
    return PortfolioCode(**fields)
