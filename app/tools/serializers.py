from typing import Any
from datetime import datetime, date
import json


def _convert_value(v: Any) -> Any:
    """Convert a single value to a JSON-friendly representation."""
    # datetimes -> isoformat
    if isinstance(v, (datetime, date)):
        return v.isoformat()
    # sets/tuples -> lists
    if isinstance(v, (set, tuple)):
        return list(v)
    # anything else json cannot encode -> str
    return str(v)


def to_json_text(value: Any, default: Any) -> str:
    """Serialize one structured-data category for a text column.

    `None` is replaced by `default` so a stored category is never the literal
    string "null". Key order is preserved.
    """
    if value is None:
        value = default
    return json.dumps(value, default=_convert_value, ensure_ascii=False)

