"""
Best-effort extraction of a JSON object from free-form model output.
"""
import json
import re
from typing import Any, Iterator, Optional

from app.core.logging import get_logger

logger = get_logger(__name__)

_FENCED_JSON = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)


def _balanced_end(text: str, start: int) -> Optional[int]:
    """Index of the brace closing the object opened at *start*, ignoring braces inside strings."""
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return None


def balanced_objects(text: str) -> Iterator[str]:
    """Yield every top-level ``{...}`` span whose braces balance, left to right."""
    start = text.find("{")
    while start != -1:
        end = _balanced_end(text, start)
        if end is None:
            start = text.find("{", start + 1)
        else:
            yield text[start:end + 1]
            start = text.find("{", end + 1)


def first_balanced_object(text: str) -> Optional[str]:
    return next(balanced_objects(text), None)


def extract_json_object(text: str) -> Optional[dict[str, Any]]:
    """Parse the first JSON object found in *text*.

    Tries fenced code blocks first, then balanced objects in the raw
    text.  Returns ``None`` when nothing parses to a dict.
    """
    candidates = [match.group(1) for match in _FENCED_JSON.finditer(text)]
    candidates.append(text)
    for candidate in candidates:
        for span in balanced_objects(candidate):
            try:
                value = json.loads(span)
            except json.JSONDecodeError as exc:
                logger.warning("Failed to parse AI JSON", error=str(exc), chars=len(span))
                continue
            if isinstance(value, dict):
                return value
    return None
