"""Turns raw model completions into JSON objects."""

import json
import re
from typing import Any

from docfin.analysis.exceptions import AIResponseFormatError

_FENCED_BLOCK = re.compile(r"```[ \t]*[\w+-]*[ \t]*\r?\n?(.*?)```", re.DOTALL)


def strip_code_fences(raw: str) -> str:
    """Return the body of the first fenced code block, or the trimmed text."""
    cleaned = raw.strip()
    match = _FENCED_BLOCK.search(cleaned)
    if match is not None:
        return match.group(1).strip()
    if cleaned.startswith("```"):
        # unterminated fence: drop the opening line
        _, _, rest = cleaned.partition("\n")
        return rest.strip()
    return cleaned


def parse_json_object(raw: str) -> dict[str, Any]:
    """Parse a completion into a JSON object.

    Fenced code blocks are unwrapped first. If the remainder is not valid
    JSON, the span from the first ``{`` to the last ``}`` is tried.

    Raises:
        AIResponseFormatError: if no JSON object can be recovered.
    """
    cleaned = strip_code_fences(raw)
    if not cleaned:
        raise AIResponseFormatError("Empty AI response")
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        parsed = _parse_braced_span(cleaned, exc)

    if not isinstance(parsed, dict):
        raise AIResponseFormatError("JSON response must be an object")
    return parsed


def _parse_braced_span(text: str, original: json.JSONDecodeError) -> Any:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        raise AIResponseFormatError(f"Invalid JSON response: {original}") from original
    try:
        return json.loads(text[start : end + 1])
    except json.JSONDecodeError as exc:
        raise AIResponseFormatError(f"Invalid JSON response: {exc}") from exc
