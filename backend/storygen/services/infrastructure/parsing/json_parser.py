"""
JSON recovery for model output.

Structured-output calls usually return clean JSON, but local models and
retries through proxies can wrap it in markdown fences, prepend chatter or
emit stray backslashes. These helpers recover the object when possible.
"""

import json
import re
from typing import Any, Dict, List, Optional

from storygen.core.exceptions import GenerationCallError

_FENCE_LINE = re.compile(r"^\s*```")
# A backslash not starting a valid JSON escape
_INVALID_ESCAPE = re.compile(r'\\(?!["\\/bfnrt]|u[0-9a-fA-F]{4})')


def strip_code_fences(text: str) -> str:
    """Drop markdown fence lines (```json ... ```) around a payload."""
    stripped = text.strip()
    if not stripped.startswith("```"):
        return stripped
    lines = [line for line in stripped.split("\n") if not _FENCE_LINE.match(line)]
    return "\n".join(lines).strip()


def extract_largest_balanced_json(text: str) -> Optional[str]:
    """Return the largest balanced {...} block, respecting string literals."""
    if not text:
        return None

    in_string = False
    escape = False
    depth = 0
    start: Optional[int] = None
    best: Optional[str] = None

    for index, ch in enumerate(text):
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            if depth == 0:
                start = index
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
            if depth == 0 and start is not None:
                candidate = text[start:index + 1]
                if best is None or len(candidate) > len(best):
                    best = candidate
                start = None

    return best


def is_likely_truncated_json(text: str) -> bool:
    """Unterminated string or unclosed braces/brackets."""
    if not text:
        return False

    in_string = False
    escape = False
    stack: List[str] = []
    pairs = {"}": "{", "]": "["}

    for ch in text:
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in "{[":
            stack.append(ch)
        elif ch in pairs and stack:
            if stack[-1] != pairs[ch]:
                return False
            stack.pop()

    return bool(stack) or in_string


def fix_json_escapes(text: str) -> str:
    """Double any backslash that does not begin a valid JSON escape."""
    return _INVALID_ESCAPE.sub(r"\\\\", text)


def parse_json_response(text: str) -> Optional[Dict[str, Any]]:
    """Parse a JSON object from model output with error recovery.

    Tries, in order: the text as-is (fences stripped), the text with invalid
    escapes repaired, and the largest balanced object found in the text.

    Returns:
        The parsed object, or None when nothing parses to a JSON object
    """
    if not text or not text.strip():
        return None

    cleaned = strip_code_fences(text)
    candidates = [cleaned, fix_json_escapes(cleaned)]
    block = extract_largest_balanced_json(cleaned)
    if block and block != cleaned:
        candidates.extend([block, fix_json_escapes(block)])

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed

    return None


def require_json_object(text: str, source: str = "model") -> Dict[str, Any]:
    """parse_json_response that raises GenerationCallError instead of returning None"""
    parsed = parse_json_response(text)
    if parsed is None:
        preview = (text or "")[:120]
        raise GenerationCallError(f"{source} returned no JSON object: {preview!r}")
    return parsed
