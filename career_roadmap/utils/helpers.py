"""Helper utilities shared by the analysis and roadmap clients."""

import json
import re
from typing import Any, List

from career_roadmap.errors import InvalidResponseError, ParseError

# ```json ... ``` or bare ``` ... ``` anywhere in the content
_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*([\s\S]*?)\s*```")


def strip_code_fence(text: str) -> str:
    """Return the content of the first markdown code fence, or the stripped text if none."""
    raw = (text or "").strip()
    match = _FENCE_RE.search(raw)
    if match:
        return match.group(1).strip()
    # Unterminated fence: drop the opening marker only
    if raw.startswith("```"):
        raw = re.sub(r"^```(?:json|JSON)?\s*", "", raw)
    return raw


def parse_llm_json(text: str) -> dict:
    """
    Parse a JSON object from an LLM response, stripping markdown code fences if present.
    Raises ParseError for empty or invalid JSON and InvalidResponseError for non-object JSON.
    """
    raw = strip_code_fence(text)
    if not raw:
        raise ParseError("AI response was empty", raw=text or "")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ParseError(f"Failed to parse AI response: {e.msg}", raw=raw[:200]) from e
    if not isinstance(data, dict):
        raise InvalidResponseError(
            f"Expected a JSON object in AI response, got {type(data).__name__}"
        )
    return data


def truncate_text(text: str, max_chars: int) -> str:
    """Cut text to max_chars and append an ellipsis when anything was dropped."""
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + "..."


def _item_to_text(item: Any) -> str:
    if isinstance(item, str):
        return item.strip()
    if isinstance(item, dict):
        # LLMs sometimes return {"company": ..., "title": ...} where a string was asked for
        return ", ".join(str(v).strip() for v in item.values() if v not in (None, "", [], {}))
    if isinstance(item, (list, tuple)):
        return ", ".join(_item_to_text(v) for v in item if v is not None)
    return str(item).strip()


def coerce_str_list(value: Any) -> List[str]:
    """Coerce value to a list of non-empty strings; anything that is not a list becomes []."""
    if not isinstance(value, list):
        return []
    out: List[str] = []
    for item in value:
        if item is None:
            continue
        text = _item_to_text(item)
        if text:
            out.append(text)
    return out


def dedupe_preserve_order(items: List[str]) -> List[str]:
    """Remove case-insensitive duplicates, keeping the first spelling."""
    seen: set[str] = set()
    result: List[str] = []
    for s in items:
        key = s.strip().lower()
        if key and key not in seen:
            seen.add(key)
            result.append(s)
    return result
