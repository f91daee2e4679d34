from __future__ import annotations

import json
import re
from typing import Any

_FENCED_JSON_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def _loads_object(candidate: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(candidate)
    except (TypeError, ValueError):
        return None
    return parsed if isinstance(parsed, dict) else None


def parse_json_reply(text: str | None, default: dict[str, Any] | None = None) -> dict[str, Any] | None:
    """Extract a JSON object from a model reply.

    Tries the whole reply, then a fenced code block, then the widest
    ``{...}`` span. Returns ``default`` when none of them parse.
    """
    raw = (text or "").strip()
    if not raw:
        return default

    parsed = _loads_object(raw)
    if parsed is not None:
        return parsed

    fenced = _FENCED_JSON_RE.search(raw)
    if fenced:
        parsed = _loads_object(fenced.group(1))
        if parsed is not None:
            return parsed

    span = _OBJECT_RE.search(raw)
    if span:
        parsed = _loads_object(span.group(0))
        if parsed is not None:
            return parsed

    return default
