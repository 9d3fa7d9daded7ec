"""
Best‑effort recovery of a JSON object from model output.

Model replies arrive as clean JSON, as fenced markdown, as JSON wrapped in
prose, or as prose only. ``parse_extracted_json`` returns the decoded object
or ``None``; it never raises.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

logger = logging.getLogger(__name__)

_OPENING_FENCE = re.compile(r"^```(?:json|javascript)?", re.IGNORECASE)
_CLOSING_FENCE = re.compile(r"```$")


def _strip_fences(text: str) -> str:
    if not text.startswith("```"):
        return text
    text = _OPENING_FENCE.sub("", text, count=1)
    text = _CLOSING_FENCE.sub("", text, count=1)
    return text.strip()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _loads_object(text: str) -> Optional[dict[str, Any]]:
    # ValueError also covers oversized integer literals
    try:
        value = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return None
    return value if isinstance(value, dict) else None


def parse_extracted_json(extracted_text: Any) -> Optional[dict[str, Any]]:
    """Recover a JSON object from *extracted_text*.

    1. strip a leading ```json / ```javascript / ``` fence and a trailing fence
    2. try a direct parse
    3. otherwise parse the span from the first ``{`` to the last ``}``

    Braces inside string values can make step 3 pick a wrong span; the
    result is then ``None`` rather than an error.
    """
    if not extracted_text or not isinstance(extracted_text, str):
        return None

    text = _strip_fences(extracted_text.strip())

    parsed = _loads_object(text)
    if parsed is not None:
        return parsed

    first = text.find("{")
    last = text.rfind("}")
    if first != -1 and last > first:
        parsed = _loads_object(text[first:last + 1])
        if parsed is not None:
            return parsed
        logger.debug("Brace span is not valid JSON (chars %d-%d)", first, last)

    logger.debug("No JSON object recovered from %d chars of text", len(text))
    return None
