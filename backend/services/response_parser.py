"""Recover a JSON object from an LLM's free-text reply.

Models asked for "JSON only" still sometimes wrap the object in a markdown
fence or surround it with prose. Recovery is layered:

1. trim surrounding whitespace
2. strip a leading ```/```json fence and a trailing ``` fence
3. parse the cleaned text
4. on failure, parse the span from the first ``{`` to the last ``}``
5. give up with :class:`RecoveryFailure`

The parsed value is returned as-is; shape checks happen elsewhere.
"""

import json
import logging
import re
from typing import Any

from services.errors import RecoveryFailure

logger = logging.getLogger(__name__)

# Opening fence plus the line break that ends it; closing fence plus the one before it
_LEADING_FENCE = re.compile(r"\A```(?:json)?[^\S\n]*\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\n?```\Z")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _loads(text: str) -> Any:
    return json.loads(text, parse_constant=_reject_constant)


def strip_code_fences(text: str) -> str:
    """Remove a markdown code fence wrapper, leaving the interior untouched."""
    text = _LEADING_FENCE.sub("", text, count=1)
    return _TRAILING_FENCE.sub("", text, count=1)


def clean_model_output(raw: str) -> str:
    return strip_code_fences(raw.strip())


def extract_json_object(text: str) -> str | None:
    """Return the substring from the first '{' to the last '}', if any."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or start >= end:
        return None
    return text[start:end + 1]


def parse_model_output(raw: str, excerpt_chars: int = 500) -> Any:
    """Parse the model's reply, salvaging an embedded object when needed."""
    cleaned = clean_model_output(raw)
    logger.debug("Cleaned model output: %s", cleaned)

    try:
        return _loads(cleaned)
    except ValueError as e:
        logger.debug("Direct JSON parse failed: %s", e)

    candidate = extract_json_object(cleaned)
    if candidate is not None:
        try:
            return _loads(candidate)
        except ValueError as e:
            logger.debug("Brace-scan JSON parse failed: %s", e)

    logger.error("Failed to recover JSON from model output (%d chars)", len(cleaned))
    raise RecoveryFailure(excerpt=cleaned[:excerpt_chars])
