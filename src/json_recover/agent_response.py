"""Normalization of the ``response`` field returned by agent APIs."""

from __future__ import annotations

import logging
import re
from typing import Any

from json_recover.models.outcome import Success
from json_recover.pipeline import strict_parse
from json_recover.recovery import recover


logger = logging.getLogger(__name__)

FENCE_OPEN_RE = re.compile(r"^```(?:json|JSON)?\s*\n?", re.MULTILINE)
FENCE_CLOSE_RE = re.compile(r"\n?```\s*$", re.MULTILINE)

_LITERAL_ESCAPES = (("\\n", "\n"), ("\\r", "\r"), ("\\t", "\t"))


def clean_response_text(text: str) -> str:
    """Turn literal escape sequences into characters and drop markdown fences."""
    for literal, char in _LITERAL_ESCAPES:
        text = text.replace(literal, char)
    text = FENCE_OPEN_RE.sub("", text)
    text = FENCE_CLOSE_RE.sub("", text)
    return text.strip()


def greedy_span(text: str) -> str | None:
    """Widest {...} or [...] slice, from the first opener that has a closer after it."""
    spans: list[tuple[int, int]] = []
    for opener, closer in (("{", "}"), ("[", "]")):
        start = text.find(opener)
        end = text.rfind(closer)
        if start != -1 and end > start:
            spans.append((start, end))
    if not spans:
        return None
    start, end = min(spans)
    return text[start : end + 1]


def _structured(outcome: object) -> Any | None:
    if isinstance(outcome, Success) and isinstance(outcome.value, (dict, list)):
        return outcome.value
    return None


def normalize_agent_response(response: Any, options: Any = None) -> Any:
    """
    Best-effort structured view of an agent response field.

    Objects and arrays pass through. Strings are cleaned and parsed with
    increasingly forgiving strategies; only dict or list results are accepted.
    Anything that cannot be recovered is returned unchanged.
    """
    if not isinstance(response, str):
        return response

    # Valid JSON may carry escaped newlines that cleaning would break.
    value = _structured(strict_parse(response.strip()))
    if value is not None:
        return value

    cleaned = clean_response_text(response)

    value = _structured(strict_parse(cleaned))
    if value is not None:
        return value

    value = _structured(recover(cleaned, options))
    if value is not None:
        return value

    span = greedy_span(cleaned)
    if span is None:
        logger.info("No JSON found in agent response, keeping it as-is")
        return response

    value = _structured(strict_parse(span))
    if value is not None:
        return value

    value = _structured(recover(span, {"attempt_fix": True}))
    if value is not None:
        return value

    logger.info("All parsing strategies failed for agent response, keeping it as-is")
    return response
