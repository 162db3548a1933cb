"""Descend through envelope fields that wrap the real payload."""

from __future__ import annotations

from typing import Any, Callable

from json_recover.models.outcome import ParseOutcome, Success

DEFAULT_ENVELOPE_FIELD = "response"
DEFAULT_MAX_ATTEMPTS = 2


def unwrap_envelope(
    value: Any,
    parse: Callable[[str], ParseOutcome],
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    field: str = DEFAULT_ENVELOPE_FIELD,
) -> Any:
    """
    Replace value with the payload under field, at most max_attempts times.
    String payloads go through parse; unparseable ones stop the descent.
    """
    current = value
    attempts = 0
    while attempts < max_attempts and isinstance(current, dict):
        inner = current.get(field)
        if not inner:
            break
        if isinstance(inner, str):
            outcome = parse(inner)
            if not isinstance(outcome, Success):
                break
            current = outcome.value
        elif isinstance(inner, (dict, list)):
            current = inner
        else:
            break
        attempts += 1
    return current
