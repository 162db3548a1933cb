"""Entry guard that turns arbitrary input into candidate text."""

from __future__ import annotations

from typing import Any


def normalize_input(raw: Any) -> str | None:
    """Return the text to parse, or None when there is nothing usable."""
    if raw is None:
        return None
    if isinstance(raw, (bytes, bytearray)):
        text = bytes(raw).decode("utf-8", errors="replace")
    elif isinstance(raw, str):
        text = raw
    else:
        try:
            text = str(raw)
        except Exception:
            return None
    if not text.strip():
        return None
    return text
