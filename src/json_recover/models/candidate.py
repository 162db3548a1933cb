"""JSON-shaped substring found in free text."""

from __future__ import annotations

from dataclasses import dataclass

FENCED_JSON = 1
FENCED_CODE = 2
INLINE_CODE = 3
RAW_PATTERN = 4


@dataclass(frozen=True)
class Candidate:
    content: str
    priority: int  # lower is more confident
