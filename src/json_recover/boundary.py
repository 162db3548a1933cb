"""Bracket-aware scanning for JSON spans embedded in text."""

from __future__ import annotations

OPENERS = {"{": "}", "[": "]"}
CLOSERS = frozenset("}]")


def find_json_boundaries(text: str, *, allow_partial: bool = False, last: bool = False) -> str | None:
    """
    Return the first top-level balanced {...} or [...] span in text.
    Brackets inside string literals are ignored. With last=True the final
    complete span is returned instead. A closer of the wrong type abandons the
    span it would close. With allow_partial=True an unterminated span is
    returned with one closing bracket appended.
    """
    start = -1
    depth = 0
    in_string = False
    escape = False
    open_stack: list[str] = []
    found: str | None = None

    for i, ch in enumerate(text):
        if escape:
            escape = False
            continue
        if ch == "\\":
            escape = True
            continue
        if ch == "\"":
            in_string = not in_string
            continue
        if in_string:
            continue
        if ch in OPENERS:
            if depth == 0:
                start = i
            depth += 1
            open_stack.append(ch)
        elif ch in CLOSERS and depth > 0:
            if OPENERS[open_stack.pop()] != ch:
                start = -1
                depth = 0
                open_stack.clear()
                continue
            depth -= 1
            if depth == 0:
                found = text[start : i + 1]
                if not last:
                    return found
                start = -1

    if found is not None:
        return found
    if allow_partial and depth > 0:
        return text[start:] + OPENERS[open_stack[-1]]
    return None
