"""Textual repairs that turn JSON-like text into stricter JSON.

Each rule is a plain ``str -> str`` function registered in ``REPAIR_RULES``
and applied in order. Rules that rewrite structure only look at the text
outside string literals, so values such as ``"http://host"`` or ``"it's None"``
survive untouched. ``repair`` runs the chain until the text stops changing,
which keeps the result idempotent when one rule exposes work for an earlier
one.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterator


logger = logging.getLogger(__name__)

MAX_REPAIR_PASSES = 4

# Double-quoted literals may span lines; single-quoted ones stop at a newline
# so stray apostrophes in prose do not swallow whole paragraphs.
_LITERAL_RE = re.compile(r"\"(?:\\.|[^\"\\])*\"|'(?:\\.|[^'\\\n])*'", re.DOTALL)

_HASH_COMMENT_RE = re.compile(r"^[ \t]*#[^\n]*$", re.MULTILINE)
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_COMMENT_RE = re.compile(r"//[^\n]*")
_ESCAPED_QUOTE_RE = re.compile(r"(?<!\\)\\+([\"'])")
_UNESCAPED_DOUBLE_QUOTE_RE = re.compile(r"(?<!\\)\"")
_SEPARATOR_RUN_RE = re.compile(r"[\s,]+")
_BARE_KEY_RE = re.compile(r"([{,]\s*)([A-Za-z_$][\w\-.]*)\s*:")
_VALUE_LITERAL_RE = re.compile(r":\s*(true|false|none|undefined)\b", re.IGNORECASE)
_PYTHON_LITERAL_RE = re.compile(r"\b(True|False|None)\b")
_DOUBLE_ESCAPED_QUOTE_RE = re.compile(r"(?<!\\)(?:\\\\)+\\\"")
_ELLIPSIS_RE = re.compile(r"\.{3,}|\u2026+")

_JSON_LITERALS = {
    "true": "true",
    "false": "false",
    "none": "null",
    "undefined": "null",
    "True": "true",
    "False": "false",
    "None": "null",
}


@dataclass(frozen=True)
class RepairRule:
    name: str
    apply: Callable[[str], str]
    partial_only: bool = False


class RepairCache:
    """Repaired text keyed by the exact input, owned by one recovery call."""

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}

    def get(self, text: str) -> str | None:
        return self._entries.get(text)

    def store(self, text: str, repaired: str) -> None:
        self._entries[text] = repaired

    def __contains__(self, text: object) -> bool:
        return text in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def split_literals(text: str) -> Iterator[tuple[bool, str]]:
    """Yield (is_literal, chunk) pairs covering text in order."""
    pos = 0
    for match in _LITERAL_RE.finditer(text):
        if match.start() > pos:
            yield False, text[pos : match.start()]
        yield True, match.group(0)
        pos = match.end()
    if pos < len(text):
        yield False, text[pos:]


def _rewrite_code(text: str, func: Callable[[str], str]) -> str:
    return "".join(chunk if is_literal else func(chunk) for is_literal, chunk in split_literals(text))


def _rewrite_literals(text: str, func: Callable[[str], str]) -> str:
    return "".join(func(chunk) if is_literal else chunk for is_literal, chunk in split_literals(text))


def strip_bom(text: str) -> str:
    return text.lstrip("\ufeff")


def strip_comments(text: str) -> str:
    text = _HASH_COMMENT_RE.sub("", text)
    return _rewrite_code(text, lambda chunk: _LINE_COMMENT_RE.sub("", _BLOCK_COMMENT_RE.sub("", chunk)))


def unescape_double_encoding(text: str) -> str:
    """
    Undo one level of string encoding, e.g. {\\"a\\": 1} -> {"a": 1}.
    Only applies when every double quote in the text is escaped.
    """
    if "\\\"" not in text or _UNESCAPED_DOUBLE_QUOTE_RE.search(text):
        return text
    return _ESCAPED_QUOTE_RE.sub(r"\1", text)


def close_truncated_string(text: str) -> str:
    if len(_UNESCAPED_DOUBLE_QUOTE_RE.findall(text)) % 2:
        return text + "\""
    return text


def _drop_dangling_commas(chunk: str, at_text_end: bool) -> str:
    def replace(match: re.Match[str]) -> str:
        run = match.group(0)
        comma = run.find(",")
        if comma < 0:
            return run
        if match.end() == len(chunk):
            return run[:comma] if at_text_end else run
        return run[:comma] if chunk[match.end()] in "}]" else run

    return _SEPARATOR_RUN_RE.sub(replace, chunk)


def strip_trailing_commas(text: str) -> str:
    """Drop comma runs that precede a closing bracket or end the text."""
    chunks = list(split_literals(text))
    last = len(chunks) - 1
    return "".join(
        chunk if is_literal else _drop_dangling_commas(chunk, index == last)
        for index, (is_literal, chunk) in enumerate(chunks)
    )


def quote_bare_keys(text: str) -> str:
    return _rewrite_code(text, lambda chunk: _BARE_KEY_RE.sub(r'\1"\2":', chunk))


def _to_double_quoted(literal: str) -> str:
    if literal[0] != "'":
        return literal
    body = literal[1:-1].replace("\\'", "'")
    body = _UNESCAPED_DOUBLE_QUOTE_RE.sub(r'\\"', body)
    return f'"{body}"'


def convert_single_quotes(text: str) -> str:
    return _rewrite_literals(text, _to_double_quoted)


def _normalize_literal_chunk(chunk: str) -> str:
    chunk = _VALUE_LITERAL_RE.sub(lambda m: ": " + _JSON_LITERALS[m.group(1).lower()], chunk)
    return _PYTHON_LITERAL_RE.sub(lambda m: _JSON_LITERALS[m.group(1)], chunk)


def normalize_literals(text: str) -> str:
    return _rewrite_code(text, _normalize_literal_chunk)


def collapse_double_escapes(text: str) -> str:
    """Collapse \\\\\\" runs left by double encoding inside a string into \\"."""
    return _rewrite_literals(text, lambda chunk: _DOUBLE_ESCAPED_QUOTE_RE.sub(r'\\"', chunk))


def _drop_ellipses(chunk: str) -> str:
    pieces: list[str] = []
    pos = 0
    for match in _ELLIPSIS_RE.finditer(chunk):
        head = chunk[pos : match.start()].rstrip()
        if head.endswith(","):
            head = head[:-1]
        pieces.append(head)
        pos = match.end()
    pieces.append(chunk[pos:])
    return "".join(pieces)


def strip_ellipsis(text: str) -> str:
    return _rewrite_code(text, _drop_ellipses)



REPAIR_RULES: tuple[RepairRule, ...] = (
    RepairRule("strip_bom", strip_bom),
    RepairRule("strip_comments", strip_comments),
    RepairRule("unescape_double_encoding", unescape_double_encoding),
    RepairRule("close_truncated_string", close_truncated_string, partial_only=True),
    RepairRule("strip_trailing_commas", strip_trailing_commas),
    RepairRule("quote_bare_keys", quote_bare_keys),
    RepairRule("convert_single_quotes", convert_single_quotes),
    RepairRule("normalize_literals", normalize_literals),
    RepairRule("collapse_double_escapes", collapse_double_escapes),
    RepairRule("strip_ellipsis", strip_ellipsis),
)


def apply_rules(text: str, *, allow_partial: bool = False) -> str:
    """Run every rule once, in order."""
    for rule in REPAIR_RULES:
        if rule.partial_only and not allow_partial:
            continue
        text = rule.apply(text)
    return text


def repair(text: str, *, allow_partial: bool = False, cache: RepairCache | None = None) -> str:
    if cache is not None:
        cached = cache.get(text)
        if cached is not None:
            return cached

    repaired = text
    for _ in range(MAX_REPAIR_PASSES):
        next_text = apply_rules(repaired, allow_partial=allow_partial)
        if next_text == repaired:
            break
        repaired = next_text
    else:
        logger.debug("Repair did not settle after %d passes", MAX_REPAIR_PASSES)

    if cache is not None:
        cache.store(text, repaired)
    return repaired
