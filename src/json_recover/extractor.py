"""Locate JSON-shaped substrings inside free text."""

from __future__ import annotations

import re

from json_recover.models.candidate import FENCED_CODE
from json_recover.models.candidate import FENCED_JSON
from json_recover.models.candidate import INLINE_CODE
from json_recover.models.candidate import RAW_PATTERN
from json_recover.models.candidate import Candidate
from json_recover.models.parse_options import ParseOptions

FENCED_JSON_RE = re.compile(r"```(?:json|JSON)\s*\n?(.*?)\n?```", re.DOTALL)
FENCED_CODE_RE = re.compile(r"```\s*\n?(.*?)\n?```", re.DOTALL)
INLINE_CODE_RE = re.compile(r"(?<!`)`([^`\n]+)`(?!`)")
# Objects and arrays tolerating a single level of nesting.
RAW_PATTERN_RES = (
    re.compile(r"\{(?:[^{}]|\{[^{}]*\})*\}"),
    re.compile(r"\[(?:[^\[\]]|\[[^\[\]]*\])*\]"),
)
MIN_RAW_PATTERN_LENGTH = 10


def _looks_like_json(content: str) -> bool:
    return content.startswith("{") or content.startswith("[")


def extract_candidates(text: str, options: ParseOptions | None = None) -> list[Candidate]:
    """
    Collect up to options.max_blocks candidates, most specific pattern class first.
    With prefer_first the result is ordered by priority, otherwise by discovery.
    """
    opts = options or ParseOptions()
    limit = opts.max_blocks
    results: list[Candidate] = []

    for match in FENCED_JSON_RE.finditer(text):
        if len(results) >= limit:
            break
        content = match.group(1).strip()
        if content:
            results.append(Candidate(content, FENCED_JSON))

    for match in FENCED_CODE_RE.finditer(text):
        if len(results) >= limit:
            break
        content = match.group(1).strip()
        if content and _looks_like_json(content):
            results.append(Candidate(content, FENCED_CODE))

    for match in INLINE_CODE_RE.finditer(text):
        if len(results) >= limit:
            break
        content = match.group(1).strip()
        if content and _looks_like_json(content):
            results.append(Candidate(content, INLINE_CODE))

    for pattern in RAW_PATTERN_RES:
        for match in pattern.finditer(text):
            if len(results) >= limit:
                break
            content = match.group(0).strip()
            if len(content) > MIN_RAW_PATTERN_LENGTH:
                results.append(Candidate(content, RAW_PATTERN))

    if opts.prefer_first:
        results.sort(key=lambda candidate: candidate.priority)
    return results
