"""Top-level recovery of structured data from messy model output."""

from __future__ import annotations

import logging
import re
from typing import Any

from json_recover.boundary import find_json_boundaries
from json_recover.extractor import extract_candidates
from json_recover.models.outcome import Failure, NoInput, RecoveryOutcome, Success
from json_recover.models.parse_options import ParseOptions
from json_recover.normalizer import normalize_input
from json_recover.pipeline import ParsePipeline, strict_parse
from json_recover.repair import RepairCache
from json_recover.unwrapper import unwrap_envelope


logger = logging.getLogger(__name__)

NOT_FOUND_REASON = "No valid JSON found in the response"

FAST_PATH_RE = re.compile(r"```json\s*\n(.*?)\n```", re.DOTALL)


class JsonRecovery:
    """
    State for a single recovery call.
    The repair cache lives and dies with this object; build a new one per call.
    """

    def __init__(self, options: Any = None) -> None:
        self.options: ParseOptions = ParseOptions.coerce(options)
        self.cache: RepairCache = RepairCache()
        self.pipeline: ParsePipeline = ParsePipeline(self.options, self.cache)

    def recover(self, raw: Any) -> RecoveryOutcome:
        text = normalize_input(raw)
        if text is None:
            return NoInput()

        fast = self._fast_path(text)
        if fast is not None:
            logger.debug("Recovered JSON from fenced json block")
            return fast

        outcome = self.pipeline.parse(text)
        if isinstance(outcome, Success):
            return self._unwrapped(outcome)

        candidates = extract_candidates(text, self.options)
        if not self.options.prefer_first:
            candidates.reverse()
        candidates.sort(key=lambda candidate: len(candidate.content), reverse=True)
        for candidate in candidates:
            outcome = self.pipeline.parse(candidate.content)
            if isinstance(outcome, Success):
                logger.debug("Recovered JSON from candidate with priority %d", candidate.priority)
                return self._unwrapped(outcome)

        if self.options.attempt_fix:
            span = find_json_boundaries(text, allow_partial=self.options.allow_partial)
            if span is not None:
                outcome = self.pipeline.parse(span)
                if isinstance(outcome, Success):
                    logger.debug("Recovered JSON from aggressive boundary scan")
                    return self._unwrapped(outcome)

        logger.warning("No valid JSON found in response (length=%d)", len(text))
        return Failure(NOT_FOUND_REASON)

    def _fast_path(self, text: str) -> Success | None:
        match = FAST_PATH_RE.search(text)
        if match is None:
            return None
        outcome = strict_parse(match.group(1).strip())
        if outcome is None:
            return None
        return self._unwrapped(outcome)

    def _unwrapped(self, outcome: Success) -> Success:
        return Success(unwrap_envelope(outcome.value, self.pipeline.parse))


def recover(raw: Any, options: Any = None) -> RecoveryOutcome:
    return JsonRecovery(options).recover(raw)


def recover_value(raw: Any, options: Any = None, default: Any = None) -> Any:
    """Return the recovered value itself, or default when nothing was recovered."""
    outcome = recover(raw, options)
    if isinstance(outcome, Success):
        return outcome.value
    return default
