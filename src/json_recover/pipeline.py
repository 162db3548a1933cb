"""Strict, boundary-scoped and repaired parse attempts for one candidate."""

from __future__ import annotations

import json
import logging

from json_recover.boundary import find_json_boundaries
from json_recover.models.outcome import Failure, ParseOutcome, Success
from json_recover.models.parse_options import ParseOptions
from json_recover.repair import RepairCache, repair


logger = logging.getLogger(__name__)

EMPTY_REASON = "Empty JSON string"
EXHAUSTED_REASON = "Failed to parse JSON after all attempts"


def strict_parse(text: str) -> Success | None:
    try:
        return Success(json.loads(text))
    except (ValueError, RecursionError):
        return None


class ParsePipeline:
    def __init__(self, options: ParseOptions | None = None, cache: RepairCache | None = None) -> None:
        self.options: ParseOptions = options or ParseOptions()
        self.cache: RepairCache = cache if cache is not None else RepairCache()

    def parse(self, text: str) -> ParseOutcome:
        """
        Try, in order: the text as-is, its boundary span, the repaired text and
        the boundary span of the repaired text. The last three need attempt_fix.
        """
        if not text or not text.strip():
            return Failure(EMPTY_REASON)

        clean = text.strip()
        outcome = strict_parse(clean)
        if outcome is not None:
            return outcome

        if not self.options.attempt_fix:
            return Failure(EXHAUSTED_REASON)

        bounded = self._boundaries(clean)
        if bounded is not None:
            outcome = strict_parse(bounded)
            if outcome is not None:
                logger.debug("Parsed boundary span of %d chars", len(bounded))
                return outcome

        repaired = repair(clean, allow_partial=self.options.allow_partial, cache=self.cache)
        outcome = strict_parse(repaired)
        if outcome is not None:
            logger.debug("Parsed repaired text")
            return outcome

        bounded = self._boundaries(repaired)
        if bounded is not None:
            outcome = strict_parse(bounded)
            if outcome is not None:
                logger.debug("Parsed boundary span of repaired text")
                return outcome

        return Failure(EXHAUSTED_REASON)

    def _boundaries(self, text: str) -> str | None:
        return find_json_boundaries(
            text,
            allow_partial=self.options.allow_partial,
            last=not self.options.prefer_first,
        )
