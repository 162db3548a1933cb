"""Pydantic model for recovery options."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError


logger = logging.getLogger(__name__)


class ParseOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    attempt_fix: bool = Field(default=True, validation_alias=AliasChoices("attempt_fix", "attemptFix"))
    max_blocks: int = Field(default=5, ge=0, validation_alias=AliasChoices("max_blocks", "maxBlocks"))
    prefer_first: bool = Field(default=True, validation_alias=AliasChoices("prefer_first", "preferFirst"))
    allow_partial: bool = Field(default=False, validation_alias=AliasChoices("allow_partial", "allowPartial"))

    @classmethod
    def coerce(cls, options: Any) -> "ParseOptions":
        """
        Build options from whatever the caller handed in.
        Anything that is not a valid mapping falls back to all defaults.
        """
        if isinstance(options, ParseOptions):
            return options
        if not isinstance(options, Mapping):
            return cls()
        try:
            return cls.model_validate(dict(options))
        except ValidationError as exc:
            logger.debug("Ignoring invalid parse options (%d errors); using defaults", exc.error_count())
            return cls()
