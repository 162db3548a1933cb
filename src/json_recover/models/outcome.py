"""Tagged results returned by the parse pipeline and the orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeAlias


@dataclass(frozen=True)
class Success:
    value: Any


@dataclass(frozen=True)
class Failure:
    reason: str

    def as_record(self) -> dict[str, Any]:
        """Legacy failure record shape for callers that serialize it."""
        return {"success": False, "data": None, "error": self.reason, "rawJson": None}


@dataclass(frozen=True)
class NoInput:
    reason: str = "No input to parse"


ParseOutcome: TypeAlias = Success | Failure
RecoveryOutcome: TypeAlias = Success | Failure | NoInput
