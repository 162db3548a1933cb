"""Model types for recovery options and results."""

from json_recover.models.candidate import Candidate
from json_recover.models.outcome import Failure
from json_recover.models.outcome import NoInput
from json_recover.models.outcome import ParseOutcome
from json_recover.models.outcome import RecoveryOutcome
from json_recover.models.outcome import Success
from json_recover.models.parse_options import ParseOptions

__all__ = [
    "Candidate",
    "Failure",
    "NoInput",
    "ParseOptions",
    "ParseOutcome",
    "RecoveryOutcome",
    "Success",
]
