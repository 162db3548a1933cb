"""Public package exports."""

from json_recover.agent_response import normalize_agent_response
from json_recover.boundary import find_json_boundaries
from json_recover.extractor import extract_candidates
from json_recover.models import Candidate
from json_recover.models import Failure
from json_recover.models import NoInput
from json_recover.models import ParseOptions
from json_recover.models import Success
from json_recover.normalizer import normalize_input
from json_recover.pipeline import ParsePipeline
from json_recover.recovery import JsonRecovery
from json_recover.recovery import recover
from json_recover.recovery import recover_value
from json_recover.repair import RepairCache
from json_recover.repair import repair
from json_recover.unwrapper import unwrap_envelope

__all__ = [
    "Candidate",
    "Failure",
    "JsonRecovery",
    "NoInput",
    "ParseOptions",
    "ParsePipeline",
    "RepairCache",
    "Success",
    "extract_candidates",
    "find_json_boundaries",
    "normalize_agent_response",
    "normalize_input",
    "recover",
    "recover_value",
    "repair",
    "unwrap_envelope",
]
