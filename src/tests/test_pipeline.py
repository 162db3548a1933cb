from json_recover.models.outcome import Failure, Success
from json_recover.models.parse_options import ParseOptions
from json_recover.pipeline import EMPTY_REASON
from json_recover.pipeline import EXHAUSTED_REASON
from json_recover.pipeline import ParsePipeline
from json_recover.pipeline import strict_parse
from json_recover.repair import RepairCache


def test_strict_parse() -> None:
    assert strict_parse("[1, 2]") == Success([1, 2])
    assert strict_parse("{nope}") is None


def test_strict_text_parses_directly() -> None:
    assert ParsePipeline().parse('  {"a": 1}  ') == Success({"a": 1})


def test_empty_text_short_circuits() -> None:
    assert ParsePipeline().parse("   ") == Failure(EMPTY_REASON)
    assert ParsePipeline().parse("") == Failure(EMPTY_REASON)


def test_without_fix_only_strict_parse_runs() -> None:
    pipeline = ParsePipeline(ParseOptions(attempt_fix=False))

    assert pipeline.parse("{'a': 1}") == Failure(EXHAUSTED_REASON)
    assert pipeline.parse('Result: {"a": 1}') == Failure(EXHAUSTED_REASON)


def test_boundary_span_leg() -> None:
    assert ParsePipeline().parse('Result: {"a": 1} done') == Success({"a": 1})


def test_repair_leg() -> None:
    assert ParsePipeline().parse("{a: 1, b: 'two',}") == Success({"a": 1, "b": "two"})


def test_repaired_boundary_leg() -> None:
    assert ParsePipeline().parse("Sure! {a: 1} hope it helps") == Success({"a": 1})


def test_boundary_leg_prefers_last_span_when_configured() -> None:
    pipeline = ParsePipeline(ParseOptions(prefer_first=False))

    assert pipeline.parse('{"x": 1} {"x": 2}') == Success({"x": 2})


def test_repairs_are_cached_on_the_pipeline() -> None:
    cache = RepairCache()
    pipeline = ParsePipeline(cache=cache)

    pipeline.parse("{a: 1}")

    assert "{a: 1}" in cache


def test_unrecoverable_text_fails() -> None:
    assert ParsePipeline().parse("plain words") == Failure(EXHAUSTED_REASON)
