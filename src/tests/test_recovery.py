import json
import logging
import time
from typing import Any

import pytest

from json_recover.models.outcome import Failure, NoInput, Success
from json_recover.pipeline import ParsePipeline
from json_recover.recovery import NOT_FOUND_REASON
from json_recover.recovery import JsonRecovery
from json_recover.recovery import recover
from json_recover.recovery import recover_value


class RaisingParse:
    def __call__(self, *args: object, **kwargs: object) -> Any:
        raise AssertionError("pipeline should not run")


class Unprintable:
    def __str__(self) -> str:
        raise RuntimeError("no string form")


@pytest.mark.parametrize(
    "text",
    [
        '{"nested": {"a": [true, false, null]}, "n": 1.5}',
        "[1, 2, 3]",
        '"just a string"',
        "42",
        "null",
        '{"success": false, "data": null}',
    ],
)
def test_valid_json_matches_native_parse(text: str) -> None:
    assert recover(text) == Success(json.loads(text))


def test_fenced_json_block_uses_fast_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(ParsePipeline, "parse", RaisingParse())

    assert recover('```json\n{"a": 1}\n```') == Success({"a": 1})


def test_fast_path_result_is_unwrapped(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(ParsePipeline, "parse", RaisingParse())

    assert recover('```json\n{"response": {"a": 1}}\n```') == Success({"a": 1})


def test_fenced_json_in_prose_matches_direct_parse() -> None:
    body = '{"items": [1, 2], "ok": true}'

    assert recover(f"Here you go:\n```json\n{body}\n```\nThanks!") == Success(json.loads(body))


def test_python_style_object_is_repaired() -> None:
    assert recover("{'a': 1, 'b': True, }") == Success({"a": 1, "b": True})


def test_prefer_first_selects_between_embedded_values() -> None:
    text = 'Here is your data: {"x": 1} and more text {"x": 2}'

    assert recover(text) == Success({"x": 1})
    assert recover(text, {"preferFirst": False}) == Success({"x": 2})


def test_truncated_object_needs_allow_partial() -> None:
    text = '{"name": "Jo'

    assert recover(text) == Failure(NOT_FOUND_REASON)
    assert recover(text, {"allowPartial": True}) == Success({"name": "Jo"})


def test_response_envelope_is_unwrapped() -> None:
    assert recover('{"response": "{\\"result\\":\\"ok\\"}"}') == Success({"result": "ok"})


def test_already_parsed_envelope_is_unwrapped() -> None:
    assert recover({"response": '{"result":"ok"}'}) == Success({"result": "ok"})


@pytest.mark.parametrize("raw", [None, "", "   \n\t"])
def test_missing_input_is_no_input(raw: Any) -> None:
    assert isinstance(recover(raw), NoInput)


def test_unconvertible_input_is_no_input() -> None:
    assert isinstance(recover(Unprintable()), NoInput)


def test_non_string_input_is_converted() -> None:
    assert recover(42) == Success(42)
    assert recover(b'{"a": 1}') == Success({"a": 1})


def test_candidate_from_fenced_block_is_repaired() -> None:
    text = "Notes: {oops\n```json\n{'a': 1,}\n```"

    assert recover(text) == Success({"a": 1})


def test_aggressive_scan_recovers_first_value() -> None:
    assert recover('{"a":1} and {b c d}', {"prefer_first": False}) == Success({"a": 1})


def test_attempt_fix_disabled_only_accepts_strict_json() -> None:
    assert recover("{'a': 1}", {"attemptFix": False}) == Failure(NOT_FOUND_REASON)


def test_invalid_options_fall_back_to_defaults() -> None:
    assert recover("{'a': 1}", "nonsense") == Success({"a": 1})
    assert recover("{'a': 1}", {"maxBlocks": "many"}) == Success({"a": 1})


def test_failure_record_shape() -> None:
    outcome = recover("nothing to see here")

    assert isinstance(outcome, Failure)
    assert outcome.as_record() == {
        "success": False,
        "data": None,
        "error": "No valid JSON found in the response",
        "rawJson": None,
    }


def test_failure_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="json_recover.recovery"):
        recover("nothing to see here")

    assert "No valid JSON found" in caplog.text


def test_repair_cache_is_per_call() -> None:
    first = JsonRecovery()
    second = JsonRecovery()

    first.recover("{a: 1}")

    assert len(first.cache) > 0
    assert len(second.cache) == 0
    assert first.cache is not second.cache


def test_recover_value() -> None:
    assert recover_value("[1]") == [1]
    assert recover_value("nothing to see here", default={}) == {}
    assert recover_value(None) is None


def test_long_comma_run_fails_quickly() -> None:
    start = time.perf_counter()
    outcome = recover("," * 20000 + " x")

    assert outcome == Failure(NOT_FOUND_REASON)
    assert time.perf_counter() - start < 2.0
