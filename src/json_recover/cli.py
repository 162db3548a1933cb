"""CLI entrypoint."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from json_recover.io_utils import dump_value, load_options, load_text
from json_recover.models.outcome import Failure, Success
from json_recover.models.parse_options import ParseOptions
from json_recover.recovery import recover

EXIT_FAILURE = 1
EXIT_NO_INPUT = 2


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from exc
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def build_options(args: argparse.Namespace) -> ParseOptions:
    """Options file values with command line flags layered on top. Invalid values raise."""
    base = load_options(Path(args.options_file)) if args.options_file else ParseOptions()
    overrides: dict[str, Any] = {}
    if args.no_fix:
        overrides["attempt_fix"] = False
    if args.max_blocks is not None:
        overrides["max_blocks"] = args.max_blocks
    if args.prefer_last:
        overrides["prefer_first"] = False
    if args.allow_partial:
        overrides["allow_partial"] = True
    if not overrides:
        return base
    return ParseOptions.model_validate({**base.model_dump(), **overrides})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Recover JSON from messy model output.")
    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument("--input", type=str, help="Path to a text file")
    input_group.add_argument("--input-text", type=str, help="Raw input text")
    parser.add_argument("--options-file", type=str, help="YAML or JSON file with parse options")
    parser.add_argument("--no-fix", action="store_true", help="Disable repairs and boundary scanning")
    parser.add_argument("--max-blocks", type=non_negative_int, default=None)
    parser.add_argument("--prefer-last", action="store_true", help="Prefer the last JSON value in the text")
    parser.add_argument("--allow-partial", action="store_true", help="Close truncated structures")
    parser.add_argument("--indent", type=int, default=2)
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        options = build_options(args)
    except ValidationError as exc:
        parser.error(f"invalid parse options: {exc}")
    raw = args.input_text if args.input_text is not None else load_text(Path(args.input))

    outcome = recover(raw, options)
    if isinstance(outcome, Success):
        print(dump_value(outcome.value, args.indent))
    elif isinstance(outcome, Failure):
        print(dump_value(outcome.as_record(), args.indent))
        sys.exit(EXIT_FAILURE)
    else:
        print(outcome.reason, file=sys.stderr)
        sys.exit(EXIT_NO_INPUT)
