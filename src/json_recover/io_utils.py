"""Input/output helpers for the command line."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from json_recover.models.parse_options import ParseOptions


def load_text(path: Path) -> str:
    if not path.exists():
        raise FileNotFoundError(path)
    return path.read_text(encoding="utf-8")


def load_options(path: Path) -> ParseOptions:
    """Read ParseOptions from a YAML or JSON mapping. Invalid values raise ValidationError."""
    raw_text = load_text(path)
    if path.suffix.lower() == ".json":
        raw: Any = json.loads(raw_text)
    else:
        raw = yaml.safe_load(raw_text)
    if raw is None:
        return ParseOptions()
    if not isinstance(raw, dict):
        raise ValueError(f"Options file {path} must contain a mapping, got {type(raw).__name__}.")
    return ParseOptions.model_validate(raw)


def dump_value(value: Any, indent: int | None = 2) -> str:
    return json.dumps(value, indent=indent, ensure_ascii=False)
