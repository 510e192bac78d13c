"""Parser configuration: delimiter and accepted header spellings.

The export format is owned by the upstream time-tracking tool, so nothing
here is hard-coded in the parser itself. Defaults match a typical
Toggl-style CSV export; a JSON file can override any field.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

DEFAULT_DELIMITER = ","
DEFAULT_CLOCK_SEPARATOR = ":"
DEFAULT_PROJECT_HEADERS: tuple[str, ...] = ("project", "project name", "project_name")
DEFAULT_DURATION_HEADERS: tuple[str, ...] = ("duration", "time", "hours", "duration (h)")


@dataclass(frozen=True)
class ParserConfig:
    """Format contract between the export tool and the record parser."""
    delimiter: str = DEFAULT_DELIMITER
    clock_separator: str = DEFAULT_CLOCK_SEPARATOR
    project_headers: tuple[str, ...] = DEFAULT_PROJECT_HEADERS
    duration_headers: tuple[str, ...] = DEFAULT_DURATION_HEADERS
    # When set, rows with a blank project are billed under this label
    # instead of failing.
    unassigned_label: Optional[str] = None

    def __post_init__(self) -> None:
        if len(self.delimiter) != 1:
            raise ValueError(f"delimiter must be a single character, got {self.delimiter!r}")
        if not self.clock_separator:
            raise ValueError("clock_separator must be non-empty")
        if self.clock_separator == self.delimiter:
            raise ValueError("clock_separator must differ from the field delimiter")
        if not self.project_headers or not self.duration_headers:
            raise ValueError("at least one accepted header name is required per column")
        if self.unassigned_label is not None and not self.unassigned_label.strip():
            raise ValueError("unassigned_label must be non-empty when set")
        # Normalised once so header matching is a plain set lookup.
        object.__setattr__(self, "project_headers", _normalise(self.project_headers))
        object.__setattr__(self, "duration_headers", _normalise(self.duration_headers))


def _normalise(names) -> tuple[str, ...]:
    if isinstance(names, str):
        names = (names,)
    return tuple(n.strip().lower() for n in names)


def load_parser_config(path: str | Path, **overrides) -> ParserConfig:
    """Load a ParserConfig from a JSON object, then apply keyword overrides.

    Unknown keys are rejected so a typo does not silently fall back to a
    default. Overrides whose value is None are ignored.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Parser config {path} must contain a JSON object")

    known = {f.name for f in fields(ParserConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown parser config key(s) in {path}: {', '.join(unknown)}")

    for key in ("delimiter", "clock_separator"):
        if key in data and not isinstance(data[key], str):
            raise ValueError(f"Parser config key '{key}' must be a string, got {data[key]!r}")

    if "unassigned_label" in data and not isinstance(data["unassigned_label"], (str, type(None))):
        raise ValueError(
            f"Parser config key 'unassigned_label' must be a string or null, got {data['unassigned_label']!r}"
        )

    for key in ("project_headers", "duration_headers"):
        if key not in data:
            continue
        value = data[key]
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            data[key] = tuple(value)
        elif not isinstance(value, str):
            raise ValueError(
                f"Parser config key '{key}' must be a string or a list of strings, got {value!r}"
            )

    data.update({k: v for k, v in overrides.items() if v is not None})
    return ParserConfig(**data)
