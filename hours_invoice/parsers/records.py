"""Record Parser: export text to TimeRecords.

The header row is resolved once into column indices; data rows are then
indexed positionally. Rows are numbered from 1 starting at the first data
row, and blank rows still consume a number so reported positions match the
file.
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from hours_invoice.config import ParserConfig
from hours_invoice.models import (
    DurationParseError,
    RowError,
    RowErrors,
    SchemaError,
    TimeRecord,
)
from hours_invoice.parsers.duration import parse_duration

logger = logging.getLogger(__name__)

_BOM = "\ufeff"


@dataclass(frozen=True)
class ColumnLayout:
    """Positions of the required columns, resolved from the header row."""
    project: int
    duration: int

    @property
    def min_width(self) -> int:
        return max(self.project, self.duration) + 1


def _find_column(header: list[str], accepted: Iterable[str], field: str) -> int:
    names = [cell.strip().lower() for cell in header]
    for name in accepted:
        if name in names:
            return names.index(name)
    raise SchemaError(
        f"No {field} column found in header {header}; "
        f"expected one of: {', '.join(accepted)}",
        field=field,
        header=header,
    )


def resolve_columns(header: list[str], config: ParserConfig) -> ColumnLayout:
    """Locate the project and duration columns by case-insensitive name."""
    if header:
        header = [header[0].lstrip(_BOM), *header[1:]]
    return ColumnLayout(
        project=_find_column(header, config.project_headers, "project"),
        duration=_find_column(header, config.duration_headers, "duration"),
    )


def _is_blank(row: list[str]) -> bool:
    return all(not cell.strip() for cell in row)


def _parse_row(
    row_number: int,
    row: list[str],
    layout: ColumnLayout,
    config: ParserConfig,
) -> TimeRecord:
    raw_row = config.delimiter.join(row)

    if len(row) < layout.min_width:
        raise RowError(
            row_number,
            "row",
            raw_row,
            f"has {len(row)} field(s), needs at least {layout.min_width} "
            f"to reach the project and duration columns",
        )

    raw_project = row[layout.project]
    project = raw_project.strip()
    if not project:
        if config.unassigned_label is None:
            raise RowError(row_number, "project", raw_project, "project is missing")
        project = config.unassigned_label

    raw_duration = row[layout.duration]
    try:
        hours = parse_duration(raw_duration, config.clock_separator, row=row_number)
    except DurationParseError as e:
        raise RowError(row_number, "duration", raw_duration, e.reason) from e

    return TimeRecord(project=project, hours=hours, row=row_number)


def parse_records(
    content: str,
    config: Optional[ParserConfig] = None,
    collect_errors: bool = False,
) -> list[TimeRecord]:
    """Parse the full text of an export into TimeRecords.

    By default the first bad row aborts the parse with its RowError. With
    ``collect_errors`` every row is examined and a single RowErrors listing
    all failures is raised instead. Either way no partial result is returned.
    """
    config = config or ParserConfig()
    reader = csv.reader(io.StringIO(content), delimiter=config.delimiter)

    try:
        rows = list(reader)
    except csv.Error as e:
        raise SchemaError(f"Export is not well-formed delimited text (line {reader.line_num}): {e}") from e

    # The header is the first non-blank row.
    while rows and _is_blank(rows[0]):
        rows.pop(0)
    if not rows:
        raise SchemaError("Export has no header row")

    header, data_rows = rows[0], rows[1:]
    layout = resolve_columns(header, config)
    logger.debug("Resolved columns: project=%d duration=%d", layout.project, layout.duration)

    records: list[TimeRecord] = []
    errors: list[RowError] = []
    skipped = 0

    for row_number, row in enumerate(data_rows, start=1):
        if _is_blank(row):
            skipped += 1
            continue
        try:
            records.append(_parse_row(row_number, row, layout, config))
        except RowError as e:
            if not collect_errors:
                raise
            errors.append(e)

    if errors:
        raise RowErrors(errors)

    logger.info("Parsed %d record(s), skipped %d blank row(s)", len(records), skipped)
    return records


def parse_records_file(
    path: str | Path,
    config: Optional[ParserConfig] = None,
    collect_errors: bool = False,
) -> list[TimeRecord]:
    """Read an export from disk and parse it."""
    content = Path(path).read_text(encoding="utf-8-sig")
    return parse_records(content, config, collect_errors=collect_errors)
