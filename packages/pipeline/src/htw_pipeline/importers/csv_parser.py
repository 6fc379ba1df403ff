"""
importers/csv_parser.py — Naive CSV parser for the admin bulk upload.

Turns uploaded file text into typed table records ready for one batch
insert. The whole file is rejected on structural problems (no data row,
missing required columns); individual rows with too few fields are
dropped and counted instead.

The split is a plain ``str.split(",")``: there is no quoting or escaping,
so a comma inside a value shifts every following column. List columns
(member skills, event promotion channels) use ``;`` between items for
the same reason.

Usage:
    from htw_pipeline.importers.csv_parser import SCHEMAS, parse_csv, build_template

    batch = parse_csv(text, SCHEMAS["industries"])
    print(len(batch), batch.rows_dropped)

    template = build_template(SCHEMAS["members"])
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterator, Sequence

import structlog
from pydantic import ValidationError

from htw_shared.constants import (
    COMPANY_SIZES,
    DEFAULT_COLOR,
    DEFAULT_COMPANY_SIZE,
    DEFAULT_EVENT_TYPE,
    DEFAULT_ICON,
    DEFAULT_LEVEL,
    EVENT_TYPES,
    INDUSTRY_COLORS,
    INDUSTRY_ICONS,
    ISLANDS,
    LEVELS,
)
from htw_shared.exceptions import ImportStructureError, MissingColumnsError
from htw_shared.models import Company, Event, Industry, Member
from htw_shared.models.base import TableModel

log = structlog.get_logger(__name__)

FIELD_DELIMITER = ","
LIST_DELIMITER = ";"


@dataclass(frozen=True)
class ImportSchema:
    """
    Column layout for one importable record type.

    ``columns`` is the template header order. Columns in ``required`` must
    appear in the uploaded header; the rest may be left out and fall back
    to ``fallbacks`` (text) or the numeric default. ``choices`` lists the
    suggested values for a column; they are offered to the admin form and
    not enforced on import.
    """

    record_type: str
    model: type[TableModel]
    columns: tuple[str, ...]
    required: frozenset[str]
    integers: frozenset[str] = frozenset()
    floats: frozenset[str] = frozenset()
    lists: frozenset[str] = frozenset()
    fallbacks: dict[str, str] = field(default_factory=dict)
    choices: dict[str, tuple[str, ...]] = field(default_factory=dict)
    examples: tuple[tuple[str, ...], ...] = ()

    @property
    def table(self) -> str:
        return self.model.table

    @property
    def required_columns(self) -> list[str]:
        """Required columns in template order."""
        return [c for c in self.columns if c in self.required]


INDUSTRIES = ImportSchema(
    record_type="industries",
    model=Industry,
    columns=(
        "name", "description", "member_count", "company_count",
        "growth_rate", "color", "icon",
    ),
    required=frozenset({"name", "description", "member_count", "company_count", "growth_rate"}),
    integers=frozenset({"member_count", "company_count"}),
    floats=frozenset({"growth_rate"}),
    fallbacks={"color": DEFAULT_COLOR, "icon": DEFAULT_ICON},
    choices={"color": tuple(INDUSTRY_COLORS), "icon": tuple(INDUSTRY_ICONS)},
    examples=(
        ("Technology", "Software development and IT services", "100", "20", "15.5", "#1E88E5", "💻"),
        ("Tourism", "Hotels and visitor experiences", "80", "15", "8.2", "#FF8A65", "🏨"),
    ),
)

COMPANIES = ImportSchema(
    record_type="companies",
    model=Company,
    columns=(
        "name", "website", "island", "location", "industry_id",
        "company_size", "engagement_level",
    ),
    required=frozenset({"name", "industry_id"}),
    fallbacks={"company_size": DEFAULT_COMPANY_SIZE, "engagement_level": DEFAULT_LEVEL},
    choices={
        "island": tuple(ISLANDS),
        "company_size": tuple(COMPANY_SIZES),
        "engagement_level": tuple(LEVELS),
    },
    examples=(
        ("Aloha Analytics", "https://alohaanalytics.example", "Oahu", "Honolulu",
         "00000000-0000-0000-0000-000000000001", "Small (1-50)", "High"),
        ("Maui Cloud Works", "https://mauicloud.example", "Maui", "Kahului",
         "00000000-0000-0000-0000-000000000001", "Medium (51-200)", "Medium"),
    ),
)

MEMBERS = ImportSchema(
    record_type="members",
    model=Member,
    columns=(
        "name", "email", "job_title", "island", "bio", "linkedin_url",
        "github_url", "skills", "activity_level", "company_id",
        "industry_id", "events_attended", "member_since",
    ),
    required=frozenset({"name", "industry_id"}),
    integers=frozenset({"events_attended"}),
    lists=frozenset({"skills"}),
    fallbacks={"activity_level": DEFAULT_LEVEL},
    choices={"island": tuple(ISLANDS), "activity_level": tuple(LEVELS)},
    examples=(
        ("Keoni Kahale", "keoni@example.com", "Software Engineer", "Oahu",
         "Builds data tools", "https://linkedin.com/in/keoni", "https://github.com/keoni",
         "Python;React;AWS", "High", "", "00000000-0000-0000-0000-000000000001", "5", "2024-01-15"),
        ("Leilani Akana", "leilani@example.com", "Product Manager", "Maui",
         "Runs product for a climate startup", "", "",
         "Product Management;SQL", "Medium", "", "00000000-0000-0000-0000-000000000001", "2", "2024-03-01"),
    ),
)

EVENTS = ImportSchema(
    record_type="events",
    model=Event,
    columns=(
        "name", "description", "event_type", "company_id", "event_date",
        "location", "organizer_name", "organizer_email",
        "promotion_channels", "attendee_count",
    ),
    required=frozenset({"name", "event_date"}),
    integers=frozenset({"attendee_count"}),
    lists=frozenset({"promotion_channels"}),
    fallbacks={"event_type": DEFAULT_EVENT_TYPE},
    choices={"event_type": tuple(EVENT_TYPES)},
    examples=(
        ("Tech Meetup Honolulu", "Monthly community meetup", "htw", "", "2024-06-12",
         "Honolulu", "Kai Palakiko", "kai@example.com", "LinkedIn;Newsletter", "45"),
        ("Cloud Workshop", "Hands-on infrastructure session", "company",
         "00000000-0000-0000-0000-000000000002", "2024-07-03",
         "Kahului", "Malia Keawe", "malia@example.com", "Slack", "20"),
    ),
)

SCHEMAS: dict[str, ImportSchema] = {
    s.record_type: s for s in (INDUSTRIES, COMPANIES, MEMBERS, EVENTS)
}


@dataclass(frozen=True)
class ParsedBatch:
    """Typed records parsed from one upload, in file order."""

    record_type: str
    records: tuple[TableModel, ...]
    rows_total: int
    rows_dropped: int

    def __iter__(self) -> Iterator[TableModel]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_csv(content: str, schema: ImportSchema) -> ParsedBatch:
    """
    Parse uploaded CSV text into records of ``schema.model``.

    Args:
        content: Whole file as text. Blank lines are ignored, ``\\r\\n`` is fine.
        schema:  Column layout for the record type.

    Returns:
        ParsedBatch with one record per well-formed data line.

    Raises:
        ImportStructureError: fewer than two non-empty lines.
        MissingColumnsError:  header lacks required columns (all listed at once).
    """
    lines = [line for line in content.lstrip("\ufeff").splitlines() if line.strip()]
    if len(lines) < 2:
        raise ImportStructureError(detail=f"Found {len(lines)} non-empty line(s)")

    header = [h.strip().lower() for h in lines[0].split(FIELD_DELIMITER)]
    missing = [c for c in schema.required_columns if c not in header]
    if missing:
        raise MissingColumnsError(missing)

    parse_log = log.bind(record_type=schema.record_type)
    records: list[TableModel] = []
    dropped = 0

    for row_no, line in enumerate(lines[1:], start=1):
        values = [v.strip() for v in line.split(FIELD_DELIMITER)]
        if len(values) < len(header):
            dropped += 1
            parse_log.debug("row_dropped", row=row_no, reason="too_few_fields",
                            fields=len(values), expected=len(header))
            continue

        # zip stops at the header length, so extra trailing fields are ignored
        raw = dict(zip(header, values))
        try:
            records.append(schema.model.model_validate(_coerce_row(raw, schema)))
        except ValidationError as exc:
            dropped += 1
            parse_log.warning("row_dropped", row=row_no, reason="invalid",
                              errors=exc.error_count())

    parse_log.info("csv_parsed", rows_total=len(lines) - 1,
                   records=len(records), rows_dropped=dropped)
    return ParsedBatch(
        record_type=schema.record_type,
        records=tuple(records),
        rows_total=len(lines) - 1,
        rows_dropped=dropped,
    )


def _coerce_row(raw: dict[str, str], schema: ImportSchema) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for column in schema.columns:
        value = raw.get(column, "")
        if column in schema.integers:
            payload[column] = _parse_int(value)
        elif column in schema.floats:
            payload[column] = _parse_float(value)
        elif column in schema.lists:
            payload[column] = [v.strip() for v in value.split(LIST_DELIMITER) if v.strip()]
        elif value:
            payload[column] = value
        elif column in schema.fallbacks:
            payload[column] = schema.fallbacks[column]
        else:
            payload[column] = None
    return payload


def _parse_int(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def _parse_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError:
        return 0.0
    # float() accepts "nan" and "inf"; neither may reach the dashboard
    return parsed if math.isfinite(parsed) else 0.0


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


def build_template(schema: ImportSchema) -> str:
    """Sample CSV offered for download: header plus two example rows."""
    lines = [FIELD_DELIMITER.join(schema.columns)]
    lines.extend(FIELD_DELIMITER.join(row) for row in schema.examples)
    return "\n".join(lines) + "\n"


def encode_records(schema: ImportSchema, records: Sequence[TableModel]) -> str:
    """
    Write records in the template layout.

    Values containing a comma are written as-is and will not parse back
    into the same columns. A null field that has an import fallback is
    written as that fallback, since parsing an empty cell would produce it
    anyway; such records round-trip only up to that substitution.
    """
    lines = [FIELD_DELIMITER.join(schema.columns)]
    for record in records:
        data = record.model_dump(mode="json")
        values = []
        for column in schema.columns:
            value = data.get(column)
            if value is None and column in schema.fallbacks:
                value = schema.fallbacks[column]
            values.append(_encode_value(value))
        lines.append(FIELD_DELIMITER.join(values))
    return "\n".join(lines) + "\n"


def _encode_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return LIST_DELIMITER.join(str(v) for v in value)
    return str(value)
