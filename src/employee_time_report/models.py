"""
Data models for Employee Time Report.

PURPOSE: Type-safe dataclasses representing core domain entities.
AI CONTEXT: These models define the raw record schema and the derived report data.

MODEL HIERARCHY:
- TimeEntry: One raw recorded work interval for an employee (input)
- EmployeeSummary: Total hours for one employee (aggregation output)
- ChartSlice: One pie wedge, value in percent of all hours
- ChartModel: Ordered slices plus pie geometry, consumed by the rasterizer

SERIALIZATION:
TimeEntry.from_dict() parses the endpoint's JSON objects, including its
misspelled "starTimeUtc" field. to_dict() writes the corrected names.
Timestamps use ISO 8601; naive values are read as UTC.

USAGE:
    entries = parse_time_entries(json.loads(body))
    entry.duration_hours  # 7.5
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from .config import Config
from .errors import DeserializationError

__all__ = [
    "TimeEntry",
    "EmployeeSummary",
    "ChartSlice",
    "ChartModel",
    "parse_time_entries",
]

# Accepted wire keys per field, first match wins
_ID_KEYS = ("id", "Id")
_NAME_KEYS = ("employeeName", "EmployeeName")
_START_KEYS = ("startTimeUtc", "starTimeUtc", "StartTimeUtc", "StarTimeUtc")
_END_KEYS = ("endTimeUtc", "EndTimeUtc")
_NOTES_KEYS = ("entryNotes", "EntryNotes", "notes")
_DELETED_KEYS = ("deletedOn", "DeletedOn")

# .NET serializers emit up to 7 fractional digits; datetime keeps 6
_EXTRA_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def _first(data: dict[str, Any], keys: tuple[str, ...]) -> Any:
    """Return the value of the first key present in data, or None."""
    for key in keys:
        if key in data:
            return data[key]
    return None


def _parse_utc(value: Any, field_name: str) -> datetime:
    """
    Parse an ISO 8601 timestamp into an aware UTC datetime.

    Accepts 'Z' and '+00:00' suffixes as well as naive timestamps, which
    are interpreted as UTC. Offsets other than UTC are converted.

    Args:
        value: ISO 8601 string or datetime.
        field_name: Wire field name, used in the error message.

    Returns:
        Timezone-aware datetime in UTC.

    Raises:
        DeserializationError: If value is missing or not a valid timestamp.

    Example:
        >>> _parse_utc("2024-01-01T10:00:00Z", "endTimeUtc").isoformat()
        '2024-01-01T10:00:00+00:00'
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        text = _EXTRA_FRACTION_RE.sub(r"\1", value.replace("Z", "+00:00"))
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise DeserializationError(f"Invalid {field_name} '{value}': {e}") from e
    else:
        raise DeserializationError(f"Missing or invalid {field_name}: {value!r}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


@dataclass(frozen=True)
class TimeEntry:
    """
    One raw recorded work interval.

    VALIDITY RULES:
    - deleted_on set: soft-deleted tombstone, excluded from aggregation
    - employee_name None or blank: excluded from aggregation
    - end before start: kept, contributes a negative duration

    Timestamps are timezone-aware UTC datetimes.
    """

    id: str
    employee_name: str | None
    start_time_utc: datetime
    end_time_utc: datetime
    notes: str = ""
    deleted_on: datetime | None = None

    @property
    def duration_hours(self) -> float:
        """
        Elapsed time between start and end in fractional hours.

        Derived as total elapsed seconds / 3600. Zero or negative for
        malformed records; no clamping is applied.

        Returns:
            Duration in hours as float.

        Example:
            >>> entry.duration_hours  # 09:00 -> 17:30
            8.5
        """
        return (self.end_time_utc - self.start_time_utc).total_seconds() / 3600.0

    @property
    def is_deleted(self) -> bool:
        """True when the entry carries a soft-delete timestamp."""
        return self.deleted_on is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TimeEntry:
        """
        Deserialize a time entry from the endpoint's JSON object.

        Reads camelCase keys as sent by the endpoint, tolerating
        PascalCase variants and both the misspelled 'starTimeUtc' and
        the corrected 'startTimeUtc' for the start timestamp.

        Business context: The endpoint has always sent 'starTimeUtc'.
        Accepting both spellings keeps wire compatibility while local
        JSON files can use the corrected name.

        Args:
            data: Dict with id, employeeName, starTimeUtc/startTimeUtc,
                endTimeUtc, entryNotes and deletedOn fields.

        Returns:
            TimeEntry with UTC timestamps.

        Raises:
            DeserializationError: If data is not a dict, a timestamp is
                missing or invalid, or employeeName is not a string.

        Example:
            >>> entry = TimeEntry.from_dict({
            ...     "id": "1", "employeeName": "Ana",
            ...     "starTimeUtc": "2024-01-01T09:00:00",
            ...     "endTimeUtc": "2024-01-01T11:00:00",
            ... })
            >>> entry.duration_hours
            2.0
        """
        if not isinstance(data, dict):
            raise DeserializationError(f"Expected time entry object, got {type(data).__name__}")

        name = _first(data, _NAME_KEYS)
        if name is not None and not isinstance(name, str):
            raise DeserializationError(f"Invalid employeeName: {name!r}")

        deleted = _first(data, _DELETED_KEYS)
        raw_id = _first(data, _ID_KEYS)

        return cls(
            id="" if raw_id is None else str(raw_id),
            employee_name=name,
            start_time_utc=_parse_utc(_first(data, _START_KEYS), "startTimeUtc"),
            end_time_utc=_parse_utc(_first(data, _END_KEYS), "endTimeUtc"),
            notes=_first(data, _NOTES_KEYS) or "",
            deleted_on=_parse_utc(deleted, "deletedOn") if deleted else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize the entry with corrected field names.

        Returns:
            Dict with id, employeeName, startTimeUtc, endTimeUtc,
            entryNotes and deletedOn (ISO 8601 strings or None).
        """
        return {
            "id": self.id,
            "employeeName": self.employee_name,
            "startTimeUtc": self.start_time_utc.isoformat(),
            "endTimeUtc": self.end_time_utc.isoformat(),
            "entryNotes": self.notes,
            "deletedOn": self.deleted_on.isoformat() if self.deleted_on else None,
        }


def parse_time_entries(payload: Any) -> list[TimeEntry]:
    """
    Deserialize the endpoint's JSON payload into time entries.

    Args:
        payload: Decoded JSON, expected to be a list of entry objects.

    Returns:
        List of TimeEntry in payload order.

    Raises:
        DeserializationError: If payload is not a list or any element
            fails TimeEntry.from_dict(). The message names the index.

    Example:
        >>> parse_time_entries([])
        []
    """
    if not isinstance(payload, list):
        raise DeserializationError(
            f"Expected a JSON array of time entries, got {type(payload).__name__}"
        )

    entries = []
    for index, item in enumerate(payload):
        try:
            entries.append(TimeEntry.from_dict(item))
        except DeserializationError as e:
            raise DeserializationError(f"Entry {index}: {e.args[0]}") from e
    return entries


@dataclass(frozen=True)
class EmployeeSummary:
    """Total hours worked by one employee across all counted entries."""

    name: str
    total_hours: float

    @property
    def is_low_hours(self) -> bool:
        """
        Whether this employee is below the report's highlight threshold.

        Returns:
            True if total_hours < Config.LOW_HOURS_THRESHOLD (100.0).
        """
        return self.total_hours < Config.LOW_HOURS_THRESHOLD

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {"name": self.name, "total_hours": self.total_hours}


@dataclass(frozen=True)
class ChartSlice:
    """One pie wedge: employee name and share of all hours in percent."""

    label: str
    value: float


@dataclass(frozen=True)
class ChartModel:
    """
    Pie chart description independent of any drawing library.

    GEOMETRY:
    - Slices are drawn in order, clockwise from start_angle
    - angle_span of 360 covers the full circle
    - Names are placed at inside_label_position of the radius
    """

    title: str
    slices: tuple[ChartSlice, ...]
    start_angle: float = Config.CHART_START_ANGLE
    angle_span: float = Config.CHART_ANGLE_SPAN
    inside_label_position: float = Config.CHART_INSIDE_LABEL_POSITION

    @property
    def total_percentage(self) -> float:
        """Sum of all slice values; 100 for any non-degenerate chart."""
        return sum(s.value for s in self.slices)

    @property
    def is_empty(self) -> bool:
        """True when no slice has a positive value to draw."""
        return not any(s.value > 0 for s in self.slices)
