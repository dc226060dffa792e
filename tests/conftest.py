"""
Pytest configuration and shared fixtures for Employee Time Report tests.

This module contains:
- MockFileSystem: In-memory filesystem for testing without actual I/O
- InMemorySource: TimeEntrySource returning fixed entries or raising
- Shared fixtures for the reference scenario and wire payloads
"""

from __future__ import annotations

import struct
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from employee_time_report.models import TimeEntry

BASE_TIME = datetime(2024, 3, 4, 9, 0, tzinfo=UTC)
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class MockFileSystem:
    """
    In-memory file system for testing.

    Simulates a file system using dictionaries:
    - _files: dict mapping path -> content (str or bytes)
    - _dirs: set of directory paths
    - _read_only: paths whose writes raise PermissionError

    FEATURES:
    - No actual I/O operations
    - Easy to inspect written reports
    - Supports write-failure simulation
    """

    def __init__(self) -> None:
        self._files: dict[str, str | bytes] = {}
        self._dirs: set[str] = set()
        self._read_only: set[str] = set()

    def exists(self, path: str) -> bool:
        return path in self._files or path in self._dirs

    def makedirs(self, path: str, exist_ok: bool = False) -> None:
        """
        Create mock directory and parent directories.

        Args:
            path: Directory path to create.
            exist_ok: If True, don't raise if directory exists.

        Raises:
            FileExistsError: If directory exists and exist_ok is False.
        """
        if path in self._dirs and not exist_ok:
            raise FileExistsError(f"Directory exists: {path}")
        parts = path.split("/")
        for i in range(1, len(parts) + 1):
            partial = "/".join(parts[:i])
            if partial:
                self._dirs.add(partial)

    def read_text(self, path: str, _encoding: str = "utf-8") -> str:
        """
        Read text content from mock file.

        Raises:
            FileNotFoundError: If path not in _files.
        """
        if path not in self._files:
            raise FileNotFoundError(f"No such file: {path}")
        content = self._files[path]
        return content.decode("utf-8") if isinstance(content, bytes) else content

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:  # noqa: ARG002
        """
        Write text to mock file.

        Raises:
            PermissionError: If path was marked read-only.
        """
        if path in self._read_only:
            raise PermissionError(f"Permission denied: {path}")
        self._files[path] = content

    def write_bytes(self, path: str, content: bytes) -> None:
        """
        Write bytes to mock file.

        Raises:
            PermissionError: If path was marked read-only.
        """
        if path in self._read_only:
            raise PermissionError(f"Permission denied: {path}")
        self._files[path] = content

    # Test helpers

    def set_file(self, path: str, content: str | bytes) -> None:
        """Create a file directly, bypassing read-only checks."""
        self._files[path] = content

    def get_file(self, path: str) -> str | bytes | None:
        """Return file content or None if missing."""
        return self._files.get(path)

    def set_read_only(self, path: str) -> None:
        """Make subsequent writes to path raise PermissionError."""
        self._read_only.add(path)

    def list_files(self) -> list[str]:
        return sorted(self._files)


class InMemorySource:
    """
    TimeEntrySource test double.

    Returns a copy of the given entries on every fetch, or raises the
    given error. Counts fetch calls for assertions.
    """

    def __init__(
        self,
        entries: list[TimeEntry] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.entries = entries or []
        self.error = error
        self.calls = 0

    def describe(self) -> str:
        return "memory"

    def fetch_entries(self) -> list[TimeEntry]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.entries)


def make_entry(
    name: str | None,
    hours: float,
    *,
    deleted: bool = False,
    start: datetime = BASE_TIME,
    entry_id: str = "",
) -> TimeEntry:
    """
    Build a TimeEntry lasting the given number of hours.

    Args:
        name: Employee name (None for nameless entries).
        hours: Duration; negative values put end before start.
        deleted: When True, deleted_on is set one day after start.
        start: Start timestamp. Default: BASE_TIME.
        entry_id: Identifier. Default: derived from name and hours.

    Returns:
        TimeEntry with UTC timestamps.
    """
    return TimeEntry(
        id=entry_id or f"{name}-{hours}",
        employee_name=name,
        start_time_utc=start,
        end_time_utc=start + timedelta(hours=hours),
        notes="",
        deleted_on=start + timedelta(days=1) if deleted else None,
    )


def png_size(data: bytes) -> tuple[int, int]:
    """
    Read width and height from a PNG's IHDR chunk.

    Returns:
        (width, height) in pixels.
    """
    assert data[:8] == PNG_SIGNATURE
    width, height = struct.unpack(">II", data[16:24])
    return width, height


def has_matplotlib() -> bool:
    """Check if matplotlib is available for chart tests.

    Tests requiring matplotlib are skipped when the library is not
    installed, so the rest of the suite runs in minimal environments.

    Returns:
        True if matplotlib can be imported, False otherwise.
    """
    try:
        import matplotlib  # noqa: F401

        return True
    except ImportError:
        return False


@pytest.fixture
def mock_fs() -> MockFileSystem:
    """
    Create a MockFileSystem for testing.

    Provides a fresh in-memory filesystem instance for each test,
    ensuring test isolation without actual disk I/O.

    Returns:
        MockFileSystem: A fresh mock filesystem instance.
    """
    return MockFileSystem()


@pytest.fixture
def entry_factory() -> Callable[..., TimeEntry]:
    """Provide make_entry() to tests that build custom entry lists."""
    return make_entry


@pytest.fixture
def scenario_entries() -> list[TimeEntry]:
    """
    Reference scenario: A works 2h, a deleted 1h entry for A, B works 5h.

    Expected summary: [B 5.0, A 2.0]; chart slices 71.43% and 28.57%.
    """
    return [
        make_entry("A", 2, entry_id="1"),
        make_entry("A", 1, deleted=True, entry_id="2"),
        make_entry("B", 5, entry_id="3"),
    ]


@pytest.fixture
def scenario_source(scenario_entries: list[TimeEntry]) -> InMemorySource:
    """InMemorySource serving the reference scenario."""
    return InMemorySource(scenario_entries)


@pytest.fixture
def wire_payload() -> list[dict[str, object]]:
    """
    Endpoint-shaped JSON objects, including the 'starTimeUtc' spelling.

    Ana: 8h + 2.5h, Ben: 3h, one deleted entry, one nameless entry.
    """
    return [
        {
            "Id": "a1",
            "EmployeeName": "Ana",
            "StarTimeUtc": "2024-03-04T09:00:00",
            "EndTimeUtc": "2024-03-04T17:00:00",
            "EntryNotes": "Sprint work",
            "DeletedOn": None,
        },
        {
            "id": "b1",
            "employeeName": "Ben",
            "starTimeUtc": "2024-03-04T08:00:00Z",
            "endTimeUtc": "2024-03-04T11:00:00Z",
            "entryNotes": "",
            "deletedOn": None,
        },
        {
            "id": "a2",
            "employeeName": "Ana",
            "starTimeUtc": "2024-03-05T13:00:00.0000000",
            "endTimeUtc": "2024-03-05T15:30:00.0000000",
            "entryNotes": "Review",
            "deletedOn": None,
        },
        {
            "id": "b2",
            "employeeName": "Ben",
            "starTimeUtc": "2024-03-05T08:00:00",
            "endTimeUtc": "2024-03-05T20:00:00",
            "entryNotes": "Removed",
            "deletedOn": "2024-03-06T10:00:00",
        },
        {
            "id": "x1",
            "employeeName": None,
            "starTimeUtc": "2024-03-05T08:00:00",
            "endTimeUtc": "2024-03-05T09:00:00",
            "entryNotes": "Unassigned",
            "deletedOn": None,
        },
    ]
