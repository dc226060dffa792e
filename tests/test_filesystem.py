"""Tests for filesystem module."""

from __future__ import annotations

from pathlib import Path

import pytest
from conftest import MockFileSystem

from employee_time_report.filesystem import RealFileSystem


class TestMockFileSystem:
    """Tests for the in-memory test filesystem."""

    def test_initial_state_empty(self) -> None:
        """Verifies a new MockFileSystem has no files."""
        fs = MockFileSystem()
        assert fs.list_files() == []
        assert not fs.exists("EmployeeReport.html")

    def test_makedirs_creates_parents(self) -> None:
        fs = MockFileSystem()
        fs.makedirs("a/b/c")
        assert fs.exists("a")
        assert fs.exists("a/b/c")

    def test_makedirs_existing_raises(self) -> None:
        fs = MockFileSystem()
        fs.makedirs("out")
        with pytest.raises(FileExistsError):
            fs.makedirs("out")
        fs.makedirs("out", exist_ok=True)

    def test_read_missing_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            MockFileSystem().read_text("missing.json")

    def test_read_only_write_raises(self) -> None:
        """Verifies read-only paths simulate write failures for both kinds."""
        fs = MockFileSystem()
        fs.set_read_only("x")
        with pytest.raises(PermissionError):
            fs.write_text("x", "data")
        with pytest.raises(PermissionError):
            fs.write_bytes("x", b"data")


class TestRealFileSystem:
    """Tests for RealFileSystem against a temporary directory."""

    def test_text_round_trip(self, tmp_path: Path) -> None:
        """Verifies UTF-8 text is written and read back unchanged.

        Business context:
        Employee names include accented characters; the report must
        keep them intact.

        Arrangement:
        A path inside pytest's tmp_path.

        Action:
        write_text then read_text.

        Assertion Strategy:
        Validates content equality and existence.
        """
        fs = RealFileSystem()
        path = str(tmp_path / "EmployeeReport.html")
        fs.write_text(path, "<td>Zoë Ångström</td>")
        assert fs.exists(path)
        assert fs.read_text(path) == "<td>Zoë Ångström</td>"

    def test_write_bytes(self, tmp_path: Path) -> None:
        fs = RealFileSystem()
        path = tmp_path / "EmployeeTimeChart.png"
        fs.write_bytes(str(path), b"\x89PNG\r\n")
        assert path.read_bytes() == b"\x89PNG\r\n"

    def test_makedirs(self, tmp_path: Path) -> None:
        fs = RealFileSystem()
        target = tmp_path / "reports" / "2024"
        fs.makedirs(str(target), exist_ok=True)
        assert target.is_dir()

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            RealFileSystem().read_text(str(tmp_path / "nope.json"))
