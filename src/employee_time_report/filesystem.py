"""
File access seam for Employee Time Report.

PURPOSE: Keep sources and sinks off the real disk in unit tests.
AI CONTEXT: Only JsonFileTimeEntrySource and FileReportSink touch files, and
both go through this protocol.

IMPLEMENTATIONS:
- RealFileSystem: os and open() on the local disk
- MockFileSystem (tests/conftest.py): dict-backed, with write-failure simulation

USAGE:
    sink = FileReportSink(output_dir="reports", filesystem=RealFileSystem())
    source = JsonFileTimeEntrySource("entries.json", filesystem=mock_fs)
"""

from __future__ import annotations

import os
from typing import Protocol

__all__ = ["FileSystem", "RealFileSystem"]


class FileSystem(Protocol):
    """
    File operations needed to read saved responses and write report outputs.

    Paths are plain strings. Failures surface as OSError subclasses, which
    callers translate into FetchError or PersistError.
    """

    def exists(self, path: str) -> bool:
        """True if a file or directory is present at path."""
        ...

    def makedirs(self, path: str, exist_ok: bool = False) -> None:
        """
        Create the output directory including missing parents.

        Raises:
            OSError: If the directory is already there and exist_ok is False.
        """
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """
        Return the whole file as a string.

        Raises:
            FileNotFoundError: If nothing exists at path.
        """
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """
        Replace the file at path with content (the HTML report).

        Raises:
            OSError: If the file cannot be written, e.g. it is read-only.
        """
        ...

    def write_bytes(self, path: str, content: bytes) -> None:
        """
        Replace the file at path with raw bytes (the chart PNG).

        Raises:
            OSError: If the file cannot be written, e.g. it is read-only.
        """
        ...


class RealFileSystem:
    """Local disk implementation. OS errors propagate unchanged."""

    def exists(self, path: str) -> bool:  # pragma: no cover
        return os.path.exists(path)

    def makedirs(self, path: str, exist_ok: bool = False) -> None:  # pragma: no cover
        os.makedirs(path, exist_ok=exist_ok)

    def read_text(self, path: str, encoding: str = "utf-8") -> str:  # pragma: no cover
        with open(path, encoding=encoding) as f:
            return f.read()

    def write_text(
        self, path: str, content: str, encoding: str = "utf-8"
    ) -> None:  # pragma: no cover
        # newline="": "\n" line endings on every platform
        with open(path, "w", encoding=encoding, newline="") as f:
            f.write(content)

    def write_bytes(self, path: str, content: bytes) -> None:  # pragma: no cover
        with open(path, "wb") as f:
            f.write(content)
