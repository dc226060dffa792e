"""
Report sinks for Employee Time Report.

PURPOSE: Narrow sink capability that persists rendered outputs.
AI CONTEXT: The only place the report pipeline writes files.

ERROR HANDLING STRATEGY:
- OSError while writing -> logged and raised as PersistError
- Each output is written independently; a failure never removes
  an output that was already written

USAGE:
    sink = FileReportSink(output_dir="reports")
    path = sink.write_text("EmployeeReport.html", html)
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Protocol

from .errors import PersistError
from .filesystem import RealFileSystem

if TYPE_CHECKING:
    from .filesystem import FileSystem

__all__ = ["ReportSink", "FileReportSink"]

logger = logging.getLogger(__name__)


class ReportSink(Protocol):
    """Protocol for destinations of rendered report outputs."""

    def write_text(self, name: str, content: str) -> str:
        """
        Persist a text output (UTF-8).

        Args:
            name: Output file name, e.g. "EmployeeReport.html".
            content: Document text.

        Returns:
            Location of the written output.

        Raises:
            PersistError: If the output cannot be written.
        """
        ...

    def write_bytes(self, name: str, content: bytes) -> str:
        """
        Persist a binary output.

        Args:
            name: Output file name, e.g. "EmployeeTimeChart.png".
            content: Raw bytes.

        Returns:
            Location of the written output.

        Raises:
            PersistError: If the output cannot be written.
        """
        ...


class FileReportSink:
    """
    Writes report outputs into a directory.

    The directory is created on first write. With no output_dir the
    files land in the current working directory under their bare names.
    """

    def __init__(
        self,
        output_dir: str | None = None,
        filesystem: FileSystem | None = None,
    ) -> None:
        """
        Initialize the sink.

        Args:
            output_dir: Target directory. Default: current directory.
            filesystem: FileSystem implementation. Default: RealFileSystem
        """
        self.output_dir = output_dir or ""
        self._fs: FileSystem = filesystem or RealFileSystem()

    def path_for(self, name: str) -> str:
        """
        Build the output path for a file name.

        Example:
            >>> FileReportSink("out").path_for("EmployeeReport.html")
            'out/EmployeeReport.html'
            >>> FileReportSink().path_for("EmployeeReport.html")
            'EmployeeReport.html'
        """
        return os.path.join(self.output_dir, name) if self.output_dir else name

    def _ensure_dir(self) -> None:
        if self.output_dir:
            self._fs.makedirs(self.output_dir, exist_ok=True)

    def write_text(self, name: str, content: str) -> str:
        path = self.path_for(name)
        try:
            self._ensure_dir()
            self._fs.write_text(path, content, encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            raise PersistError(f"Cannot write {path}: {e}", failed_outputs=(name,)) from e
        logger.info(f"Wrote {path}")
        return path

    def write_bytes(self, name: str, content: bytes) -> str:
        path = self.path_for(name)
        try:
            self._ensure_dir()
            self._fs.write_bytes(path, content)
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            raise PersistError(f"Cannot write {path}: {e}", failed_outputs=(name,)) from e
        logger.info(f"Wrote {path}")
        return path
