"""
Error taxonomy for Employee Time Report.

PURPOSE: Name the pipeline stage that failed so the CLI can report it.
AI CONTEXT: Every fatal failure is raised as a ReportError subclass.

STAGES:
- fetch: Network/transport error or non-success response
- deserialize: Response body is not a list of time entries
- persist-html / persist-chart: An output file could not be written

Empty or fully filtered input is NOT an error - it yields an empty report.
"""

from __future__ import annotations

__all__ = [
    "ReportError",
    "FetchError",
    "DeserializationError",
    "PersistError",
]


class ReportError(Exception):
    """
    Base class for fatal report pipeline failures.

    Attributes:
        stage: Short name of the pipeline stage that failed.
    """

    default_stage = "report"

    def __init__(self, message: str, stage: str | None = None) -> None:
        super().__init__(message)
        self.stage = stage or self.default_stage

    def __str__(self) -> str:
        return f"{self.stage} failed: {self.args[0]}"


class FetchError(ReportError):
    """Time entries could not be retrieved from the data source."""

    default_stage = "fetch"


class DeserializationError(ReportError):
    """Retrieved data does not have the shape of a time entry list."""

    default_stage = "deserialize"


class PersistError(ReportError):
    """
    One or more report outputs could not be written.

    Attributes:
        failed_outputs: File names that were not written.
        written: Output file name -> path for outputs that were written
            before the failure was reported.
    """

    default_stage = "persist"

    def __init__(
        self,
        message: str,
        stage: str | None = None,
        failed_outputs: tuple[str, ...] = (),
        written: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message, stage)
        self.failed_outputs = failed_outputs
        self.written = written or {}
