"""
Report pipeline for Employee Time Report.

PURPOSE: Sequence fetch -> aggregate -> render -> persist for one run.
AI CONTEXT: Orchestration only - business rules live in aggregator/presenters.

STAGES:
1. fetch:          source.fetch_entries()          (fatal, nothing written)
2. aggregate:      aggregate(entries)              (never fails)
3. persist-html:   render_html -> sink.write_text
4. persist-chart:  build_chart_model + rasterize -> sink.write_bytes

The two outputs are independent. If one cannot be encoded or written the
other is still attempted and kept; the run then fails with a PersistError
that names every output that was not written and maps the written ones
to their paths.

USAGE:
    pipeline = ReportPipeline(HttpTimeEntrySource(), FileReportSink())
    result = pipeline.run()
    print(result.html_path, result.chart_path)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .aggregator import aggregate, total_hours
from .config import Config
from .errors import PersistError
from .presenters import build_chart_model, rasterize, render_html

if TYPE_CHECKING:
    from .models import ChartModel, EmployeeSummary
    from .sinks import ReportSink
    from .sources import TimeEntrySource

__all__ = ["ReportResult", "ReportPipeline"]

logger = logging.getLogger(__name__)

HTML_STAGE = "persist-html"
CHART_STAGE = "persist-chart"


@dataclass(frozen=True)
class ReportResult:
    """Outcome of a successful pipeline run."""

    summary: tuple[EmployeeSummary, ...]
    html_path: str
    chart_path: str | None = None
    chart_model: ChartModel | None = None


class ReportPipeline:
    """
    Orchestrates one report run from a source into a sink.

    DESIGN:
    - Source and sink are injected, so the run is testable without
      network or disk access
    - Single thread of control; the fetch completes before aggregation
    - No retries: the first fetch failure aborts the run
    """

    def __init__(
        self,
        source: TimeEntrySource,
        sink: ReportSink,
        include_chart: bool = True,
        chart_size: tuple[int, int] | None = None,
    ) -> None:
        """
        Initialize the pipeline with its collaborators.

        Args:
            source: Supplies the raw time entries.
            sink: Receives the rendered HTML and PNG outputs.
            include_chart: When False the chart stage is skipped.
            chart_size: (width, height) in pixels. Default: (800, 600).
        """
        self.source = source
        self.sink = sink
        self.include_chart = include_chart
        self.chart_size = chart_size or Config.chart_size()

    def build_summary(self) -> tuple[EmployeeSummary, ...]:
        """
        Fetch entries and aggregate them.

        Returns:
            Ordered employee summary.

        Raises:
            FetchError: If the source cannot be reached.
            DeserializationError: If the source data is malformed.
        """
        logger.info(f"Fetching time entries from {self.source.describe()}")
        entries = self.source.fetch_entries()
        summary = aggregate(entries)
        logger.info(
            f"Aggregated {len(entries)} entries into {len(summary)} employees "
            f"({total_hours(summary):.2f} hours)"
        )
        return summary

    def write_html(self, summary: Sequence[EmployeeSummary]) -> str:
        """Render and persist the HTML report, returning its path."""
        try:
            return self.sink.write_text(Config.REPORT_FILE, render_html(summary))
        except PersistError as e:
            raise PersistError(
                e.args[0], stage=HTML_STAGE, failed_outputs=(Config.REPORT_FILE,)
            ) from e

    def write_chart(self, model: ChartModel) -> str:
        """
        Rasterize and persist the pie chart, returning its path.

        Encoding failures are reported like write failures: the chart
        output is lost but the run goes on to report it by stage.
        """
        width, height = self.chart_size
        try:
            png = rasterize(model, width, height)
        except Exception as e:
            logger.error(f"Failed to encode {Config.CHART_FILE}: {e}")
            raise PersistError(
                f"Cannot encode {Config.CHART_FILE}: {e}",
                stage=CHART_STAGE,
                failed_outputs=(Config.CHART_FILE,),
            ) from e
        try:
            return self.sink.write_bytes(Config.CHART_FILE, png)
        except PersistError as e:
            raise PersistError(
                e.args[0], stage=CHART_STAGE, failed_outputs=(Config.CHART_FILE,)
            ) from e

    def run(self) -> ReportResult:
        """
        Execute the full pipeline.

        Business context: Each run regenerates both files from a fresh
        fetch. Outputs are written only after the whole summary exists,
        so a failed fetch leaves previous reports untouched.

        Returns:
            ReportResult with the summary and written paths.

        Raises:
            FetchError: If the source cannot be reached (nothing written).
            DeserializationError: If the source data is malformed
                (nothing written).
            PersistError: If one or both outputs could not be encoded or
                written. Outputs that were written remain in place and
                are listed in its written mapping.

        Example:
            >>> result = ReportPipeline(source, sink).run()
            >>> result.html_path
            'EmployeeReport.html'
        """
        summary = self.build_summary()
        failures: list[PersistError] = []
        written: dict[str, str] = {}

        html_path = ""
        try:
            html_path = self.write_html(summary)
            written[Config.REPORT_FILE] = html_path
        except PersistError as e:
            failures.append(e)

        chart_model = None
        chart_path = None
        if self.include_chart:
            chart_model = build_chart_model(summary)
            try:
                chart_path = self.write_chart(chart_model)
                written[Config.CHART_FILE] = chart_path
            except PersistError as e:
                failures.append(e)

        if failures:
            stage = failures[0].stage if len(failures) == 1 else "persist"
            raise PersistError(
                "; ".join(e.args[0] for e in failures),
                stage=stage,
                failed_outputs=tuple(name for e in failures for name in e.failed_outputs),
                written=written,
            )

        return ReportResult(
            summary=summary,
            html_path=html_path,
            chart_path=chart_path,
            chart_model=chart_model,
        )
