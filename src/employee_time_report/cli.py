"""
CLI entry point for Employee Time Report.

PURPOSE: Command-line interface for generating and previewing the report.
AI CONTEXT: Wires CLI options to sources, the pipeline and the preview server.

USAGE:
    # Generate EmployeeReport.html and EmployeeTimeChart.png (default)
    python -m employee_time_report

    # Or via CLI command (after install)
    employee-time-report

    # Run with subcommands
    employee-time-report generate --output-dir reports   # Write both files
    employee-time-report generate --input entries.json   # Use a saved response
    employee-time-report summary                         # Print text summary
    employee-time-report serve --port 8000               # Preview in browser

EXIT CODES:
    0: Success
    1: A pipeline stage failed (message names the stage)
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from functools import lru_cache
from typing import TYPE_CHECKING

from .config import Config
from .errors import PersistError, ReportError

if TYPE_CHECKING:
    from .filesystem import FileSystem
    from .sources import TimeEntrySource

# Constants
PROG_NAME = "employee-time-report"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
EXIT_OK = 0
EXIT_FAILURE = 1


@lru_cache(maxsize=1)
def _get_logger() -> logging.Logger:
    """Get module logger (cached for thread safety)."""
    logging.basicConfig(level=logging.INFO)
    return logging.getLogger(__name__)


def _log(message: str, *, emoji: str = "") -> None:
    """Log message with optional emoji prefix for CLI output.

    Args:
        message: The message to log.
        emoji: Optional emoji prefix for visual CLI feedback.
    """
    prefix = f"{emoji} " if emoji else ""
    _get_logger().info(f"{prefix}{message}")


def build_source(
    url: str | None = None,
    input_path: str | None = None,
    filesystem: FileSystem | None = None,
) -> TimeEntrySource:
    """
    Choose the time entry source for a run.

    Args:
        url: Endpoint URL override. Default: Config.API_URL.
        input_path: Local JSON file; takes precedence over url.
        filesystem: Optional FileSystem for the file source.

    Returns:
        JsonFileTimeEntrySource when input_path is given, otherwise
        HttpTimeEntrySource.
    """
    from .sources import HttpTimeEntrySource, JsonFileTimeEntrySource

    if input_path:
        return JsonFileTimeEntrySource(input_path, filesystem=filesystem)
    return HttpTimeEntrySource(url or Config.API_URL)


def _print_generated(html_path: str | None, chart_path: str | None) -> None:
    # Confirmation lines go to stdout; logging goes to stderr
    if html_path:
        print(f"HTML report generated: {html_path}")
    if chart_path:
        print(f"PNG image generated: {chart_path}")


def run_generate(
    output_dir: str | None = None,
    url: str | None = None,
    input_path: str | None = None,
    include_chart: bool = True,
    *,
    source: TimeEntrySource | None = None,
    filesystem: FileSystem | None = None,
) -> None:
    """
    Generate the HTML report and the pie chart.

    Runs the full pipeline and prints one confirmation line per
    generated file to stdout.

    Business context: This is the default command, run on a schedule
    or by hand to refresh the files shared with managers.

    Args:
        output_dir: Directory for the output files. Default: current dir.
        url: Endpoint URL override.
        input_path: Read entries from a local JSON file instead.
        include_chart: When False only the HTML report is written.
        source: Optional TimeEntrySource for testability.
        filesystem: Optional FileSystem for testability.

    Returns:
        None. Confirmation lines are printed to stdout.

    Raises:
        FetchError: If entries cannot be retrieved.
        DeserializationError: If entries are malformed.
        PersistError: If an output cannot be written.

    Example:
        >>> run_generate()
        HTML report generated: EmployeeReport.html
        PNG image generated: EmployeeTimeChart.png
    """
    from .pipeline import ReportPipeline
    from .sinks import FileReportSink

    pipeline = ReportPipeline(
        source=source or build_source(url, input_path, filesystem),
        sink=FileReportSink(output_dir, filesystem=filesystem),
        include_chart=include_chart,
    )
    try:
        result = pipeline.run()
    except PersistError as e:
        # The output that did get written is still confirmed
        _print_generated(e.written.get(Config.REPORT_FILE), e.written.get(Config.CHART_FILE))
        raise

    _print_generated(result.html_path, result.chart_path)


def run_summary(
    url: str | None = None,
    input_path: str | None = None,
    *,
    source: TimeEntrySource | None = None,
) -> None:
    """
    Print the per-employee summary as a text table.

    Args:
        url: Endpoint URL override.
        input_path: Read entries from a local JSON file instead.
        source: Optional TimeEntrySource for testability.

    Returns:
        None. Report is printed to stdout.

    Raises:
        FetchError: If entries cannot be retrieved.
        DeserializationError: If entries are malformed.
    """
    from .aggregator import aggregate, format_summary_report

    entries = (source or build_source(url, input_path)).fetch_entries()
    print(format_summary_report(aggregate(entries)))


def run_serve(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    url: str | None = None,
    input_path: str | None = None,
) -> None:
    """
    Launch the web preview of the report.

    Serves the HTML report, the chart and a JSON summary, fetched
    fresh on every request.

    Args:
        host: Network interface to bind to. Default '127.0.0.1'.
        port: TCP port for the HTTP server. Default 8000.
        url: Endpoint URL override.
        input_path: Read entries from a local JSON file instead.

    Returns:
        None. Blocks until server shutdown (Ctrl+C).

    Raises:
        OSError: If port is already in use.
    """
    from .web import run_preview

    _log(f"Starting report preview at http://{host}:{port}", emoji="🚀")
    _log("Press Ctrl+C to stop")
    run_preview(host=host, port=port, source=build_source(url, input_path))


def _add_source_options(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--url",
        default=None,
        help="Time entries endpoint (default: built-in endpoint)",
    )
    group.add_argument(
        "--input",
        dest="input_path",
        default=None,
        help="Read time entries from a JSON file instead of the endpoint",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    from .__version__ import __version__

    parser = argparse.ArgumentParser(
        prog=PROG_NAME,
        description="Employee Time Report - Hours per employee as HTML and pie chart",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    generate_parser = subparsers.add_parser(
        "generate",
        help=f"Write {Config.REPORT_FILE} and {Config.CHART_FILE} (default)",
    )
    generate_parser.add_argument(
        "--output-dir",
        "-o",
        default=None,
        help="Directory for the generated files (default: current directory)",
    )
    generate_parser.add_argument(
        "--no-chart",
        dest="include_chart",
        action="store_false",
        help="Only write the HTML report",
    )
    _add_source_options(generate_parser)

    # Summary command
    summary_parser = subparsers.add_parser(
        "summary",
        help="Print per-employee hours to stdout",
    )
    _add_source_options(summary_parser)

    # Serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Launch web preview of the report",
    )
    serve_parser.add_argument(
        "--host",
        default=DEFAULT_HOST,
        help=f"Bind address (default: {DEFAULT_HOST})",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=DEFAULT_PORT,
        help=f"Port number (default: {DEFAULT_PORT})",
    )
    _add_source_options(serve_parser)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main CLI entry point for Employee Time Report.

    Parses command-line arguments and dispatches to the subcommand
    handler. With no subcommand the report is generated into the
    current directory.

    Business context: This is the entry point installed as the
    'employee-time-report' console script. A non-zero exit code tells
    schedulers that the report was not refreshed.

    Args:
        argv: Argument list without program name. Default: sys.argv[1:].

    Returns:
        0 on success, 1 if a pipeline stage failed. The failed stage
        is reported on stderr.

    Raises:
        SystemExit: On --help, --version or argument parsing errors.

    Example:
        >>> # From command line:
        >>> # employee-time-report generate --output-dir reports
        >>> sys.exit(main())
    """
    args = build_parser().parse_args(argv)
    _get_logger()

    try:
        if args.command == "summary":
            run_summary(url=args.url, input_path=args.input_path)
        elif args.command == "serve":
            run_serve(
                host=args.host,
                port=args.port,
                url=args.url,
                input_path=args.input_path,
            )
        elif args.command == "generate":
            run_generate(
                output_dir=args.output_dir,
                url=args.url,
                input_path=args.input_path,
                include_chart=args.include_chart,
            )
        else:
            # Default: generate both outputs with built-in settings
            run_generate()
    except ReportError as e:
        _get_logger().error(f"Report run aborted at stage '{e.stage}'")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
