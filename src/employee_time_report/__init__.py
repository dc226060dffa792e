"""
Employee Time Report.

PURPOSE: Turn raw employee time entries into a per-employee hours report.
AI CONTEXT: This package fetches time entries, aggregates hours per employee,
and renders the summary as an HTML table and a pie chart PNG.

PACKAGE STRUCTURE:
- models.py: Data models (TimeEntry, EmployeeSummary, ChartModel)
- aggregator.py: Filtering, grouping and ordering of hours per employee
- presenters.py: HTML table and pie chart rendering
- sources.py: Time entry sources (HTTP endpoint, local JSON file)
- sinks.py: Report output destinations
- pipeline.py: Fetch -> aggregate -> render -> persist orchestration
- cli.py: Command line entry point
- web/: FastAPI preview of the report

QUICK START:
    # Generate EmployeeReport.html and EmployeeTimeChart.png
    python -m employee_time_report

    # Print a text summary
    python -m employee_time_report summary
"""

from employee_time_report.__version__ import (
    __author__,
    __copyright__,
    __description__,
    __license__,
    __title__,
    __version__,
    __version_date__,
)

__all__ = [
    "__version__",
    "__version_date__",
    "__title__",
    "__description__",
    "__author__",
    "__license__",
    "__copyright__",
]
