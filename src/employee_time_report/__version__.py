"""Version information for employee-time-report."""

__version__ = "1.0.0"
__version_date__ = "2026-10-17"

__title__ = "employee_time_report"
__description__ = "Aggregate employee time entries into an HTML report and a pie chart"

__author__ = "Employee Time Report contributors"

__license__ = "MIT"
__copyright__ = "Copyright 2026 Employee Time Report contributors"

__all__ = [
    "__version__",
    "__version_date__",
    "__title__",
    "__description__",
    "__author__",
    "__license__",
    "__copyright__",
]
