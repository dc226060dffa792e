"""
Package entry point for python -m execution.

USAGE:
    python -m employee_time_report           # Generate HTML report and chart
    python -m employee_time_report summary   # Print text summary
    python -m employee_time_report serve     # Launch preview web app
"""

import sys

from employee_time_report.cli import main

if __name__ == "__main__":
    sys.exit(main())
