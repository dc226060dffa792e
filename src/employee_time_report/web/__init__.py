"""
Web preview module for Employee Time Report.

PURPOSE: FastAPI app serving the report, chart and summary over HTTP.
AI CONTEXT: Same presenters as the file outputs - no separate templates.

FEATURES:
- GET /             : HTML report (identical to EmployeeReport.html)
- GET /chart.png    : Pie chart (identical to EmployeeTimeChart.png)
- GET /api/summary  : JSON summary for programmatic access

USAGE:
    # Via CLI
    employee-time-report serve

    # Programmatically
    from employee_time_report.web import create_app
    app = create_app()
"""

from .app import create_app, run_preview

__all__ = ["create_app", "run_preview"]
