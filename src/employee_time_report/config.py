"""
Configuration for Employee Time Report.

PURPOSE: Centralized configuration constants for the report pipeline.
AI CONTEXT: All configurable values live here - modify this file to change behavior.

CONFIGURATION CATEGORIES:
- Data Source: Time entry endpoint and request settings
- Output: Report and chart file names
- Report Layout: Titles and the low-hours highlight threshold
- Chart: Raster dimensions and resolution

Per-run overrides (endpoint URL, output directory, input file) come from
CLI options; no environment variables are read.

USAGE:
    from employee_time_report.config import Config
    report_name = Config.REPORT_FILE
    threshold = Config.LOW_HOURS_THRESHOLD
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .__version__ import __version__


@dataclass(frozen=True)
class Config:
    """
    Immutable configuration container for Employee Time Report.

    DESIGN: Frozen dataclass ensures configuration immutability at runtime.
    All values are class-level constants - no instance creation needed.

    OUTPUT STRUCTURE:
        <output dir>/
        ├── EmployeeReport.html    # Styled per-employee hours table
        └── EmployeeTimeChart.png  # Pie chart of each employee's share
    """

    # =========================================================================
    # DATA SOURCE CONFIGURATION
    # =========================================================================
    API_URL: ClassVar[str] = (
        "https://rc-vault-fap-live-1.azurewebsites.net/api/gettimeentries"
        "?code=vO17RnE8vuzXzPJo5eaLLjXjmRW07law99QTD90zat9FfOQJKKUcgQ=="
    )
    """Time entries endpoint. The access code is part of the query string."""

    REQUEST_TIMEOUT_SECONDS: ClassVar[float] = 30.0
    USER_AGENT: ClassVar[str] = f"employee-time-report/{__version__}"

    # =========================================================================
    # OUTPUT CONFIGURATION
    # =========================================================================
    REPORT_FILE: ClassVar[str] = "EmployeeReport.html"
    CHART_FILE: ClassVar[str] = "EmployeeTimeChart.png"

    # =========================================================================
    # REPORT LAYOUT
    # =========================================================================
    REPORT_TITLE: ClassVar[str] = "Employee Time Report"
    CHART_TITLE: ClassVar[str] = "Employee Time Distribution"

    LOW_HOURS_THRESHOLD: ClassVar[float] = 100.0
    """Employees with strictly fewer total hours are highlighted in the report."""

    # =========================================================================
    # CHART CONFIGURATION
    # =========================================================================
    CHART_WIDTH: ClassVar[int] = 800
    CHART_HEIGHT: ClassVar[int] = 600
    CHART_DPI: ClassVar[int] = 100
    CHART_START_ANGLE: ClassVar[float] = 0.0
    CHART_ANGLE_SPAN: ClassVar[float] = 360.0
    CHART_INSIDE_LABEL_POSITION: ClassVar[float] = 0.8
    """Fraction of the radius at which employee names are drawn inside each slice."""

    @classmethod
    def chart_size(cls) -> tuple[int, int]:
        """
        Get the default chart raster size.

        Returns:
            Tuple of (width, height) in pixels. Default: (800, 600).

        Example:
            >>> Config.chart_size()
            (800, 600)
        """
        return (cls.CHART_WIDTH, cls.CHART_HEIGHT)
