"""
Presenters for Employee Time Report.

PURPOSE: Render an employee summary as an HTML table and a pie chart.
AI CONTEXT: Pure transformation from summary to document/image bytes - no file I/O.

DESIGN PRINCIPLES:
1. Presenters receive the ordered summary and never re-sort it
2. HTML rendering is deterministic: same summary, same bytes
3. Chart data (ChartModel) is built separately from rasterization so
   slice percentages are unit-testable without matplotlib

USAGE:
    html = render_html(summary)
    model = build_chart_model(summary)
    png_bytes = rasterize(model, 800, 600)
"""

from __future__ import annotations

import html
import io
from collections.abc import Sequence
from dataclasses import dataclass

from .aggregator import total_hours
from .config import Config
from .models import ChartModel, ChartSlice, EmployeeSummary

__all__ = [
    "SummaryRowViewModel",
    "build_rows",
    "render_html",
    "build_chart_model",
    "rasterize",
]

LOW_HOURS_CLASS = "low-hours"

_REPORT_CSS = """
table { width: 100%; border-collapse: collapse; }
th, td { border: 1px solid black; padding: 8px; text-align: left; }
tr.low-hours { background-color: #ffcccc; }
"""

SLICE_EDGE_COLOR = "white"
PLACEHOLDER_TEXT = "No data"


@dataclass(frozen=True)
class SummaryRowViewModel:
    """View model for one employee row in the report table."""

    name: str
    total_hours: float

    @property
    def hours_display(self) -> str:
        """
        Format total hours with exactly two decimal places.

        Returns:
            String like "171.50" or "-2.00".
        """
        return f"{self.total_hours:.2f}"

    @property
    def row_class(self) -> str:
        """
        Get CSS class name for the row.

        Business context: Employees under the threshold are highlighted
        so managers spot under-reported time at a glance.

        Returns:
            "low-hours" if total_hours < Config.LOW_HOURS_THRESHOLD,
            otherwise empty string.

        Example:
            >>> SummaryRowViewModel("Ana", 99.99).row_class
            'low-hours'
            >>> SummaryRowViewModel("Ana", 100.0).row_class
            ''
        """
        return LOW_HOURS_CLASS if self.total_hours < Config.LOW_HOURS_THRESHOLD else ""


def build_rows(summary: Sequence[EmployeeSummary]) -> list[SummaryRowViewModel]:
    """Build row view models in summary order."""
    return [SummaryRowViewModel(name=item.name, total_hours=item.total_hours) for item in summary]


def _render_row(row: SummaryRowViewModel) -> str:
    class_attr = f' class="{row.row_class}"' if row.row_class else ""
    return (
        f"<tr{class_attr}>"
        f"<td>{html.escape(row.name)}</td>"
        f"<td>{row.hours_display}</td>"
        "</tr>"
    )


def render_html(summary: Sequence[EmployeeSummary]) -> str:
    """
    Render the complete HTML report document.

    Produces a self-contained page with an inline stylesheet, a title
    heading and a table with one row per employee in summary order.
    Rows under the low-hours threshold carry class="low-hours", which
    the stylesheet gives a light-red background.

    Business context: The HTML file is the deliverable managers open
    directly from disk, so it must not depend on external assets.

    Args:
        summary: Ordered employee summaries from aggregate(). May be
            empty, in which case the table has only its header row.

    Returns:
        HTML document string. Employee names are HTML-escaped.

    Raises:
        None: Template construction never raises.

    Example:
        >>> doc = render_html(summary)
        >>> doc.count('<tr class="low-hours">')
        2
    """
    rows = "\n".join(_render_row(row) for row in build_rows(summary))
    title = html.escape(Config.REPORT_TITLE)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<title>{title}</title>
<style>{_REPORT_CSS}</style>
</head>
<body>
<h1>{title}</h1>
<table>
<tr><th>Name</th><th>Total Time Worked (hours)</th></tr>
{rows}
</table>
</body>
</html>
"""


def build_chart_model(summary: Sequence[EmployeeSummary]) -> ChartModel:
    """
    Compute pie slices as each employee's percentage of all hours.

    Slices follow summary order, so the largest share starts at the
    chart's start angle. When the overall total is zero or negative no
    meaningful proportion exists and every slice value is 0.0.

    Args:
        summary: Ordered employee summaries from aggregate().

    Returns:
        ChartModel with one ChartSlice per employee. Slice values sum
        to 100 whenever the overall total is positive.

    Raises:
        None: The zero-total case is guarded.

    Example:
        >>> model = build_chart_model(summary)  # B: 5h, A: 2h
        >>> [round(s.value, 2) for s in model.slices]
        [71.43, 28.57]
    """
    overall = total_hours(summary)

    if overall > 0:
        slices = tuple(
            ChartSlice(label=item.name, value=(item.total_hours / overall) * 100)
            for item in summary
        )
    else:
        slices = tuple(ChartSlice(label=item.name, value=0.0) for item in summary)

    return ChartModel(title=Config.CHART_TITLE, slices=slices)


def rasterize(
    model: ChartModel,
    width: int = Config.CHART_WIDTH,
    height: int = Config.CHART_HEIGHT,
) -> bytes:
    """
    Draw the chart model as a PNG image.

    Wedges run clockwise from model.start_angle. Employee names sit
    inside each wedge at model.inside_label_position of the radius;
    percentages are printed just outside the rim. Only positive slices
    are drawn. A model without any (empty or zero-hour summary) renders
    a "No data" placeholder instead of a pie.

    Args:
        model: Chart description from build_chart_model().
        width: Image width in pixels. Default 800.
        height: Image height in pixels. Default 600.

    Returns:
        PNG image bytes of exactly width x height pixels.

    Raises:
        ValueError: If width or height is not positive.
        ImportError: If matplotlib is not installed.

    Example:
        >>> png = rasterize(build_chart_model(summary))
        >>> png[:8] == b"\\x89PNG\\r\\n\\x1a\\n"
        True
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Chart size must be positive, got {width}x{height}")

    import matplotlib

    matplotlib.use("Agg")  # Non-interactive backend
    import matplotlib.pyplot as plt

    dpi = Config.CHART_DPI
    fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi, facecolor="white")
    try:
        ax = fig.add_subplot()
        ax.set_title(model.title, pad=20, parse_math=False)

        visible = [s for s in model.slices if s.value > 0]
        if not visible:
            ax.text(0.5, 0.5, PLACEHOLDER_TEXT, ha="center", va="center", fontsize=14)
            ax.set_xlim(0, 1)
            ax.set_ylim(0, 1)
            ax.axis("off")
        else:
            values = [s.value for s in visible]
            sweep = min(model.angle_span / 360.0, 1.0)
            full_circle = sweep == 1.0
            if not full_circle:
                # Unnormalized fractions leave the rest of the circle empty
                visible_total = sum(values)
                values = [v / visible_total * sweep for v in values]
            ax.pie(
                values,
                labels=[s.label for s in visible],
                labeldistance=model.inside_label_position,
                autopct=lambda pct: f"{pct / sweep:.0f} %",
                pctdistance=1.12,
                startangle=model.start_angle,
                counterclock=False,
                normalize=full_circle,
                wedgeprops={"linewidth": 1.0, "edgecolor": SLICE_EDGE_COLOR},
                # Names are plain text; "$" must not start mathtext
                textprops={"fontsize": 9, "parse_math": False},
            )
            ax.axis("equal")

        buf = io.BytesIO()
        fig.savefig(buf, format="png", dpi=dpi, facecolor="white")
    finally:
        plt.close(fig)
    buf.seek(0)
    return buf.read()
