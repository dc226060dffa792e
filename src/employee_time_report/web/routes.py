"""
FastAPI routes for Employee Time Report preview.

PURPOSE: Thin route handlers that delegate to aggregator and presenters.
AI CONTEXT: Routes should be simple - business logic in aggregator/presenters.

ROUTE STRUCTURE:
- /             : HTML report page
- /chart.png    : PNG pie chart
- /api/summary  : JSON summary for programmatic access

Source failures (FetchError, DeserializationError) become HTTP 502.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, Response

from ..aggregator import aggregate, total_hours
from ..errors import ReportError
from ..models import EmployeeSummary
from ..presenters import build_chart_model, rasterize, render_html
from ..sources import HttpTimeEntrySource, TimeEntrySource

__all__ = ["router", "get_source", "get_summary"]

router = APIRouter()


# =============================================================================
# Dependency Factory Functions
# =============================================================================


def get_source(request: Request) -> TimeEntrySource:
    """
    Return the TimeEntrySource attached to the app.

    Falls back to a fresh HttpTimeEntrySource for the configured
    endpoint when create_app() was called without a source.

    Returns:
        TimeEntrySource used for this request.
    """
    source: TimeEntrySource | None = request.app.state.source
    return source if source is not None else HttpTimeEntrySource()


def get_summary(
    source: Annotated[TimeEntrySource, Depends(get_source)],
) -> tuple[EmployeeSummary, ...]:
    """
    Fetch entries and aggregate them for one request.

    Business context: The preview always reflects the current data,
    so nothing is cached between requests.

    Returns:
        Ordered employee summary.

    Raises:
        HTTPException: 502 if the source fails; detail names the stage.
    """
    try:
        return aggregate(source.fetch_entries())
    except ReportError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e


# ============================================================================
# Routes
# ============================================================================


@router.get("/", response_class=HTMLResponse)
async def report_page(
    summary: Annotated[tuple[EmployeeSummary, ...], Depends(get_summary)],
) -> HTMLResponse:
    """
    Render the report page.

    Returns:
        HTMLResponse with the same document written to EmployeeReport.html.
    """
    return HTMLResponse(content=render_html(summary), media_type="text/html; charset=utf-8")


@router.get("/chart.png")
async def chart_image(
    summary: Annotated[tuple[EmployeeSummary, ...], Depends(get_summary)],
) -> Response:
    """
    Render the pie chart as PNG.

    Returns:
        Response with PNG bytes (media_type="image/png"), 800x600 pixels.
    """
    png_bytes = rasterize(build_chart_model(summary))
    return Response(content=png_bytes, media_type="image/png")


@router.get("/api/summary")
async def api_summary(
    summary: Annotated[tuple[EmployeeSummary, ...], Depends(get_summary)],
) -> dict[str, Any]:
    """
    Get the summary as JSON.

    Returns:
        Dict with "employees" (name, total_hours, percentage in summary
        order) and the overall "total_hours".

    Example:
        >>> # GET /api/summary
        >>> {"employees": [{"name": "B", "total_hours": 5.0, "percentage": 71.43}, ...],
        ...  "total_hours": 7.0}
    """
    model = build_chart_model(summary)
    return {
        "employees": [
            {**item.to_dict(), "percentage": round(chart_slice.value, 2)}
            for item, chart_slice in zip(summary, model.slices, strict=True)
        ],
        "total_hours": total_hours(summary),
    }
