"""
Hours aggregation for Employee Time Report.

PURPOSE: Turn raw time entries into an ordered per-employee summary.
AI CONTEXT: Pure data processing - no rendering, no I/O.

AGGREGATION RULES:
1. Exclusion: soft-deleted entries and entries without a name are dropped
2. Grouping: durations summed per exact employee name (case-sensitive)
3. Ordering: total hours descending, ties in first-seen order
4. No rounding: formatting is left to the presenters

USAGE:
    summary = aggregate(entries)
    print(format_summary_report(summary))
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .models import EmployeeSummary, TimeEntry

__all__ = [
    "is_countable",
    "aggregate",
    "total_hours",
    "format_summary_report",
]

logger = logging.getLogger(__name__)


def is_countable(entry: TimeEntry) -> bool:
    """
    Decide whether an entry contributes to the summary.

    Business context: Deleted entries are tombstones kept by the source
    system for auditing; nameless entries cannot be attributed to anyone.
    Neither should count toward anybody's hours.

    Args:
        entry: Raw time entry.

    Returns:
        False if entry.deleted_on is set or the name is None/blank after
        trimming, True otherwise. Durations are not inspected.

    Example:
        >>> is_countable(TimeEntry("1", "  ", start, end))
        False
    """
    if entry.is_deleted:
        return False
    return bool(entry.employee_name and entry.employee_name.strip())


def aggregate(entries: Iterable[TimeEntry]) -> tuple[EmployeeSummary, ...]:
    """
    Sum hours per employee and order employees by total descending.

    Groups countable entries by their exact employee_name and adds up
    duration_hours. Negative and zero durations are summed as-is. The
    result is sorted with a stable sort on total hours, so employees
    with equal totals keep the order in which they were first seen.

    Business context: The summary is the single input to both the HTML
    table and the pie chart. Producing it deterministically means two
    runs over the same data render identical reports.

    Args:
        entries: Any finite iterable of TimeEntry, including empty.

    Returns:
        Tuple of EmployeeSummary ordered by total_hours descending.
        Empty tuple when no entry is countable.

    Raises:
        None: Malformed durations are not rejected.

    Example:
        >>> summary = aggregate([a_2h, a_1h_deleted, b_5h])
        >>> [(s.name, s.total_hours) for s in summary]
        [('B', 5.0), ('A', 2.0)]
    """
    totals: dict[str, float] = {}
    first_seen: list[str] = []
    skipped = 0

    for entry in entries:
        name = entry.employee_name
        if name is None or not is_countable(entry):
            skipped += 1
            continue
        if name not in totals:
            totals[name] = 0.0
            first_seen.append(name)
        totals[name] += entry.duration_hours

    if skipped:
        logger.debug(f"Skipped {skipped} deleted or unnamed time entries")

    ordered = sorted(first_seen, key=lambda name: totals[name], reverse=True)
    return tuple(EmployeeSummary(name=name, total_hours=totals[name]) for name in ordered)


def total_hours(summary: Sequence[EmployeeSummary]) -> float:
    """Sum of total_hours across all employees in the summary."""
    return sum(item.total_hours for item in summary)


def format_summary_report(summary: Sequence[EmployeeSummary]) -> str:
    """
    Format the summary as a plain-text table for terminal output.

    Columns are employee name, total hours (two decimals) and share of
    all hours. Shares are 0.0% when the overall total is not positive.

    Args:
        summary: Ordered employee summaries from aggregate().

    Returns:
        Multi-line report string ending with a totals line.

    Example:
        >>> print(format_summary_report(summary))
        ==================================================
        EMPLOYEE TIME SUMMARY
        ==================================================
        ...
    """
    rule = "=" * 50
    lines = [rule, "EMPLOYEE TIME SUMMARY", rule]

    if not summary:
        lines.append("No time entries to report.")
        return "\n".join(lines)

    overall = total_hours(summary)
    width = max(len("Name"), *(len(item.name) for item in summary))

    lines.append(f"{'Name':<{width}}  {'Hours':>10}  {'Share':>7}")
    lines.append("-" * (width + 21))
    for item in summary:
        share = item.total_hours / overall if overall > 0 else 0.0
        lines.append(f"{item.name:<{width}}  {item.total_hours:>10.2f}  {share:>7.1%}")
    lines.append("-" * (width + 21))
    lines.append(f"{'Total':<{width}}  {overall:>10.2f}")
    lines.append(f"Employees: {len(summary)}")

    return "\n".join(lines)
