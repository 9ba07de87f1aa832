"""Reporting aggregations."""

from home_budget.reports.breakdown import (
    BreakdownSegment,
    MonthlyBreakdown,
    monthly_breakdown,
)

__all__ = ["BreakdownSegment", "MonthlyBreakdown", "monthly_breakdown"]
