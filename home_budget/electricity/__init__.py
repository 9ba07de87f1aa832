"""Electricity bill splitting."""

from home_budget.electricity.calculator import (
    ELECTRICITY_TAB,
    NEGATIVE_REMAINDER_WARNING,
    PARSE_ERROR,
    T1_REGRESSION_ERROR,
    T2_REGRESSION_ERROR,
    build_electricity_record,
    calculate_electricity,
    parse_decimal,
)
from home_budget.electricity.report import render_calculation_report, report_filename

__all__ = [
    "ELECTRICITY_TAB",
    "NEGATIVE_REMAINDER_WARNING",
    "PARSE_ERROR",
    "T1_REGRESSION_ERROR",
    "T2_REGRESSION_ERROR",
    "build_electricity_record",
    "calculate_electricity",
    "parse_decimal",
    "render_calculation_report",
    "report_filename",
]
