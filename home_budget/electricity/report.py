"""
Calculation report export.

Renders a human-readable text report of one month's electricity split,
offered to the user as a downloadable file. The format is free text and is
never read back.
"""

import re
from datetime import datetime
from typing import Optional

from home_budget.electricity.calculator import parse_decimal
from home_budget.formatting import format_currency, format_kwh, format_price
from home_budget.models.electricity import ElectricityInputs, ElectricityResult

RULE = "-" * 51
DOUBLE_RULE = "=" * 51


def report_filename(month_label: str) -> str:
    """File name offered for download, e.g. calculation_report_Декември_2025.txt"""
    safe_label = re.sub(r"\s", "_", month_label.strip())
    return f"calculation_report_{safe_label}.txt"


def render_calculation_report(
    inputs: ElectricityInputs,
    result: ElectricityResult,
    month_label: str,
    generated_at: Optional[datetime] = None,
    currency: str = "EUR",
) -> str:
    """
    Render the detailed calculation report.

    Per-tariff costs are recomputed from the inputs so that every line of
    the report shows its own arithmetic.

    Raises:
        ValueError: If the result is not valid
    """
    if not result.is_valid:
        raise ValueError("Cannot export a report for invalid electricity inputs")

    generated_at = generated_at or datetime.now()
    price_t1 = parse_decimal(inputs.price_t1)
    price_t2 = parse_decimal(inputs.price_t2)
    invoice = parse_decimal(inputs.invoice_total)
    if price_t1 is None or price_t2 is None or invoice is None:
        raise ValueError("Cannot export a report for invalid electricity inputs")

    cost_t1 = result.cons_t1 * price_t1
    cost_t2 = result.cons_t2 * price_t2
    total_cost = cost_t1 + cost_t2
    em2 = invoice - total_cost

    lines = [
        "DETAILED ELECTRICITY BILL REPORT",
        f"Month: {month_label}",
        f"Generated: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
        DOUBLE_RULE,
        "",
        "1. DAY TARIFF (T1)",
        RULE,
        f"Old reading:          {inputs.old_t1}",
        f"New reading:          {inputs.new_t1}",
        RULE,
        "Consumption:",
        f"{inputs.new_t1} - {inputs.old_t1} = {format_kwh(result.cons_t1)} kWh",
        "",
        "Cost:",
        f"{format_kwh(result.cons_t1)} kWh * {format_price(price_t1)} {currency}"
        f" = {format_currency(cost_t1)} {currency}",
        "",
        "",
        "2. NIGHT TARIFF (T2)",
        RULE,
        f"Old reading:          {inputs.old_t2}",
        f"New reading:          {inputs.new_t2}",
        RULE,
        "Consumption:",
        f"{inputs.new_t2} - {inputs.old_t2} = {format_kwh(result.cons_t2)} kWh",
        "",
        "Cost:",
        f"{format_kwh(result.cons_t2)} kWh * {format_price(price_t2)} {currency}"
        f" = {format_currency(cost_t2)} {currency}",
        "",
        "",
        "3. METER 1 SUMMARY",
        RULE,
        f"Total consumption:    {format_kwh(result.total_cons)} kWh",
        f"Total cost (T1+T2):   {format_currency(cost_t1)} + {format_currency(cost_t2)}"
        f" = {format_currency(total_cost)} {currency}",
        "",
        "",
        "4. INVOICE ALLOCATION",
        RULE,
        f"Invoice total:        {format_currency(invoice)} {currency}",
        f"Meter 1 bill:         {format_currency(total_cost)} {currency}",
        RULE,
        "REMAINDER FOR METER 2:",
        f"{format_currency(invoice)} - {format_currency(total_cost)} = {format_currency(em2)} {currency}",
    ]

    if result.warnings:
        lines.append("")
        lines.extend(result.warnings)

    lines.extend([
        "",
        DOUBLE_RULE,
        "Home Budget Application",
        "",
    ])
    return "\n".join(lines)
