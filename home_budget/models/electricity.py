"""
Electricity Bill Models

These models describe the electricity splitter: the raw text the user types
into the form and the breakdown derived from it.

DESIGN DECISION: Inputs stay as text. The form re-runs the calculation on
every keystroke, so half-typed values ("12.", "") are normal and must not
raise. Parsing and validation happen in the calculator, which reports
problems as values on ElectricityResult.
"""

from pydantic import BaseModel, ConfigDict, Field


class ElectricityInputs(BaseModel):
    """
    The seven text fields of the electricity form.

    Tariff 1 is the day tariff, tariff 2 the night tariff. Prices are per kWh
    with VAT included; the invoice total is the full amount billed for both
    meters.
    """
    model_config = ConfigDict(str_strip_whitespace=True, coerce_numbers_to_str=True)

    old_t1: str = Field(default="", description="Day tariff, previous reading")
    new_t1: str = Field(default="", description="Day tariff, current reading")
    old_t2: str = Field(default="", description="Night tariff, previous reading")
    new_t2: str = Field(default="", description="Night tariff, current reading")
    price_t1: str = Field(default="", description="Day tariff unit price")
    price_t2: str = Field(default="", description="Night tariff unit price")
    invoice_total: str = Field(default="", description="Invoice total for both meters")


class ElectricityResult(BaseModel):
    """
    Derived breakdown of an electricity invoice.

    Values are unrounded. Rounding happens only when a snapshot is persisted
    or a report is rendered (3 decimals for kWh, 2 for currency).

    An invalid result always carries zeros in every numeric field.
    """

    cons_t1: float = Field(default=0.0, description="Day tariff consumption (kWh)")
    cons_t2: float = Field(default=0.0, description="Night tariff consumption (kWh)")
    total_cons: float = Field(default=0.0, description="Total consumption of meter 1 (kWh)")
    cost_em1: float = Field(default=0.0, description="Computed cost of meter 1")
    em2_remainder: float = Field(
        default=0.0,
        description="Invoice total minus meter 1 cost, attributed to meter 2"
    )
    is_valid: bool = False
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)
