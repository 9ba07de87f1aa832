"""
Main Orchestrator for Home Budget

Ties the components together behind the operations the UI calls:
1. Electricity: recompute on every edit, save the remainder, export a report
2. Monthly expenses: save fixed and additional expenses
3. Savings: add and delete ledger transactions, balance and trend
4. Reports: per-month expense breakdown

DESIGN DECISION: The storage port is created once at startup and handed to
every component explicitly; nothing reaches for a global store.
"""

from datetime import datetime
from typing import Optional

from home_budget.audit import AuditLogger, create_audit_logger
from home_budget.config import get_settings
from home_budget.electricity import (
    build_electricity_record,
    calculate_electricity,
    render_calculation_report,
    report_filename,
)
from home_budget.models.budget import (
    ExpenseCategory,
    ExpensesUpdate,
    IncomeItem,
    TransactionType,
)
from home_budget.models.electricity import ElectricityInputs, ElectricityResult
from home_budget.months import month_id_from_date, month_label
from home_budget.records import MonthlyRecordStore, SaveOutcome
from home_budget.reports import MonthlyBreakdown, monthly_breakdown
from home_budget.savings import SavingsLedger
from home_budget.services.storage import JsonFileKeyValueStorage, KeyValueStorage


class HomeBudget:
    """
    Application facade.

    Month ids default to the current month, the one the UI is editing.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        monthly_key: Optional[str] = None,
        savings_key: Optional[str] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        settings = get_settings()
        self._electricity_settings = settings.electricity
        storage_settings = settings.storage

        self._audit_logger = audit_logger or create_audit_logger()
        self.records = MonthlyRecordStore(
            storage,
            key=monthly_key or storage_settings.monthly_key,
            audit_logger=self._audit_logger,
        )
        self.ledger = SavingsLedger(
            storage,
            key=savings_key or storage_settings.savings_key,
            audit_logger=self._audit_logger,
        )

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    def load(self) -> None:
        """Load both stores. Call once at startup."""
        self.records.load()
        self.ledger.load()

    # -------------------------------------------------------------------------
    # Electricity
    # -------------------------------------------------------------------------

    def default_inputs(self) -> ElectricityInputs:
        """Empty form with the configured tariff prices filled in."""
        return ElectricityInputs(
            price_t1=self._electricity_settings.default_day_price,
            price_t2=self._electricity_settings.default_night_price,
        )

    def calculate(self, inputs: ElectricityInputs) -> ElectricityResult:
        return calculate_electricity(inputs)

    def save_electricity(
        self,
        inputs: ElectricityInputs,
        month_id: Optional[str] = None,
        generated_at: Optional[datetime] = None,
    ) -> SaveOutcome:
        """
        Save the meter 2 remainder and the electricity snapshot.

        The unrounded remainder goes into expenses.saved_em2_eur; the
        snapshot carries rounded values. Invalid inputs save nothing.
        """
        month_id = month_id or month_id_from_date()
        result = calculate_electricity(inputs)
        record = build_electricity_record(month_id, inputs, result, generated_at)
        if record is None:
            self._audit_logger.log_calculation_rejected(result.errors)
            return SaveOutcome.REJECTED

        return self.records.save_electricity(month_id, result.em2_remainder, record)

    def export_report(
        self,
        inputs: ElectricityInputs,
        month_id: Optional[str] = None,
        generated_at: Optional[datetime] = None,
    ) -> Optional[tuple[str, str]]:
        """
        Render the downloadable calculation report.

        Returns (filename, content), or None when the inputs are invalid.
        """
        month_id = month_id or month_id_from_date()
        result = calculate_electricity(inputs)
        if not result.is_valid:
            return None

        label = month_label(month_id)
        content = render_calculation_report(
            inputs,
            result,
            month_label=label,
            generated_at=generated_at,
            currency=self._electricity_settings.currency,
        )
        filename = report_filename(label)
        self._audit_logger.log_report_exported(month_id, filename)
        return filename, content

    # -------------------------------------------------------------------------
    # Monthly expenses and reports
    # -------------------------------------------------------------------------

    def save_expenses(
        self,
        update: ExpensesUpdate,
        month_id: Optional[str] = None,
    ) -> SaveOutcome:
        """Save the expenses tab; its additional expenses replace the stored list."""
        month_id = month_id or month_id_from_date()
        return self.records.save_expenses(month_id, update.to_payload())

    def monthly_breakdown(self, month_id: Optional[str] = None) -> MonthlyBreakdown:
        month_id = month_id or month_id_from_date()
        return monthly_breakdown(self.records.get(month_id))

    # -------------------------------------------------------------------------
    # Savings
    # -------------------------------------------------------------------------

    def add_savings_transaction(
        self,
        category: ExpenseCategory,
        amount: float,
        transaction_type: TransactionType = TransactionType.INCOME,
        note: Optional[str] = None,
    ) -> IncomeItem:
        return self.ledger.add_transaction(category, amount, transaction_type, note=note)

    def delete_savings_transaction(self, transaction_id: str) -> bool:
        return self.ledger.delete_transaction(transaction_id)

    def savings_balance(self) -> float:
        return self.ledger.balance()

    def savings_trend(self, year: Optional[int] = None) -> list[float]:
        """Month-end balances of a year (the current one by default)."""
        return self.ledger.monthly_snapshot(year or datetime.now().year)


def create_home_budget(
    storage: Optional[KeyValueStorage] = None,
    load: bool = True,
) -> HomeBudget:
    """
    Factory function to create the application.

    Args:
        storage: Storage port to use. Defaults to the JSON file configured
                 in settings.
        load: Whether to load stored data right away.
    """
    if storage is None:
        storage = JsonFileKeyValueStorage(get_settings().storage.data_file)

    budget = HomeBudget(storage)
    if load:
        budget.load()
    return budget
