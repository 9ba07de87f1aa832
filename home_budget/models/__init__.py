"""
Data Models Package

This package contains all Pydantic models used by the home budget.
"""

from home_budget.models.electricity import (
    ElectricityInputs,
    ElectricityResult,
)
from home_budget.models.budget import (
    CREDIT_CATEGORY_NAME,
    ELECTRICITY_CATEGORY_NAME,
    INTERNET_CATEGORY_NAME,
    PHONE_CATEGORY_NAME,
    PREDEFINED_INCOME_CATEGORIES,
    ElectricityInputsSnapshot,
    ElectricityResultsSnapshot,
    ExpenseCategory,
    ExpenseItem,
    ExpensesSection,
    ExpensesUpdate,
    FixedExpenses,
    FixedExpensesUpdate,
    IncomeItem,
    MonthlyRecord,
    RecordMeta,
    TransactionType,
    utc_now_iso,
)
from home_budget.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Electricity models
    "ElectricityInputs",
    "ElectricityResult",
    # Budget models
    "CREDIT_CATEGORY_NAME",
    "ELECTRICITY_CATEGORY_NAME",
    "INTERNET_CATEGORY_NAME",
    "PHONE_CATEGORY_NAME",
    "PREDEFINED_INCOME_CATEGORIES",
    "ElectricityInputsSnapshot",
    "ElectricityResultsSnapshot",
    "ExpenseCategory",
    "ExpenseItem",
    "ExpensesSection",
    "ExpensesUpdate",
    "FixedExpenses",
    "FixedExpensesUpdate",
    "IncomeItem",
    "MonthlyRecord",
    "RecordMeta",
    "TransactionType",
    "utc_now_iso",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
