"""
Household Budget Models

Schemas for everything the budget persists: expense and ledger items, the
categories they point at, and the per-month record.

DESIGN DECISION: Persisted JSON keeps the field names the stored data
already uses (camelCase for items, snake_case inside monthly records).
Python code uses snake_case attributes; pydantic aliases translate.

Monthly records are partial by nature: a month saved only from the
electricity tab has no expenses section and vice versa. Every section of
MonthlyRecord is therefore optional, and unknown keys are kept so that a
typed read never loses data written by another version of the app.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================

class TransactionType(str, Enum):
    """Polarity of a savings ledger entry."""
    INCOME = "income"    # adds to the balance
    EXPENSE = "expense"  # subtracts from the balance


# =============================================================================
# CATEGORIES
# =============================================================================

class ExpenseCategory(BaseModel):
    """
    A label for expense or income items.

    Icon and color are presentation hints only; nothing in the budget logic
    depends on them.
    """
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    icon_name: str = Field(default="Wallet", alias="iconName")
    color_class: str = Field(default="bg-slate-100 text-slate-600", alias="colorClass")
    is_custom: bool = Field(default=False, alias="isCustom")

    @classmethod
    def custom(cls, name: str, prefix: str = "custom") -> "ExpenseCategory":
        """Create a user-defined category with a unique id."""
        return cls(
            id=f"{prefix}_{uuid4().hex[:12]}",
            name=name,
            is_custom=True,
        )


PREDEFINED_INCOME_CATEGORIES: tuple[ExpenseCategory, ...] = (
    ExpenseCategory(id="salary", name="Заплата", icon_name="Briefcase",
                    color_class="bg-emerald-100 text-emerald-600"),
    ExpenseCategory(id="parents", name="От родители", icon_name="Users",
                    color_class="bg-blue-100 text-blue-600"),
    ExpenseCategory(id="gifts", name="Подаръци", icon_name="Gift",
                    color_class="bg-pink-100 text-pink-500"),
    ExpenseCategory(id="bonus", name="Бонус", icon_name="Sparkles",
                    color_class="bg-yellow-100 text-yellow-600"),
    ExpenseCategory(id="freelance", name="Фрийланс", icon_name="Smartphone",
                    color_class="bg-purple-100 text-purple-600"),
    ExpenseCategory(id="sales", name="Продажби", icon_name="ShoppingBag",
                    color_class="bg-orange-100 text-orange-600"),
    ExpenseCategory(id="investments", name="Инвестиции", icon_name="TrendingUp",
                    color_class="bg-cyan-100 text-cyan-600"),
    ExpenseCategory(id="other_income", name="Други", icon_name="Wallet",
                    color_class="bg-slate-100 text-slate-600"),
)

# Names of the segments the monthly report builds from fixed record fields
ELECTRICITY_CATEGORY_NAME = "Ток"
CREDIT_CATEGORY_NAME = "Кредит"
PHONE_CATEGORY_NAME = "Телефон"
INTERNET_CATEGORY_NAME = "Интернет"


# =============================================================================
# ITEMS
# =============================================================================

def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ExpenseItem(BaseModel):
    """
    A single categorized expense within a month.

    The category is denormalized into the item so that renaming or removing
    a custom category never rewrites history.
    """
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    category_id: str = Field(..., alias="categoryId")
    category_name: str = Field(..., alias="categoryName")
    category_icon: str = Field(default="Wallet", alias="categoryIcon")
    category_color: str = Field(default="bg-slate-100 text-slate-600", alias="categoryColor")
    amount: float
    note: Optional[str] = None
    date: str = Field(default_factory=utc_now_iso, description="ISO-8601 timestamp")

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        """Reject timestamps that cannot be parsed back."""
        datetime.fromisoformat(v)
        return v

    @property
    def timestamp(self) -> datetime:
        """The item date as an aware datetime (naive values are taken as UTC)."""
        parsed = datetime.fromisoformat(self.date)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    @classmethod
    def for_category(cls, category: ExpenseCategory, amount: float, **kwargs) -> "ExpenseItem":
        """Build an item that copies the category's presentation fields."""
        return cls(
            category_id=category.id,
            category_name=category.name,
            category_icon=category.icon_name,
            category_color=category.color_class,
            amount=amount,
            **kwargs,
        )

    def to_storage_dict(self) -> dict:
        """Serialize with the persisted (camelCase) field names."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class IncomeItem(ExpenseItem):
    """
    A savings ledger transaction.

    Entries without a type are treated as income, matching data written
    before expenses could be recorded in the ledger.
    """

    type: Optional[TransactionType] = None

    @property
    def signed_amount(self) -> float:
        """Amount with the ledger polarity applied."""
        if self.type == TransactionType.EXPENSE:
            return -self.amount
        return self.amount


# =============================================================================
# MONTHLY RECORD (typed read view)
# =============================================================================

class _Section(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ElectricityInputsSnapshot(_Section):
    """Parsed electricity inputs as persisted with a month."""
    old_t1: Optional[float] = None
    new_t1: Optional[float] = None
    old_t2: Optional[float] = None
    new_t2: Optional[float] = None
    day_price_with_vat: Optional[float] = None
    night_price_with_vat: Optional[float] = None
    invoice_total: Optional[float] = None


class ElectricityResultsSnapshot(_Section):
    """Rounded electricity results as persisted with a month."""
    cons_t1_kwh: Optional[float] = None
    cons_t2_kwh: Optional[float] = None
    total_cons_em1_kwh: Optional[float] = None
    cost_em1_eur: Optional[float] = None
    em2_remainder_eur: Optional[float] = None


class FixedExpenses(_Section):
    credit_eur: float = 0.0
    phone_eur: float = 0.0
    internet_eur: float = 0.0


class ExpensesSection(_Section):
    saved_em2_eur: Optional[float] = None
    fixed_expenses: FixedExpenses = Field(default_factory=FixedExpenses)
    additional_expenses: list[ExpenseItem] = Field(default_factory=list)


class RecordMeta(_Section):
    generated_at: Optional[str] = None


class MonthlyRecord(_Section):
    """
    Everything saved for one month.

    The record store persists raw JSON objects; this model is the typed
    view used by readers such as the monthly report.
    """
    month: Optional[str] = None
    tab: Optional[str] = None
    inputs: Optional[ElectricityInputsSnapshot] = None
    results: Optional[ElectricityResultsSnapshot] = None
    expenses: Optional[ExpensesSection] = None
    incomes: list[IncomeItem] = Field(default_factory=list)
    meta: Optional[RecordMeta] = None


# =============================================================================
# UPDATES
# =============================================================================

class FixedExpensesUpdate(BaseModel):
    """Fixed expenses submitted by the expenses tab; omitted fields are kept."""
    credit_eur: Optional[float] = None
    phone_eur: Optional[float] = None
    internet_eur: Optional[float] = None


class ExpensesUpdate(BaseModel):
    """
    What the expenses tab submits on save.

    additional_expenses is the tab's complete list and replaces the stored
    one; None leaves the stored list alone.
    """
    saved_em2_eur: Optional[float] = None
    fixed_expenses: FixedExpensesUpdate = Field(default_factory=FixedExpensesUpdate)
    additional_expenses: Optional[list[ExpenseItem]] = None

    def to_payload(self) -> dict:
        """Plain payload for the record store merge."""
        payload: dict = {
            "fixed_expenses": self.fixed_expenses.model_dump(exclude_none=True),
        }
        if self.saved_em2_eur is not None:
            payload["saved_em2_eur"] = self.saved_em2_eur
        if self.additional_expenses is not None:
            payload["additional_expenses"] = [
                item.to_storage_dict() for item in self.additional_expenses
            ]
        return payload
