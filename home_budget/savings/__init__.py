"""Savings ledger."""

from home_budget.savings.ledger import DEFAULT_SAVINGS_KEY, SavingsLedger

__all__ = ["DEFAULT_SAVINGS_KEY", "SavingsLedger"]
