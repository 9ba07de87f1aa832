"""
Home Budget - Source Package

Core logic of a personal household-budget tracker: an electricity bill
splitter, a per-month record store, a savings ledger and monthly reports,
all persisted to a local key-value store.
"""

__version__ = "1.0.0"
