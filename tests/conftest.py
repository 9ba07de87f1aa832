"""Shared fixtures: in-memory storage doubles and a local-only audit logger."""

import pytest

from home_budget.audit import AuditLogger
from home_budget.models.electricity import ElectricityInputs
from home_budget.services.storage import InMemoryKeyValueStorage, StorageWriteError


class SwitchableStorage(InMemoryKeyValueStorage):
    """In-memory storage whose writes can be made to fail."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fail_writes = False

    def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageWriteError(f"Simulated write failure for {key}")
        super().set_item(key, value)


@pytest.fixture
def storage():
    return InMemoryKeyValueStorage()


@pytest.fixture
def flaky_storage():
    return SwitchableStorage()


@pytest.fixture
def audit_logger():
    return AuditLogger(history_size=100)


@pytest.fixture
def example_inputs():
    """The worked example: 50 kWh day, 30 kWh night, invoice of 30."""
    return ElectricityInputs(
        old_t1="100",
        new_t1="150",
        old_t2="200",
        new_t2="230",
        price_t1="0.14986",
        price_t2="0.08870",
        invoice_total="30",
    )
