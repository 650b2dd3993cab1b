"""Points ledger tests."""

from __future__ import annotations

import pytest

from app.config import settings
from app.services.common import MemoryRecordStore
from app.services.ledger_service import LedgerService
from app.services.repositories import NS_LEDGER, NS_POINTS
from app.utils.errors import InvalidInputError


def test_read_initialises_default_balance(store: MemoryRecordStore) -> None:
    """First read persists the product default."""
    ledger = LedgerService(store)
    assert ledger.read("new-user") == settings.default_points
    assert ledger.read("new-user") == settings.default_points
    assert store.load(NS_POINTS, {})["new-user"]["points"] == settings.default_points


def test_subtract_floors_at_zero(store: MemoryRecordStore) -> None:
    ledger = LedgerService(store)
    ledger.read("u1")
    assert ledger.adjust("u1", settings.default_points + 500, "subtract") == 0


def test_adjust_is_idempotent_per_reference(store: MemoryRecordStore) -> None:
    """The same reference is applied only once per direction."""
    ledger = LedgerService(store)
    start = ledger.read("u1")
    assert ledger.adjust("u1", 100, "add", reference_id="sub-1") == start + 100
    assert ledger.adjust("u1", 100, "add", reference_id="sub-1") == start + 100
    assert ledger.adjust("u1", 40, "subtract", reference_id="sub-1") == start + 60

    entries = ledger.list_entries("u1")
    assert [entry.direction for entry in entries] == ["subtract", "add"]
    assert entries[0].balance_after == start + 60


@pytest.mark.parametrize("amount", [0, -5])
def test_adjust_rejects_non_positive_amounts(store: MemoryRecordStore, amount: int) -> None:
    with pytest.raises(InvalidInputError):
        LedgerService(store).adjust("u1", amount, "add")


def test_reference_is_kept_with_the_balance(store: MemoryRecordStore) -> None:
    """Losing the history write does not let the same reference apply twice."""
    ledger = LedgerService(store)
    start = ledger.read("u1")
    ledger.adjust("u1", 300, "subtract", reference_id="red-1")
    store.save(NS_LEDGER, [])

    assert ledger.is_applied("u1", "red-1", "subtract")
    assert ledger.adjust("u1", 300, "subtract", reference_id="red-1") == start - 300
    assert ledger.read("u1") == start - 300
