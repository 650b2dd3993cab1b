"""Reward redemption and journal recovery tests."""

from __future__ import annotations

import pytest

from app.config import settings
from app.schemas.gamification import RewardCreate
from app.services.common import MemoryRecordStore
from app.services.journal_service import STEP_LEDGER, STEP_STOCK, JournalService
from app.services.ledger_service import LedgerService
from app.services.repositories import RedemptionRepository, RewardRepository
from app.services.reward_service import RewardService
from app.utils.errors import ConflictError, ForbiddenError, InsufficientResourceError, InvalidInputError


@pytest.fixture()
def kit(store: MemoryRecordStore, admin) -> str:
    """A single-unit reward costing 500 points."""
    reward = RewardService(store).create_reward(
        RewardCreate(title="Kit Sustentável", cost=500, stock=1), admin
    )
    return reward.id


def test_request_does_not_move_points(store: MemoryRecordStore, resident, kit: str) -> None:
    ledger = LedgerService(store)
    before = ledger.read(resident.id)
    redemption = RewardService(store).request_redemption(kit, before, resident)
    assert redemption.status == "pending"
    assert ledger.read(resident.id) == before
    assert RewardRepository(store).get(kit).stock == 1


def test_last_unit_goes_to_first_approval(
    store: MemoryRecordStore, resident, admin, make_user, kit: str
) -> None:
    """Two pending requests for one unit: the second approval fails on stock."""
    service = RewardService(store)
    ledger = LedgerService(store)
    neighbour = make_user("user-2")

    first = service.request_redemption(kit, None, resident)
    second = service.request_redemption(kit, None, neighbour)
    before = ledger.read(resident.id)

    delivered = service.process(first.id, "delivered", "Retire na portaria", admin)
    assert delivered.status == "delivered"
    assert delivered.admin_feedback == "Retire na portaria"
    assert ledger.read(resident.id) == before - 500
    assert RewardRepository(store).get(kit).stock == 0

    with pytest.raises(InsufficientResourceError):
        service.process(second.id, "delivered", "", admin)
    assert RedemptionRepository(store).get(second.id).status == "pending"
    assert ledger.read(neighbour.id) == settings.default_points


def test_request_with_low_balance_is_refused(store: MemoryRecordStore, resident, kit: str) -> None:
    ledger = LedgerService(store)
    ledger.adjust(resident.id, ledger.read(resident.id) - 100, "subtract")
    with pytest.raises(InsufficientResourceError):
        RewardService(store).request_redemption(kit, 100, resident)


def test_out_of_stock_reward_cannot_be_requested(store: MemoryRecordStore, resident, admin) -> None:
    service = RewardService(store)
    empty = service.create_reward(RewardCreate(title="Esgotado", cost=10, stock=0), admin)
    with pytest.raises(InsufficientResourceError):
        service.request_redemption(empty.id, None, resident)


def test_processed_redemption_is_terminal(
    store: MemoryRecordStore, resident, admin, kit: str
) -> None:
    service = RewardService(store)
    redemption = service.request_redemption(kit, None, resident)
    service.process(redemption.id, "rejected", "Fora do prazo", admin)
    with pytest.raises(ConflictError):
        service.process(redemption.id, "delivered", "", admin)
    assert RewardRepository(store).get(kit).stock == 1


def test_rejection_requires_feedback(store: MemoryRecordStore, resident, admin, kit: str) -> None:
    service = RewardService(store)
    redemption = service.request_redemption(kit, None, resident)
    with pytest.raises(InvalidInputError):
        service.process(redemption.id, "rejected", "", admin)


def test_residents_cannot_process(store: MemoryRecordStore, resident, kit: str) -> None:
    service = RewardService(store)
    redemption = service.request_redemption(kit, None, resident)
    with pytest.raises(ForbiddenError):
        service.process(redemption.id, "delivered", "", resident)


def test_recover_finishes_interrupted_delivery(
    store: MemoryRecordStore, resident, kit: str
) -> None:
    """A delivery that stopped after the deduction is completed without charging twice."""
    service = RewardService(store)
    journal = JournalService(store)
    ledger = LedgerService(store)
    before = ledger.read(resident.id)
    redemption = service.request_redemption(kit, None, resident)

    entry = journal.open_redemption(redemption, "ok")
    journal._apply_step(entry, STEP_LEDGER)
    journal.journal.replace(entry.model_copy(update={"steps_done": [STEP_LEDGER]}))
    assert len(journal.open_entries()) == 1

    assert journal.recover() == 1
    assert journal.open_entries() == []
    assert ledger.read(resident.id) == before - 500
    assert RewardRepository(store).get(kit).stock == 0
    assert RedemptionRepository(store).get(redemption.id).status == "delivered"
    assert journal.recover() == 0


@pytest.fixture()
def crate(store: MemoryRecordStore, admin) -> str:
    """A three-unit reward costing 200 points."""
    reward = RewardService(store).create_reward(
        RewardCreate(title="Caixa de compostagem", cost=200, stock=3), admin
    )
    return reward.id


def test_recover_does_not_repeat_unmarked_stock_step(
    store: MemoryRecordStore, resident, crate: str
) -> None:
    """Stock written but never marked done is decremented once."""
    journal = JournalService(store)
    ledger = LedgerService(store)
    before = ledger.read(resident.id)
    redemption = RewardService(store).request_redemption(crate, None, resident)

    entry = journal.open_redemption(redemption, "ok")
    journal._apply_step(entry, STEP_LEDGER)
    journal._apply_step(entry, STEP_STOCK)
    journal.journal.replace(entry.model_copy(update={"steps_done": [STEP_LEDGER]}))

    assert journal.recover() == 1
    assert RewardRepository(store).get(crate).stock == 2
    assert ledger.read(resident.id) == before - 200
    assert RedemptionRepository(store).get(redemption.id).status == "delivered"


def test_approval_resumes_open_journal_entry(
    store: MemoryRecordStore, resident, admin, crate: str
) -> None:
    """Approving again while a delivery is open finishes it instead of starting another."""
    service = RewardService(store)
    journal = JournalService(store)
    ledger = LedgerService(store)
    before = ledger.read(resident.id)
    redemption = service.request_redemption(crate, None, resident)

    entry = journal.open_redemption(redemption, "ok")
    journal._apply_step(entry, STEP_LEDGER)
    journal._apply_step(entry, STEP_STOCK)
    journal.journal.replace(entry.model_copy(update={"steps_done": [STEP_LEDGER, STEP_STOCK]}))

    delivered = service.process(redemption.id, "delivered", "ok", admin)
    assert delivered.status == "delivered"
    assert journal.open_entries() == []
    assert len(journal.journal.all()) == 1
    assert journal.recover() == 0
    assert RewardRepository(store).get(crate).stock == 2
    assert ledger.read(resident.id) == before - 200


def test_rejection_refused_while_delivery_is_open(
    store: MemoryRecordStore, resident, admin, crate: str
) -> None:
    service = RewardService(store)
    journal = JournalService(store)
    redemption = service.request_redemption(crate, None, resident)
    journal.open_redemption(redemption, "ok")

    with pytest.raises(ConflictError):
        service.process(redemption.id, "rejected", "Sem estoque", admin)
    assert RedemptionRepository(store).get(redemption.id).status == "pending"


def test_foreign_admin_cannot_see_or_process(
    store: MemoryRecordStore, resident, admin, make_user, kit: str
) -> None:
    service = RewardService(store)
    ledger = LedgerService(store)
    outsider = make_user("org-9", role="organization", region="Vila Madalena")
    before = ledger.read(resident.id)
    redemption = service.request_redemption(kit, None, resident)

    assert service.list_pending_redemptions(outsider) == []
    assert [row.id for row in service.list_pending_redemptions(admin)] == [redemption.id]
    with pytest.raises(ForbiddenError):
        service.process(redemption.id, "delivered", "ok", outsider)

    assert RedemptionRepository(store).get(redemption.id).status == "pending"
    assert RewardRepository(store).get(kit).stock == 1
    assert ledger.read(resident.id) == before


def test_legacy_redemption_region_comes_from_owner(
    store: MemoryRecordStore, resident, make_user, kit: str
) -> None:
    """Records filed without a region are scoped by the redeemer's account."""
    service = RewardService(store)
    redemption = service.request_redemption(kit, None, resident)
    service.redemptions.replace(redemption.model_copy(update={"region": ""}))

    outsider = make_user("org-9", role="organization", region="Vila Madalena")
    with pytest.raises(ForbiddenError):
        service.process(redemption.id, "delivered", "ok", outsider)
