"""Tests for the stateful ledger service."""

import json
import logging

from nutriflow.domain.foods import ProfileUpdate
from nutriflow.domain.ledger import DailyLedger
from nutriflow.services.ledger import LedgerService
from nutriflow.services.snapshots import dump_ledger
from tests.conftest import EGGS, SNAPSHOT_KEY, InMemorySnapshotRepository, make_store


def _service(repository: InMemorySnapshotRepository) -> LedgerService:
    return LedgerService(
        store=make_store(), repository=repository, snapshot_key=SNAPSHOT_KEY
    )


def test_current_defaults_when_key_missing() -> None:
    service = _service(InMemorySnapshotRepository())

    ledger = service.current()

    assert ledger == DailyLedger()


def test_current_loads_persisted_snapshot() -> None:
    repository = InMemorySnapshotRepository()
    repository.blobs[SNAPSHOT_KEY] = dump_ledger(
        DailyLedger(target=1800, water=400, user_name="Runner")
    )

    ledger = _service(repository).current()

    assert ledger.target == 1800
    assert ledger.water == 400
    assert ledger.user_name == "Runner"


def test_current_falls_back_on_malformed_snapshot() -> None:
    repository = InMemorySnapshotRepository()
    repository.blobs[SNAPSHOT_KEY] = "{not json"

    assert _service(repository).current() == DailyLedger()


def test_commands_persist_after_each_change() -> None:
    repository = InMemorySnapshotRepository()
    service = _service(repository)

    service.add_food(EGGS)
    service.add_water(250)
    service.add_water(500)

    assert repository.saves == 3
    stored = json.loads(repository.blobs[SNAPSHOT_KEY])
    assert stored["consumed"] == 155
    assert stored["water"] == 750
    assert stored["log"][0]["name"] == "Eggs"


def test_noop_commands_do_not_persist() -> None:
    repository = InMemorySnapshotRepository()
    service = _service(repository)

    service.remove_food("missing")
    service.add_water(0)
    service.update_profile(ProfileUpdate())

    assert repository.saves == 0


def test_remove_food_round_trip_through_service() -> None:
    service = _service(InMemorySnapshotRepository())
    entry_id = service.add_food(EGGS).log[0].id

    ledger = service.remove_food(entry_id)

    assert ledger.consumed == 0
    assert ledger.log == ()
    assert service.current() is ledger


def test_reload_sees_last_persisted_snapshot() -> None:
    repository = InMemorySnapshotRepository()
    service = _service(repository)
    service.add_food(EGGS)
    service.update_profile(ProfileUpdate(target="2200"))

    reloaded = _service(repository).current()

    assert reloaded == service.current()
    assert reloaded.target == 2200


def test_persist_failure_is_logged_and_state_advances(caplog, monkeypatch) -> None:
    monkeypatch.setattr(logging.getLogger("nutriflow"), "propagate", True)
    repository = InMemorySnapshotRepository(fail_saves=True)
    service = _service(repository)

    with caplog.at_level(logging.ERROR, logger="nutriflow"):
        ledger = service.add_food(EGGS)

    assert ledger.consumed == 155
    assert service.current().consumed == 155
    assert "Failed to persist ledger snapshot" in caplog.text


def test_reset_and_close_day_through_service() -> None:
    service = _service(InMemorySnapshotRepository())
    service.add_food(EGGS)

    closed = service.close_day()
    assert closed.history[5] == 155
    assert closed.consumed == 0

    service.add_water(500)
    reset = service.reset_day()
    assert reset.water == 0
    assert reset.history == closed.history
