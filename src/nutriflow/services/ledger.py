"""Daily ledger commands and the stateful ledger service."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import uuid4

from nutriflow.domain.foods import FoodCandidate, ProfileUpdate
from nutriflow.domain.ledger import DailyLedger, FoodEntry, exact_sum
from nutriflow.services.snapshots import SnapshotRepository, dump_ledger, load_ledger

_logger = logging.getLogger(__name__)

TIME_FORMAT = "%H:%M"


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _new_entry_id() -> str:
    return uuid4().hex


@dataclass
class LedgerStore:
    """Pure commands that turn one ledger snapshot into the next.

    No command mutates its input. ``clock`` and ``id_factory`` are only
    consulted by :meth:`add_food`.
    """

    clock: Callable[[], datetime] = _utc_now
    id_factory: Callable[[], str] = _new_entry_id

    def add_food(self, ledger: DailyLedger, candidate: FoodCandidate) -> DailyLedger:
        """Log a food entry and add its macros to the running totals."""
        entry = FoodEntry(
            id=self.id_factory(),
            name=candidate.name,
            calories=candidate.calories,
            protein_g=candidate.protein_g,
            carbs_g=candidate.carbs_g,
            fat_g=candidate.fat_g,
            time=self.clock().strftime(TIME_FORMAT),
        )
        return replace(
            ledger,
            log=(entry, *ledger.log),
            consumed=exact_sum((ledger.consumed, entry.calories)),
            protein_g=exact_sum((ledger.protein_g, entry.protein_g)),
            carbs_g=exact_sum((ledger.carbs_g, entry.carbs_g)),
            fat_g=exact_sum((ledger.fat_g, entry.fat_g)),
        )

    def remove_food(self, ledger: DailyLedger, entry_id: str) -> DailyLedger:
        """Remove a logged entry, subtracting exactly its stored values.

        An unknown id returns the ledger unchanged.
        """
        entry = ledger.find_entry(entry_id)
        if entry is None:
            return ledger
        return replace(
            ledger,
            log=tuple(item for item in ledger.log if item.id != entry_id),
            consumed=exact_sum((ledger.consumed, -entry.calories)),
            protein_g=exact_sum((ledger.protein_g, -entry.protein_g)),
            carbs_g=exact_sum((ledger.carbs_g, -entry.carbs_g)),
            fat_g=exact_sum((ledger.fat_g, -entry.fat_g)),
        )

    def add_water(self, ledger: DailyLedger, amount: int) -> DailyLedger:
        """Add water in milliliters."""
        if amount == 0:
            return ledger
        return replace(ledger, water=ledger.water + amount)

    def reset_day(self, ledger: DailyLedger) -> DailyLedger:
        """Clear the day's intake, keeping profile, target and history."""
        return replace(
            ledger,
            consumed=0.0,
            protein_g=0.0,
            carbs_g=0.0,
            fat_g=0.0,
            log=(),
            water=0,
        )

    def update_profile(self, ledger: DailyLedger, update: ProfileUpdate) -> DailyLedger:
        """Merge the supplied profile fields into the ledger."""
        changes = update.changes()
        if not changes:
            return ledger
        return replace(ledger, **changes)

    def close_day(self, ledger: DailyLedger) -> DailyLedger:
        """Roll today's total into history and start a fresh day.

        History shifts one slot left, today's calories land in the last
        real slot and the trailing placeholder stays zero.
        """
        history = (*ledger.history[1:-1], ledger.consumed, 0.0)
        return self.reset_day(replace(ledger, history=history))


@dataclass
class LedgerService:
    """Holds the current ledger and persists it after every command."""

    store: LedgerStore
    repository: SnapshotRepository
    snapshot_key: str
    _ledger: DailyLedger | None = field(default=None, init=False, repr=False)

    def current(self) -> DailyLedger:
        """Return the latest snapshot, loading it on first use."""
        if self._ledger is None:
            self._ledger = load_ledger(self.repository.load(self.snapshot_key))
        return self._ledger

    def add_food(self, candidate: FoodCandidate) -> DailyLedger:
        """Log a validated food candidate."""
        return self._apply(
            "add_food", lambda ledger: self.store.add_food(ledger, candidate)
        )

    def remove_food(self, entry_id: str) -> DailyLedger:
        """Remove a logged entry by id."""
        return self._apply(
            "remove_food", lambda ledger: self.store.remove_food(ledger, entry_id)
        )

    def add_water(self, amount: int) -> DailyLedger:
        """Add water in milliliters."""
        return self._apply(
            "add_water", lambda ledger: self.store.add_water(ledger, amount)
        )

    def reset_day(self) -> DailyLedger:
        """Clear the day's intake unconditionally."""
        return self._apply("reset_day", self.store.reset_day)

    def update_profile(self, update: ProfileUpdate) -> DailyLedger:
        """Merge profile fields."""
        return self._apply(
            "update_profile", lambda ledger: self.store.update_profile(ledger, update)
        )

    def close_day(self) -> DailyLedger:
        """Roll today into history and start a new day."""
        return self._apply("close_day", self.store.close_day)

    def _apply(
        self, action: str, command: Callable[[DailyLedger], DailyLedger]
    ) -> DailyLedger:
        previous = self.current()
        updated = command(previous)
        if updated is previous:
            _logger.debug("Ledger %s was a no-op", action)
            return updated
        self._ledger = updated
        _logger.info(
            "Ledger %s applied: consumed=%s entries=%s water=%s",
            action,
            updated.consumed,
            len(updated.log),
            updated.water,
        )
        self._persist(updated)
        return updated

    def _persist(self, ledger: DailyLedger) -> None:
        """Save the snapshot; failures are logged and the command still counts."""
        try:
            self.repository.save(self.snapshot_key, dump_ledger(ledger))
        except Exception:
            _logger.exception("Failed to persist ledger snapshot %s", self.snapshot_key)
