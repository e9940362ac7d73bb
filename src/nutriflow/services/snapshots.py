"""Snapshot encoding for the persisted ledger."""

import logging
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from nutriflow.domain.ledger import HISTORY_DAYS, DailyLedger, FoodEntry

_logger = logging.getLogger(__name__)


class SnapshotRepository(Protocol):
    """Key-value blob store holding serialized ledger snapshots."""

    def load(self, key: str) -> str | None:
        """Return the stored blob for a key, if present."""

    def save(self, key: str, payload: str) -> None:
        """Store the blob under a key, replacing any previous value."""


class FoodEntryRecord(BaseModel):
    """Persisted shape of a food entry."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    name: str
    calories: float = Field(alias="cal")
    protein_g: float = Field(alias="p")
    carbs_g: float = Field(alias="c")
    fat_g: float = Field(alias="g")
    time: str


class LedgerSnapshot(BaseModel):
    """Persisted shape of the daily ledger."""

    model_config = ConfigDict(populate_by_name=True)

    target: int
    consumed: float
    protein_g: float = Field(alias="p")
    carbs_g: float = Field(alias="c")
    fat_g: float = Field(alias="g")
    log: list[FoodEntryRecord]
    water: int
    user_name: str = Field(alias="userName")
    profile_img: str = Field(alias="profileImg")
    history: list[float] = Field(min_length=HISTORY_DAYS, max_length=HISTORY_DAYS)

    @classmethod
    def from_ledger(cls, ledger: DailyLedger) -> "LedgerSnapshot":
        """Build a snapshot record from a ledger."""
        return cls(
            target=ledger.target,
            consumed=ledger.consumed,
            protein_g=ledger.protein_g,
            carbs_g=ledger.carbs_g,
            fat_g=ledger.fat_g,
            log=[
                FoodEntryRecord(
                    id=entry.id,
                    name=entry.name,
                    calories=entry.calories,
                    protein_g=entry.protein_g,
                    carbs_g=entry.carbs_g,
                    fat_g=entry.fat_g,
                    time=entry.time,
                )
                for entry in ledger.log
            ],
            water=ledger.water,
            user_name=ledger.user_name,
            profile_img=ledger.profile_img,
            history=list(ledger.history),
        )

    def to_ledger(self) -> DailyLedger:
        """Convert the record back into a domain ledger."""
        return DailyLedger(
            target=self.target,
            consumed=self.consumed,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
            log=tuple(
                FoodEntry(
                    id=record.id,
                    name=record.name,
                    calories=record.calories,
                    protein_g=record.protein_g,
                    carbs_g=record.carbs_g,
                    fat_g=record.fat_g,
                    time=record.time,
                )
                for record in self.log
            ),
            water=self.water,
            user_name=self.user_name,
            profile_img=self.profile_img,
            history=tuple(self.history),
        )


def ledger_to_payload(ledger: DailyLedger) -> dict[str, object]:
    """Return the ledger as a JSON-compatible dict with wire keys."""
    return LedgerSnapshot.from_ledger(ledger).model_dump(by_alias=True)


def dump_ledger(ledger: DailyLedger) -> str:
    """Serialize a ledger to its persisted JSON form."""
    return LedgerSnapshot.from_ledger(ledger).model_dump_json(by_alias=True)


def load_ledger(raw: str | None) -> DailyLedger:
    """Parse a persisted snapshot, falling back to the default ledger."""
    if raw is None:
        return DailyLedger()
    try:
        return LedgerSnapshot.model_validate_json(raw).to_ledger()
    except ValidationError as exc:
        _logger.warning(
            "Ledger snapshot is malformed (%s errors), using defaults",
            exc.error_count(),
        )
        return DailyLedger()
