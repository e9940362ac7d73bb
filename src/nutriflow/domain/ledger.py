"""Domain models for the daily nutrition ledger."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

HISTORY_DAYS = 7
HISTORY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
DEFAULT_TARGET = 2000
DEFAULT_USER_NAME = "Elite Athlete"
DEFAULT_PROFILE_IMG = "https://picsum.photos/200"
DEFAULT_HISTORY: tuple[float, ...] = (1850, 2100, 1600, 1950, 2200, 1750, 0)


@dataclass(frozen=True)
class FoodEntry:
    """A single logged food consumption event."""

    id: str
    name: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    time: str


@dataclass(frozen=True)
class DailyLedger:
    """Immutable snapshot of the day's nutrition state.

    Totals always equal the sum of the matching fields in ``log``.
    ``log`` is ordered newest first. The last ``history`` slot is a
    placeholder for today and is replaced by ``consumed`` when derived.
    """

    target: int = DEFAULT_TARGET
    consumed: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    log: tuple[FoodEntry, ...] = ()
    water: int = 0
    user_name: str = DEFAULT_USER_NAME
    profile_img: str = DEFAULT_PROFILE_IMG
    history: tuple[float, ...] = field(default=DEFAULT_HISTORY)

    def __post_init__(self) -> None:
        if len(self.history) != HISTORY_DAYS:
            raise ValueError(
                f"history must have exactly {HISTORY_DAYS} slots, "
                f"got {len(self.history)}"
            )

    def find_entry(self, entry_id: str) -> FoodEntry | None:
        """Return the logged entry with the given id, if present."""
        for entry in self.log:
            if entry.id == entry_id:
                return entry
        return None


def exact_sum(values: Iterable[float]) -> float:
    """Add decimal quantities without accumulating binary float error."""
    return float(sum((Decimal(str(value)) for value in values), Decimal(0)))
