"""Derived display metrics computed from ledger snapshots."""

import math
from dataclasses import dataclass

from nutriflow.domain.ledger import HISTORY_DAYS, HISTORY_LABELS, DailyLedger
from nutriflow.domain.metrics import (
    DashboardMetrics,
    DaySeries,
    MacroProgress,
    StatsMetrics,
)

DEFAULT_WATER_GOAL_ML = 2500
DEFAULT_RING_CIRCUMFERENCE = 264.0


def clamp_fraction(value: float, target: float) -> float:
    """Return value/target clamped to [0, 1]; a zero target yields 0."""
    if target <= 0:
        return 0.0
    return min(max(value / target, 0.0), 1.0)


def as_percent(fraction: float) -> float:
    """Convert a fraction to a percentage in [0, 100]."""
    return min(max(fraction, 0.0), 1.0) * 100


def remaining_calories(ledger: DailyLedger) -> float:
    """Calories left before the target, never negative."""
    return max(ledger.target - ledger.consumed, 0)


def consumed_fraction(ledger: DailyLedger) -> float:
    return clamp_fraction(ledger.consumed, ledger.target)


def ring_offset(ledger: DailyLedger, circumference: float) -> float:
    """Stroke offset of a circular progress ring of the given circumference."""
    return circumference * (1 - consumed_fraction(ledger))


def macro_fraction(value: float, macro_target: float) -> float:
    return clamp_fraction(value, macro_target)


def water_fraction(
    ledger: DailyLedger, water_goal: int = DEFAULT_WATER_GOAL_ML
) -> float:
    return clamp_fraction(ledger.water, water_goal)


def water_liters(ledger: DailyLedger) -> float:
    """Water in liters to one decimal, rounding halves up."""
    return math.floor(ledger.water / 100 + 0.5) / 10


def weekly_series(ledger: DailyLedger) -> list[DaySeries]:
    """Return the labeled week with today's slot replaced by live calories."""
    return [
        DaySeries(
            label=label,
            calories=ledger.consumed if index == HISTORY_DAYS - 1 else value,
        )
        for index, (label, value) in enumerate(
            zip(HISTORY_LABELS, ledger.history, strict=True)
        )
    ]


def weekly_average(ledger: DailyLedger) -> int:
    """Average daily calories over the week, rounded half up."""
    total = sum(day.calories for day in weekly_series(ledger))
    return math.floor(total / HISTORY_DAYS + 0.5)


@dataclass
class MetricsService:
    """Builds dashboard and stats views with the configured goals."""

    protein_target_g: float = 150
    carbs_target_g: float = 250
    fat_target_g: float = 70
    water_goal_ml: int = DEFAULT_WATER_GOAL_ML
    ring_circumference: float = DEFAULT_RING_CIRCUMFERENCE

    def macros(self, ledger: DailyLedger) -> list[MacroProgress]:
        """Return protein, carbs and fat progress."""
        return [
            MacroProgress(
                label=label,
                value_g=value,
                target_g=target,
                fraction=macro_fraction(value, target),
            )
            for label, value, target in (
                ("Protein", ledger.protein_g, self.protein_target_g),
                ("Carbs", ledger.carbs_g, self.carbs_target_g),
                ("Fats", ledger.fat_g, self.fat_target_g),
            )
        ]

    def dashboard(self, ledger: DailyLedger) -> DashboardMetrics:
        """Return the daily dashboard metrics."""
        fraction = consumed_fraction(ledger)
        return DashboardMetrics(
            target=ledger.target,
            consumed=ledger.consumed,
            remaining=remaining_calories(ledger),
            consumed_fraction=fraction,
            consumed_percent=as_percent(fraction),
            ring_offset=ring_offset(ledger, self.ring_circumference),
            macros=self.macros(ledger),
            water=ledger.water,
            water_goal=self.water_goal_ml,
            water_fraction=water_fraction(ledger, self.water_goal_ml),
            entry_count=len(ledger.log),
        )

    def stats(self, ledger: DailyLedger) -> StatsMetrics:
        """Return the weekly performance metrics."""
        return StatsMetrics(
            weekly_average=weekly_average(ledger),
            water_liters=water_liters(ledger),
            series=weekly_series(ledger),
            macros=self.macros(ledger),
        )
