"""Domain models for derived display metrics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MacroProgress:
    """Progress of a single macro against its target."""

    label: str
    value_g: float
    target_g: float
    fraction: float


@dataclass(frozen=True)
class DaySeries:
    """Calories for one labeled day of the rolling week."""

    label: str
    calories: float


@dataclass(frozen=True)
class DashboardMetrics:
    """Values shown on the daily dashboard."""

    target: int
    consumed: float
    remaining: float
    consumed_fraction: float
    consumed_percent: float
    ring_offset: float
    macros: list[MacroProgress]
    water: int
    water_goal: int
    water_fraction: float
    entry_count: int


@dataclass(frozen=True)
class StatsMetrics:
    """Values shown on the weekly performance view."""

    weekly_average: int
    water_liters: float
    series: list[DaySeries]
    macros: list[MacroProgress]
