"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from supabase import create_client

from nutriflow.adapters.json_file_snapshot_repository import (
    JsonFileSnapshotRepository,
)
from nutriflow.adapters.openai_estimator_client import OpenAIEstimatorClient
from nutriflow.adapters.supabase_snapshot_repository import (
    SupabaseSnapshotRepository,
)
from nutriflow.config import Settings
from nutriflow.services.estimator import EstimatorService
from nutriflow.services.food_database import FoodDatabase
from nutriflow.services.ledger import LedgerService, LedgerStore
from nutriflow.services.metrics import MetricsService
from nutriflow.services.snapshots import SnapshotRepository


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    ledger_service: LedgerService
    metrics_service: MetricsService
    estimator_service: EstimatorService
    food_database: FoodDatabase
    close_resources: Callable[[], Awaitable[None]]


def build_snapshot_repository(settings: Settings) -> SnapshotRepository:
    """Return the Supabase store when configured, else the local file store."""
    if settings.uses_supabase:
        supabase_client = create_client(
            settings.supabase_url, settings.supabase_service_key
        )
        return SupabaseSnapshotRepository(supabase_client)
    return JsonFileSnapshotRepository(settings.snapshot_dir)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    tz = ZoneInfo(resolved_settings.clock_timezone)
    ledger_service = LedgerService(
        store=LedgerStore(clock=lambda: datetime.now(tz=tz)),
        repository=build_snapshot_repository(resolved_settings),
        snapshot_key=resolved_settings.snapshot_key,
    )
    metrics_service = MetricsService(
        protein_target_g=resolved_settings.protein_target_g,
        carbs_target_g=resolved_settings.carbs_target_g,
        fat_target_g=resolved_settings.fat_target_g,
        water_goal_ml=resolved_settings.water_goal_ml,
        ring_circumference=resolved_settings.ring_circumference,
    )
    openai_client = OpenAIEstimatorClient.create(resolved_settings.openai_api_key)
    estimator_service = EstimatorService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        ledger_service=ledger_service,
        metrics_service=metrics_service,
        estimator_service=estimator_service,
        food_database=FoodDatabase(),
        close_resources=close_resources,
    )
