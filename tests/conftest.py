"""Shared test fixtures."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime

import pytest

from nutriflow.config import Settings
from nutriflow.containers import AppContainer
from nutriflow.domain.foods import FoodCandidate
from nutriflow.services.estimator import EstimatorClient, EstimatorService
from nutriflow.services.food_database import FoodDatabase
from nutriflow.services.ledger import LedgerService, LedgerStore
from nutriflow.services.metrics import MetricsService
from nutriflow.services.snapshots import SnapshotRepository

SNAPSHOT_KEY = "nutriflow_test"


@dataclass
class InMemorySnapshotRepository(SnapshotRepository):
    """In-memory snapshot store for tests."""

    blobs: dict[str, str] = field(default_factory=dict)
    saves: int = 0
    fail_saves: bool = False

    def load(self, key: str) -> str | None:
        return self.blobs.get(key)

    def save(self, key: str, payload: str) -> None:
        if self.fail_saves:
            raise RuntimeError("storage unavailable")
        self.saves += 1
        self.blobs[key] = payload


@dataclass
class FakeEstimatorClient(EstimatorClient):
    """Fake estimator client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "name": "Oatmeal with banana",
            "cal": 350,
            "p": 10,
            "c": 62,
            "g": 6,
        }
    )
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def estimate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.payload


def fixed_clock() -> datetime:
    return datetime(2025, 3, 14, 8, 30)


def sequential_ids() -> Iterator[str]:
    counter = 0
    while True:
        counter += 1
        yield f"entry-{counter}"


def make_store() -> LedgerStore:
    ids = sequential_ids()
    return LedgerStore(clock=fixed_clock, id_factory=lambda: next(ids))


EGGS = FoodCandidate(name="Eggs", cal=155, p=13, c=1, g=11)
RICE = FoodCandidate(name="Rice", cal=130, p=2.5, c=28, g=0.5)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        openai_api_key="openai-key",
        snapshot_key=SNAPSHOT_KEY,
        snapshot_dir=tmp_path / "snapshots",
    )


@pytest.fixture
def snapshot_repository() -> InMemorySnapshotRepository:
    return InMemorySnapshotRepository()


@pytest.fixture
def estimator_client() -> FakeEstimatorClient:
    return FakeEstimatorClient()


@pytest.fixture
def container(
    settings: Settings,
    snapshot_repository: InMemorySnapshotRepository,
    estimator_client: FakeEstimatorClient,
) -> AppContainer:
    ledger_service = LedgerService(
        store=make_store(),
        repository=snapshot_repository,
        snapshot_key=settings.snapshot_key,
    )
    estimator_service = EstimatorService(
        client=estimator_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        ledger_service=ledger_service,
        metrics_service=MetricsService(),
        estimator_service=estimator_service,
        food_database=FoodDatabase(),
        close_resources=close_resources,
    )
