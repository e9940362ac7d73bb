"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request

from nutriflow.api.models import EstimateRequest, WaterRequest
from nutriflow.app_logging import configure_logging
from nutriflow.containers import AppContainer
from nutriflow.domain.foods import FoodCandidate, ProfileUpdate
from nutriflow.services.snapshots import ledger_to_payload

ESTIMATE_FAILED_MESSAGE = "Could not analyze meal. Try being more specific!"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        ledger = app.state.container.ledger_service.current()
        logger.info(
            "Loaded ledger: target=%s consumed=%s entries=%s",
            ledger.target,
            ledger.consumed,
            len(ledger.log),
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    def _container(request: Request) -> AppContainer:
        return request.app.state.container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/ledger")
    async def get_ledger(request: Request) -> dict[str, object]:
        """Return the current ledger snapshot."""
        return ledger_to_payload(_container(request).ledger_service.current())

    @app.post("/ledger/foods")
    async def add_food(candidate: FoodCandidate, request: Request) -> dict[str, object]:
        """Log a food from manual entry or a database selection."""
        ledger = _container(request).ledger_service.add_food(candidate)
        return ledger_to_payload(ledger)

    @app.delete("/ledger/foods/{entry_id}")
    async def remove_food(entry_id: str, request: Request) -> dict[str, object]:
        """Remove a logged food; unknown ids leave the ledger unchanged."""
        ledger = _container(request).ledger_service.remove_food(entry_id)
        return ledger_to_payload(ledger)

    @app.post("/ledger/water")
    async def add_water(payload: WaterRequest, request: Request) -> dict[str, object]:
        """Add water in milliliters."""
        ledger = _container(request).ledger_service.add_water(payload.amount)
        return ledger_to_payload(ledger)

    @app.post("/ledger/reset")
    async def reset_day(request: Request) -> dict[str, object]:
        """Clear today's intake. Confirmation is the client's job."""
        return ledger_to_payload(_container(request).ledger_service.reset_day())

    @app.post("/ledger/close-day")
    async def close_day(request: Request) -> dict[str, object]:
        """Roll today's calories into history and start a new day."""
        return ledger_to_payload(_container(request).ledger_service.close_day())

    @app.patch("/ledger/profile")
    async def update_profile(
        update: ProfileUpdate, request: Request
    ) -> dict[str, object]:
        """Merge target, user name or profile image."""
        ledger = _container(request).ledger_service.update_profile(update)
        return ledger_to_payload(ledger)

    @app.get("/ledger/metrics")
    async def metrics(request: Request) -> dict[str, object]:
        """Return dashboard and weekly stats metrics."""
        state_container = _container(request)
        ledger = state_container.ledger_service.current()
        return {
            "dashboard": state_container.metrics_service.dashboard(ledger),
            "stats": state_container.metrics_service.stats(ledger),
        }

    @app.get("/foods/search")
    async def search_foods(request: Request, q: str = "") -> dict[str, object]:
        """Search the local food database by name."""
        foods = _container(request).food_database.search(q)
        return {"foods": [food.model_dump(by_alias=True) for food in foods]}

    @app.post("/foods/estimate")
    async def estimate_food(
        payload: EstimateRequest, request: Request
    ) -> dict[str, object]:
        """Estimate a meal description and log it."""
        state_container = _container(request)
        candidate = await state_container.estimator_service.estimate(
            payload.description
        )
        if candidate is None:
            raise HTTPException(
                status_code=422,
                detail=ESTIMATE_FAILED_MESSAGE,
            )
        ledger = state_container.ledger_service.add_food(candidate)
        return ledger_to_payload(ledger)

    return app
