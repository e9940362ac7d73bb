"""Meal estimation from free-text descriptions using LLMs."""

import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from nutriflow.domain.foods import FoodCandidate

_logger = logging.getLogger(__name__)

ESTIMATE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "name": {"type": "string", "description": "Name of the food or meal"},
        "cal": {"type": "number", "description": "Calories in kcal"},
        "p": {"type": "number", "description": "Protein in grams"},
        "c": {"type": "number", "description": "Carbohydrates in grams"},
        "g": {"type": "number", "description": "Fats in grams"},
    },
    "required": ["name", "cal", "p", "c", "g"],
    "additionalProperties": False,
}


class EstimatorClient(Protocol):
    """Interface for LLM meal estimation."""

    async def estimate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured nutrition data for the prompt."""


@dataclass
class EstimatorService:
    """Service that prompts the estimator and validates its answer."""

    client: EstimatorClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def estimate(self, description: str) -> FoodCandidate | None:
        """Estimate a meal, returning None when it cannot be analyzed."""
        cleaned = description.strip()
        if not cleaned:
            return None
        prompt = (
            "Estimate the nutritional values for the following meal description: "
            f'"{cleaned}". '
            "Provide the most accurate single item representation or a summary."
        )
        try:
            raw = await self.client.estimate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                schema=ESTIMATE_SCHEMA,
                prompt=prompt,
            )
        except Exception:
            _logger.exception("Meal estimation failed")
            return None
        try:
            return FoodCandidate.model_validate(raw)
        except ValidationError as exc:
            _logger.warning(
                "Meal estimation returned an invalid record (%s errors)",
                exc.error_count(),
            )
            return None
