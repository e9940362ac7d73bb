"""Boundary models for food records and profile updates."""

import math
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class FoodCandidate(BaseModel):
    """Normalized food record accepted by the ledger.

    The same shape arrives from the local food database, the meal estimator
    and manual entry. Wire keys are ``cal``, ``p``, ``c`` and ``g`` (fat).
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(min_length=1)
    calories: float = Field(alias="cal", ge=0, allow_inf_nan=False)
    protein_g: float = Field(alias="p", ge=0, allow_inf_nan=False)
    carbs_g: float = Field(alias="c", ge=0, allow_inf_nan=False)
    fat_g: float = Field(alias="g", ge=0, allow_inf_nan=False)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("name must not be blank")
        return stripped


class ProfileUpdate(BaseModel):
    """Partial profile update; only explicitly set fields are merged."""

    model_config = ConfigDict(populate_by_name=True)

    target: int | None = None
    user_name: str | None = Field(default=None, alias="userName")
    profile_img: str | None = Field(default=None, alias="profileImg")

    @field_validator("target", mode="before")
    @classmethod
    def _coerce_target(cls, value: object) -> int:
        return parse_target(value)

    def changes(self) -> dict[str, object]:
        """Return only the fields the caller supplied with a value."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


def parse_target(value: object) -> int:
    """Parse a calorie target, falling back to zero on malformed input."""
    parsed = 0
    if isinstance(value, bool):
        parsed = 0
    elif isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        parsed = int(value) if math.isfinite(value) else 0
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        parsed = int(match.group(1)) if match else 0
    return max(parsed, 0)
