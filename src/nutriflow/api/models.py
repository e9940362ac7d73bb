"""Request models for the HTTP API."""

from pydantic import BaseModel, Field


class WaterRequest(BaseModel):
    """Water intake to add, in milliliters."""

    amount: int = Field(ge=0)


class EstimateRequest(BaseModel):
    """Free-text meal description for the estimator."""

    description: str = Field(max_length=500)
