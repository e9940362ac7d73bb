"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    snapshot_key: str = "nutriflow_red_v2"
    snapshot_dir: Path = Path("data")
    clock_timezone: str = "UTC"
    water_goal_ml: int = 2500
    protein_target_g: float = 150
    carbs_target_g: float = 250
    fat_target_g: float = 70
    ring_circumference: float = 264
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def uses_supabase(self) -> bool:
        """Return True when Supabase credentials are configured."""
        return bool(self.supabase_url and self.supabase_service_key)
