"""
Configuration loader for the flood-fill background-removal service.

Environment variables are centralized here to keep the rest of the code
focused on business logic and to make operational tuning clear.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings

from .errors import InvalidFeatherRadiusError


class Settings(BaseSettings):
    # Background matching
    default_tolerance: int = Field(30, env="DEFAULT_TOLERANCE")
    max_tolerance: int = Field(441, env="MAX_TOLERANCE")

    # Edge feathering
    feather_radius: int = Field(2, env="FEATHER_RADIUS")
    max_feather_radius: int = Field(32, env="MAX_FEATHER_RADIUS")

    # API
    log_level: str = Field("INFO", env="LOG_LEVEL")

    # Debugging
    debug: bool = Field(False, env="DEBUG")
    debug_output_dir: Path = Field(Path("/tmp/floodfill_debug"), env="DEBUG_OUTPUT_DIR")

    class Config:
        env_file = ".env"
        case_sensitive = False

    @validator("default_tolerance", "max_tolerance", "feather_radius", "max_feather_radius")
    def validate_non_negative(cls, v: int) -> int:  # noqa: B902
        if v < 0:
            raise ValueError("tolerance and feather radius settings must be >= 0")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings to avoid reparsing env on every call."""
    settings = Settings()
    if settings.default_tolerance > settings.max_tolerance:
        raise ValueError("DEFAULT_TOLERANCE must not exceed MAX_TOLERANCE")
    if settings.feather_radius > settings.max_feather_radius:
        raise ValueError("FEATHER_RADIUS must not exceed MAX_FEATHER_RADIUS")
    return settings


def resolve_feather_radius(feather_radius: Optional[int], settings: Optional[Settings] = None) -> int:
    """
    Pick the feather radius for a call, falling back to the configured one.

    Larger radii widen the soft transition band around the cut.
    """
    if feather_radius is not None:
        if feather_radius < 0:
            raise InvalidFeatherRadiusError(f"feather radius must be >= 0, got {feather_radius}")
        return feather_radius
    settings = settings or get_settings()
    return settings.feather_radius
