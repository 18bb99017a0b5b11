"""Solver settings with environment variable support.

Uses pydantic-settings for typed configuration validation.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class SolverSettings(BaseSettings):
    """Solver configuration loaded from environment variables."""

    # Logging
    log_level: str = Field(default="WARNING", description="Logging level")
    log_json: bool = Field(default=False, description="Render log events as JSON lines")

    # Discretization defaults (EUR per bucket)
    default_delta_value: float = Field(default=50.0, gt=0)
    default_delta_exposure: float = Field(default=50.0, gt=0)

    # Performance
    max_table_cells: int = Field(
        default=50_000_000, gt=0, description="Max DP cells allocated per solve"
    )

    # Policy
    include_in_bank_beneficial: bool = Field(
        default=False,
        description="Mark in-bank loans with positive net benefit as closed on the max-cash path",
    )

    model_config = {
        "env_prefix": "REFI_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> SolverSettings:
    """Get cached solver settings."""
    return SolverSettings()
