"""Configuration settings for metis simulations.

Uses Pydantic Settings for validation and environment variable support.
All settings can be overridden via METIS_* environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class MetisConfig(BaseSettings):
    """Global configuration for a population-genetics run."""

    # Randomness
    seed: int | None = None

    # Driver
    num_cycles: int = Field(default=10, ge=0)
    max_cycles: int = Field(default=0, ge=0)  # 0 = no guard on open-ended runs

    # Population
    population_size: int = Field(default=20, ge=0)
    offspring_per_cycle: int = Field(default=20, ge=0)

    # Genome
    num_markers: int = Field(default=20, ge=1)

    model_config = {"env_prefix": "METIS_"}
