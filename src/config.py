"""Configuration settings for the neuroevolution engine.

Uses Pydantic Settings for validation and environment variable support.
All settings can be overridden via NEUROEVO_* environment variables.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings


class Extremity(str, Enum):
    """Which end of the ascending fitness order a selection is taken from."""

    LOW = "low"
    HIGH = "high"


class EvolutionConfig(BaseSettings):
    """Global configuration for a neuroevolution run."""

    seed: int = 42

    # Population
    population_size: int = Field(default=85, gt=0)
    mutation_rate: float = Field(default=0.055, ge=0.0, le=1.0)

    # Crossover controls
    best_agent_selection: int = Field(default=8, ge=0)
    worst_agent_selection: int = Field(default=3, ge=0)
    number_to_crossover: int = Field(default=38, ge=0)  # pairs per generation
    best_selection_end: Extremity = Extremity.HIGH
    worst_selection_end: Extremity = Extremity.LOW
    crossover_max_attempts: int = Field(default=100, gt=0)

    # Network topology (input width 3 and output width 2 are fixed)
    layers: int = Field(default=1, ge=0)
    neurons: int = Field(default=10, gt=0)

    # Driver fitness
    distance_multiplier: float = 1.4
    avg_speed_multiplier: float = 0.2
    sensor_multiplier: float = 0.1
    sensor_range: float = Field(default=20.0, gt=0.0)  # raw ray distance mapped to 1.0
    stall_timeout: float = 20.0  # seconds before the stall check applies
    stall_fitness: float = 40.0
    max_fitness: float = 1000.0

    model_config = {"env_prefix": "NEUROEVO_"}
