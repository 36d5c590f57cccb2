"""Tests for evolution settings and their validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.config import EvolutionConfig, Extremity


class TestEvolutionConfig:
    """Test defaults, bounds and environment overrides."""

    def test_defaults(self):
        config = EvolutionConfig()

        assert config.population_size == 85
        assert config.mutation_rate == pytest.approx(0.055)
        assert config.best_agent_selection == 8
        assert config.worst_agent_selection == 3
        assert config.layers == 1
        assert config.neurons == 10
        assert config.best_selection_end == Extremity.HIGH
        assert config.worst_selection_end == Extremity.LOW

    @pytest.mark.parametrize(
        "field,value",
        [
            ("population_size", 0),
            ("mutation_rate", 1.5),
            ("mutation_rate", -0.1),
            ("best_agent_selection", -1),
            ("worst_agent_selection", -1),
            ("number_to_crossover", -2),
            ("layers", -1),
            ("neurons", 0),
            ("crossover_max_attempts", 0),
        ],
    )
    def test_rejects_out_of_range(self, field, value):
        with pytest.raises(ValidationError):
            EvolutionConfig(**{field: value})

    def test_zero_hidden_layers_allowed(self):
        assert EvolutionConfig(layers=0).layers == 0

    def test_extremity_from_string(self):
        config = EvolutionConfig(best_selection_end="low")

        assert config.best_selection_end is Extremity.LOW

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("NEUROEVO_POPULATION_SIZE", "12")
        monkeypatch.setenv("NEUROEVO_MUTATION_RATE", "0.5")

        config = EvolutionConfig()

        assert config.population_size == 12
        assert config.mutation_rate == 0.5
