"""Feedforward network genome: weights, biases and a tanh forward pass.

A genome is never trained, only initialised, copied, recombined and
mutated. Layer widths are fixed at 3 sensor inputs and 2 control outputs,
with any number of equally sized hidden layers in between.
"""

from __future__ import annotations

import numpy as np

from src.errors import TopologyError

INPUT_WIDTH = 3  # right, forward, left proximity sensors
OUTPUT_WIDTH = 2  # throttle, steering


def layer_widths(layers: int, neurons: int) -> list[int]:
    """Widths of every layer from sensor input to control output."""
    return [INPUT_WIDTH] + [neurons] * layers + [OUTPUT_WIDTH]


def weight_shapes(layers: int, neurons: int) -> list[tuple[int, int]]:
    """Shape of each weight matrix as (rows of next layer, columns of this layer)."""
    widths = layer_widths(layers, neurons)
    return [(widths[i + 1], widths[i]) for i in range(len(widths) - 1)]


class NeuralNetwork:
    """One genome: a fixed-topology network plus its fitness score.

    The generator is shared with the controller that owns the population so
    a whole run is reproducible from a single seed.
    """

    def __init__(self, rng: np.random.Generator):
        self.rng = rng
        self.weights: list[np.ndarray] = []
        self.biases: list[np.ndarray] = []
        self.fitness: float = 0.0

    @classmethod
    def random(cls, layers: int, neurons: int, rng: np.random.Generator) -> NeuralNetwork:
        """Create a freshly randomised genome."""
        network = cls(rng)
        network.initialise(layers, neurons)
        return network

    @property
    def shapes(self) -> list[tuple[int, int]]:
        return [w.shape for w in self.weights]

    def initialise(self, layers: int, neurons: int) -> None:
        """Replace every weight and bias with uniform values in [-1, 1].

        Args:
            layers: Number of hidden layers (0 connects sensors to controls directly)
            neurons: Neurons per hidden layer
        """
        self.weights = []
        self.biases = []
        for rows, cols in weight_shapes(layers, neurons):
            self.weights.append(self.rng.uniform(-1.0, 1.0, size=(rows, cols)))
            self.biases.append(self.rng.uniform(-1.0, 1.0, size=rows))

    def matches(self, layers: int, neurons: int) -> bool:
        """Whether every parameter has the shape the topology prescribes."""
        expected = weight_shapes(layers, neurons)
        if len(self.weights) != len(expected) or len(self.biases) != len(expected):
            return False
        for weight, bias, (rows, cols) in zip(self.weights, self.biases, expected):
            if weight.shape != (rows, cols) or bias.shape != (rows,):
                return False
        return True

    def initialise_copy(self, layers: int, neurons: int) -> NeuralNetwork:
        """Deep-copy this genome's parameters into a new genome.

        The copy starts with fitness 0 and shares nothing mutable with the
        source, so later mutation of either side leaves the other intact.

        Args:
            layers: Expected number of hidden layers
            neurons: Expected neurons per hidden layer

        Returns:
            New NeuralNetwork with identical weights and biases

        Raises:
            TopologyError: If this genome's shapes differ from (layers, neurons)
        """
        if not self.matches(layers, neurons):
            raise TopologyError(
                layers, neurons, f"genome has weight shapes {self.shapes}"
            )

        copy = NeuralNetwork(self.rng)
        copy.weights = [w.copy() for w in self.weights]
        copy.biases = [b.copy() for b in self.biases]
        return copy

    def run_network(self, a: float, b: float, c: float) -> tuple[float, float]:
        """Forward pass from three sensor readings to (throttle, steering).

        tanh is applied after every transition, so both outputs are in [-1, 1].
        """
        x = np.array([a, b, c], dtype=float)
        for weight, bias in zip(self.weights, self.biases):
            x = np.tanh(weight @ x + bias)
        return float(x[0]), float(x[1])

    def __repr__(self) -> str:
        return f"NeuralNetwork(shapes={self.shapes}, fitness={self.fitness:.3f})"
