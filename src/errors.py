"""Structured error hierarchy for the neuroevolution engine."""


class NeuroevoError(Exception):
    """Base for all neuroevolution errors."""

    pass


class ConfigurationError(NeuroevoError):
    """Evolution settings cannot produce a valid population."""

    pass


class TopologyError(NeuroevoError):
    """Network parameter shapes do not match the requested topology."""

    def __init__(self, layers: int, neurons: int, detail: str):
        self.layers = layers
        self.neurons = neurons
        super().__init__(f"Topology mismatch for layers={layers}, neurons={neurons}: {detail}")


class EngineStateError(NeuroevoError):
    """Controller in invalid state for requested operation."""

    pass
