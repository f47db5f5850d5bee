"""
Engine Errors
=============
Exceptions raised by the simulation engine.

All of them are local and non-fatal: the engine leaves its state exactly as it
was before the failing call, and the Controller decides whether to surface a
message to the user.
"""


class SimulationError(Exception):
    """Base class for all engine errors."""


class UnknownModelError(SimulationError, KeyError):
    """Raised when a model identifier is not one of the supported kinetics."""

    def __init__(self, model_id: object) -> None:
        super().__init__(model_id)
        self.model_id = model_id

    def __str__(self) -> str:
        return f"Unknown reaction model: {self.model_id!r}"


class UnknownStrategyError(SimulationError, KeyError):
    """Raised when an initialization strategy name is not recognised."""

    def __init__(self, strategy: object) -> None:
        super().__init__(strategy)
        self.strategy = strategy

    def __str__(self) -> str:
        return f"Unknown initialization strategy: {self.strategy!r}"


class InvalidDimensionsError(SimulationError, ValueError):
    """Raised when a grid is sized with a non-positive width or height."""

    def __init__(self, width: int, height: int) -> None:
        super().__init__(f"Grid dimensions must be positive, got {width}x{height}.")
        self.width = width
        self.height = height


class InvalidParametersError(SimulationError, ValueError):
    """Raised when a parameter set violates the engine invariants."""


class InvalidBrushError(SimulationError, ValueError):
    """Raised when a brush channel or edit mode is not recognised."""

    def __init__(self, setting: str, value: object) -> None:
        super().__init__(f"Unknown brush {setting}: {value!r}")
        self.setting = setting
        self.value = value
