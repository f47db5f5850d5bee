"""
Simulation Parameters
=====================
Defines the per-model parameter sets consumed by the stepper.

Why is this file needed?
------------------------
1. Naming: Each reaction model reads its own bag of named scalars
   (feed/kill rates, diffusion coefficients, time step, model constants).
2. Invariants: Time step and diffusion coefficients must be non-negative;
   everything else is a range the UI presents, not something the engine enforces.
3. Metadata: The slider ranges a Controller presents live next to the
   values so the Controller can build its widgets from one place.

Classes:
    ModelParameters: Abstract base for all parameter sets.
    GrayScottParams, FitzHughNagumoParams, BrusselatorParams: Concrete sets.
    ParameterSpec: UI metadata (label and range) of a single parameter.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
import dataclasses
from dataclasses import dataclass, asdict, fields
import math
from typing import Any, Dict, Mapping

from turingpatterns.errors import InvalidParametersError
from turingpatterns.model.identifiers import ModelId


@dataclass(kw_only=True)
class ModelParameters(ABC):
    """
    Abstract base class for the parameter set of one reaction model.
    """
    dt: float
    Du: float
    Dv: float

    @property
    @abstractmethod
    def model(self) -> ModelId:
        pass

    @classmethod
    def keys(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def validate(self) -> None:
        """
        Check the invariants shared by every model.

        Raises:
            InvalidParametersError: If a value is not finite, or if the time
                step or a diffusion coefficient is negative.
        """
        for key, value in self.to_dict().items():
            if not math.isfinite(value):
                raise InvalidParametersError(f"{self.model.label}: '{key}' must be finite, got {value}.")
        for key in ("dt", "Du", "Dv"):
            value = getattr(self, key)
            if value < 0.0:
                raise InvalidParametersError(f"{self.model.label}: '{key}' must be non-negative, got {value}.")

    def replace(self, **changes: float) -> ModelParameters:
        """Return a validated copy with some values changed."""
        unknown = set(changes) - set(self.keys())
        if unknown:
            raise InvalidParametersError(
                f"{self.model.label} has no parameter(s) {sorted(unknown)}; expected {self.keys()}."
            )
        updated = dataclasses.replace(self, **{key: float(value) for key, value in changes.items()})
        updated.validate()
        return updated

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @staticmethod
    def from_dict(model: ModelId | str, data: Mapping[str, Any]) -> ModelParameters:
        """Factory method: build the parameter set of `model`, missing keys take their defaults."""
        model_id = ModelId.resolve(model)
        return default_parameters(model_id).replace(**dict(data))


@dataclass(kw_only=True)
class GrayScottParams(ModelParameters):
    dt: float = 1.0
    F: float = 0.0545
    k: float = 0.062
    Du: float = 0.16
    Dv: float = 0.08

    @property
    def model(self) -> ModelId:
        return ModelId.GRAY_SCOTT


@dataclass(kw_only=True)
class FitzHughNagumoParams(ModelParameters):
    dt: float = 0.1
    Du: float = 1.0
    Dv: float = 0.0
    stimulus: float = 0.0
    epsilon: float = 0.02
    a1: float = 0.5
    a0: float = 0.0

    @property
    def model(self) -> ModelId:
        return ModelId.FITZHUGH_NAGUMO


@dataclass(kw_only=True)
class BrusselatorParams(ModelParameters):
    dt: float = 0.005
    Du: float = 2.0
    Dv: float = 16.0
    A_feed: float = 4.5
    B_feed: float = 8.0

    @property
    def model(self) -> ModelId:
        return ModelId.BRUSSELATOR


PARAMETER_CLASSES: Dict[ModelId, type[ModelParameters]] = {
    ModelId.GRAY_SCOTT: GrayScottParams,
    ModelId.FITZHUGH_NAGUMO: FitzHughNagumoParams,
    ModelId.BRUSSELATOR: BrusselatorParams,
}


def default_parameters(model: ModelId | str) -> ModelParameters:
    """Fresh parameter set of `model` with its default values."""
    return PARAMETER_CLASSES[ModelId.resolve(model)]()


@dataclass(frozen=True)
class ParameterSpec:
    """Slider metadata of a single parameter."""
    key: str
    label: str
    minimum: float
    maximum: float
    step: float

    def clip(self, value: float) -> float:
        """Clamp `value` into the presented range."""
        return min(max(float(value), self.minimum), self.maximum)


# Centralized metadata for the Controller, in display order
PARAMETER_SPECS: Dict[ModelId, list[ParameterSpec]] = {
    ModelId.GRAY_SCOTT: [
        ParameterSpec("F", "Feed rate (F)", 0.0, 0.1, 0.001),
        ParameterSpec("k", "Kill rate (k)", 0.0, 0.1, 0.001),
        ParameterSpec("Du", "Diffusion U", 0.05, 0.5, 0.005),
        ParameterSpec("Dv", "Diffusion V", 0.01, 0.25, 0.005),
        ParameterSpec("dt", "Time step", 0.1, 2.0, 0.1),
    ],
    ModelId.FITZHUGH_NAGUMO: [
        ParameterSpec("stimulus", "Stimulus (I)", -0.5, 0.5, 0.01),
        ParameterSpec("epsilon", "Recovery (e)", 0.001, 0.1, 0.001),
        ParameterSpec("a1", "Coupling a1", 0.0, 3.0, 0.05),
        ParameterSpec("a0", "Offset a0", -1.0, 1.0, 0.05),
        ParameterSpec("Du", "Diffusion u", 0.01, 1.0, 0.01),
        ParameterSpec("Dv", "Diffusion v", 0.0, 1.0, 0.01),
        ParameterSpec("dt", "Time step", 0.01, 0.5, 0.005),
    ],
    ModelId.BRUSSELATOR: [
        ParameterSpec("A_feed", "Feed A", 0.5, 5.0, 0.1),
        ParameterSpec("B_feed", "Feed B", 0.5, 12.0, 0.1),
        ParameterSpec("Du", "Diffusion U", 0.5, 5.0, 0.1),
        ParameterSpec("Dv", "Diffusion V", 0.5, 20.0, 0.5),
        ParameterSpec("dt", "Time step", 0.001, 0.05, 0.001),
    ],
}


def get_parameter_spec(model: ModelId | str, key: str) -> ParameterSpec:
    for spec in PARAMETER_SPECS[ModelId.resolve(model)]:
        if spec.key == key:
            return spec
    raise KeyError(f"No parameter '{key}' for model '{model}'")
