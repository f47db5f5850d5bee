"""
Reaction Kinetics
=================
The closed set of reaction laws the stepper can drive.

Why is this file needed?
------------------------
1. Dispatch: A model is resolved ONCE into a Kinetics variant carrying an
   integer kernel code and a packed coefficient vector. The per-cell loop in
   `turingpatterns.engine.kernels` branches on that code instead of looking
   the model up by name on every step.
2. Steady states: Each variant knows its default (steady-state) pair, used to
   fill fresh fields and as the erase target of the brush, and its seed pair,
   used to stamp high-contrast patches during initialization.

Classes:
    Kinetics: Abstract base of all variants.
    GrayScott, FitzHughNagumo, Brusselator: The supported reaction laws.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Dict, TYPE_CHECKING

import numpy as np

from turingpatterns.engine import kernels
from turingpatterns.errors import InvalidParametersError
from turingpatterns.model.identifiers import ModelId
from turingpatterns.model.parameters import (
    ModelParameters, GrayScottParams, FitzHughNagumoParams, BrusselatorParams
)

if TYPE_CHECKING:
    import numpy.typing as npt


class Kinetics(ABC):
    """
    A reaction law: given a cell's (U, V) and the discrete Laplacian of both
    components, produce the next (U, V).
    """
    model: ClassVar[ModelId]
    kernel_code: ClassVar[int]
    parameters_class: ClassVar[type[ModelParameters]]
    default_pair: ClassVar[tuple[float, float]]
    seed_pair: ClassVar[tuple[float, float]]
    bounds: ClassVar[tuple[float, float]]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model={self.model.value!r})"

    @abstractmethod
    def _constants(self, params: ModelParameters) -> tuple[float, ...]:
        """Model constants packed after (dt, Du, Dv)."""

    def coefficients(self, params: ModelParameters) -> npt.NDArray[np.float64]:
        """
        Pack a parameter set into the coefficient vector read by the kernels.

        Raises:
            InvalidParametersError: If `params` belongs to another model or
                violates the shared invariants.
        """
        if not isinstance(params, self.parameters_class):
            raise InvalidParametersError(
                f"{self.model.label} expects {self.parameters_class.__name__}, "
                f"got {type(params).__name__}."
            )
        params.validate()

        packed = np.zeros(kernels.N_COEFFICIENTS, dtype=np.float64)
        packed[0:3] = (params.dt, params.Du, params.Dv)
        constants = self._constants(params)
        packed[3:3 + len(constants)] = constants
        return packed

    def react(
        self,
        u: float,
        v: float,
        lap_u: float,
        lap_v: float,
        params: ModelParameters,
    ) -> tuple[float, float]:
        """Update of a single cell, the same code path the stepper runs per cell."""
        new_u, new_v = kernels.react(
            self.kernel_code, float(u), float(v), float(lap_u), float(lap_v), self.coefficients(params)
        )
        return float(new_u), float(new_v)


class GrayScott(Kinetics):
    """Chemical pattern model; both components clamped to [0, 1]."""
    model = ModelId.GRAY_SCOTT
    kernel_code = kernels.GRAY_SCOTT
    parameters_class = GrayScottParams
    default_pair = (1.0, 0.0)
    seed_pair = (0.5, 0.25)
    bounds = (0.0, 1.0)

    def _constants(self, params: GrayScottParams) -> tuple[float, ...]:
        return params.F, params.k


class FitzHughNagumo(Kinetics):
    """Excitable medium; both components clamped to [-3, 3]."""
    model = ModelId.FITZHUGH_NAGUMO
    kernel_code = kernels.FITZHUGH_NAGUMO
    parameters_class = FitzHughNagumoParams
    default_pair = (0.0, 0.0)
    seed_pair = (1.0, 0.0)
    bounds = (-3.0, 3.0)

    def _constants(self, params: FitzHughNagumoParams) -> tuple[float, ...]:
        return params.stimulus, params.epsilon, params.a1, params.a0


class Brusselator(Kinetics):
    """Chemical oscillator; both components floored at 0, no upper clamp."""
    model = ModelId.BRUSSELATOR
    kernel_code = kernels.BRUSSELATOR
    parameters_class = BrusselatorParams
    # Steady state (A, B/A) of the default feeds A = 4.5, B = 8.0
    default_pair = (4.5, 1.78)
    seed_pair = (6.0, 3.0)
    bounds = (0.0, float("inf"))

    def _constants(self, params: BrusselatorParams) -> tuple[float, ...]:
        return params.A_feed, params.B_feed


KINETICS: Dict[ModelId, Kinetics] = {
    kinetics.model: kinetics for kinetics in (GrayScott(), FitzHughNagumo(), Brusselator())
}


def get_kinetics(model: ModelId | str) -> Kinetics:
    """
    Resolve a model identifier into its Kinetics variant.

    Raises:
        UnknownModelError: If `model` is not one of the supported models.
    """
    return KINETICS[ModelId.resolve(model)]
