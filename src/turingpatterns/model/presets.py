"""
Preset Library
==============
Named parameter sets that produce recognisable patterns, and the "breeding"
blend that interpolates between two of them.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Dict, List

from turingpatterns.errors import InvalidParametersError
from turingpatterns.model.identifiers import InitStrategy, ModelId
from turingpatterns.model.parameters import (
    ModelParameters, GrayScottParams, FitzHughNagumoParams, BrusselatorParams
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Preset:
    name: str
    params: ModelParameters
    init: InitStrategy = InitStrategy.MULTI_SEED
    description: str = ""

    @property
    def model(self) -> ModelId:
        return self.params.model


PRESETS: List[Preset] = [
    # Gray-Scott (Pearson classification, 5-point stencil with Du = 2 Dv)
    Preset("Coral", GrayScottParams(F=0.0545, k=0.062), InitStrategy.MULTI_SEED,
           "Branching coral growth"),
    Preset("Mitosis", GrayScottParams(F=0.0367, k=0.0649), InitStrategy.MULTI_SEED,
           "Self-replicating spots"),
    Preset("Spots", GrayScottParams(F=0.035, k=0.065), InitStrategy.RANDOM_NOISE,
           "Stable isolated spots"),
    Preset("Maze", GrayScottParams(F=0.029, k=0.057), InitStrategy.MULTI_SEED,
           "Labyrinthine stripes"),
    Preset("Worms", GrayScottParams(F=0.078, k=0.061), InitStrategy.CENTER_SEED,
           "Stripes growing from a single seed"),
    Preset("Bubbles", GrayScottParams(F=0.098, k=0.057), InitStrategy.CENTER_SEED,
           "Negative spots (holes)"),
    # FitzHugh-Nagumo
    Preset("Spiral Waves", FitzHughNagumoParams(), InitStrategy.CENTER_SEED,
           "Excitation fronts curling into spirals"),
    Preset("Turing Stripes",
           FitzHughNagumoParams(dt=0.02, Du=0.05, Dv=1.0, epsilon=0.1, a1=2.0, a0=-0.1),
           InitStrategy.RANDOM_NOISE, "Stationary stripes from noise"),
    # Brusselator
    Preset("Hexagons", BrusselatorParams(), InitStrategy.RANDOM_NOISE,
           "Turing hexagons around the steady state"),
    Preset("Brusselator Stripes", BrusselatorParams(B_feed=7.5, Dv=12.0), InitStrategy.GRADIENT,
           "Stripes seeded by a concentration gradient"),
]

PRESETS_BY_NAME: Dict[str, Preset] = {preset.name: preset for preset in PRESETS}


def presets_for(model: ModelId | str) -> List[Preset]:
    """All presets of one model, in library order."""
    model_id = ModelId.resolve(model)
    return [preset for preset in PRESETS if preset.model == model_id]


def get_preset(name: str) -> Preset:
    preset = PRESETS_BY_NAME.get(name)
    if preset is None:
        raise KeyError(f"No preset named '{name}'")
    return preset


def blend_parameters(a: ModelParameters, b: ModelParameters, t: float) -> ModelParameters:
    """
    Linearly interpolate every parameter between two sets of the same model.

    Args:
        a: Parent A (returned for t = 0).
        b: Parent B (returned for t = 1).
        t: Blend factor, clipped to [0, 1].

    Raises:
        InvalidParametersError: If the parents belong to different models.
    """
    if a.model != b.model:
        raise InvalidParametersError(
            f"Cannot blend {a.model.label} with {b.model.label} parameters."
        )
    t = min(max(float(t), 0.0), 1.0)
    values_a = a.to_dict()
    values_b = b.to_dict()
    blended = {key: values_a[key] * (1.0 - t) + values_b[key] * t for key in values_a}
    logger.debug(f"Blended {a.model.label} parameters at t={t:.2f}: {blended}")
    return a.replace(**blended)
