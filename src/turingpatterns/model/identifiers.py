"""
Identifiers
===========
Closed vocabularies shared by the engine and its collaborators: which reaction
model is active, how a field is initialized, and how the brush edits it.
"""
from __future__ import annotations

from enum import IntEnum, StrEnum

from turingpatterns.errors import InvalidBrushError, UnknownModelError, UnknownStrategyError


class ModelId(StrEnum):
    GRAY_SCOTT = "gray-scott"
    FITZHUGH_NAGUMO = "fitzhugh-nagumo"
    BRUSSELATOR = "brusselator"

    @property
    def label(self) -> str:
        return _MODEL_LABELS[self]

    @classmethod
    def resolve(cls, value: ModelId | str) -> ModelId:
        """Convert a user-supplied name into a ModelId, raising UnknownModelError."""
        try:
            return cls(value)
        except ValueError:
            raise UnknownModelError(value) from None


_MODEL_LABELS: dict[ModelId, str] = {
    ModelId.GRAY_SCOTT: "Gray-Scott",
    ModelId.FITZHUGH_NAGUMO: "FitzHugh-Nagumo",
    ModelId.BRUSSELATOR: "Brusselator",
}


class InitStrategy(StrEnum):
    UNIFORM_DEFAULT = "uniform-default"
    CENTER_SEED = "center-seed"
    RANDOM_NOISE = "random-noise"
    MULTI_SEED = "multi-seed"
    GRADIENT = "gradient"

    @classmethod
    def resolve(cls, value: InitStrategy | str) -> InitStrategy:
        try:
            return cls(value)
        except ValueError:
            raise UnknownStrategyError(value) from None


class Channel(IntEnum):
    """Which concentration the brush paints."""
    U = 0
    V = 1
    BOTH = 2

    @classmethod
    def resolve(cls, value: Channel | int | str) -> Channel:
        """Accept a member, its number or its name ("v", "both")."""
        try:
            if isinstance(value, str):
                return cls[value.upper()]
            return cls(value)
        except (KeyError, ValueError):
            raise InvalidBrushError("channel", value) from None


class EditMode(StrEnum):
    PAINT = "paint"
    ERASE = "erase"

    @classmethod
    def resolve(cls, value: EditMode | str) -> EditMode:
        try:
            return cls(value)
        except ValueError:
            raise InvalidBrushError("mode", value) from None
