"""
Simulation Engine Facade
========================
The object a Controller owns to drive one reaction-diffusion field.

Why is this file needed?
------------------------
1. Orchestration: It wires the FieldStore, Stepper, EditOperator and
   Initializer around one explicit SimulationState.
2. Error policy: Every public operation validates its arguments BEFORE
   touching any state, so a rejected call leaves the engine exactly as it was.
3. Collaboration: Renderers only call `current_field()`; Controllers only call
   the public operations below.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, List, Mapping, Optional, TYPE_CHECKING

import numpy as np

from turingpatterns.config import BRUSH_INNER_FRACTION, BRUSH_RADIUS, BRUSH_VALUE, DEFAULT_GRID_SIZE
from turingpatterns.engine.brush import EditOperator
from turingpatterns.engine.field import FieldStore, FieldStatistics
from turingpatterns.engine.initializer import Initializer, SeedStamp
from turingpatterns.engine.stepper import Stepper
from turingpatterns.errors import InvalidParametersError, UnknownModelError
from turingpatterns.model.identifiers import Channel, EditMode, InitStrategy, ModelId
from turingpatterns.model.kinetics import Kinetics, get_kinetics
from turingpatterns.model.parameters import ModelParameters
from turingpatterns.model.presets import Preset, presets_for
from turingpatterns.model.state import SimulationState

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

ParameterSource = ModelParameters | Mapping[str, Any]


class Simulation:
    """
    Reaction-diffusion engine on a toroidal grid.
    """

    def __init__(
        self,
        width: int = DEFAULT_GRID_SIZE,
        height: Optional[int] = None,
        model: ModelId | str = ModelId.GRAY_SCOTT,
        seed: Optional[int] = None,
        brush_inner_fraction: float = BRUSH_INNER_FRACTION,
    ) -> None:
        """
        Create the field and fill it with the steady state of `model`.

        Args:
            width: Grid width in cells.
            height: Grid height in cells, defaults to `width`.
            model: Initially active reaction model.
            seed: Seed of the random generator used by the initializer.
            brush_inner_fraction: Fraction of the brush radius painted at full strength.

        Raises:
            InvalidDimensionsError: If a dimension is not positive.
            UnknownModelError: If `model` is not supported.
        """
        model_id = ModelId.resolve(model)
        self.state = SimulationState(model=model_id)
        self.store = FieldStore(width, width if height is None else height)
        self.stepper = Stepper(self.store)
        self.brush = EditOperator(self.store, inner_fraction=brush_inner_fraction)
        self.initializer = Initializer(self.store, rng=np.random.default_rng(seed))
        self._kinetics: Kinetics = get_kinetics(model_id)

        self.initialize(InitStrategy.UNIFORM_DEFAULT)

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(model={self.model.value!r}, "
                f"size={self.width}x{self.height}, generation={self.generation})")

    # ------------------------------
    # Accessors
    # ------------------------------

    @property
    def width(self) -> int:
        return self.store.width

    @property
    def height(self) -> int:
        return self.store.height

    @property
    def model(self) -> ModelId:
        return self.state.model

    @property
    def kinetics(self) -> Kinetics:
        return self._kinetics

    @property
    def generation(self) -> int:
        return self.state.generation

    def parameters(self, model: ModelId | str | None = None) -> ModelParameters:
        """Stored parameter set of `model` (the active model by default)."""
        model_id = self.model if model is None else ModelId.resolve(model)
        return self.state.parameters[model_id]

    def default_pair(self) -> tuple[float, float]:
        return self._kinetics.default_pair

    def seed_pair(self) -> tuple[float, float]:
        return self._kinetics.seed_pair

    def current_field(self) -> npt.NDArray[np.float64]:
        """
        Read-only snapshot of the current state, shape (height, width, 2).

        The copy is taken under the store lock, so a renderer holding it never
        sees a buffer that a later pass is writing.
        """
        with self.store.lock:
            snapshot = self.store.read().copy()
        snapshot.flags.writeable = False
        return snapshot

    def statistics(self) -> FieldStatistics:
        with self.store.lock:
            return FieldStatistics.from_field(self.store.read())

    # ------------------------------
    # Model & parameters
    # ------------------------------

    def set_model(self, model: ModelId | str) -> ModelId:
        """
        Make `model` the active reaction model. The field is left as it is.

        Raises:
            UnknownModelError: If `model` is not supported; nothing changes.
        """
        kinetics = self._resolve_kinetics(model)
        if kinetics.model != self.state.model:
            logger.info(f"Active model: {self.state.model.label} -> {kinetics.model.label}")
        self.state.model = kinetics.model
        self._kinetics = kinetics
        return kinetics.model

    def set_parameters(self, model: ModelId | str, params: ParameterSource) -> ModelParameters:
        """
        Store a parameter set for `model`.

        A mapping is merged over the currently stored values, so a single
        slider change can be applied as ``{"F": 0.04}``.

        Raises:
            UnknownModelError: If `model` is not supported.
            InvalidParametersError: If the values violate the invariants or
                belong to another model. The stored set is unchanged.
        """
        kinetics = self._resolve_kinetics(model)
        resolved = self._resolve_parameters(kinetics, params)
        self.state.parameters[kinetics.model] = resolved
        logger.debug(f"{kinetics.model.label} parameters: {resolved.to_dict()}")
        return resolved

    # ------------------------------
    # Field operations
    # ------------------------------

    def initialize(
        self,
        strategy: InitStrategy | str = InitStrategy.UNIFORM_DEFAULT,
        model: ModelId | str | None = None,
    ) -> List[SeedStamp]:
        """
        Replace the field with a fresh one built by `strategy`.

        Args:
            strategy: Initialization strategy.
            model: Model whose default/seed pairs are used (the active model by default).

        Raises:
            UnknownStrategyError: If `strategy` is not recognised.
            UnknownModelError: If `model` is not supported.
        """
        strategy = InitStrategy.resolve(strategy)
        kinetics = self._kinetics if model is None else self._resolve_kinetics(model)
        with self.store.lock:
            stamps = self.initializer.initialize(strategy, kinetics)
            self.state.strategy = strategy
            self.state.generation = 0
        return stamps

    def step(
        self,
        model: ModelId | str | None = None,
        params: ParameterSource | None = None,
        count: int = 1,
        should_continue: Optional[Callable[[], bool]] = None,
    ) -> int:
        """
        Advance the field by `count` stencil passes.

        Args:
            model: Reaction model to step with (the active model by default).
            params: Parameters for this batch; None uses the stored set of the
                model, a mapping is merged over it without being stored.
            count: Number of passes.
            should_continue: Checked before every pass; returning False
                abandons the rest of the batch.

        Raises:
            UnknownModelError: If `model` is not supported; nothing changes.
            InvalidParametersError: If `params` is invalid; nothing changes.

        Returns:
            Passes performed.
        """
        kinetics = self._kinetics if model is None else self._resolve_kinetics(model)
        resolved = self._resolve_parameters(kinetics, params)

        with self.store.lock:
            done = self.stepper.step(kinetics, resolved, count, should_continue=should_continue)
            self.state.generation += done
        logger.debug(f"Stepped {kinetics.model.label} x{done} (generation {self.state.generation}).")
        return done

    def edit(
        self,
        center_x: float,
        center_y: float,
        radius: float = BRUSH_RADIUS,
        value: float = BRUSH_VALUE,
        channel: Channel | int = Channel.V,
        mode: EditMode | str = EditMode.PAINT,
    ) -> int:
        """
        Paint or erase around a point of the readable buffer.

        Erasing blends both channels toward the active model's default pair,
        whatever `channel` says.

        Raises:
            InvalidBrushError: If `channel` or `mode` is not recognised; the
                field is untouched.

        Returns:
            Number of cells affected.
        """
        channel = Channel.resolve(channel)
        mode = EditMode.resolve(mode)
        return self.brush.edit(center_x, center_y, radius, value, channel, mode, self._kinetics.default_pair)

    def resize(
        self,
        width: int,
        height: int,
        strategy: InitStrategy | str = InitStrategy.UNIFORM_DEFAULT,
    ) -> None:
        """
        Reallocate the field at a new size and re-initialize it.

        Raises:
            InvalidDimensionsError: If a dimension is not positive; the field is
                left as it was.
        """
        strategy = InitStrategy.resolve(strategy)
        with self.store.lock:
            self.store.resize(width, height)
            self.initialize(strategy)
        logger.info(f"Grid resized to {width}x{height}.")

    # ------------------------------
    # Presets & convenience
    # ------------------------------

    def load_preset(self, preset: Preset) -> List[SeedStamp]:
        """Select the preset's model, apply its parameters and initialize."""
        self.set_model(preset.model)
        self.set_parameters(preset.model, preset.params)
        self.state.preset_name = preset.name
        logger.info(f"Preset loaded: {preset.name}")
        return self.initialize(preset.init)

    def switch_model(self, model: ModelId | str) -> List[SeedStamp]:
        """Switch to `model` by loading its first preset."""
        model_id = ModelId.resolve(model)
        return self.load_preset(presets_for(model_id)[0])

    def reset(self) -> List[SeedStamp]:
        """Re-initialize with the strategy used last."""
        return self.initialize(self.state.strategy)

    def clear(self) -> List[SeedStamp]:
        """Re-initialize with a single centred seed."""
        return self.initialize(InitStrategy.CENTER_SEED)

    # ------------------------------
    # Helpers
    # ------------------------------

    @staticmethod
    def _resolve_kinetics(model: ModelId | str) -> Kinetics:
        try:
            return get_kinetics(model)
        except UnknownModelError as e:
            logger.warning(f"Rejected: {e}")
            raise

    def _resolve_parameters(self, kinetics: Kinetics, params: ParameterSource | None) -> ModelParameters:
        stored = self.state.parameters[kinetics.model]
        if params is None:
            return stored
        if isinstance(params, ModelParameters):
            if not isinstance(params, kinetics.parameters_class):
                raise InvalidParametersError(
                    f"{kinetics.model.label} expects {kinetics.parameters_class.__name__}, "
                    f"got {type(params).__name__}."
                )
            params.validate()
            return params.replace()
        return stored.replace(**dict(params))
