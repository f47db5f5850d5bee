"""
Simulation State (Data Model)
=============================
This module defines the explicit state the Controller owns for a running
simulation.

Why is this file needed?
------------------------
1. State Management: It holds the active model, the parameter set of every
   model and the bookkeeping of the current run in one place.
2. Decoupling: The engine reads and writes this object; it never reaches into
   presentation state, and the Controller never reaches into the buffers.

Classes:
    SimulationState: The main container class.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from turingpatterns.model.identifiers import InitStrategy, ModelId
from turingpatterns.model.parameters import ModelParameters, PARAMETER_CLASSES


def _default_parameter_table() -> Dict[ModelId, ModelParameters]:
    return {model: cls() for model, cls in PARAMETER_CLASSES.items()}


@dataclass
class SimulationState:
    """
    Everything about a run that is not the field itself.
    Pass this instance (through the Simulation) to Controllers and workers.
    """
    model: ModelId = ModelId.GRAY_SCOTT
    parameters: Dict[ModelId, ModelParameters] = field(default_factory=_default_parameter_table)

    strategy: InitStrategy = InitStrategy.UNIFORM_DEFAULT
    preset_name: Optional[str] = None

    # Stencil passes since the last initialization
    generation: int = 0

    @property
    def active_parameters(self) -> ModelParameters:
        return self.parameters[self.model]
