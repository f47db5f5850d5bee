"""
Simulation Engine
=================
The core implementation of the reaction-diffusion simulation.

Why is this package needed?
---------------------------
1. Storage: It owns the double-buffered concentration field (FieldStore).
2. Time-Stepping: It advances the field with the explicit stencil (Stepper).
3. Interaction: It applies brush edits and initialization strategies directly
   to the readable buffer.

Note: This package should be pure Python/NumPy/Numba and should NOT import PySide6.
"""
