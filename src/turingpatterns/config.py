"""
Configuration & Global Constants
================================
This module serves as the central registry for the engine's tunable constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (brush radius, seed sizes, noise
   amplitudes) scattered throughout the engine.
2. Consistency: The Controller, the background worker and the CLI all read
   their defaults from the same place.

Exports:
    DEFAULT_GRID_SIZE (int): Side length of the square grid created at start-up.
    STEPS_PER_FRAME (int): Stencil passes run between two displayed frames.
    BRUSH_* : Default brush settings used by the Controller.
    NOISE_AMPLITUDE, GRADIENT_*, *_SEED_*: Initializer settings.
"""
from typing import Final

# Grid
DEFAULT_GRID_SIZE: Final[int] = 512

# Stepping
STEPS_PER_FRAME: Final[int] = 8

# Brush
BRUSH_RADIUS: Final[float] = 15.0
BRUSH_VALUE: Final[float] = 1.0
BRUSH_INNER_FRACTION: Final[float] = 0.3  # falloff reaches full strength at 30 % of the radius

# Initializer
NOISE_AMPLITUDE: Final[float] = 0.05
GRADIENT_SPAN: Final[float] = 0.5
GRADIENT_JITTER: Final[float] = 0.025
CENTER_SEED_HALF_WIDTH: Final[int] = 10
MULTI_SEED_COUNT_RANGE: Final[tuple[int, int]] = (8, 15)         # inclusive
MULTI_SEED_HALF_WIDTH_RANGE: Final[tuple[int, int]] = (4, 7)     # inclusive
