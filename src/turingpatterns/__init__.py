"""
Turing Patterns
===============
Reaction-diffusion simulation engine: two chemicals on a toroidal grid,
several reaction kinetics, and a brush to paint concentrations onto the field.
"""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("turingpatterns")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
