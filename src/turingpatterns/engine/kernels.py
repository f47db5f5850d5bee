# kernels.py
from __future__ import annotations

from typing import TYPE_CHECKING

import numba as nb
import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

# Kernel codes of the reaction laws (see turingpatterns.model.kinetics)
GRAY_SCOTT = 0
FITZHUGH_NAGUMO = 1
BRUSSELATOR = 2

# Packed coefficient layout: [dt, Du, Dv, p0, p1, p2, p3]
N_COEFFICIENTS = 7


@nb.njit(cache=True)
def wrap(n: int, dim: int) -> int:
    """Periodic index: maps n in [-dim, 2*dim) onto [0, dim)."""
    return (n + dim) % dim


@nb.njit(cache=True, fastmath=True)
def clamp(value: float, lower: float, upper: float) -> float:
    return min(max(value, lower), upper)


@nb.njit(cache=True, fastmath=True)
def react(
    kind: int,
    u: float,
    v: float,
    lap_u: float,
    lap_v: float,
    c: npt.NDArray[np.float64],
) -> tuple[float, float]:
    """
    Explicit Euler update of a single cell.

    Args:
        kind:  Kernel code of the reaction law.
        u, v:  Current concentrations of the cell.
        lap_u, lap_v: 5-point Laplacians of both components at the cell.
        c:     Packed coefficients, c[0:3] = (dt, Du, Dv), c[3:7] model constants.

    Returns:
        The clamped concentrations of the next pass.
    """
    dt = c[0]
    du = c[1]
    dv = c[2]

    if kind == GRAY_SCOTT:
        feed = c[3]
        kill = c[4]
        uvv = u * v * v
        new_u = u + dt * (du * lap_u - uvv + feed * (1.0 - u))
        new_v = v + dt * (dv * lap_v + uvv - (feed + kill) * v)
        return clamp(new_u, 0.0, 1.0), clamp(new_v, 0.0, 1.0)

    if kind == FITZHUGH_NAGUMO:
        stimulus = c[3]
        epsilon = c[4]
        a1 = c[5]
        a0 = c[6]
        new_u = u + dt * (du * lap_u + u - u * u * u - v + stimulus)
        new_v = v + dt * (dv * lap_v + epsilon * (u - a1 * v - a0))
        return clamp(new_u, -3.0, 3.0), clamp(new_v, -3.0, 3.0)

    # BRUSSELATOR
    a_feed = c[3]
    b_feed = c[4]
    u2v = u * u * v
    new_u = u + dt * (du * lap_u + a_feed - (b_feed + 1.0) * u + u2v)
    new_v = v + dt * (dv * lap_v + b_feed * u - u2v)
    return max(new_u, 0.0), max(new_v, 0.0)


@nb.njit(cache=True, fastmath=True, parallel=True)
def stencil_pass(
    src: npt.NDArray[np.float64],
    dst: npt.NDArray[np.float64],
    kind: int,
    c: npt.NDArray[np.float64],
) -> None:
    """
    One full pass of the reaction-diffusion stencil on a toroidal grid.

    Every cell of `dst` is written from values of `src` only, so rows are
    processed in parallel without any ordering between them.

    Args:
        src:  Readable buffer, shape (height, width, 2).
        dst:  Writable buffer of the same shape. Must not alias `src`.
        kind: Kernel code of the reaction law.
        c:    Packed coefficients.
    """
    height = src.shape[0]
    width = src.shape[1]
    for y in nb.prange(height):
        ym = wrap(y - 1, height)
        yp = wrap(y + 1, height)
        for x in range(width):
            xm = wrap(x - 1, width)
            xp = wrap(x + 1, width)

            u = src[y, x, 0]
            v = src[y, x, 1]
            lap_u = src[y, xp, 0] + src[y, xm, 0] + src[yp, x, 0] + src[ym, x, 0] - 4.0 * u
            lap_v = src[y, xp, 1] + src[y, xm, 1] + src[yp, x, 1] + src[ym, x, 1] - 4.0 * v

            new_u, new_v = react(kind, u, v, lap_u, lap_v, c)
            dst[y, x, 0] = new_u
            dst[y, x, 1] = new_v
