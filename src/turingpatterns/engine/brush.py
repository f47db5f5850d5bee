from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from turingpatterns.config import BRUSH_INNER_FRACTION
from turingpatterns.engine.field import U_CHANNEL, V_CHANNEL
from turingpatterns.model.identifiers import Channel, EditMode

if TYPE_CHECKING:
    import numpy.typing as npt

    from turingpatterns.engine.field import FieldStore

logger = logging.getLogger(__name__)


def smoothstep(edge0: float, edge1: float, x: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Hermite interpolation between two edges; edge0 > edge1 gives a falling ramp."""
    t = np.clip((x - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


def mix(old: npt.NDArray[np.float64], target: float, strength: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Linear blend that returns `old` exactly at 0 and `target` exactly at 1."""
    return old * (1.0 - strength) + target * strength


class EditOperator:
    """
    Localized paint/erase brush acting directly on the readable buffer.

    The edit does not go through the ping-pong swap: it overwrites the current
    state in place while holding the store lock, so it is sequenced between
    stencil passes.
    """

    def __init__(self, store: FieldStore, inner_fraction: float = BRUSH_INNER_FRACTION) -> None:
        """
        Args:
            store: The double-buffered field.
            inner_fraction: Fraction of the radius inside which the brush acts
                at full strength. Must lie in [0, 1).
        """
        if not 0.0 <= inner_fraction < 1.0:
            raise ValueError(f"Inner fraction must lie in [0, 1), got {inner_fraction}.")
        self.store = store
        self.inner_fraction = inner_fraction

    def falloff(self, center_x: float, center_y: float, radius: float) -> npt.NDArray[np.float64]:
        """
        Per-cell brush strength, shape (height, width).

        The distance of a cell to the centre is measured to the nearest
        periodic image of the centre, so a brush near an edge also acts on the
        opposite edge. Strength is 1 inside `inner_fraction * radius`, falls
        smoothly to 0 at `radius` and is 0 beyond it.
        """
        height, width = self.store.shape
        if radius <= 0.0:
            return np.zeros((height, width), dtype=np.float64)

        dx = np.arange(width, dtype=np.float64) - center_x
        dx -= width * np.round(dx / width)
        dy = np.arange(height, dtype=np.float64) - center_y
        dy -= height * np.round(dy / height)
        dist = np.hypot(dy[:, np.newaxis], dx[np.newaxis, :])

        strength = smoothstep(radius, radius * self.inner_fraction, dist)
        strength[dist > radius] = 0.0
        return strength

    def edit(
        self,
        center_x: float,
        center_y: float,
        radius: float,
        value: float,
        channel: Channel,
        mode: EditMode,
        default_pair: tuple[float, float],
    ) -> int:
        """
        Blend the cells under the brush toward a target.

        Args:
            center_x, center_y: Brush centre in cell coordinates (cell (x, y)
                has its centre at (x, y)).
            radius: Brush radius in cells. Non-positive radii touch nothing.
            value: Paint target.
            channel: Channel(s) painted; ignored when erasing.
            mode: PAINT blends the selected channel(s) toward `value`; ERASE
                blends both channels toward `default_pair`.
            default_pair: Steady state of the active model.

        Returns:
            Number of cells affected.
        """
        channel = Channel.resolve(channel)
        mode = EditMode.resolve(mode)

        with self.store.lock:
            strength = self.falloff(center_x, center_y, radius)
            inside = strength > 0.0
            affected = int(np.count_nonzero(inside))
            if affected == 0:
                return 0

            s = strength[inside]
            state = self.store.active()
            if mode is EditMode.ERASE:
                targets = ((U_CHANNEL, default_pair[0]), (V_CHANNEL, default_pair[1]))
            else:
                targets = []
                if channel in (Channel.U, Channel.BOTH):
                    targets.append((U_CHANNEL, value))
                if channel in (Channel.V, Channel.BOTH):
                    targets.append((V_CHANNEL, value))

            for ch, target in targets:
                layer = state[..., ch]
                layer[inside] = mix(layer[inside], float(target), s)

        logger.debug(f"{mode.value} at ({center_x:.1f}, {center_y:.1f}) r={radius} touched {affected} cells.")
        return affected
