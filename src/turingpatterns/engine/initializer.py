from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import List, Optional, TYPE_CHECKING

import numpy as np

from turingpatterns.config import (
    CENTER_SEED_HALF_WIDTH,
    GRADIENT_JITTER,
    GRADIENT_SPAN,
    MULTI_SEED_COUNT_RANGE,
    MULTI_SEED_HALF_WIDTH_RANGE,
    NOISE_AMPLITUDE,
)
from turingpatterns.engine.field import U_CHANNEL, V_CHANNEL
from turingpatterns.model.identifiers import InitStrategy

if TYPE_CHECKING:
    import numpy.typing as npt

    from turingpatterns.engine.field import FieldStore
    from turingpatterns.model.kinetics import Kinetics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedStamp:
    """A seed square: every cell within Chebyshev distance `half_width` of (x, y)."""
    x: int
    y: int
    half_width: int

    def separated_from(self, other: SeedStamp, width: int, height: int) -> bool:
        """True if the two squares neither overlap nor touch on the torus."""
        dx = abs(self.x - other.x) % width
        dx = min(dx, width - dx)
        dy = abs(self.y - other.y) % height
        dy = min(dy, height - dy)
        gap = self.half_width + other.half_width + 1
        return dx > gap or dy > gap


def stamp_seed(data: npt.NDArray[np.float64], stamp: SeedStamp, seed_pair: tuple[float, float]) -> None:
    """Overwrite the cells of a seed square (wrapped toroidally) with `seed_pair`."""
    height, width = data.shape[0], data.shape[1]
    offsets = np.arange(-stamp.half_width, stamp.half_width + 1)
    xs = (stamp.x + offsets) % width
    ys = (stamp.y + offsets) % height
    data[np.ix_(ys, xs)] = seed_pair


class Initializer:
    """
    Produces a starting field from a named strategy.

    The whole writable buffer is filled, then promoted to readable; whatever
    was in the field before is discarded.
    """

    def __init__(self, store: FieldStore, rng: Optional[np.random.Generator] = None) -> None:
        self.store = store
        self.rng = rng if rng is not None else np.random.default_rng()

    def initialize(self, strategy: InitStrategy | str, kinetics: Kinetics) -> List[SeedStamp]:
        """
        Fill the field according to `strategy`.

        Args:
            strategy: Name of the initialization strategy.
            kinetics: Reaction law providing the default and seed pairs.

        Raises:
            UnknownStrategyError: If `strategy` is not recognised.

        Returns:
            The seed squares stamped (empty for strategies without seeds).
        """
        strategy = InitStrategy.resolve(strategy)

        with self.store.lock:
            data = self.store.write()
            height, width = self.store.shape
            default_u, default_v = kinetics.default_pair

            data[..., U_CHANNEL] = default_u
            data[..., V_CHANNEL] = default_v
            stamps: List[SeedStamp] = []

            if strategy is InitStrategy.CENTER_SEED:
                stamps.append(SeedStamp(width // 2, height // 2, CENTER_SEED_HALF_WIDTH))

            elif strategy is InitStrategy.RANDOM_NOISE:
                data += self.rng.uniform(-NOISE_AMPLITUDE, NOISE_AMPLITUDE, size=data.shape)

            elif strategy is InitStrategy.MULTI_SEED:
                stamps.extend(self._place_seeds(width, height))

            elif strategy is InitStrategy.GRADIENT:
                t = np.arange(height, dtype=np.float64) / height
                data[..., U_CHANNEL] += ((t - 0.5) * GRADIENT_SPAN)[:, np.newaxis]
                data[..., V_CHANNEL] += self.rng.uniform(-GRADIENT_JITTER, GRADIENT_JITTER, size=(height, width))

            for stamp in stamps:
                stamp_seed(data, stamp, kinetics.seed_pair)

            self.store.swap()

        logger.info(f"Field initialized: {strategy.value} for {kinetics.model.label} "
                    f"({width}x{height}, {len(stamps)} seed(s)).")
        return stamps

    def _place_seeds(self, width: int, height: int) -> List[SeedStamp]:
        """
        Draw 8-15 seed squares at random positions with random half-widths.

        Each square is placed uniformly among the centres where it neither
        overlaps nor touches the squares already placed. When none is left,
        the half-width shrinks toward the minimum; when even that fails, the
        layout stops if it already holds the minimum number of squares.
        Only grids too small for that many squares get overlapping seeds.
        """
        low, high = MULTI_SEED_COUNT_RANGE
        count = int(self.rng.integers(low, high + 1))
        min_count = low
        low, high = MULTI_SEED_HALF_WIDTH_RANGE

        placed: List[SeedStamp] = []
        overlapping = 0
        for _ in range(count):
            drawn = int(self.rng.integers(low, high + 1))
            stamp = None
            for half_width in range(drawn, low - 1, -1):
                free = np.flatnonzero(self._free_centres(placed, half_width, width, height))
                if free.size:
                    y, x = divmod(int(self.rng.choice(free)), width)
                    stamp = SeedStamp(x, y, half_width)
                    break

            if stamp is None:
                if len(placed) >= min_count:
                    logger.debug(f"Grid {width}x{height} is full after {len(placed)} seeds.")
                    break
                stamp = SeedStamp(int(self.rng.integers(0, width)), int(self.rng.integers(0, height)), drawn)
                overlapping += 1
            placed.append(stamp)

        if overlapping:
            logger.warning(f"Grid {width}x{height} is too small for {min_count} separated seeds; "
                           f"{overlapping} seed(s) overlap.")
        return placed

    @staticmethod
    def _free_centres(placed: List[SeedStamp], half_width: int, width: int, height: int) -> npt.NDArray[np.bool_]:
        """Mask (height, width) of centres where a square of `half_width` stays separated from `placed`."""
        free = np.ones((height, width), dtype=bool)
        for other in placed:
            gap = other.half_width + half_width + 1
            offsets = np.arange(-gap, gap + 1)
            free[np.ix_((other.y + offsets) % height, (other.x + offsets) % width)] = False
        return free
