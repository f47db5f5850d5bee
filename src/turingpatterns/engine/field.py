from __future__ import annotations

from dataclasses import dataclass
import logging
import threading
from typing import TYPE_CHECKING

import numpy as np

from turingpatterns.errors import InvalidDimensionsError

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

U_CHANNEL = 0
V_CHANNEL = 1


class FieldStore:
    """
    Double-buffered concentration field on a toroidal grid.

    Both buffers live in one array of shape (2, height, width, 2); the last
    axis holds (U, V). An index (0/1) tells which buffer is currently readable,
    the other one is writable. Operations that touch the buffers hold `lock`
    for their whole duration, which sequences edits against stencil passes.
    """

    def __init__(self, width: int, height: int) -> None:
        """
        Allocate both buffers.

        Args:
            width: Number of cells along x. Must be positive.
            height: Number of cells along y. Must be positive.

        Raises:
            InvalidDimensionsError: If a dimension is not positive.
        """
        self._check_dimensions(width, height)
        self.lock = threading.RLock()
        self.width = int(width)
        self.height = int(height)
        self._buffers: npt.NDArray[np.float64] = self._allocate(self.width, self.height)
        self._read_index = 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(width={self.width}, height={self.height}, read_index={self._read_index})"

    @staticmethod
    def _check_dimensions(width: int, height: int) -> None:
        if int(width) <= 0 or int(height) <= 0:
            raise InvalidDimensionsError(width, height)

    @staticmethod
    def _allocate(width: int, height: int) -> npt.NDArray[np.float64]:
        return np.zeros((2, height, width, 2), dtype=np.float64)

    @property
    def shape(self) -> tuple[int, int]:
        """(height, width) of the grid."""
        return self.height, self.width

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    @property
    def read_index(self) -> int:
        return self._read_index

    def read(self) -> npt.NDArray[np.float64]:
        """Read-only view of the currently valid buffer, shape (height, width, 2)."""
        view = self._buffers[self._read_index].view()
        view.flags.writeable = False
        return view

    def write(self) -> npt.NDArray[np.float64]:
        """The writable buffer (next state)."""
        return self._buffers[1 - self._read_index]

    def active(self) -> npt.NDArray[np.float64]:
        """
        Mutable view of the readable buffer, for in-place edits.

        Callers must hold `lock` while they modify it.
        """
        return self._buffers[self._read_index]

    def swap(self) -> None:
        """Exchange the readable and writable roles."""
        self._read_index = 1 - self._read_index

    def resize(self, width: int, height: int) -> None:
        """
        Discard both buffers and allocate zeroed ones of the new size.

        Old values are not migrated; the caller must re-initialize.

        Raises:
            InvalidDimensionsError: If a dimension is not positive. The store is
                left unchanged.
        """
        self._check_dimensions(width, height)
        with self.lock:
            self.width = int(width)
            self.height = int(height)
            self._buffers = self._allocate(self.width, self.height)
            self._read_index = 0
        logger.debug(f"Field buffers reallocated at {self.width}x{self.height}.")

    @staticmethod
    def wrap(n: int, dim: int) -> int:
        """Periodic coordinate along an axis of length `dim`."""
        return (n + dim) % dim

    def index(self, x: int, y: int) -> int:
        """Flat cell index y*W + x of the (wrapped) coordinates."""
        return self.wrap(y, self.height) * self.width + self.wrap(x, self.width)

    def cell(self, x: int, y: int) -> tuple[float, float]:
        """(U, V) of a cell of the readable buffer; coordinates wrap around."""
        flat = self._buffers[self._read_index].reshape(-1, 2)
        u, v = flat[self.index(x, y)]
        return float(u), float(v)


@dataclass(frozen=True)
class FieldStatistics:
    u_min: float
    u_max: float
    u_mean: float
    v_min: float
    v_max: float
    v_mean: float

    @classmethod
    def from_field(cls, field: npt.NDArray[np.float64]) -> FieldStatistics:
        u = field[..., U_CHANNEL]
        v = field[..., V_CHANNEL]
        return cls(
            u_min=float(u.min()), u_max=float(u.max()), u_mean=float(u.mean()),
            v_min=float(v.min()), v_max=float(v.max()), v_mean=float(v.mean()),
        )

    def __str__(self) -> str:
        return (f"U [{self.u_min:.4f}, {self.u_max:.4f}] mean {self.u_mean:.4f} | "
                f"V [{self.v_min:.4f}, {self.v_max:.4f}] mean {self.v_mean:.4f}")
