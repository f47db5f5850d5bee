from __future__ import annotations

import logging
from typing import Callable, Optional, TYPE_CHECKING

from turingpatterns.engine.kernels import stencil_pass

if TYPE_CHECKING:
    from turingpatterns.engine.field import FieldStore
    from turingpatterns.model.kinetics import Kinetics
    from turingpatterns.model.parameters import ModelParameters

logger = logging.getLogger(__name__)


class Stepper:
    """
    Explicit time stepper with ping-pong buffering.
    """

    def __init__(self, store: FieldStore) -> None:
        """
        Initialize the stepper with the field it advances.

        Args:
            store: The double-buffered field.
        """
        self.store = store

    def step(
        self,
        kinetics: Kinetics,
        params: ModelParameters,
        count: int = 1,
        should_continue: Optional[Callable[[], bool]] = None,
    ) -> int:
        """
        Perform `count` sequential stencil passes.

        Each pass reads the readable buffer, writes every cell of the writable
        buffer and swaps the roles, so pass n+1 always sees the finished result
        of pass n. The store lock is held for the whole batch.

        Args:
            kinetics: Reaction law to apply.
            params: Parameter set of that reaction law.
            count: Number of passes.
            should_continue: Optional callback checked before every pass; when it
                returns False the rest of the batch is abandoned.

        Raises:
            ValueError: If `count` is negative.
            InvalidParametersError: If `params` does not fit `kinetics`.

        Returns:
            The number of passes actually performed.
        """
        if count < 0:
            raise ValueError(f"Step count must be non-negative, got {count}.")

        coefficients = kinetics.coefficients(params)
        done = 0
        with self.store.lock:
            for _ in range(count):
                if should_continue is not None and not should_continue():
                    logger.debug(f"Batch abandoned after {done}/{count} passes.")
                    break
                stencil_pass(self.store.read(), self.store.write(), kinetics.kernel_code, coefficients)
                self.store.swap()
                done += 1

        return done
