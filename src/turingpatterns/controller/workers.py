"""
Background Workers (Threading)
==============================
This module contains QThread subclasses for handling long-running tasks.

Why is this file needed?
------------------------
1. Responsiveness: If we run the stencil passes on the main thread, the GUI
   freezes. These classes push the stepping loop to a background thread.
2. Signals: They provide a safe way to tell the GUI that a new frame is
   ready (or that something failed) using Qt Signals.
3. Sequencing: Brush edits issued from the GUI thread wait on the field lock,
   so they always land between two batches, never inside a pass.

Classes:
    SimulationWorker: Runs the stepping loop.
"""
import logging
from typing import Optional

from PySide6.QtCore import QThread, Signal

from turingpatterns.config import STEPS_PER_FRAME
from turingpatterns.engine.simulation import Simulation

logger = logging.getLogger(__name__)


class SimulationWorker(QThread):
    # Signals to update the UI from the background
    frame_ready = Signal(int)        # generation after the batch
    completed = Signal(int)          # final generation
    error_occurred = Signal(str)

    def __init__(
        self,
        simulation: Simulation,
        steps_per_frame: int = STEPS_PER_FRAME,
        max_frames: Optional[int] = None,
        frame_interval_ms: int = 0,
    ):
        super().__init__()
        self.simulation = simulation
        self.steps_per_frame = steps_per_frame
        self.max_frames = max_frames
        self.frame_interval_ms = frame_interval_ms
        self.frames = 0
        self.is_running = True

    def run(self):
        try:
            logger.info(f"Starting stepping loop ({self.steps_per_frame} passes per frame)...")

            while self.is_running and (self.max_frames is None or self.frames < self.max_frames):
                done = self.simulation.step(
                    count=self.steps_per_frame,
                    should_continue=lambda: self.is_running,
                )
                if done < self.steps_per_frame:
                    # Stopped mid-batch; the field holds the last finished pass
                    break
                self.frames += 1
                self.frame_ready.emit(self.simulation.generation)

                if self.frame_interval_ms > 0:
                    self.msleep(self.frame_interval_ms)

            logger.info(f"Stepping loop finished after {self.frames} frame(s).")
            self.completed.emit(self.simulation.generation)

        except Exception as e:
            logger.error(f"Error in SimulationWorker: {e}")
            self.error_occurred.emit(str(e))

    def stop(self) -> None:
        self.is_running = False
