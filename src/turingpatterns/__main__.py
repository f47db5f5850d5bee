"""Command-line interface: run a simulation headless and report field statistics."""
from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Optional, Sequence

from turingpatterns.config import DEFAULT_GRID_SIZE, STEPS_PER_FRAME
from turingpatterns.engine.simulation import Simulation
from turingpatterns.errors import SimulationError
from turingpatterns.logging_config import setup_logging
from turingpatterns.model.identifiers import InitStrategy, ModelId
from turingpatterns.model.presets import PRESETS, get_preset, presets_for

logger = logging.getLogger("turingpatterns.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="turingpatterns",
        description="Run a reaction-diffusion simulation without a display.",
    )
    parser.add_argument("--model", choices=[m.value for m in ModelId], default=None,
                        help="Reaction model; loads its first preset (default: gray-scott).")
    parser.add_argument("--preset", choices=[p.name for p in PRESETS], default=None,
                        help="Named preset; overrides --model.")
    parser.add_argument("--init", choices=[s.value for s in InitStrategy], default=None,
                        help="Initialization strategy (default: the preset's).")
    parser.add_argument("--size", type=int, default=DEFAULT_GRID_SIZE, help="Grid side length in cells.")
    parser.add_argument("--frames", type=int, default=100, help="Number of frames to run.")
    parser.add_argument("--steps-per-frame", type=int, default=STEPS_PER_FRAME)
    parser.add_argument("--report-every", type=int, default=10, help="Log statistics every N frames.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed of the initializer.")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, log_file=args.log_file)

    try:
        if args.preset:
            preset = get_preset(args.preset)
        else:
            preset = presets_for(args.model or ModelId.GRAY_SCOTT)[0]

        sim = Simulation(args.size, args.size, model=preset.model, seed=args.seed)
        sim.load_preset(preset)
        if args.init:
            sim.initialize(args.init)

        logger.info(f"{sim} | {sim.statistics()}")
        start = time.perf_counter()
        for frame in range(1, args.frames + 1):
            sim.step(count=args.steps_per_frame)
            if args.report_every > 0 and frame % args.report_every == 0:
                logger.info(f"Frame {frame}/{args.frames} - generation {sim.generation} | {sim.statistics()}")
        elapsed = time.perf_counter() - start

    except SimulationError as e:
        logger.error(str(e))
        return 1

    rate = sim.generation / elapsed if elapsed > 0 else float("inf")
    logger.info(f"Done: {sim.generation} passes in {elapsed:.2f} s ({rate:.0f} passes/s).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
