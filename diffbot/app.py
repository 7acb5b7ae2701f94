"""Entry point that starts every simulation task and waits for them."""

from __future__ import annotations

import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TextIO

from .monitors import SharedState
from .tasks import (
    control_task,
    interface_task,
    linearization_task,
    logger_task,
    model_x_task,
    model_y_task,
    reference_task,
    simulation_task,
    timer_task,
)

DEFAULT_OUTPUT = "data/saida.csv"
DEFAULT_DURATION = 20.0
DEFAULT_INTERVAL = 0.1

_HANDLER_NAME = "diffbot-stderr"
_LOG_FORMAT = "[%(levelname)s] %(filename)s:%(funcName)s():%(lineno)d: %(message)s"


def configure_logging(enabled: bool = True) -> logging.Logger:
    """Send the package's debug messages to stderr, or silence them."""
    log = logging.getLogger("diffbot")
    for handler in list(log.handlers):
        if handler.get_name() == _HANDLER_NAME:
            log.removeHandler(handler)
    if enabled:
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        log.addHandler(handler)
        log.setLevel(logging.DEBUG)
        log.propagate = False
    else:
        log.setLevel(logging.CRITICAL + 1)
    return log


def run_simulation(
    output_path=DEFAULT_OUTPUT,
    duration: float = DEFAULT_DURATION,
    interval: float = DEFAULT_INTERVAL,
    out: TextIO | None = None,
) -> SharedState:
    """Run all tasks concurrently until the timer ends the simulation.

    Returns the shared state as it was when every task had finished.
    Any exception raised by a task is re-raised after all have stopped.
    """
    if duration < 0:
        raise ValueError(f"duration must not be negative, got {duration!r}")
    if interval <= 0:
        raise ValueError(f"interval must be positive, got {interval!r}")
    stream = sys.stdout if out is None else out
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    shared = SharedState()
    jobs = [
        (simulation_task, (shared,)),
        (linearization_task, (shared,)),
        (control_task, (shared,)),
        (reference_task, (shared,)),
        (model_x_task, (shared,)),
        (model_y_task, (shared,)),
        (interface_task, (shared, stream)),
        (logger_task, (shared, path)),
        (timer_task, (shared.clock, duration, interval, stream)),
    ]
    with ThreadPoolExecutor(max_workers=len(jobs)) as pool:
        futures = [pool.submit(fn, *args) for fn, args in jobs]
    errors = [f.exception() for f in futures if f.exception() is not None]
    if errors:
        raise errors[0]

    print("Simulation completed successfully.", file=stream, flush=True)
    return shared


def main(argv=None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        prog="diffbot",
        description="Simulate model-following control of a differential-drive robot.",
    )
    parser.add_argument("--output", default=DEFAULT_OUTPUT, help="CSV log file")
    parser.add_argument("--duration", type=float, default=DEFAULT_DURATION,
                        help="simulated time in seconds")
    parser.add_argument("--interval", type=float, default=DEFAULT_INTERVAL,
                        help="clock step in seconds")
    parser.add_argument("--no-log", dest="log", action="store_false",
                        help="disable debug messages on stderr")
    args = parser.parse_args(argv)

    configure_logging(args.log)
    try:
        run_simulation(args.output, args.duration, args.interval)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0