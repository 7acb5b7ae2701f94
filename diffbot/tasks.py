"""Periodic tasks that together run the closed-loop robot simulation."""

from __future__ import annotations

import logging
import sys
import time
from typing import Callable, TextIO

from .dynamics import (
    CONTROL_PERIOD,
    LINEARIZATION_PERIOD,
    MODEL_PERIOD,
    REFERENCE_PERIOD,
    SIM_PERIOD,
    V_MAX,
    W_MAX,
    Pose,
    control_law,
    linearize,
    reference_model_step,
    reference_signal,
)
from .monitors import SharedState, SimulationClock

logger = logging.getLogger(__name__)

#: Period of the CSV logger in seconds.
LOGGER_PERIOD = 0.050
#: Period of the console status display in seconds.
INTERFACE_PERIOD = 1.0

#: Column names of the CSV log.
LOG_HEADER = "t,xref,yref,x1,x2,x3,y1,y2,v1,v2,u1,u2"

# Longest single sleep, so that tasks notice a stop request promptly.
_POLL = 0.05


def _sleep_until(clock: SimulationClock, deadline: float) -> None:
    while not clock.stopped():
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            return
        time.sleep(min(remaining, _POLL))


def run_periodic(
    clock: SimulationClock, period: float, step: Callable[[], object]
) -> int:
    """Call ``step`` every ``period`` seconds until the clock is stopped.

    Activations follow an absolute schedule so that the period does not drift.
    Returns the number of times ``step`` was called.
    """
    if period <= 0:
        raise ValueError(f"period must be positive, got {period!r}")
    count = 0
    next_activation = time.monotonic()
    while not clock.stopped():
        step()
        count += 1
        next_activation += period
        _sleep_until(clock, next_activation)
    return count


def simulation_step(shared: SharedState, dt: float) -> Pose:
    """Advance the robot pose by one Euler step using the current u(t)."""
    u = shared.linearization.snapshot()
    s = shared.state.snapshot()
    pose = Pose(s["x1"], s["x2"], s["x3"]).step(u["u1"], u["u2"], dt)
    y1, y2 = pose.output()
    shared.state.update(x1=pose.x1, x2=pose.x2, x3=pose.x3, y1=y1, y2=y2)
    logger.debug(
        "simulation: x=(%.2f, %.2f, %.2f), y=(%.2f, %.2f)",
        pose.x1, pose.x2, pose.x3, y1, y2,
    )
    return pose


def linearization_step(shared: SharedState) -> tuple[float, float]:
    """Compute u(t) from the heading and the virtual input v(t)."""
    theta = shared.state.snapshot()["x3"]
    v = shared.command.snapshot()
    u1, u2 = linearize(theta, v["v1"], v["v2"])
    shared.linearization.update(u1=u1, u2=u2)
    logger.debug(
        "linearization: theta=%.2f, v=(%.2f, %.2f) -> u=(%.2f, %.2f)",
        theta, v["v1"], v["v2"], u1, u2,
    )
    return u1, u2


def control_step(shared: SharedState) -> tuple[float, float]:
    """Compute the saturated virtual input v(t) from the reference models."""
    s = shared.state.snapshot()
    mx = shared.model_x.snapshot()
    my = shared.model_y.snapshot()
    p = shared.parameters.snapshot()
    v1 = control_law(s["y1"], mx["y_m"], mx["dy_m"], p["alpha1"], V_MAX)
    v2 = control_law(s["y2"], my["y_m"], my["dy_m"], p["alpha2"], W_MAX)
    shared.command.update(v1=v1, v2=v2)
    logger.debug(
        "control: v=(%.2f, %.2f), ym=(%.2f, %.2f), y=(%.2f, %.2f)",
        v1, v2, mx["y_m"], my["y_m"], s["y1"], s["y2"],
    )
    return v1, v2


def reference_step(shared: SharedState) -> tuple[float, float]:
    """Update the reference point for the current simulation time."""
    t = shared.clock.now()
    xref, yref = reference_signal(t)
    shared.reference.update(xref=xref, yref=yref)
    logger.debug("reference: t=%.2f -> xref=%.2f, yref=%.2f", t, xref, yref)
    return xref, yref


def model_x_step(shared: SharedState, dt: float) -> tuple[float, float]:
    """Advance the x-axis reference model by one step."""
    xref = shared.reference.snapshot()["xref"]
    y_m = shared.model_x.snapshot()["y_m"]
    alpha1 = shared.parameters.snapshot()["alpha1"]
    y_m, dy_m = reference_model_step(y_m, xref, alpha1, dt)
    shared.model_x.update(y_m=y_m, dy_m=dy_m)
    logger.debug("model x: xref=%.2f, ymx=%.2f, dymx=%.2f", xref, y_m, dy_m)
    return y_m, dy_m


def model_y_step(shared: SharedState, dt: float) -> tuple[float, float]:
    """Advance the y-axis reference model by one step."""
    yref = shared.reference.snapshot()["yref"]
    y_m = shared.model_y.snapshot()["y_m"]
    alpha2 = shared.parameters.snapshot()["alpha2"]
    y_m, dy_m = reference_model_step(y_m, yref, alpha2, dt)
    shared.model_y.update(y_m=y_m, dy_m=dy_m)
    logger.debug("model y: yref=%.2f, ymy=%.2f, dymy=%.2f", yref, y_m, dy_m)
    return y_m, dy_m


def format_status(shared: SharedState) -> str:
    """One-line summary of time, state, reference and gains."""
    t = shared.clock.now()
    s = shared.state.snapshot()
    r = shared.reference.snapshot()
    p = shared.parameters.snapshot()
    return (
        f"[{t:.2f}s] x=({s['x1']:.2f}, {s['x2']:.2f}, {s['x3']:.2f}) | "
        f"y=({s['y1']:.2f}, {s['y2']:.2f}) | "
        f"ref=({r['xref']:.2f}, {r['yref']:.2f}) | "
        f"α=({p['alpha1']:.2f}, {p['alpha2']:.2f})"
    )


def format_log_row(shared: SharedState, t: float) -> str:
    """CSV row matching ``LOG_HEADER`` for logger time ``t``."""
    r = shared.reference.snapshot()
    s = shared.state.snapshot()
    v = shared.command.snapshot()
    u = shared.linearization.snapshot()
    values = (
        r["xref"], r["yref"],
        s["x1"], s["x2"], s["x3"], s["y1"], s["y2"],
        v["v1"], v["v2"], u["u1"], u["u2"],
    )
    return ",".join([f"{t:.2f}", *(f"{x:.4f}" for x in values)])


def simulation_task(shared: SharedState) -> int:
    """Run the robot simulation until the clock stops."""
    logger.debug("simulation task started")
    return run_periodic(
        shared.clock, SIM_PERIOD, lambda: simulation_step(shared, SIM_PERIOD)
    )


def linearization_task(shared: SharedState) -> int:
    """Run the feedback linearization until the clock stops."""
    logger.debug("linearization task started")
    return run_periodic(
        shared.clock, LINEARIZATION_PERIOD, lambda: linearization_step(shared)
    )


def control_task(shared: SharedState) -> int:
    """Run the model-following controller until the clock stops."""
    logger.debug("control task started")
    return run_periodic(shared.clock, CONTROL_PERIOD, lambda: control_step(shared))


def reference_task(shared: SharedState) -> int:
    """Generate the reference trajectory until the clock stops."""
    logger.debug("reference task started")
    return run_periodic(
        shared.clock, REFERENCE_PERIOD, lambda: reference_step(shared)
    )


def model_x_task(shared: SharedState) -> int:
    """Run the x-axis reference model until the clock stops."""
    logger.debug("reference model x task started")
    return run_periodic(
        shared.clock, MODEL_PERIOD, lambda: model_x_step(shared, MODEL_PERIOD)
    )


def model_y_task(shared: SharedState) -> int:
    """Run the y-axis reference model until the clock stops."""
    logger.debug("reference model y task started")
    return run_periodic(
        shared.clock, MODEL_PERIOD, lambda: model_y_step(shared, MODEL_PERIOD)
    )


def _write_line(stream: TextIO, line: str) -> str:
    stream.write(line + "\n")
    stream.flush()
    return line


def interface_task(shared: SharedState, out: TextIO | None = None) -> int:
    """Write a status line once per second until the clock stops.

    Returns the number of status lines written.
    """
    stream = sys.stdout if out is None else out
    return run_periodic(
        shared.clock,
        INTERFACE_PERIOD,
        lambda: _write_line(stream, format_status(shared)),
    )


def logger_task(shared: SharedState, path) -> int:
    """Write a CSV row every ``LOGGER_PERIOD`` seconds until the clock stops.

    Returns the number of rows written. Raises ``OSError`` if the file cannot
    be opened.
    """
    logger.debug("logger task started")
    with open(path, "w", newline="", encoding="utf-8") as fh:
        fh.write(LOG_HEADER + "\n")
        t = 0.0

        def write_row() -> None:
            nonlocal t
            _write_line(fh, format_log_row(shared, t))
            t += LOGGER_PERIOD

        rows = run_periodic(shared.clock, LOGGER_PERIOD, write_row)
    logger.debug("logger finished")
    return rows


def timer_task(
    clock: SimulationClock,
    duration: float = 20.0,
    interval: float = 0.1,
    out: TextIO | None = None,
) -> float:
    """Advance simulation time in ``interval`` steps, then request a stop.

    Returns the final value of the time counter.
    """
    if interval <= 0:
        raise ValueError(f"interval must be positive, got {interval!r}")
    stream = sys.stdout if out is None else out
    t = 0.0
    while t <= duration:
        clock.set_time(t)
        time.sleep(interval)
        t += interval
    clock.request_stop()
    _write_line(stream, f"[INFO] Simulation finished after {t:.2f}s")
    return t