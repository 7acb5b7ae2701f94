"""Lock-protected records shared between the simulation tasks."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, fields
from typing import Any


class Monitor:
    """Base for dataclass records whose fields are read and written under a lock."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "_lock", threading.Lock())

    def snapshot(self) -> dict[str, Any]:
        """Consistent copy of all fields, read under the lock."""
        with self._lock:
            return {f.name: getattr(self, f.name) for f in fields(self)}

    def update(self, **kwargs: Any) -> None:
        """Set several fields at once, under the lock."""
        names = {f.name for f in fields(self)}
        unknown = set(kwargs) - names
        if unknown:
            raise TypeError(
                f"{type(self).__name__} has no field(s): {', '.join(sorted(unknown))}"
            )
        with self._lock:
            for name, value in kwargs.items():
                setattr(self, name, value)


@dataclass
class RobotState(Monitor):
    """Robot pose (x1, x2, theta as x3) and front-point output (y1, y2)."""

    x1: float = 0.0
    x2: float = 0.0
    x3: float = 0.0
    y1: float = 0.0
    y2: float = 0.0


@dataclass
class Command(Monitor):
    """Virtual control input v(t)."""

    v1: float = 0.0
    v2: float = 0.0


@dataclass
class Linearization(Monitor):
    """Actuator input u(t) produced by feedback linearization."""

    u1: float = 0.0
    u2: float = 0.0


@dataclass
class Reference(Monitor):
    """Reference trajectory point."""

    xref: float = 0.0
    yref: float = 0.0


@dataclass
class ReferenceModel(Monitor):
    """Reference-model output and its derivative for one axis."""

    y_m: float = 0.0
    dy_m: float = 0.0


@dataclass
class Parameters(Monitor):
    """Controller gains."""

    alpha1: float = 3.0
    alpha2: float = 3.0


@dataclass
class SimulationClock(Monitor):
    """Current simulation time and the shutdown flag."""

    time: float = 0.0
    stop_requested: bool = False

    def now(self) -> float:
        with self._lock:
            return self.time

    def set_time(self, t: float) -> None:
        with self._lock:
            self.time = t

    def request_stop(self) -> None:
        with self._lock:
            self.stop_requested = True

    def stopped(self) -> bool:
        with self._lock:
            return self.stop_requested


@dataclass
class SharedState:
    """All monitors used by one simulation run."""

    state: RobotState = field(default_factory=RobotState)
    command: Command = field(default_factory=Command)
    linearization: Linearization = field(default_factory=Linearization)
    reference: Reference = field(default_factory=Reference)
    model_x: ReferenceModel = field(default_factory=ReferenceModel)
    model_y: ReferenceModel = field(default_factory=ReferenceModel)
    parameters: Parameters = field(default_factory=Parameters)
    clock: SimulationClock = field(default_factory=SimulationClock)