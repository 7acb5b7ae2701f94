"""Control laws and kinematics of the differential-drive robot."""

from __future__ import annotations

import math
from dataclasses import dataclass

#: Distance from the wheel axis centre to the controlled front point.
R = 0.3

#: Saturation limits of the virtual input v(t).
V_MAX = 1.0
W_MAX = 1.0

#: Saturation limits of the actuator input u(t).
U1_MAX = 1.0
U2_MAX = 3.0

#: Task periods in seconds.
SIM_PERIOD = 0.030
LINEARIZATION_PERIOD = 0.030
CONTROL_PERIOD = 0.050
MODEL_PERIOD = 0.050
REFERENCE_PERIOD = 0.120

#: Amplitude of the reference trajectory and its angular frequency.
REFERENCE_AMPLITUDE = 5.0 / math.pi
REFERENCE_OMEGA = 0.2 * math.pi
#: Time after which the y reference runs in the opposite direction.
REFERENCE_SWITCH_TIME = 10.0

_TWO_PI = 2.0 * math.pi


def saturate(value: float, limit: float) -> float:
    """Clamp ``value`` to the interval ``[-limit, limit]``."""
    if value > limit:
        return limit
    if value < -limit:
        return -limit
    return value


def wrap_angle(theta: float) -> float:
    """Bring an angle into ``[-pi, pi]``; angles already inside are unchanged."""
    if not math.isfinite(theta):
        raise ValueError(f"angle must be finite, got {theta!r}")
    if theta > math.pi:
        theta -= _TWO_PI * math.ceil((theta - math.pi) / _TWO_PI)
    elif theta < -math.pi:
        theta += _TWO_PI * math.ceil((-math.pi - theta) / _TWO_PI)
    # Guard against rounding left over from the bulk correction.
    while theta > math.pi:
        theta -= _TWO_PI
    while theta < -math.pi:
        theta += _TWO_PI
    return theta


def reference_signal(t: float) -> tuple[float, float]:
    """Reference point ``(xref, yref)`` at simulation time ``t``.

    The trajectory is a circle; after ``REFERENCE_SWITCH_TIME`` the y
    component changes sign so that the circle is travelled backwards.
    """
    phase = REFERENCE_OMEGA * t
    xref = REFERENCE_AMPLITUDE * math.cos(phase)
    yref = REFERENCE_AMPLITUDE * math.sin(phase)
    if t >= REFERENCE_SWITCH_TIME:
        yref = -yref
    return xref, yref


def reference_model_step(
    y_m: float, ref: float, alpha: float, dt: float
) -> tuple[float, float]:
    """One Euler step of the first-order model ``dy_m = alpha * (ref - y_m)``.

    Returns the new output and the derivative used for the step.
    """
    dy_m = alpha * (ref - y_m)
    return y_m + dy_m * dt, dy_m


def control_law(
    y: float, y_m: float, dy_m: float, alpha: float, limit: float = V_MAX
) -> float:
    """Model-following control ``v = dy_m + alpha * (y_m - y)``, saturated."""
    return saturate(dy_m + alpha * (y_m - y), limit)


def linearize(theta: float, v1: float, v2: float) -> tuple[float, float]:
    """Map the virtual input ``v`` to the actuator input ``u`` at heading ``theta``."""
    c, s = math.cos(theta), math.sin(theta)
    u1 = c * v1 + s * v2
    u2 = (-s * v1 + c * v2) / R
    return saturate(u1, U1_MAX), saturate(u2, U2_MAX)


@dataclass(frozen=True)
class Pose:
    """Position ``(x1, x2)`` and heading ``x3`` of the robot."""

    x1: float = 0.0
    x2: float = 0.0
    x3: float = 0.0

    def output(self) -> tuple[float, float]:
        """Position of the front point at distance ``R`` along the heading."""
        return self.x1 + R * math.cos(self.x3), self.x2 + R * math.sin(self.x3)

    def step(self, u1: float, u2: float, dt: float) -> Pose:
        """Pose after one Euler step with linear speed ``u1`` and turn rate ``u2``."""
        x1 = self.x1 + math.cos(self.x3) * u1 * dt
        x2 = self.x2 + math.sin(self.x3) * u1 * dt
        x3 = wrap_angle(self.x3 + u2 * dt)
        return Pose(x1, x2, x3)