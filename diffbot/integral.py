"""Numerical integration rules used by the robot simulation."""

from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)

Function = Callable[[float], float]


def _validate(name: str, f: Function | None, n: int) -> None:
    if f is None or not callable(f):
        raise TypeError(f"{name}: the integrand must be callable")
    if n <= 0:
        raise ValueError(f"{name}: invalid number of subdivisions: n={n}")


def midpoint_rule(f: Function, a: float, b: float, n: int) -> float:
    """Approximate the integral of ``f`` over ``[a, b]`` with ``n`` midpoints.

    Raises ``ValueError`` when the interval is empty (``a == b``).
    """
    _validate("midpoint_rule", f, n)
    if a == b:
        raise ValueError(f"midpoint_rule: empty interval: a == b == {a}")

    width = (b - a) / n
    total = sum(f(a + (i + 0.5) * width) for i in range(n))
    result = total * width
    logger.debug("midpoint_rule - approximate integral: %f", result)
    return result


def composite_trapezoidal(f: Function, a: float, b: float, n: int) -> float:
    """Approximate the integral of ``f`` over ``[a, b]`` with ``n`` trapezoids.

    An empty interval (``a == b``) yields ``0.0``.
    """
    _validate("composite_trapezoidal", f, n)
    if a == b:
        logger.debug("composite_trapezoidal - empty interval: a == b == %f", a)
        return 0.0

    h = (b - a) / n
    total = f(a) + f(b) + 2.0 * sum(f(a + i * h) for i in range(1, n))
    result = (h / 2.0) * total
    logger.debug("composite_trapezoidal - approximate integral: %f", result)
    return result