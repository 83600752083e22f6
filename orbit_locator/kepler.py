"""
Kepler Equation Solver

Newton-Raphson solution of Kepler's equation E - e*sin(E) = M for the
eccentric anomaly of an elliptical orbit.

The solver always runs a fixed number of iterations (KEPLER_ITERATIONS) and
never exits early. Callers that need an accuracy check inspect the returned
residual |E_n - E_(n-1)| instead.
"""

import math
from typing import Iterator, Tuple

from orbit_locator.constants import KEPLER_ITERATIONS


def kepler_residual(E: float, e: float, M: float) -> float:
    """Evaluate f(E) = E - e*sin(E) - M."""
    return E - e * math.sin(E) - M


def newton_step(E: float, e: float, M: float) -> float:
    """One Newton-Raphson update E - f(E)/f'(E) with f'(E) = 1 - e*cos(E)."""
    return E - kepler_residual(E, e, M) / (1.0 - e * math.cos(E))


def kepler_iterates(e: float, M: float, iterations: int = KEPLER_ITERATIONS) -> Iterator[float]:
    """
    Yield successive eccentric anomaly iterates, starting from E0 = M.

    Args:
        e: Eccentricity (0 <= e < 1, not checked)
        M: Mean anomaly (rad)
        iterations: Number of Newton-Raphson steps

    Yields:
        E_1 ... E_n (rad)
    """
    E = M
    for _ in range(iterations):
        E = newton_step(E, e, M)
        yield E


def solve_kepler(e: float, M: float) -> Tuple[float, float]:
    """
    Solve Kepler's equation for eccentric anomaly.

    Args:
        e: Eccentricity
        M: Mean anomaly (rad)

    Returns:
        Tuple of (E, residual) where residual is |E_n - E_(n-1)| of the last step
    """
    before = M
    after = M
    residual = 0.0
    for after in kepler_iterates(e, M, KEPLER_ITERATIONS):
        residual = abs(after - before)
        before = after
    return after, residual
