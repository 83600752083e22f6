"""
Secular Perturbation Model

Linear-in-time drift of the argument of perigee and the right ascension of
the ascending node caused by Earth's oblateness (a J2-like first-order term).
"""

import math
from typing import Tuple

from orbit_locator.constants import EARTH_RADIUS_KM, PERTURBATION_COEFFICIENT


def secular_rates(inclination: float, semi_major_axis: float) -> Tuple[float, float]:
    """
    Daily drift of argument of perigee and RAAN.

    Args:
        inclination: Inclination (deg)
        semi_major_axis: Semi-major axis (km)

    Returns:
        Tuple of (perigee_rate, raan_rate) in deg/day
    """
    i = math.radians(inclination)
    scale = 180.0 * PERTURBATION_COEFFICIENT / (
        math.pi * math.pow(semi_major_axis / EARTH_RADIUS_KM, 3.5)
    )
    perigee_rate = scale * (2.0 - 2.5 * math.sin(i) ** 2)
    raan_rate = -scale * math.cos(i)
    return perigee_rate, raan_rate


def secular_correction(
    raan0: float,
    arg_perigee0: float,
    inclination: float,
    semi_major_axis: float,
    elapsed_days: float,
) -> Tuple[float, float]:
    """
    Apply secular drift since epoch.

    Args:
        raan0: RAAN at epoch (deg)
        arg_perigee0: Argument of perigee at epoch (deg)
        inclination: Inclination (deg)
        semi_major_axis: Semi-major axis (km)
        elapsed_days: Time since epoch (days)

    Returns:
        Tuple of (arg_perigee, raan) in degrees
    """
    perigee_rate, raan_rate = secular_rates(inclination, semi_major_axis)
    arg_perigee = arg_perigee0 + perigee_rate * elapsed_days
    raan = raan0 + raan_rate * elapsed_days
    return arg_perigee, raan
