"""
Coordinate Frame Transformations

Chained transforms used by the propagator:

1. orbital plane: focus-centred position on the ellipse
2. orbital plane -> equatorial (pseudo-inertial) frame,
   R_z(raan) @ R_x(inclination) @ R_z(arg_perigee)
3. equatorial -> Earth-fixed frame, R_z(-theta) with theta from a linear
   sidereal model anchored at 2006-01-01T00:00:00Z

All rotations are right-handed and active: R_z(a) rotates a vector by +a
about the z-axis. A wrong sign or order still produces a plausible position,
so the reference states in tests/test_frames.py pin these conventions.
"""

import math
from datetime import datetime, timezone
from typing import Tuple

import numpy as np

from orbit_locator.constants import (
    SECONDS_PER_DAY,
    SIDEREAL_CYCLES_AT_REFERENCE,
    SIDEREAL_CYCLES_PER_DAY,
    SIDEREAL_REFERENCE_EPOCH,
    TWOPI,
)


def rotation_x(angle: float) -> np.ndarray:
    """Rotation matrix about the x-axis (angle in radians)."""
    c = math.cos(angle)
    s = math.sin(angle)
    return np.array([
        [1.0, 0.0, 0.0],
        [0.0, c, -s],
        [0.0, s, c],
    ])


def rotation_z(angle: float) -> np.ndarray:
    """Rotation matrix about the z-axis (angle in radians)."""
    c = math.cos(angle)
    s = math.sin(angle)
    return np.array([
        [c, -s, 0.0],
        [s, c, 0.0],
        [0.0, 0.0, 1.0],
    ])


def orbital_plane_position(a: float, e: float, E: float) -> Tuple[float, float]:
    """
    Position in the orbital plane with the origin at the focus.

    Args:
        a: Semi-major axis (km)
        e: Eccentricity
        E: Eccentric anomaly (rad)

    Returns:
        Tuple of (u, v) in km; the out-of-plane component is zero
    """
    u = a * math.cos(E) - a * e
    v = a * math.sqrt(1.0 - e * e) * math.sin(E)
    return u, v


def perifocal_to_equatorial_matrix(
    arg_perigee: float, inclination: float, raan: float
) -> np.ndarray:
    """Composed rotation R_z(raan) @ R_x(inclination) @ R_z(arg_perigee), radians."""
    return rotation_z(raan) @ rotation_x(inclination) @ rotation_z(arg_perigee)


def orbital_to_equatorial(
    u: float, v: float, arg_perigee: float, inclination: float, raan: float
) -> np.ndarray:
    """
    Rotate orbital-plane coordinates into the equatorial frame.

    Args:
        u, v: Orbital-plane position (km)
        arg_perigee: Argument of perigee (rad)
        inclination: Inclination (rad)
        raan: Right ascension of ascending node (rad)

    Returns:
        Equatorial position [x, y, z] (km)
    """
    rotation = perifocal_to_equatorial_matrix(arg_perigee, inclination, raan)
    return rotation @ np.array([u, v, 0.0])


def to_utc(timestamp: datetime) -> datetime:
    """Interpret naive datetimes as UTC and convert aware ones to UTC."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def greenwich_sidereal_angle(timestamp: datetime) -> float:
    """
    Greenwich sidereal angle from the linear reference-epoch model.

    Only the fractional part of the accumulated cycles is used (truncated
    toward zero, so instants before the reference epoch give a negative angle
    of the same orientation).

    Args:
        timestamp: UTC instant (naive values are taken as UTC)

    Returns:
        Sidereal angle theta (rad)
    """
    elapsed = (to_utc(timestamp) - SIDEREAL_REFERENCE_EPOCH).total_seconds() / SECONDS_PER_DAY
    cycles = SIDEREAL_CYCLES_AT_REFERENCE + SIDEREAL_CYCLES_PER_DAY * elapsed
    fraction, _ = math.modf(cycles)
    return fraction * TWOPI


def equatorial_to_earth_fixed(position: np.ndarray, timestamp: datetime) -> np.ndarray:
    """
    Rotate an equatorial position into the Earth-fixed frame.

    Args:
        position: Equatorial position [x, y, z] (km)
        timestamp: UTC instant

    Returns:
        Earth-fixed position [X, Y, Z] (km)
    """
    theta = greenwich_sidereal_angle(timestamp)
    return rotation_z(-theta) @ np.asarray(position, dtype=float)
