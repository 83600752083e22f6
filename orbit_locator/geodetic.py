"""
Geodetic projection on a spherical Earth.

No flattening correction is applied; latitude is geocentric and altitude is
measured above a sphere of radius EARTH_RADIUS_KM.
"""

import math
from typing import Tuple

from orbit_locator.constants import EARTH_RADIUS_KM


def project(x: float, y: float, z: float) -> Tuple[float, float, float]:
    """
    Convert Earth-fixed Cartesian coordinates to latitude, longitude, altitude.

    Args:
        x, y, z: Earth-fixed position (km)

    Returns:
        Tuple of (latitude_deg, longitude_deg, altitude_km). At the origin
        latitude and longitude are NaN.
    """
    r = math.sqrt(x * x + y * y + z * z)
    altitude = r - EARTH_RADIUS_KM
    if r == 0.0:
        return math.nan, math.nan, altitude
    latitude = math.degrees(math.asin(z / r))
    longitude = math.degrees(math.atan2(y, x))
    return latitude, longitude, altitude
