"""
Physical Constants and Reference Data

Constants used by the simplified analytical propagator, plus a fallback TLE
for demonstrations and testing when no catalog is available.

The propagator works on a spherical Earth of radius EARTH_RADIUS_KM. The same
radius feeds both the secular perturbation term and the altitude computation;
the PERTURBATION_COEFFICIENT was derived against it, so the two must not be
changed independently.
"""

import math
from datetime import datetime, timezone
from typing import Dict, Any

DEG2RAD = math.pi / 180.0
RAD2DEG = 180.0 / math.pi
TWOPI = 2.0 * math.pi
SECONDS_PER_DAY = 86400.0

# Mean Earth radius (km), used for perturbations and altitude
EARTH_RADIUS_KM: float = 6356.752

# Gravitational parameter folded with the day-to-second conversion (km^3/day^2)
MU_SCALED: float = 2.975537e15

# Flattening-like factor for the informational semi-minor axis
SEMI_MINOR_FACTOR: float = 0.0001679

# Secular drift coefficient for nodal regression and perigee advance (deg/day)
PERTURBATION_COEFFICIENT: float = 0.174

# Linear sidereal model anchored at 2006-01-01T00:00:00Z
SIDEREAL_REFERENCE_EPOCH: datetime = datetime(2006, 1, 1, tzinfo=timezone.utc)
SIDEREAL_CYCLES_AT_REFERENCE: float = 0.27644444444
SIDEREAL_CYCLES_PER_DAY: float = 1.002737909

# Fixed Newton-Raphson iteration count for Kepler's equation
KEPLER_ITERATIONS: int = 10

# Finite-difference interval for velocity estimation (seconds)
VELOCITY_SAMPLE_SECONDS: float = 1.0

# Fallback STARLINK-1008 TLE (CelesTrak, 2025-04-28)
FALLBACK_TLE: Dict[str, Any] = {
    "name": "STARLINK-1008",
    "norad_id": 44714,
    "line1": "1 44714U 19074B   25117.42924319 -.00001157  00000+0 -58773-4 0  9990",
    "line2": "2 44714  53.0517 166.3609 0001116  99.1558 260.9557 15.06400606301084",
}
