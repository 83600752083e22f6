"""
Orbit Locator Package

Simplified analytical satellite propagation from Two-Line Element sets:
Kepler solve, secular J2-like drift, frame rotations and a spherical-Earth
geodetic projection.

Modules:
    tle_parser: Fixed-column TLE decoding
    kepler: Fixed-iteration Kepler equation solver
    perturbation: Secular drift of perigee and node
    frames: Orbital plane, equatorial and Earth-fixed transforms
    geodetic: Spherical latitude, longitude and altitude
    propagator: Stage orchestration and velocity estimate
    catalog, fetcher, tracker, kml, cli: Catalog handling and reporting
"""

from orbit_locator.models import OrbitalElements, SatLocation
from orbit_locator.propagator import (
    PropagationError,
    Propagator,
    TargetBeforeEpochError,
    propagate,
    velocity_estimate,
)
from orbit_locator.tle_parser import TLEParseError, TLEParser, decode_tle

__version__ = "1.0.0"

__all__ = [
    "OrbitalElements",
    "SatLocation",
    "PropagationError",
    "Propagator",
    "TargetBeforeEpochError",
    "propagate",
    "velocity_estimate",
    "TLEParseError",
    "TLEParser",
    "decode_tle",
]
