"""
Orbit Data Models

Immutable value types shared by the decoder, the propagator and the
reporting collaborators.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class OrbitalElements(BaseModel):
    """Classical orbital elements of one satellite at its TLE epoch."""

    model_config = ConfigDict(frozen=True)

    mean_anomaly: float  # M0 [deg]
    mean_motion: float = Field(gt=0.0)  # M1 [rev/day]
    mean_motion_dot: float  # M2 [rev/day^2]
    eccentricity: float = Field(ge=0.0, lt=1.0)
    epoch_year: int
    epoch_day: float  # 1-based fractional day of year
    inclination: float  # [deg]
    raan: float  # [deg]
    arg_of_perigee: float  # [deg]

    # Catalog metadata, not used by the propagator
    name: str = ""
    norad_id: Optional[int] = None
    classification: Optional[str] = None
    international_designator: Optional[str] = None
    bstar: Optional[float] = None
    element_number: Optional[int] = None
    revolution_number: Optional[int] = None

    @property
    def epoch(self) -> datetime:
        """Epoch as a UTC datetime (day 1.0 is January 1st, 00:00)."""
        start = datetime(self.epoch_year, 1, 1, tzinfo=timezone.utc)
        return start + timedelta(days=self.epoch_day - 1.0)


class SatLocation(BaseModel):
    """Satellite position in the Earth-fixed frame and on a spherical Earth."""

    model_config = ConfigDict(frozen=True)

    x: float  # [km]
    y: float  # [km]
    z: float  # [km]
    latitude: float  # [deg]
    longitude: float  # [deg]
    altitude: float  # [km]
    velocity: Optional[float] = None  # [km/s]

    @property
    def position(self):
        return (self.x, self.y, self.z)
