"""
Simplified Analytical Propagator

Drives one propagation from OrbitalElements to a SatLocation:

    elapsed time -> semi-axes -> mean anomaly -> Kepler solve
    -> orbital plane -> secular perturbation -> equatorial frame
    -> Earth-fixed frame -> spherical geodetic projection

Every stage consumes only the previous stage's output plus the static
elements. Velocity is a finite difference of two propagations one second
apart, which is adequate on low Earth orbit timescales only.

The model does not propagate backwards: a target instant before the element
epoch raises TargetBeforeEpochError.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import NamedTuple, Optional, Tuple

import numpy as np

from orbit_locator.constants import (
    MU_SCALED,
    SECONDS_PER_DAY,
    SEMI_MINOR_FACTOR,
    TWOPI,
    VELOCITY_SAMPLE_SECONDS,
)
from orbit_locator.frames import (
    equatorial_to_earth_fixed,
    greenwich_sidereal_angle,
    orbital_plane_position,
    orbital_to_equatorial,
    to_utc,
)
from orbit_locator.geodetic import project
from orbit_locator.kepler import solve_kepler
from orbit_locator.models import OrbitalElements, SatLocation
from orbit_locator.perturbation import secular_correction


class PropagationError(RuntimeError):
    """Base class for propagation failures."""


class TargetBeforeEpochError(PropagationError):
    """Raised when the target instant precedes the element epoch."""

    def __init__(self, target: datetime, epoch: datetime, elapsed_days: float):
        self.target = target
        self.epoch = epoch
        self.elapsed_days = elapsed_days
        super().__init__(
            f"Target time {target.isoformat()} is before element epoch "
            f"{epoch.isoformat()} ({elapsed_days:.6f} days)"
        )


class OrbitState(NamedTuple):
    """Intermediate quantities of a single propagation."""

    elapsed_days: float
    semi_major_axis: float  # km
    semi_minor_axis: float  # km
    mean_anomaly: float  # rad
    eccentric_anomaly: float  # rad
    kepler_residual: float  # rad
    u: float  # km
    v: float  # km
    arg_of_perigee: float  # deg, perturbed
    raan: float  # deg, perturbed
    equatorial: np.ndarray  # km
    sidereal_angle: float  # rad
    location: SatLocation


def semi_axes(mean_motion: float) -> Tuple[float, float]:
    """
    Semi-major and semi-minor axes from mean motion (Kepler's third law).

    Args:
        mean_motion: Mean motion (rev/day)

    Returns:
        Tuple of (a, b) in km. b is informational only.
    """
    a = math.pow(MU_SCALED / (4.0 * math.pi * math.pi * mean_motion * mean_motion), 1.0 / 3.0)
    b = math.sqrt(a * a - a * a * SEMI_MINOR_FACTOR * SEMI_MINOR_FACTOR)
    return a, b


def mean_anomaly_at(
    mean_anomaly0: float, mean_motion: float, mean_motion_dot: float, elapsed_days: float
) -> float:
    """
    Mean anomaly at the target time.

    Args:
        mean_anomaly0: Mean anomaly at epoch (deg)
        mean_motion: Mean motion (rev/day)
        mean_motion_dot: First derivative of mean motion (rev/day^2)
        elapsed_days: Time since epoch (days)

    Returns:
        Fractional-revolution mean anomaly (rad)
    """
    revolutions = (
        mean_anomaly0 / 360.0
        + mean_motion * elapsed_days
        + 0.5 * mean_motion_dot * elapsed_days * elapsed_days
    )
    fraction, _ = math.modf(revolutions)
    return fraction * TWOPI


class Propagator:
    """
    Analytical propagator for TLE orbital elements.

    Args:
        logger: Logger receiving per-stage DEBUG output. Defaults to this
            module's logger; its level is set by logging configuration, not here.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    def elapsed_days(self, elements: OrbitalElements, target: datetime) -> float:
        """
        Days from the element epoch to the target instant.

        Raises:
            TargetBeforeEpochError: If the target precedes the epoch
        """
        target = to_utc(target)
        epoch = elements.epoch
        elapsed = (target - epoch).total_seconds() / SECONDS_PER_DAY
        if elapsed < 0.0:
            raise TargetBeforeEpochError(target, epoch, elapsed)
        return elapsed

    def propagate_state(self, elements: OrbitalElements, target: datetime) -> OrbitState:
        """
        Propagate elements to the target instant, keeping every intermediate.

        Args:
            elements: Orbital elements at epoch
            target: Target instant (UTC; naive values are taken as UTC)

        Returns:
            OrbitState with the final SatLocation in ``location``
        """
        target = to_utc(target)
        log = self.logger
        log.debug(f"targetTime={target.isoformat()}")

        t_diff = self.elapsed_days(elements, target)
        log.debug(f"t_diff={t_diff} [day]")

        a, b = semi_axes(elements.mean_motion)
        ecc = elements.eccentricity
        log.debug(f"a={a} [km] b={b} [km] ecc={ecc}")

        mean_anomaly = mean_anomaly_at(
            elements.mean_anomaly, elements.mean_motion, elements.mean_motion_dot, t_diff
        )
        log.debug(f"fracM={mean_anomaly} [rad]")

        eccentric_anomaly, residual = solve_kepler(ecc, mean_anomaly)
        log.debug(f"eccentricAnomaly={eccentric_anomaly} [rad] residual={residual}")

        u, v = orbital_plane_position(a, ecc, eccentric_anomaly)
        log.debug(f"u={u} [km] v={v} [km]")

        arg_perigee, raan = secular_correction(
            elements.raan, elements.arg_of_perigee, elements.inclination, a, t_diff
        )
        log.debug(f"argOfPerigee={arg_perigee} [deg] raan={raan} [deg]")

        equatorial = orbital_to_equatorial(
            u, v, math.radians(arg_perigee), math.radians(elements.inclination), math.radians(raan)
        )
        log.debug(f"x={equatorial[0]} y={equatorial[1]} z={equatorial[2]} [km]")

        theta = greenwich_sidereal_angle(target)
        earth_fixed = equatorial_to_earth_fixed(equatorial, target)
        log.debug(f"thetaG={math.degrees(theta)} [deg]")
        log.debug(f"X={earth_fixed[0]} Y={earth_fixed[1]} Z={earth_fixed[2]} [km]")

        x, y, z = (float(c) for c in earth_fixed)
        latitude, longitude, altitude = project(x, y, z)
        log.debug(f"lat={latitude} [deg] lon={longitude} [deg] alt={altitude} [km]")

        location = SatLocation(
            x=x, y=y, z=z, latitude=latitude, longitude=longitude, altitude=altitude
        )
        return OrbitState(
            elapsed_days=t_diff,
            semi_major_axis=a,
            semi_minor_axis=b,
            mean_anomaly=mean_anomaly,
            eccentric_anomaly=eccentric_anomaly,
            kepler_residual=residual,
            u=u,
            v=v,
            arg_of_perigee=arg_perigee,
            raan=raan,
            equatorial=equatorial,
            sidereal_angle=theta,
            location=location,
        )

    def propagate(self, elements: OrbitalElements, target: datetime) -> SatLocation:
        """Position at the target instant (velocity left unset)."""
        return self.propagate_state(elements, target).location

    def velocity_estimate(self, elements: OrbitalElements, target: datetime) -> float:
        """
        Earth-fixed speed by finite difference over one second.

        Returns:
            Speed in km/s
        """
        first = self.propagate(elements, target)
        second = self.propagate(elements, to_utc(target) + timedelta(seconds=VELOCITY_SAMPLE_SECONDS))
        return self._speed(first, second)

    def locate(self, elements: OrbitalElements, target: datetime) -> SatLocation:
        """Position at the target instant with velocity populated."""
        first = self.propagate(elements, target)
        second = self.propagate(elements, to_utc(target) + timedelta(seconds=VELOCITY_SAMPLE_SECONDS))
        return first.model_copy(update={"velocity": self._speed(first, second)})

    def _speed(self, first: SatLocation, second: SatLocation) -> float:
        diff = np.subtract(second.position, first.position)
        velocity = float(np.linalg.norm(diff)) / VELOCITY_SAMPLE_SECONDS
        self.logger.debug(
            f"DiffX={diff[0]:f} DiffY={diff[1]:f} DiffZ={diff[2]:f} [km] V={velocity:f} [km/s]"
        )
        return velocity


_default_propagator = Propagator()


def propagate(elements: OrbitalElements, target: datetime) -> SatLocation:
    """Propagate with a default Propagator."""
    return _default_propagator.propagate(elements, target)


def velocity_estimate(elements: OrbitalElements, target: datetime) -> float:
    """Finite-difference speed with a default Propagator."""
    return _default_propagator.velocity_estimate(elements, target)
