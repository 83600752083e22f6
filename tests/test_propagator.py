"""
Unit Tests for the Analytical Propagator

Checks the stage chain end to end on the STARLINK-1008 element set, and
compares the epoch state with the reference sgp4 library where the two models
should agree.

Run with:
    python -m pytest tests/test_propagator.py -v
"""

import logging
import math
import unittest
from datetime import datetime, timedelta, timezone

import numpy as np
from sgp4.api import Satrec

from orbit_locator.constants import EARTH_RADIUS_KM
from orbit_locator.kepler import kepler_residual
from orbit_locator.propagator import (
    PropagationError,
    Propagator,
    TargetBeforeEpochError,
    mean_anomaly_at,
    propagate,
    semi_axes,
    velocity_estimate,
)
from orbit_locator.tle_parser import decode_tle

STARLINK_LINE1 = "1 44714U 19074B   25117.42924319 -.00001157  00000+0 -58773-4 0  9990"
STARLINK_LINE2 = "2 44714  53.0517 166.3609 0001116  99.1558 260.9557 15.06400606301084"


class TestHelpers(unittest.TestCase):
    """Semi-axes and mean anomaly."""

    def test_semi_axes_starlink(self):
        a, b = semi_axes(15.06400606)
        self.assertAlmostEqual(a, 6925.347, places=2)
        self.assertLess(b, a)
        self.assertAlmostEqual(b / a, math.sqrt(1.0 - 0.0001679 ** 2), places=12)

    def test_semi_axes_geostationary(self):
        a, _ = semi_axes(1.00273791)
        self.assertAlmostEqual(a, 42164.0, delta=5.0)

    def test_mean_anomaly_at_epoch(self):
        self.assertAlmostEqual(
            mean_anomaly_at(260.9557, 15.06400606, -0.00001157, 0.0),
            math.radians(260.9557),
            places=12,
        )

    def test_mean_anomaly_wraps_full_turns(self):
        self.assertAlmostEqual(mean_anomaly_at(400.0, 1.0, 0.0, 0.0), math.radians(40.0), places=12)
        self.assertAlmostEqual(mean_anomaly_at(0.0, 1.0, 0.0, 2.25), math.pi / 2, places=12)

    def test_mean_anomaly_quadratic_term(self):
        # 1.0 rev/day for one day plus 0.5 * 0.2 rev/day^2 -> 1.1 rev
        self.assertAlmostEqual(mean_anomaly_at(0.0, 1.0, 0.2, 1.0), 0.1 * 2.0 * math.pi, places=9)


class TestStarlinkPropagation(unittest.TestCase):
    """End-to-end propagation of STARLINK-1008."""

    def setUp(self):
        self.elements = decode_tle(STARLINK_LINE1, STARLINK_LINE2, "STARLINK-1008")
        self.propagator = Propagator()

    def test_epoch_identity(self):
        """At the epoch the mean anomaly is reproduced unperturbed."""
        state = self.propagator.propagate_state(self.elements, self.elements.epoch)
        self.assertEqual(state.elapsed_days, 0.0)
        self.assertAlmostEqual(state.mean_anomaly, math.radians(260.9557 % 360.0), places=12)
        self.assertEqual(state.raan, self.elements.raan)
        self.assertEqual(state.arg_of_perigee, self.elements.arg_of_perigee)

    def test_eccentric_anomaly_close_to_mean_anomaly(self):
        state = self.propagator.propagate_state(self.elements, self.elements.epoch)
        e = self.elements.eccentricity
        self.assertLessEqual(abs(state.eccentric_anomaly - state.mean_anomaly), e)
        self.assertLess(abs(kepler_residual(state.eccentric_anomaly, e, state.mean_anomaly)), 1e-9)

    def test_altitude_in_leo_band(self):
        for days in (0.0, 0.3, 1.0, 10.0):
            location = propagate(self.elements, self.elements.epoch + timedelta(days=days))
            self.assertGreaterEqual(location.altitude, 350.0)
            self.assertLessEqual(location.altitude, 650.0)

    def test_altitude_matches_radius(self):
        location = propagate(self.elements, self.elements.epoch + timedelta(hours=5))
        radius = float(np.linalg.norm(location.position))
        self.assertAlmostEqual(location.altitude, radius - EARTH_RADIUS_KM, places=9)

    def test_latitude_bounded_by_inclination(self):
        for minutes in range(0, 100, 7):
            location = propagate(self.elements, self.elements.epoch + timedelta(minutes=minutes))
            self.assertLessEqual(abs(location.latitude), self.elements.inclination + 1e-6)

    def test_before_epoch_raises(self):
        with self.assertRaises(TargetBeforeEpochError) as ctx:
            propagate(self.elements, self.elements.epoch - timedelta(days=1))
        self.assertIsInstance(ctx.exception, PropagationError)
        self.assertIsInstance(ctx.exception, RuntimeError)
        self.assertAlmostEqual(ctx.exception.elapsed_days, -1.0)

    def test_one_second_before_epoch_raises(self):
        with self.assertRaises(TargetBeforeEpochError):
            propagate(self.elements, self.elements.epoch - timedelta(seconds=1))

    def test_naive_target_is_utc(self):
        target = datetime(2025, 5, 1, 12, 0, 0)
        naive = propagate(self.elements, target)
        aware = propagate(self.elements, target.replace(tzinfo=timezone.utc))
        self.assertEqual(naive, aware)

    def test_velocity_estimate(self):
        target = self.elements.epoch + timedelta(hours=2)
        speed = velocity_estimate(self.elements, target)
        self.assertGreater(speed, 6.5)
        self.assertLess(speed, 8.0)

    def test_locate_populates_velocity(self):
        target = self.elements.epoch + timedelta(hours=2)
        location = self.propagator.locate(self.elements, target)
        self.assertIsNotNone(location.velocity)
        self.assertAlmostEqual(location.velocity, self.propagator.velocity_estimate(self.elements, target))
        self.assertIsNone(self.propagator.propagate(self.elements, target).velocity)

    def test_deterministic(self):
        target = datetime(2025, 5, 3, 8, 30, tzinfo=timezone.utc)
        self.assertEqual(propagate(self.elements, target), propagate(self.elements, target))


class TestAgainstSGP4(unittest.TestCase):
    """Coarse agreement with SGP4 at the element epoch."""

    def test_epoch_radius_and_latitude(self):
        elements = decode_tle(STARLINK_LINE1, STARLINK_LINE2)
        satrec = Satrec.twoline2rv(STARLINK_LINE1, STARLINK_LINE2)
        error, r, _ = satrec.sgp4(satrec.jdsatepoch, satrec.jdsatepochF)
        self.assertEqual(error, 0)

        location = propagate(elements, elements.epoch)
        r_sgp4 = float(np.linalg.norm(r))
        self.assertAlmostEqual(np.linalg.norm(location.position), r_sgp4, delta=20.0)
        # Latitude depends only on z / r, which both Earth-fixed rotations preserve
        latitude_sgp4 = math.degrees(math.asin(r[2] / r_sgp4))
        self.assertAlmostEqual(location.latitude, latitude_sgp4, delta=1.0)


class TestYearBoundary(unittest.TestCase):
    """Elapsed time is measured from the epoch instant, across year ends."""

    def test_epoch_in_previous_year(self):
        elements = decode_tle(STARLINK_LINE1, STARLINK_LINE2).model_copy(
            update={"epoch_year": 2024, "epoch_day": 366.5}
        )
        propagator = Propagator()
        elapsed = propagator.elapsed_days(elements, datetime(2025, 1, 1, tzinfo=timezone.utc))
        self.assertAlmostEqual(elapsed, 0.5, places=9)


class TestStageLogging(unittest.TestCase):
    """Each stage is reported at DEBUG level to the injected logger."""

    def test_stage_debug_output(self):
        logger = logging.getLogger("test.propagator")
        propagator = Propagator(logger=logger)
        elements = decode_tle(STARLINK_LINE1, STARLINK_LINE2)
        with self.assertLogs(logger, level="DEBUG") as captured:
            propagator.locate(elements, elements.epoch + timedelta(minutes=30))
        output = "\n".join(captured.output)
        for marker in ("t_diff=", "fracM=", "eccentricAnomaly=", "thetaG=", "alt=", "V="):
            self.assertIn(marker, output)


if __name__ == "__main__":
    unittest.main()
