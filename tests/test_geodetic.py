"""
Unit Tests for the Spherical Geodetic Projection

Run with:
    python -m pytest tests/test_geodetic.py -v
"""

import math
import unittest

from orbit_locator.constants import EARTH_RADIUS_KM
from orbit_locator.geodetic import project


class TestProject(unittest.TestCase):
    """Earth-fixed Cartesian to latitude, longitude and altitude."""

    def test_prime_meridian_on_surface(self):
        lat, lon, alt = project(EARTH_RADIUS_KM, 0.0, 0.0)
        self.assertEqual((lat, lon), (0.0, 0.0))
        self.assertAlmostEqual(alt, 0.0)

    def test_north_pole(self):
        lat, _, alt = project(0.0, 0.0, EARTH_RADIUS_KM + 500.0)
        self.assertAlmostEqual(lat, 90.0)
        self.assertAlmostEqual(alt, 500.0)

    def test_longitude_quadrants(self):
        r = EARTH_RADIUS_KM + 550.0
        self.assertAlmostEqual(project(0.0, r, 0.0)[1], 90.0)
        self.assertAlmostEqual(project(0.0, -r, 0.0)[1], -90.0)
        self.assertAlmostEqual(project(-r, 0.0, 0.0)[1], 180.0)

    def test_latitude_is_geocentric(self):
        lat, lon, _ = project(1000.0, 1000.0, math.sqrt(2.0) * 1000.0)
        self.assertAlmostEqual(lat, 45.0)
        self.assertAlmostEqual(lon, 45.0)

    def test_ranges(self):
        for x, y, z in [(-3000.0, -4000.0, -5000.0), (6000.0, -1.0, 2500.0), (-1.0, 1e-9, 7000.0)]:
            lat, lon, _ = project(x, y, z)
            self.assertTrue(-90.0 <= lat <= 90.0)
            self.assertTrue(-180.0 <= lon <= 180.0)

    def test_origin_yields_nan(self):
        lat, lon, alt = project(0.0, 0.0, 0.0)
        self.assertTrue(math.isnan(lat))
        self.assertTrue(math.isnan(lon))
        self.assertAlmostEqual(alt, -EARTH_RADIUS_KM)


if __name__ == "__main__":
    unittest.main()
