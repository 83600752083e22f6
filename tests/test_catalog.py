"""
Unit Tests for Catalog Lookup

Run with:
    python -m pytest tests/test_catalog.py -v
"""

import unittest

from orbit_locator.catalog import (
    SatelliteNotFoundError,
    find_satellite,
    list_satellites,
    parse_catalog,
)

STARLINK_LINE1 = "1 44714U 19074B   25117.42924319 -.00001157  00000+0 -58773-4 0  9990"
STARLINK_LINE2 = "2 44714  53.0517 166.3609 0001116  99.1558 260.9557 15.06400606301084"
ISS_LINE1 = "1 25544U 98067A   23259.57580000  .00012022  00000-0  21844-3 0  9995"
ISS_LINE2 = "2 25544  51.6416 220.9944 0004263 122.0101 312.2755 15.49541986415598"

CATALOG = "\r\n".join(
    [
        "STARLINK-1008           ",
        STARLINK_LINE1,
        STARLINK_LINE2,
        "ISS (ZARYA)",
        ISS_LINE1,
        ISS_LINE2,
    ]
) + "\r\n"


class TestParseCatalog(unittest.TestCase):
    """Three-line catalog parsing."""

    def test_names_in_order(self):
        self.assertEqual(list_satellites(CATALOG), ["STARLINK-1008", "ISS (ZARYA)"])

    def test_lines_are_stripped(self):
        catalog = parse_catalog(CATALOG)
        self.assertEqual(catalog["STARLINK-1008"], (STARLINK_LINE1, STARLINK_LINE2))
        self.assertEqual(catalog["ISS (ZARYA)"], (ISS_LINE1, ISS_LINE2))

    def test_stray_lines_skipped(self):
        text = "garbage\n\n" + CATALOG + "trailing\n"
        self.assertEqual(list_satellites(text), ["STARLINK-1008", "ISS (ZARYA)"])

    def test_empty_text(self):
        self.assertEqual(parse_catalog(""), {})
        self.assertEqual(list_satellites(""), [])


class TestFindSatellite(unittest.TestCase):
    """Name lookup with exact-then-substring matching."""

    def test_exact_match(self):
        self.assertEqual(find_satellite(CATALOG, "ISS (ZARYA)"), (ISS_LINE1, ISS_LINE2))

    def test_substring_match(self):
        self.assertEqual(find_satellite(CATALOG, "ISS"), (ISS_LINE1, ISS_LINE2))

    def test_exact_match_preferred(self):
        text = "\n".join(["STARLINK-10080", ISS_LINE1, ISS_LINE2, "STARLINK-1008", STARLINK_LINE1, STARLINK_LINE2])
        self.assertEqual(find_satellite(text, "STARLINK-1008"), (STARLINK_LINE1, STARLINK_LINE2))

    def test_tle_lines_never_match(self):
        with self.assertRaises(SatelliteNotFoundError):
            find_satellite(CATALOG, "44714U")

    def test_missing_satellite(self):
        with self.assertRaises(SatelliteNotFoundError) as ctx:
            find_satellite(CATALOG, "HUBBLE")
        self.assertIsInstance(ctx.exception, KeyError)


if __name__ == "__main__":
    unittest.main()
