"""
TLE Parser Module

Decodes Two-Line Element (TLE) sets into OrbitalElements.

Fields are read by fixed column (0-indexed, end-exclusive) rather than by
splitting on whitespace: adjacent fields may abut and several carry embedded
sign characters. Every numeric field that fails to parse raises TLEParseError
naming the field and the offending text; no default is ever substituted.
"""

import logging
import math
import re
from typing import Callable, Dict, Optional, Tuple

from pydantic import ValidationError

from orbit_locator.models import OrbitalElements

TLE_LINE_LENGTH = 69

# (start, end) columns of every field read from each line
LINE1_FIELDS: Dict[str, Tuple[int, int]] = {
    "norad_id": (2, 7),
    "classification": (7, 8),
    "international_designator": (9, 17),
    "epoch_year": (18, 20),
    "epoch_day": (20, 32),
    "mean_motion_dot": (33, 43),
    "bstar": (53, 61),
    "element_number": (64, 68),
}
LINE2_FIELDS: Dict[str, Tuple[int, int]] = {
    "inclination": (8, 16),
    "raan": (17, 25),
    "eccentricity": (26, 33),
    "arg_of_perigee": (34, 42),
    "mean_anomaly": (43, 51),
    "mean_motion": (52, 63),
    "revolution_number": (63, 68),
}

# Implied-decimal exponent notation, e.g. "-58773-4" == -0.58773e-4
_EXPONENT_RE = re.compile(r"^([+-]?)(\d{1,5})([+-])(\d)$")


class TLEParseError(ValueError):
    """Raised when a TLE field cannot be decoded."""

    def __init__(self, field: str, raw: str, reason: str = "malformed value"):
        self.field = field
        self.raw = raw
        self.reason = reason
        super().__init__(f"TLE field '{field}': {reason} ({raw!r})")


def compute_checksum(line: str) -> int:
    """
    Compute the TLE checksum of a line.

    Sum of all digits in the first 68 columns plus 1 for each minus sign,
    modulo 10.
    """
    checksum = 0
    for char in line[:68]:
        if char.isdigit():
            checksum += int(char)
        elif char == "-":
            checksum += 1
    return checksum % 10


def verify_checksum(line: str, line_number: int) -> None:
    """Raise TLEParseError if the checksum column of a line does not match."""
    expected = line[68:69]
    if not expected.isdigit() or int(expected) != compute_checksum(line):
        raise TLEParseError(
            "checksum",
            expected,
            f"line {line_number} checksum should be {compute_checksum(line)}",
        )


def _parse_float(field: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise TLEParseError(field, raw) from None
    if not math.isfinite(value):
        raise TLEParseError(field, raw)
    return value


def _parse_int(field: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise TLEParseError(field, raw) from None


def _parse_implied_decimal(field: str, raw: str) -> float:
    """Parse digits with an implied leading decimal point ("0001116" -> 0.0001116)."""
    digits = raw.strip()
    if not digits.isdigit():
        raise TLEParseError(field, raw)
    return float("0." + digits)


def _parse_exponent(field: str, raw: str) -> float:
    """Parse TLE exponential notation ("-58773-4" -> -0.58773e-4)."""
    match = _EXPONENT_RE.match(raw.strip())
    if match is None:
        raise TLEParseError(field, raw)
    sign, mantissa, exp_sign, exponent = match.groups()
    value = float("0." + mantissa) * 10.0 ** int(exp_sign + exponent)
    return -value if sign == "-" else value


def _optional(parse: Callable[[str, str], object], field: str, raw: str):
    """Blank metadata columns are absent rather than malformed."""
    if not raw.strip():
        return None
    return parse(field, raw)


def _check_line(line: str, line_number: int) -> str:
    line = line.rstrip("\r\n ")
    field = f"line{line_number}"
    if len(line) < TLE_LINE_LENGTH:
        raise TLEParseError(
            field, line, f"expected {TLE_LINE_LENGTH} columns, got {len(line)}"
        )
    if line[0] != str(line_number):
        raise TLEParseError(field, line, f"line must start with '{line_number}'")
    return line


class TLEParser:
    """
    Fixed-column decoder for Two-Line Element sets.

    Args:
        verify_checksum: Reject lines whose checksum column does not match.
        logger: Logger receiving the decoded parameter dump at DEBUG level.
    """

    def __init__(self, verify_checksum: bool = False, logger: Optional[logging.Logger] = None):
        self.verify_checksum = verify_checksum
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    def decode(self, line1: str, line2: str, name: str = "") -> OrbitalElements:
        """
        Decode TLE lines into orbital elements.

        Args:
            line1: First line of TLE
            line2: Second line of TLE
            name: Optional satellite name

        Returns:
            OrbitalElements for the satellite at its epoch

        Raises:
            TLEParseError: If a line is short or any field is malformed
        """
        line1 = _check_line(line1, 1)
        line2 = _check_line(line2, 2)
        if self.verify_checksum:
            verify_checksum(line1, 1)
            verify_checksum(line2, 2)

        raw = {key: line1[start:end] for key, (start, end) in LINE1_FIELDS.items()}
        raw.update({key: line2[start:end] for key, (start, end) in LINE2_FIELDS.items()})

        values = {
            "name": name.strip(),
            # Two-digit years are always taken as 20yy
            "epoch_year": 2000 + _parse_int("epoch_year", raw["epoch_year"]),
            "epoch_day": _parse_float("epoch_day", raw["epoch_day"]),
            "mean_motion_dot": _parse_float("mean_motion_dot", raw["mean_motion_dot"]),
            "inclination": _parse_float("inclination", raw["inclination"]),
            "raan": _parse_float("raan", raw["raan"]),
            "eccentricity": _parse_implied_decimal("eccentricity", raw["eccentricity"]),
            "arg_of_perigee": _parse_float("arg_of_perigee", raw["arg_of_perigee"]),
            "mean_anomaly": _parse_float("mean_anomaly", raw["mean_anomaly"]),
            "mean_motion": _parse_float("mean_motion", raw["mean_motion"]),
            "norad_id": _optional(_parse_int, "norad_id", raw["norad_id"]),
            "classification": raw["classification"].strip() or None,
            "international_designator": raw["international_designator"].strip() or None,
            "bstar": _optional(_parse_exponent, "bstar", raw["bstar"]),
            "element_number": _optional(_parse_int, "element_number", raw["element_number"]),
            "revolution_number": _optional(
                _parse_int, "revolution_number", raw["revolution_number"]
            ),
        }

        try:
            elements = OrbitalElements(**values)
        except ValidationError as e:
            error = e.errors()[0]
            field = str(error["loc"][0]) if error["loc"] else "elements"
            raise TLEParseError(field, raw.get(field, ""), error["msg"]) from e

        self.log_parameters(elements)
        return elements

    def log_parameters(self, elements: OrbitalElements) -> None:
        """Dump decoded parameters at DEBUG level."""
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        self.logger.debug(f"Decoded TLE for {elements.name or elements.norad_id}")
        self.logger.debug(f"  satelliteNumber={elements.norad_id}")
        self.logger.debug(f"  internationalDesignator={elements.international_designator}")
        self.logger.debug(f"  epoch={elements.epoch_year} day {elements.epoch_day:.8f}")
        self.logger.debug(f"  meanMotionDot={elements.mean_motion_dot:.8f} [rev/day^2]")
        self.logger.debug(f"  bstar={elements.bstar}")
        self.logger.debug(f"  inclination={elements.inclination:.4f} [deg]")
        self.logger.debug(f"  raan={elements.raan:.4f} [deg]")
        self.logger.debug(f"  eccentricity={elements.eccentricity:.7f} [-]")
        self.logger.debug(f"  argOfPerigee={elements.arg_of_perigee:.4f} [deg]")
        self.logger.debug(f"  meanAnomaly={elements.mean_anomaly:.4f} [deg]")
        self.logger.debug(f"  meanMotion={elements.mean_motion:.8f} [rev/day]")
        self.logger.debug(f"  revolutionNumber={elements.revolution_number}")


def decode_tle(line1: str, line2: str, name: str = "", verify_checksum: bool = False) -> OrbitalElements:
    """Decode a TLE pair with a default parser."""
    return TLEParser(verify_checksum=verify_checksum).decode(line1, line2, name)
