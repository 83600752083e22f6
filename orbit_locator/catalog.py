"""
TLE catalog lookup.

A catalog is raw text of repeated three-line entries: a name line followed by
TLE line 1 and line 2. Lines that do not fit that pattern are skipped.
"""

from typing import Dict, List, Tuple


class SatelliteNotFoundError(KeyError):
    """Raised when a satellite name is not present in a catalog."""


def _entries(text: str):
    lines = [line.rstrip("\r\n ") for line in text.splitlines()]
    i = 0
    while i < len(lines) - 2:
        if lines[i + 1].startswith("1 ") and lines[i + 2].startswith("2 "):
            name = lines[i].strip()
            if name:
                yield name, lines[i + 1], lines[i + 2]
            i += 3
        else:
            i += 1


def parse_catalog(text: str) -> Dict[str, Tuple[str, str]]:
    """
    Map every satellite name in a catalog to its TLE lines.

    Args:
        text: Multi-satellite TLE text

    Returns:
        Dictionary of name -> (line1, line2), in catalog order. A repeated
        name keeps its last entry.
    """
    return {name: (line1, line2) for name, line1, line2 in _entries(text)}


def list_satellites(text: str) -> List[str]:
    """Satellite names in catalog order."""
    return [name for name, _, _ in _entries(text)]


def find_satellite(text: str, name: str) -> Tuple[str, str]:
    """
    Find the TLE lines of a satellite by name.

    An exact name match wins; otherwise the first entry whose name contains
    ``name`` is returned.

    Raises:
        SatelliteNotFoundError: If no entry matches
    """
    wanted = name.strip()
    partial = None
    for entry_name, line1, line2 in _entries(text):
        if entry_name == wanted:
            return line1, line2
        if partial is None and wanted in entry_name:
            partial = (line1, line2)
    if partial is None:
        raise SatelliteNotFoundError(f"satellite not found: {name}")
    return partial
