"""
KML Export

Writes located satellites as Google Earth placemarks: one Placemark per
satellite with altitude and velocity in the description and the position as
lon,lat,alt (metres) coordinates.
"""

import xml.etree.ElementTree as ET
from datetime import datetime
from typing import Dict, Iterable, Optional

from orbit_locator.frames import to_utc
from orbit_locator.models import SatLocation

KML_NS = "http://www.opengis.net/kml/2.2"
SATELLITE_ICON = "http://maps.google.com/mapfiles/kml/shapes/satellite.png"
DOCUMENT_NAME = "Starlink Satellite Locations"


def _tag(name: str) -> str:
    return f"{{{KML_NS}}}{name}"


def _sub_element(parent: ET.Element, tag: str, text: Optional[str] = None, **attribs: str) -> ET.Element:
    """Create a KML sub-element with optional text and attributes."""
    elem = ET.SubElement(parent, _tag(tag), **attribs)
    if text is not None:
        elem.text = text
    return elem


def build_kml(
    names: Iterable[str], locations: Dict[str, SatLocation], timestamp: datetime
) -> ET.ElementTree:
    """
    Build the KML element tree.

    Names without an entry in ``locations`` are skipped.
    """
    # Register namespace to avoid ns0: prefix in output
    ET.register_namespace("", KML_NS)

    kml = ET.Element(_tag("kml"))
    doc = _sub_element(kml, "Document")
    _sub_element(doc, "name", DOCUMENT_NAME)
    _sub_element(
        doc, "description", f"Satellite positions at {to_utc(timestamp).isoformat()}"
    )

    # Shared style
    style = _sub_element(doc, "Style", id="satellite")
    icon_style = _sub_element(style, "IconStyle")
    icon = _sub_element(icon_style, "Icon")
    _sub_element(icon, "href", SATELLITE_ICON)
    _sub_element(icon_style, "scale", "1.0")
    label_style = _sub_element(style, "LabelStyle")
    _sub_element(label_style, "scale", "0.8")

    for name in names:
        location = locations.get(name)
        if location is None:
            continue

        velocity = location.velocity if location.velocity is not None else float("nan")
        placemark = _sub_element(doc, "Placemark")
        _sub_element(placemark, "name", name)
        _sub_element(
            placemark,
            "description",
            f"Altitude: {location.altitude:.3f} km\nVelocity: {velocity:.3f} km/s",
        )
        _sub_element(placemark, "styleUrl", "#satellite")
        point = _sub_element(placemark, "Point")
        # Longitude first, altitude in metres
        _sub_element(
            point,
            "coordinates",
            f"{location.longitude:.6f},{location.latitude:.6f},{location.altitude * 1000.0:.0f}",
        )

    tree = ET.ElementTree(kml)
    ET.indent(tree, space="  ")
    return tree


def generate_kml(
    names: Iterable[str], locations: Dict[str, SatLocation], timestamp: datetime
) -> str:
    """Render the KML document as a string with an XML declaration."""
    tree = build_kml(names, locations, timestamp)
    body = ET.tostring(tree.getroot(), encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body + "\n"


def write_kml(
    path: str, names: Iterable[str], locations: Dict[str, SatLocation], timestamp: datetime
) -> int:
    """
    Write the KML document to a file.

    Returns:
        Number of placemarks written
    """
    names = list(names)
    tree = build_kml(names, locations, timestamp)
    tree.write(
        path,
        encoding="UTF-8",
        xml_declaration=True,
    )
    return sum(1 for name in names if name in locations)
