"""
Satellite Tracker

Ties a TLE catalog to the propagator: looks satellites up by name, decodes
their elements and locates them at a target instant, one at a time or as a
batch on a thread pool.

Unknown names and malformed TLEs are logged and skipped in batch mode. A
target before an element epoch is never swallowed.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from orbit_locator.catalog import SatelliteNotFoundError, find_satellite, list_satellites
from orbit_locator.models import OrbitalElements, SatLocation
from orbit_locator.propagator import Propagator
from orbit_locator.tle_parser import TLEParseError, TLEParser


class SatelliteTracker:
    """
    Locate named satellites from a catalog.

    Args:
        catalog_text: Multi-satellite TLE text
        propagator: Propagator to use (a default one if None)
        verify_checksum: Reject TLE lines with bad checksums
        logger: Logger for skip warnings
    """

    def __init__(
        self,
        catalog_text: str,
        propagator: Optional[Propagator] = None,
        verify_checksum: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        self.catalog_text = catalog_text
        self.propagator = propagator if propagator is not None else Propagator()
        self.parser = TLEParser(verify_checksum=verify_checksum)
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    def names(self) -> List[str]:
        """Satellite names in catalog order."""
        return list_satellites(self.catalog_text)

    def elements_for(self, name: str) -> OrbitalElements:
        """
        Decode the elements of a named satellite.

        Raises:
            SatelliteNotFoundError: If the name is not in the catalog
            TLEParseError: If the TLE is malformed
        """
        line1, line2 = find_satellite(self.catalog_text, name)
        return self.parser.decode(line1, line2, name)

    def locate(self, name: str, target: datetime) -> SatLocation:
        """Location (with velocity) of a named satellite at the target instant."""
        return self.propagator.locate(self.elements_for(name), target)

    def _try_locate(self, name: str, target: datetime) -> Optional[SatLocation]:
        try:
            return self.locate(name, target)
        except SatelliteNotFoundError:
            self.logger.warning(f"Satellite not found in catalog: {name}")
        except TLEParseError as e:
            self.logger.warning(f"Skipping {name}: {e}")
        return None

    def locate_many(
        self, names: Iterable[str], target: datetime, max_workers: int = 4
    ) -> Dict[str, SatLocation]:
        """
        Locate several satellites concurrently.

        Returns:
            Dictionary of name -> SatLocation in request order, without the
            names that were skipped
        """
        names = list(names)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(lambda n: self._try_locate(n, target), names))

        located = {}
        for name, location in zip(names, results):
            if location is not None:
                located[name] = location
        self.logger.info(f"Located {len(located)} of {len(names)} satellites")
        return located
