"""
TLE Source

Loads raw multi-satellite TLE text from a local file, from CelesTrak, or from
the embedded fallback set. Parsing is left to the catalog module.
"""

from typing import Optional

import requests

from orbit_locator.config import TrackerConfig
from orbit_locator.constants import FALLBACK_TLE
from orbit_locator.logging_config import get_logger

logger = get_logger(__name__)


class TLESourceError(RuntimeError):
    """Raised when TLE text cannot be read or downloaded."""


def read_tle_file(path: str) -> str:
    """
    Read a local TLE catalog.

    Raises:
        TLESourceError: If the file cannot be read
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        logger.error(f"Failed to read TLE file {path}: {e}")
        raise TLESourceError(f"cannot read TLE file {path}: {e}") from e
    logger.info(f"Loaded TLE catalog from {path}")
    return text


def fetch_celestrak(
    group: str = "starlink",
    base_url: str = "https://celestrak.org",
    timeout: float = 30.0,
    session: Optional[requests.Session] = None,
) -> str:
    """
    Download a TLE group from CelesTrak.

    Args:
        group: CelesTrak group name (e.g. "starlink", "active")
        base_url: CelesTrak base URL
        timeout: HTTP timeout in seconds
        session: Optional requests session to reuse

    Raises:
        TLESourceError: On any HTTP or connection failure
    """
    url = f"{base_url.rstrip('/')}/NORAD/elements/gp.php"
    params = {"GROUP": group, "FORMAT": "tle"}
    http = session if session is not None else requests
    try:
        response = http.get(url, params=params, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error(f"Failed to fetch TLE group {group} from {url}: {e}")
        raise TLESourceError(f"cannot fetch TLE group {group}: {e}") from e
    logger.info(f"Fetched TLE group {group} from CelesTrak")
    return response.text


def builtin_tle_text() -> str:
    """The embedded fallback TLE set as catalog text."""
    return "\n".join(
        [FALLBACK_TLE["name"], FALLBACK_TLE["line1"], FALLBACK_TLE["line2"]]
    ) + "\n"


def load_tle_text(config: TrackerConfig) -> str:
    """Load catalog text from the source selected in the configuration."""
    if config.tle_source == "file":
        return read_tle_file(config.tle_file)
    if config.tle_source == "celestrak":
        return fetch_celestrak(
            config.celestrak_group, config.celestrak_base, config.http_timeout
        )
    return builtin_tle_text()
