"""
Tracker Configuration

Runtime settings read from the environment, in the same spirit as a service
configuration object: every value has a default and can be overridden by an
environment variable or, in the CLI, by a command-line flag.

Environment variables:
    STARLINK_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR (default INFO)
    STARLINK_LOG_FILE: Optional log file path
    STARLINK_JSON_LOGS: "true" for JSON log lines
    STARLINK_TLE_SOURCE: builtin, file or celestrak (default builtin)
    STARLINK_TLE_FILE: Local catalog path (default tle.txt)
    CELESTRAK_API_BASE: CelesTrak base URL
    CELESTRAK_GROUP: CelesTrak group name (default starlink)
    STARLINK_HTTP_TIMEOUT: HTTP timeout in seconds (default 30)
    STARLINK_MAX_WORKERS: Worker threads for batch propagation (default 4)
    STARLINK_VERIFY_CHECKSUM: "true" to reject TLE lines with bad checksums
"""

import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
TLESourceName = Literal["builtin", "file", "celestrak"]

_TRUE_VALUES = {"1", "true", "yes", "on"}


class TrackerConfig(BaseModel):
    """Settings shared by the TLE source, tracker and logging setup."""

    model_config = ConfigDict(frozen=True)

    log_level: LogLevel = "INFO"
    log_file: Optional[str] = None
    json_logs: bool = False
    tle_source: TLESourceName = "builtin"
    tle_file: str = "tle.txt"
    celestrak_base: str = "https://celestrak.org"
    celestrak_group: str = "starlink"
    http_timeout: float = Field(default=30.0, gt=0.0)
    max_workers: int = Field(default=4, ge=1)
    verify_checksum: bool = False

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TrackerConfig":
        """Build a configuration from environment variables."""
        env = os.environ if environ is None else environ
        values = {
            "log_level": env.get("STARLINK_LOG_LEVEL"),
            "log_file": env.get("STARLINK_LOG_FILE"),
            "tle_source": env.get("STARLINK_TLE_SOURCE"),
            "tle_file": env.get("STARLINK_TLE_FILE"),
            "celestrak_base": env.get("CELESTRAK_API_BASE"),
            "celestrak_group": env.get("CELESTRAK_GROUP"),
            "http_timeout": env.get("STARLINK_HTTP_TIMEOUT"),
            "max_workers": env.get("STARLINK_MAX_WORKERS"),
        }
        if "STARLINK_JSON_LOGS" in env:
            values["json_logs"] = env["STARLINK_JSON_LOGS"].lower() in _TRUE_VALUES
        if "STARLINK_VERIFY_CHECKSUM" in env:
            values["verify_checksum"] = env["STARLINK_VERIFY_CHECKSUM"].lower() in _TRUE_VALUES
        return cls(**{key: value for key, value in values.items() if value not in (None, "")})

    def with_overrides(self, **overrides) -> "TrackerConfig":
        """Copy with non-None overrides applied and validated."""
        updates = {key: value for key, value in overrides.items() if value is not None}
        return self.__class__(**{**self.model_dump(), **updates})
