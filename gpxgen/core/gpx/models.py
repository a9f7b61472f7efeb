"""
GPX Generator Data Models

Defines the core data structures flowing through validation, synthesis
and serialization.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from gpxgen.utils.constants import (
    DEFAULT_ELEVATION_M,
    GPX_MEDIA_TYPE,
    METERS_PER_KM,
    SECONDS_PER_HOUR,
)


def is_number(value: Any) -> bool:
    """True for JSON numbers (int/float). Booleans are not numbers here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class TrackPoint:
    """
    A client-supplied coordinate.

    Attributes:
        lat: Latitude in decimal degrees
        lon: Longitude in decimal degrees
        alt: Altitude in meters, None when absent or non-numeric
    """
    lat: float
    lon: float
    alt: Optional[float] = None

    @property
    def elevation(self) -> float:
        return self.alt if self.alt is not None else DEFAULT_ELEVATION_M

    @classmethod
    def from_raw(cls, raw: Any) -> Optional["TrackPoint"]:
        """
        Build a TrackPoint from a request entry.

        Returns None when the entry is not a mapping or lat/lon are not
        both numeric; such points are dropped from the track.
        """
        if not isinstance(raw, dict):
            return None
        lat, lon, alt = raw.get("lat"), raw.get("lon"), raw.get("alt")
        if not (is_number(lat) and is_number(lon)):
            return None
        return cls(lat=float(lat), lon=float(lon), alt=float(alt) if is_number(alt) else None)


@dataclass
class GenerationRequest:
    """Validated request fields handed from the validator to the synthesizer."""
    points: List[Any]
    activity_details: Dict[str, Any]
    start_instant: datetime
    heart_rate_data: Any = None
    cadence_data: Any = None


@dataclass(frozen=True)
class ActivitySettings:
    """
    Fully-populated activity configuration.

    Every default is applied once in synthesis.normalize_settings; nothing
    downstream re-checks the raw payload.
    """
    activity_name: str
    creator: str
    activity_type: str
    speed_kmh: float
    start_date: str
    start_instant: datetime
    description: Optional[str] = None

    @property
    def speed_mps(self) -> float:
        return self.speed_kmh * METERS_PER_KM / SECONDS_PER_HOUR


@dataclass(frozen=True)
class SynthesizedPoint:
    """A track point with its synthesized timestamp and optional sensor samples."""
    lat: float
    lon: float
    elevation: float
    time: datetime
    heart_rate: Optional[str] = None
    cadence: Optional[str] = None

    @property
    def has_extensions(self) -> bool:
        return self.heart_rate is not None or self.cadence is not None


@dataclass
class SynthesizedTrack:
    settings: ActivitySettings
    points: List[SynthesizedPoint] = field(default_factory=list)


@dataclass(frozen=True)
class GpxDocument:
    """Finished GPX payload plus the suggested download filename."""
    xml: str
    filename: str
    media_type: str = GPX_MEDIA_TYPE
