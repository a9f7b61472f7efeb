"""
Track Synthesis

Turns validated request fields into a SynthesizedTrack: applies activity
defaults once, aligns the optional sensor series to the point list, and
folds over the points to give every valid point a timestamp derived from
haversine distance and the configured speed.
"""

import logging
import math
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any, List, Mapping, Optional

from gpxgen.core.gpx.geo import haversine_m
from gpxgen.core.gpx.models import (
    ActivitySettings,
    GenerationRequest,
    SynthesizedPoint,
    SynthesizedTrack,
    TrackPoint,
    is_number,
)
from gpxgen.utils.constants import (
    DEFAULT_ACTIVITY_NAME,
    DEFAULT_ACTIVITY_TYPE,
    DEFAULT_CREATOR,
    DEFAULT_SPEED_KMH,
    FALLBACK_INCREMENT_SECONDS,
    MS_PER_SECOND,
)

logger = logging.getLogger(__name__)


class SynthesisError(Exception):
    """
    Unexpected failure while building or serializing a track.

    Indicates a server-side defect, not a bad request. The original
    exception is kept on `cause` for diagnostics.
    """
    def __init__(self, cause: BaseException):
        self.cause = cause
        self.detail = str(cause) or type(cause).__name__
        super().__init__(self.detail)


def _text_or_default(value: Any, default: str) -> str:
    if value is None or (isinstance(value, (str, int, float)) and not value):
        return default
    return str(value)


def normalize_settings(details: Mapping[str, Any], start_instant: datetime) -> ActivitySettings:
    """
    Apply every activity default in one place.

    Defaults: activityName -> "Generated Activity", watchBrand -> creator
    label, activityType -> "running" (lowercased), speedKmh -> 10 unless a
    positive number.
    """
    speed = details.get("speedKmh")
    speed_kmh = float(speed) if is_number(speed) and speed > 0 else DEFAULT_SPEED_KMH

    description = details.get("description")
    settings = ActivitySettings(
        activity_name=_text_or_default(details.get("activityName"), DEFAULT_ACTIVITY_NAME),
        creator=_text_or_default(details.get("watchBrand"), DEFAULT_CREATOR),
        activity_type=_text_or_default(details.get("activityType"), DEFAULT_ACTIVITY_TYPE).lower(),
        speed_kmh=speed_kmh,
        start_date=str(details["startDate"]),
        start_instant=start_instant,
        description=_text_or_default(description, "") or None,
    )
    logger.info(
        f"Activity '{settings.activity_name}' ({settings.activity_type}) "
        f"creator={settings.creator} speed={settings.speed_kmh} km/h"
    )
    return settings


def format_sample(value: Any) -> str:
    """String form of a sensor sample, as a JSON client would print it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def align_samples(series: Any, length: int) -> List[Optional[str]]:
    """
    Resolve an optional sensor series into one entry per input point.

    A sample exists only when the series is a list with a non-null entry at
    that index; anything else yields None for the index.
    """
    if not isinstance(series, list):
        return [None] * length
    aligned: List[Optional[str]] = []
    for i in range(length):
        value = series[i] if i < len(series) else None
        aligned.append(None if value is None else format_sample(value))
    return aligned


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def time_increment_ms(previous: Optional[TrackPoint], current: TrackPoint, speed_mps: float) -> int:
    """
    Milliseconds between the previous input point and the current one.

    Falls back to a flat 1 second when the previous input point was
    invalid or the speed is not positive.
    """
    if previous is None:
        seconds = FALLBACK_INCREMENT_SECONDS
    else:
        distance = haversine_m(previous.lat, previous.lon, current.lat, current.lon)
        seconds = distance / speed_mps if speed_mps > 0 else FALLBACK_INCREMENT_SECONDS
    return _round_half_up(seconds * MS_PER_SECOND)


@dataclass(frozen=True)
class ClockState:
    """
    Accumulator for the timestamp fold.

    Attributes:
        previous: The immediately preceding input point, None if it was invalid
        offset_ms: Elapsed ms since the start instant, None until a point is emitted
    """
    previous: Optional[TrackPoint] = None
    offset_ms: Optional[int] = None

    def skip(self) -> "ClockState":
        return replace(self, previous=None)

    def advance(self, current: TrackPoint, speed_mps: float) -> "ClockState":
        if self.offset_ms is None:
            offset = 0
        else:
            offset = self.offset_ms + time_increment_ms(self.previous, current, speed_mps)
        return ClockState(previous=current, offset_ms=offset)


def synthesize_track(request: GenerationRequest) -> SynthesizedTrack:
    """
    Build the in-memory track for a validated request.

    Invalid points (non-numeric lat/lon) are dropped. The first emitted
    point carries the start instant; timestamps never decrease.
    """
    settings = normalize_settings(request.activity_details, request.start_instant)
    count = len(request.points)
    heart_rates = align_samples(request.heart_rate_data, count)
    cadences = align_samples(request.cadence_data, count)

    track = SynthesizedTrack(settings=settings)
    state = ClockState()
    for i, raw in enumerate(request.points):
        current = TrackPoint.from_raw(raw)
        if current is None:
            logger.warning(f"Skipping invalid point at index {i}: {raw!r}")
            state = state.skip()
            continue

        state = state.advance(current, settings.speed_mps)
        track.points.append(SynthesizedPoint(
            lat=current.lat,
            lon=current.lon,
            elevation=current.elevation,
            time=settings.start_instant + timedelta(milliseconds=state.offset_ms),
            heart_rate=heart_rates[i],
            cadence=cadences[i],
        ))

    logger.debug(f"Synthesized {len(track.points)} of {count} points")
    return track
