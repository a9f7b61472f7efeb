"""
GPX 1.1 Serialization

Writes a SynthesizedTrack as a pretty-printed GPX document with the
Garmin TrackPointExtension (heart rate, cadence) and GpxExtensions
namespaces declared on the root element.
"""

import math
import re
import time
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Optional

from gpxgen.core.gpx.models import ActivitySettings, SynthesizedPoint, SynthesizedTrack
from gpxgen.utils.constants import (
    COORDINATE_DECIMALS,
    ELEVATION_DECIMALS,
    GPX_FILE_EXTENSION,
    GPX_NAMESPACE,
    GPX_SCHEMA_LOCATION,
    GPXTPX_NAMESPACE,
    GPXX_NAMESPACE,
    XML_DECLARATION,
    XSI_NAMESPACE,
)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w.-]", re.ASCII)
# Wide enough for every finite float written out in full
_FIXED_CONTEXT = Context(prec=400)


def format_timestamp(value: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2024-05-01T06:30:00.000Z"""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_fixed(value: float, decimals: int) -> str:
    """
    Fixed-point string with ties rounded away from zero.

    Rounds the exact binary value of the float, so 12.25 gives "12.3" and
    -0.25 gives "-0.3" where Python formatting would round half to even.
    """
    if not math.isfinite(value):
        return f"{value:.{decimals}f}"
    if value == 0:
        value = 0.0
    quantum = Decimal(1).scaleb(-decimals)
    return format(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=_FIXED_CONTEXT), "f")


def _text(parent: ET.Element, tag: str, text: str) -> ET.Element:
    child = ET.SubElement(parent, tag)
    child.text = text
    return child


def _gpx_root(creator: str) -> ET.Element:
    # Prefixed names are written literally so the namespace declarations
    # appear on <gpx> exactly as listed, used or not.
    return ET.Element("gpx", {
        "version": "1.1",
        "creator": creator,
        "xmlns": GPX_NAMESPACE,
        "xmlns:xsi": XSI_NAMESPACE,
        "xsi:schemaLocation": GPX_SCHEMA_LOCATION,
        "xmlns:gpxtpx": GPXTPX_NAMESPACE,
        "xmlns:gpxx": GPXX_NAMESPACE,
    })


def _append_trackpoint(segment: ET.Element, point: SynthesizedPoint) -> None:
    trkpt = ET.SubElement(segment, "trkpt", {
        "lat": format_fixed(point.lat, COORDINATE_DECIMALS),
        "lon": format_fixed(point.lon, COORDINATE_DECIMALS),
    })
    _text(trkpt, "ele", format_fixed(point.elevation, ELEVATION_DECIMALS))
    _text(trkpt, "time", format_timestamp(point.time))

    if not point.has_extensions:
        return
    extensions = ET.SubElement(trkpt, "extensions")
    tpx = ET.SubElement(extensions, "gpxtpx:TrackPointExtension")
    if point.heart_rate is not None:
        _text(tpx, "gpxtpx:hr", point.heart_rate)
    if point.cadence is not None:
        _text(tpx, "gpxtpx:cad", point.cadence)


def build_gpx_element(track: SynthesizedTrack) -> ET.Element:
    """Build the <gpx> element tree for a track."""
    settings = track.settings
    root = _gpx_root(settings.creator)

    metadata = ET.SubElement(root, "metadata")
    _text(metadata, "name", settings.activity_name)
    _text(metadata, "time", format_timestamp(settings.start_instant))
    if settings.description:
        _text(metadata, "desc", settings.description)

    trk = ET.SubElement(root, "trk")
    _text(trk, "name", settings.activity_name)
    _text(trk, "type", settings.activity_type)

    segment = ET.SubElement(trk, "trkseg")
    for point in track.points:
        _append_trackpoint(segment, point)
    return root


def serialize_gpx(track: SynthesizedTrack) -> str:
    """Pretty-printed GPX document with a UTF-8 XML declaration."""
    root = build_gpx_element(track)
    ET.indent(root, space="  ")
    return f"{XML_DECLARATION}\n{ET.tostring(root, encoding='unicode')}\n"


def safe_activity_name(name: str) -> str:
    """Replace anything but word characters, dots and hyphens with '_'."""
    return _UNSAFE_FILENAME_CHARS.sub("_", name)


def build_filename(settings: ActivitySettings, now_ms: Optional[int] = None) -> str:
    """
    Suggested download name: {safe name}_{startDate}_{unix millis}.gpx

    now_ms only makes the name unique; it plays no part in the track data.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{safe_activity_name(settings.activity_name)}_{settings.start_date}_{now_ms}{GPX_FILE_EXTENSION}"
