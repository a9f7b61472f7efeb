"""
GPX generation entry point.

Runs validation, synthesis and serialization for one request. Validation
failures propagate untouched; anything else that goes wrong while
building the document is reported as a SynthesisError.
"""

import logging
from typing import Any, Optional

from gpxgen.core.gpx.models import GpxDocument
from gpxgen.core.gpx.synthesis import SynthesisError, synthesize_track
from gpxgen.core.gpx.validation import validate_payload
from gpxgen.core.gpx.writer import build_filename, serialize_gpx

logger = logging.getLogger(__name__)


def generate_gpx(payload: Any, now_ms: Optional[int] = None) -> GpxDocument:
    """
    Generate a GPX document from a decoded /generate-gpx payload.

    Args:
        payload: Request body (points, activityDetails, heartRateData, cadenceData)
        now_ms: Unix millis for the filename suffix (defaults to the wall clock)

    Returns:
        GpxDocument with XML text and suggested filename

    Raises:
        ValidationError: If the request is malformed
        SynthesisError: If building or serializing the track fails
    """
    request = validate_payload(payload)

    try:
        track = synthesize_track(request)
        xml = serialize_gpx(track)
        filename = build_filename(track.settings, now_ms)
    except Exception as e:
        logger.error(f"Internal error while generating GPX: {e}", exc_info=True)
        raise SynthesisError(e) from e

    logger.info(f"GPX generated: {filename} ({len(track.points)} track points)")
    return GpxDocument(xml=xml, filename=filename)
