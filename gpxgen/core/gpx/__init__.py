"""
GPX track generation.

validate_payload -> synthesize_track -> serialize_gpx, tied together by
generate_gpx.
"""

from gpxgen.core.gpx.validation import ValidationError, validate_payload
from gpxgen.core.gpx.synthesis import SynthesisError, synthesize_track
from gpxgen.core.gpx.generator import generate_gpx

__all__ = [
    "ValidationError",
    "SynthesisError",
    "validate_payload",
    "synthesize_track",
    "generate_gpx",
]
