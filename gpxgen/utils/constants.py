"""
Application Constants

This module contains all application-wide constants to avoid magic numbers
and improve maintainability.
"""

# Distance / time conversion
METERS_PER_KM = 1000.0
SECONDS_PER_HOUR = 3600.0
MS_PER_SECOND = 1000

# Earth model used for great-circle distances
EARTH_RADIUS_M = 6371000.0

# Activity defaults
DEFAULT_ACTIVITY_NAME = "Generated Activity"
DEFAULT_CREATOR = "FakeMyRun GPXGenerator"
DEFAULT_ACTIVITY_TYPE = "running"
DEFAULT_SPEED_KMH = 10.0
DEFAULT_ELEVATION_M = 50.0

# Clock advance when a distance-based increment cannot be computed
FALLBACK_INCREMENT_SECONDS = 1.0

# Input formats
START_DATE_PATTERN = r"[0-9]{4}-[0-9]{2}-[0-9]{2}"
START_TIME_PATTERN = r"[0-9]{2}:[0-9]{2}"
START_INSTANT_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
MIN_TRACK_POINTS = 2

# Output formatting
COORDINATE_DECIMALS = 7
ELEVATION_DECIMALS = 1
GPX_MEDIA_TYPE = "application/gpx+xml"
GPX_FILE_EXTENSION = ".gpx"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

# GPX 1.1 + Garmin extension namespaces
GPX_NAMESPACE = "http://www.topografix.com/GPX/1/1"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
GPXTPX_NAMESPACE = "http://www.garmin.com/xmlschemas/TrackPointExtension/v1"
GPXX_NAMESPACE = "http://www.garmin.com/xmlschemas/GpxExtensions/v3"
GPX_SCHEMA_LOCATION = " ".join([
    "http://www.topografix.com/GPX/1/1 http://www.topografix.com/GPX/1/1/gpx.xsd",
    "http://www.garmin.com/xmlschemas/GpxExtensions/v3 http://www.garmin.com/xmlschemas/GpxExtensionsv3.xsd",
    "http://www.garmin.com/xmlschemas/TrackPointExtension/v1 http://www.garmin.com/xmlschemas/TrackPointExtensionv1.xsd",
])

# Service defaults (overridable via config/service.yml and env)
DEFAULT_PORT = 4000
DEFAULT_MAX_BODY_BYTES = 10 * 1024 * 1024
