"""
Pytest configuration for gpxgen tests.

Shared payload builders and the FastAPI test client.
"""

import copy
import xml.etree.ElementTree as ET

import pytest
from fastapi.testclient import TestClient

GPX_NS = "{http://www.topografix.com/GPX/1/1}"
TPX_NS = "{http://www.garmin.com/xmlschemas/TrackPointExtension/v1}"

BASE_PAYLOAD = {
    "points": [
        {"lat": 0.0, "lon": 0.0, "alt": 12.5},
        {"lat": 0.0, "lon": 0.001},
        {"lat": 0.0, "lon": 0.002, "alt": 14},
    ],
    "activityDetails": {
        "startDate": "2024-05-01",
        "startTime": "06:30",
        "activityName": "Morning Run! #1",
        "activityType": "Running",
        "watchBrand": "Garmin Forerunner 965",
        "description": "Easy loop",
        "speedKmh": 36,
    },
}


@pytest.fixture
def payload():
    """Fresh copy of a valid /generate-gpx payload (36 km/h = 10 m/s)."""
    return copy.deepcopy(BASE_PAYLOAD)


@pytest.fixture
def client():
    """Create FastAPI test client"""
    from gpxgen.main import app
    return TestClient(app)


def parse_gpx(xml: str) -> ET.Element:
    """Parse generated GPX text into an element tree root."""
    return ET.fromstring(xml.encode("utf-8"))


def trackpoints(root: ET.Element):
    return root.findall(f"{GPX_NS}trk/{GPX_NS}trkseg/{GPX_NS}trkpt")
