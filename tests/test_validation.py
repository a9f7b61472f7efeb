"""
Unit tests for /generate-gpx request validation.

Each test class focuses on one validation step. Checks run in order and
the first failure wins.
"""

from datetime import datetime, timezone

import pytest

from gpxgen.core.gpx.validation import (
    ValidationError,
    parse_start_instant,
    validate_payload,
    validate_start_fields,
)


class TestValidatePoints:
    """Test the points list check."""

    @pytest.mark.parametrize("points", [None, [], [{"lat": 1, "lon": 2}], "not a list", {"lat": 1}])
    def test_rejects_missing_short_or_non_list(self, payload, points):
        """Fewer than two points (or no list at all) is rejected."""
        payload["points"] = points
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(payload)
        assert exc_info.value.code == 400
        assert exc_info.value.message == "points array required, minimum 2 points"

    def test_missing_key(self, payload):
        del payload["points"]
        with pytest.raises(ValidationError, match="points array required"):
            validate_payload(payload)

    def test_non_mapping_payload(self):
        """A body that is not an object fails the first check."""
        with pytest.raises(ValidationError, match="points array required"):
            validate_payload(["not", "an", "object"])

    def test_invalid_points_still_count(self, payload):
        """Per-point checks are deferred; two garbage entries pass validation."""
        payload["points"] = [{"lat": "x"}, None]
        request = validate_payload(payload)
        assert len(request.points) == 2


class TestValidateActivityDetails:
    """Test the activityDetails object check."""

    @pytest.mark.parametrize("details", [None, "run", 5, [], ["2024-05-01"]])
    def test_rejects_non_object(self, payload, details):
        payload["activityDetails"] = details
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(payload)
        assert exc_info.value.message == "activityDetails object required"

    def test_points_checked_first(self, payload):
        """Short-circuits on the first failing check."""
        payload["points"] = []
        payload["activityDetails"] = None
        with pytest.raises(ValidationError, match="points array required"):
            validate_payload(payload)


class TestValidateStartFields:
    """Test startDate / startTime presence, type and format."""

    @pytest.mark.parametrize("details", [
        {"startTime": "06:30"},
        {"startDate": "2024-05-01"},
        {"startDate": "", "startTime": "06:30"},
        {"startDate": "2024-05-01", "startTime": None},
    ])
    def test_missing(self, details):
        with pytest.raises(ValidationError) as exc_info:
            validate_start_fields(details)
        assert exc_info.value.message == "startDate and startTime required"

    @pytest.mark.parametrize("details", [
        {"startDate": 20240501, "startTime": "06:30"},
        {"startDate": "2024-05-01", "startTime": 630},
        {"startDate": ["2024-05-01"], "startTime": "06:30"},
    ])
    def test_not_strings(self, details):
        with pytest.raises(ValidationError) as exc_info:
            validate_start_fields(details)
        assert exc_info.value.message == "startDate/startTime must be strings"

    @pytest.mark.parametrize("start_date,start_time", [
        ("2024-5-01", "06:30"),
        ("01-05-2024", "06:30"),
        ("2024-05-01\n", "06:30"),
        ("2024-13-40", "06:30"),
        ("2024-05-01", "6:30"),
        ("2024-05-01", "06:30:00"),
        ("2024-05-01", "24:00"),
        ("2024-05-01", "25:00"),
        ("2024-05-01", "06:60"),
    ])
    def test_bad_format(self, start_date, start_time):
        with pytest.raises(ValidationError) as exc_info:
            validate_start_fields({"startDate": start_date, "startTime": start_time})
        assert exc_info.value.message.startswith("bad date/time format")

    def test_valid(self):
        # Should not raise
        validate_start_fields({"startDate": "2024-05-01", "startTime": "23:59"})


class TestParseStartInstant:
    """Test combining date and time into a UTC instant."""

    def test_parses_as_utc(self):
        assert parse_start_instant("2024-05-01", "06:30") == datetime(2024, 5, 1, 6, 30, tzinfo=timezone.utc)

    def test_impossible_calendar_date(self):
        """Passes the format check, fails the parser; parser message is kept."""
        with pytest.raises(ValidationError) as exc_info:
            parse_start_instant("2024-02-30", "06:30")
        message = exc_info.value.message
        assert message.startswith("unparseable date/time")
        assert "Error: " in message

    def test_year_zero(self):
        """Year 0000 passes the format check but has no datetime representation."""
        with pytest.raises(ValidationError) as exc_info:
            parse_start_instant("0000-01-01", "06:30")
        assert exc_info.value.message.startswith("unparseable date/time")

    def test_leap_day(self):
        assert parse_start_instant("2024-02-29", "00:00").day == 29

    def test_payload_with_impossible_date(self, payload):
        payload["activityDetails"]["startDate"] = "2023-02-29"
        with pytest.raises(ValidationError, match="unparseable date/time"):
            validate_payload(payload)


class TestValidatePayload:
    """Test the full validation pass."""

    def test_returns_request(self, payload):
        payload["heartRateData"] = [120, None, 130]
        request = validate_payload(payload)
        assert request.points is payload["points"]
        assert request.start_instant == datetime(2024, 5, 1, 6, 30, tzinfo=timezone.utc)
        assert request.heart_rate_data == [120, None, 130]
        assert request.cadence_data is None

    def test_other_fields_not_validated(self, payload):
        """speedKmh, names and sensor arrays are not checked here."""
        payload["activityDetails"]["speedKmh"] = "fast"
        payload["cadenceData"] = "nope"
        validate_payload(payload)
