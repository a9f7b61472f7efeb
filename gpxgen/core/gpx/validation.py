"""
GPX Generator Input Validation

Checks the shape of a /generate-gpx payload before any computation.
Checks run in a fixed order and stop at the first failure. Per-point and
per-sample checks are left to the synthesizer, which drops bad points
instead of rejecting the request.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Tuple

from gpxgen.core.gpx.models import GenerationRequest
from gpxgen.utils.constants import (
    MIN_TRACK_POINTS,
    START_DATE_PATTERN,
    START_INSTANT_FORMAT,
    START_TIME_PATTERN,
)

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(START_DATE_PATTERN)
_TIME_RE = re.compile(START_TIME_PATTERN)


class ValidationError(Exception):
    """
    Validation error with HTTP error code and message.

    Always caused by a malformed request; the caller fixes the request
    and tries again.
    """
    def __init__(self, message: str, code: int = 400):
        self.message = message
        self.code = code
        super().__init__(self.message)


def _is_blank(value: Any) -> bool:
    # Missing, null, empty string, zero and false all count as absent.
    if value is None:
        return True
    if isinstance(value, (str, int, float)):
        return not value
    return False


def validate_points(payload: Mapping[str, Any]) -> None:
    """
    Raises:
        ValidationError (400): If points is missing, not a list, or has fewer than 2 entries
    """
    points = payload.get("points")
    if not isinstance(points, list) or len(points) < MIN_TRACK_POINTS:
        raise ValidationError("points array required, minimum 2 points")


def validate_activity_details(payload: Mapping[str, Any]) -> None:
    """
    Raises:
        ValidationError (400): If activityDetails is missing or not an object
    """
    if not isinstance(payload.get("activityDetails"), dict):
        raise ValidationError("activityDetails object required")


def validate_start_fields(details: Mapping[str, Any]) -> None:
    """
    Validate presence, type and format of startDate / startTime.

    Raises:
        ValidationError (400): On the first failing check
    """
    start_date = details.get("startDate")
    start_time = details.get("startTime")

    if _is_blank(start_date) or _is_blank(start_time):
        raise ValidationError("startDate and startTime required")

    if not isinstance(start_date, str) or not isinstance(start_time, str):
        raise ValidationError("startDate/startTime must be strings")

    if not _DATE_RE.fullmatch(start_date) or not _fields_in_range(start_date, "-", (12, 31), 1):
        raise ValidationError(f"bad date/time format: startDate must be YYYY-MM-DD, got '{start_date}'")

    if not _TIME_RE.fullmatch(start_time) or not _fields_in_range(start_time, ":", (23, 59), 0):
        raise ValidationError(f"bad date/time format: startTime must be HH:MM, got '{start_time}'")


def _fields_in_range(value: str, sep: str, upper: Tuple[int, int], lower: int) -> bool:
    # Month/day (or hour/minute) digits must at least name a possible field;
    # calendar validity (e.g. Feb 30) is left to the parser.
    fields = [int(part) for part in value.split(sep)[-2:]]
    return all(lower <= field <= top for field, top in zip(fields, upper))


def parse_start_instant(start_date: str, start_time: str) -> datetime:
    """
    Combine startDate and startTime into a UTC instant.

    Args:
        start_date: "YYYY-MM-DD"
        start_time: "HH:MM" (interpreted as UTC)

    Returns:
        Timezone-aware UTC datetime

    Raises:
        ValidationError (400): If the combined value is not a real date/time
    """
    raw = f"{start_date}T{start_time}:00Z"
    try:
        parsed = datetime.strptime(raw, START_INSTANT_FORMAT)
    except ValueError as e:
        logger.warning(f"Could not parse start instant {raw}: {e}")
        raise ValidationError(
            f"unparseable date/time: {start_date} {start_time}. "
            f"Use YYYY-MM-DD and HH:MM (UTC). Error: {e}"
        )
    return parsed.replace(tzinfo=timezone.utc)


def validate_payload(payload: Any) -> GenerationRequest:
    """
    Run every request-level check and return the validated fields.

    Args:
        payload: Decoded JSON request body

    Returns:
        GenerationRequest ready for synthesis

    Raises:
        ValidationError (400): On the first failing check
    """
    if not isinstance(payload, dict):
        payload = {}

    try:
        validate_points(payload)
        validate_activity_details(payload)
        details: Dict[str, Any] = payload["activityDetails"]
        validate_start_fields(details)
        start_instant = parse_start_instant(details["startDate"], details["startTime"])
    except ValidationError as e:
        logger.warning(f"Rejected /generate-gpx payload: {e.message}")
        raise

    return GenerationRequest(
        points=payload["points"],
        activity_details=details,
        start_instant=start_instant,
        heart_rate_data=payload.get("heartRateData"),
        cadence_data=payload.get("cadenceData"),
    )
