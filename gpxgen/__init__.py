"""
gpxgen - GPX track generator service.

Turns a list of coordinates plus activity details into a GPX 1.1 track
with synthesized timestamps.
"""

__version__ = "1.0.0"
