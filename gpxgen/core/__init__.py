"""
Core Package

This package contains the core algorithmic logic for the GPX generator.

Structure:
- gpx/ - validation, track synthesis and GPX serialization
"""
