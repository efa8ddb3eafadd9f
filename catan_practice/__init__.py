"""Placement-phase drafting practice for the standard 19-hex board."""

__version__ = "0.1.0"
