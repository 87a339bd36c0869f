"""Render geographic routes as progressively animated, frame-accurate image sequences."""

__version__ = "0.1.0"
