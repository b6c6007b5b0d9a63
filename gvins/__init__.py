"""Geodesy, rotation, camera, map and feature-tracking tools for GNSS-visual-inertial navigation."""

__version__ = "0.1.0"