"""
Pose Module
===========

Landmark data types, geometry helpers and landmark sources.
"""

from .geometry import (
    calculate_angle,
    distance,
    horizontal_distance,
    midpoint,
    reflex_aware_angle,
    vertical_distance,
)
from .landmarks import SKELETON_CONNECTIONS, Frame, Landmark, LandmarkName
from .source import LandmarkSource, ReplayLandmarkSource

__all__ = [
    "calculate_angle",
    "distance",
    "horizontal_distance",
    "midpoint",
    "reflex_aware_angle",
    "vertical_distance",
    "SKELETON_CONNECTIONS",
    "Frame",
    "Landmark",
    "LandmarkName",
    "LandmarkSource",
    "ReplayLandmarkSource",
]
