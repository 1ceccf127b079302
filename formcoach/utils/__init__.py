"""
Utilities Module
================

Camera capture, the MediaPipe landmark source and OpenCV drawing helpers.
"""

from .camera_manager import CameraManager
from .mediapipe_source import MediaPipeLandmarkSource
from .overlay import draw_session_overlay, draw_skeleton

__all__ = [
    "CameraManager",
    "MediaPipeLandmarkSource",
    "draw_session_overlay",
    "draw_skeleton",
]
