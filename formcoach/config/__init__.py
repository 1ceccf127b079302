"""
Configuration Module
====================
"""

from .settings import (
    MIN_HYSTERESIS_MARGIN,
    CameraConfig,
    PoseConfig,
    SessionConfig,
    ThresholdConfig,
    SquatThresholds,
    PushUpThresholds,
    PullUpThresholds,
    LungeThresholds,
    PlankThresholds,
    JumpingJackThresholds,
    get_camera_config,
    get_pose_config,
    get_session_config,
    get_threshold_config,
)

__all__ = [
    "MIN_HYSTERESIS_MARGIN",
    "CameraConfig",
    "PoseConfig",
    "SessionConfig",
    "ThresholdConfig",
    "SquatThresholds",
    "PushUpThresholds",
    "PullUpThresholds",
    "LungeThresholds",
    "PlankThresholds",
    "JumpingJackThresholds",
    "get_camera_config",
    "get_pose_config",
    "get_session_config",
    "get_threshold_config",
]
