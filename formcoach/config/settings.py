"""
Analyzer Configuration
======================

Configuration settings for the camera, the pose model, the workout session
and the per-exercise form and rep thresholds.

Every threshold can be overridden from the environment (or a ``.env`` file)
using ``<EXERCISE>_<FIELD>``, e.g. ``SQUAT_KNEE_ANGLE_MIN=65``.
"""

import os
from dataclasses import dataclass, field, fields, replace
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Smallest allowed gap between a rep rule's "down" and "up" thresholds
MIN_HYSTERESIS_MARGIN = 10.0


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: Optional[int] = None  # None for auto-detect
    width: int = 640
    height: int = 480
    fps: int = 30
    capture_thread: bool = True


@dataclass
class PoseConfig:
    """MediaPipe Pose model options."""
    model_complexity: int = 1
    smooth_landmarks: bool = True
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5


@dataclass
class SessionConfig:
    """Workout session settings."""
    visibility_threshold: float = 0.4
    history_path: str = "workout_history.json"
    speech_enabled: bool = True
    manual_fallback: bool = True


@dataclass
class SquatThresholds:
    """Squat form checks and hip-knee distance rep signal (pixels)."""
    knee_angle_min: float = 70.0
    knee_angle_max: float = 110.0
    standing_knee_angle: float = 160.0
    knee_over_toe_px: float = 30.0
    back_offset_px: float = 50.0
    knee_separation_min_px: float = 60.0
    rep_down_distance_px: float = 80.0
    rep_up_distance_px: float = 120.0


@dataclass
class PushUpThresholds:
    body_line_min: float = 160.0
    elbow_angle_min: float = 70.0
    elbow_angle_max: float = 170.0
    rep_down_angle: float = 100.0
    rep_up_angle: float = 160.0


@dataclass
class PullUpThresholds:
    perfect_angle: float = 40.0
    partial_angle_min: float = 100.0
    partial_angle_max: float = 140.0
    extended_angle: float = 160.0
    rep_down_angle: float = 70.0
    rep_up_angle: float = 150.0


@dataclass
class LungeThresholds:
    knee_angle_min: float = 70.0
    knee_angle_max: float = 110.0
    standing_knee_angle: float = 160.0
    hip_level_px: float = 30.0
    rep_down_angle: float = 100.0
    rep_up_angle: float = 150.0


@dataclass
class PlankThresholds:
    body_line_min: float = 165.0
    body_line_max: float = 195.0


@dataclass
class JumpingJackThresholds:
    arm_angle_min: float = 150.0
    arms_up_offset_px: float = 50.0
    legs_spread_px: float = 80.0
    legs_together_px: float = 50.0


@dataclass
class ThresholdConfig:
    """Per-exercise thresholds, one section per exercise kind."""
    squat: SquatThresholds = field(default_factory=SquatThresholds)
    push_up: PushUpThresholds = field(default_factory=PushUpThresholds)
    pull_up: PullUpThresholds = field(default_factory=PullUpThresholds)
    lunge: LungeThresholds = field(default_factory=LungeThresholds)
    plank: PlankThresholds = field(default_factory=PlankThresholds)
    jumping_jack: JumpingJackThresholds = field(default_factory=JumpingJackThresholds)

    def validate(self, margin: float = MIN_HYSTERESIS_MARGIN) -> None:
        """
        Check that every rep signal keeps a hysteresis gap.

        Raises:
            ValueError: if a down threshold is not below its up threshold
                by at least ``margin``
        """
        pairs = {
            "squat": (self.squat.rep_down_distance_px, self.squat.rep_up_distance_px),
            "push_up": (self.push_up.rep_down_angle, self.push_up.rep_up_angle),
            "pull_up": (self.pull_up.rep_down_angle, self.pull_up.rep_up_angle),
            "lunge": (self.lunge.rep_down_angle, self.lunge.rep_up_angle),
            "jumping_jack": (self.jumping_jack.legs_together_px,
                             self.jumping_jack.legs_spread_px),
        }
        for name, (down, up) in pairs.items():
            if up - down < margin:
                raise ValueError(
                    f"{name}: down threshold {down} and up threshold {up} "
                    f"must differ by at least {margin}"
                )


def _with_env_overrides(section, prefix: str):
    """Return a copy of a threshold section with ``PREFIX_FIELD`` env values applied."""
    overrides = {}
    for f in fields(section):
        value = os.getenv(f"{prefix}_{f.name.upper()}")
        if value is not None:
            overrides[f.name] = float(value)
    return replace(section, **overrides)


def get_camera_config() -> CameraConfig:
    """Get camera configuration from environment."""
    index = os.getenv("CAMERA_INDEX")
    return CameraConfig(
        index=int(index) if index else None,
        width=int(os.getenv("CAMERA_WIDTH", "640")),
        height=int(os.getenv("CAMERA_HEIGHT", "480")),
        fps=int(os.getenv("CAMERA_FPS", "30")),
        capture_thread=_env_bool("CAMERA_CAPTURE_THREAD", True),
    )


def get_pose_config() -> PoseConfig:
    """Get pose model configuration from environment."""
    return PoseConfig(
        model_complexity=int(os.getenv("POSE_MODEL_COMPLEXITY", "1")),
        smooth_landmarks=_env_bool("POSE_SMOOTH_LANDMARKS", True),
        min_detection_confidence=float(os.getenv("POSE_MIN_DETECTION_CONFIDENCE", "0.5")),
        min_tracking_confidence=float(os.getenv("POSE_MIN_TRACKING_CONFIDENCE", "0.5")),
    )


def get_session_config() -> SessionConfig:
    """Get session configuration from environment."""
    return SessionConfig(
        visibility_threshold=float(os.getenv("VISIBILITY_THRESHOLD", "0.4")),
        history_path=os.getenv("HISTORY_PATH", "workout_history.json"),
        speech_enabled=_env_bool("SPEECH_ENABLED", True),
        manual_fallback=_env_bool("MANUAL_FALLBACK", True),
    )


def get_threshold_config() -> ThresholdConfig:
    """Get per-exercise thresholds from environment and validate them."""
    defaults = ThresholdConfig()
    config = ThresholdConfig(
        squat=_with_env_overrides(defaults.squat, "SQUAT"),
        push_up=_with_env_overrides(defaults.push_up, "PUSH_UP"),
        pull_up=_with_env_overrides(defaults.pull_up, "PULL_UP"),
        lunge=_with_env_overrides(defaults.lunge, "LUNGE"),
        plank=_with_env_overrides(defaults.plank, "PLANK"),
        jumping_jack=_with_env_overrides(defaults.jumping_jack, "JUMPING_JACK"),
    )
    config.validate()
    return config
