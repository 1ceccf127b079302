"""
MediaPipe Landmark Source
=========================

Camera frames through MediaPipe Pose, converted to pixel-space landmarks.
"""

import logging
from typing import Optional

import cv2
import mediapipe as mp

from ..config.settings import CameraConfig, PoseConfig
from ..exceptions import CameraUnavailableError, ModelInitError
from ..pose.landmarks import Frame
from ..pose.source import LandmarkSource
from .camera_manager import CameraManager

logger = logging.getLogger(__name__)


class MediaPipeLandmarkSource(LandmarkSource):
    """
    Landmark source backed by a local camera and MediaPipe Pose.

    Frames carry the captured BGR image so callers can draw on it.
    """

    name = "mediapipe"

    def __init__(self, camera_config: Optional[CameraConfig] = None,
                 pose_config: Optional[PoseConfig] = None):
        self.pose_config = pose_config or PoseConfig()
        self.camera = CameraManager(camera_config)
        self.pose = None

    def initialize(self) -> None:
        if not self.camera.start():
            raise CameraUnavailableError("Could not open a camera")
        cfg = self.pose_config
        try:
            self.pose = mp.solutions.pose.Pose(
                static_image_mode=False,
                model_complexity=cfg.model_complexity,
                smooth_landmarks=cfg.smooth_landmarks,
                enable_segmentation=False,
                min_detection_confidence=cfg.min_detection_confidence,
                min_tracking_confidence=cfg.min_tracking_confidence,
            )
        except Exception as exc:
            self.camera.stop()
            raise ModelInitError(f"Failed to load MediaPipe Pose: {exc}") from exc
        logger.info("MediaPipe Pose ready (complexity %d)", cfg.model_complexity)

    def estimate(self) -> Optional[Frame]:
        if self.pose is None:
            return None
        image = self.camera.get_frame()
        if image is None:
            return None

        rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        rgb.flags.writeable = False
        results = self.pose.process(rgb)

        frame_h, frame_w = image.shape[:2]
        if not results.pose_landmarks:
            return Frame(width=frame_w, height=frame_h, image=image)
        return Frame.from_normalized(
            results.pose_landmarks.landmark, frame_w, frame_h, image=image
        )

    def is_opened(self) -> bool:
        return self.pose is not None and self.camera.is_running()

    def dispose(self) -> None:
        self.camera.stop()
        pose, self.pose = self.pose, None
        if pose is not None:
            try:
                pose.close()
            except Exception:
                logger.exception("Failed to close MediaPipe Pose")
