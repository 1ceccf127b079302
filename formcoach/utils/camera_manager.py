"""
Camera Manager Module
=====================

Thread-safe camera capture that keeps only the newest frame.

A background thread reads the camera continuously; consumers get the latest
frame they have not seen yet. When pose estimation is slower than the camera,
stale frames are dropped instead of queued.
"""

import logging
import threading
import time
from typing import Optional

import cv2
import numpy as np

from ..config.settings import CameraConfig

logger = logging.getLogger(__name__)


class CameraManager:
    """
    Thread-safe camera manager for single camera access.

    Attributes:
        running (bool): Whether capture is active
        threaded (bool): Whether a background capture thread is used
    """

    def __init__(self, config: Optional[CameraConfig] = None):
        """Initialize the camera manager."""
        self.config = config or CameraConfig()
        self.lock = threading.Lock()
        self._new_frame = threading.Condition(self.lock)
        self.cap: Optional[cv2.VideoCapture] = None
        self.frame: Optional[np.ndarray] = None
        self.frame_id = 0
        self._read_id = 0
        self.running = False
        self.threaded = self.config.capture_thread
        self.thread: Optional[threading.Thread] = None

    def _open_capture(self) -> cv2.VideoCapture:
        if self.config.index is None:
            cap = self._auto_detect_camera()
        else:
            cap = cv2.VideoCapture(self.config.index)
        if cap.isOpened():
            cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.width)
            cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.height)
            cap.set(cv2.CAP_PROP_FPS, self.config.fps)
        return cap

    def _auto_detect_camera(self) -> cv2.VideoCapture:
        """Auto-detect a working camera that provides non-black frames."""
        for idx in [0, 1, 2]:
            cap = cv2.VideoCapture(idx)
            if cap.isOpened():
                ret, frame = cap.read()
                if ret and frame is not None and np.mean(frame) > 10:
                    logger.info("Using camera %d", idx)
                    return cap
            cap.release()

        # Fallback
        cap = cv2.VideoCapture(1)
        if not cap.isOpened():
            cap = cv2.VideoCapture(0)
        return cap

    def start(self) -> bool:
        """
        Open the camera and begin capturing.

        Returns:
            True if the camera is open, False otherwise
        """
        with self.lock:
            if self.running:
                return True
            cap = self._open_capture()
            if not cap.isOpened():
                cap.release()
                logger.warning("No camera could be opened")
                return False
            self.cap = cap
            self.frame = None
            self.frame_id = 0
            self._read_id = 0
            self.running = True
            if self.threaded:
                self.thread = threading.Thread(target=self._capture_loop, daemon=True)
                try:
                    self.thread.start()
                except RuntimeError:
                    logger.warning("Capture thread unavailable, polling the camera directly")
                    self.thread = None
                    self.threaded = False
            return True

    def stop(self) -> None:
        """Stop capturing and release the camera. Safe to call more than once."""
        with self.lock:
            self.running = False
            thread, self.thread = self.thread, None
            self._new_frame.notify_all()
        if thread is not None:
            thread.join(timeout=2.0)
        with self.lock:
            if self.cap is not None:
                self.cap.release()
                self.cap = None
            self.frame = None

    def _capture_loop(self) -> None:
        """Background capture loop for continuous frame acquisition."""
        while self.running:
            cap = self.cap
            if cap is None or not cap.isOpened():
                break
            try:
                ret, frame = cap.read()
            except cv2.error:
                logger.exception("Capture error")
                break
            if not ret or frame is None:
                time.sleep(0.01)
                continue
            with self._new_frame:
                self.frame = frame
                self.frame_id += 1
                self._new_frame.notify_all()

        with self._new_frame:
            self.running = False
            self._new_frame.notify_all()

    def get_frame(self, timeout: float = 0.5) -> Optional[np.ndarray]:
        """
        Get the newest frame not yet returned.

        Without a capture thread the camera is read directly.

        Args:
            timeout: Seconds to wait for a new frame

        Returns:
            BGR frame, or None if no new frame arrived in time
        """
        if not self.threaded:
            with self.lock:
                cap = self.cap if self.running else None
                if cap is None:
                    return None
                ret, frame = cap.read()
            return frame if ret else None

        with self._new_frame:
            self._new_frame.wait_for(
                lambda: not self.running or self.frame_id > self._read_id, timeout
            )
            if self.frame_id <= self._read_id or self.frame is None:
                return None
            self._read_id = self.frame_id
            return self.frame

    def is_running(self) -> bool:
        """Check if capture is active."""
        return self.running
