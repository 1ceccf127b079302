"""
Landmark Sources
================

Common interface for anything that produces pose frames, plus a replay
source that feeds recorded frames back through a session.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from .landmarks import Frame

logger = logging.getLogger(__name__)


class LandmarkSource(ABC):
    """Abstract base class for per-frame landmark producers."""

    name: str = "base"

    @abstractmethod
    def initialize(self) -> None:
        """
        Acquire the camera and model.

        Raises:
            CameraUnavailableError: if the camera cannot be opened
            ModelInitError: if the pose model cannot be loaded
        """

    @abstractmethod
    def estimate(self) -> Optional[Frame]:
        """Return the landmarks for the next frame, or None if none is ready."""

    @abstractmethod
    def is_opened(self) -> bool:
        """Check if the source can still produce frames."""

    def dispose(self) -> None:
        """Release resources. Safe to call more than once."""
        return None


class ReplayLandmarkSource(LandmarkSource):
    """
    Replays a fixed sequence of frames.

    Usage:
        source = ReplayLandmarkSource(frames)
        source = ReplayLandmarkSource.from_json("session.jsonl")
    """

    name = "replay"

    def __init__(self, frames: Iterable[Frame]):
        self._frames: List[Frame] = list(frames)
        self._position = 0
        self._opened = False

    @classmethod
    def from_json(cls, path: str) -> "ReplayLandmarkSource":
        """Load frames from a JSON-lines file written by ``Frame.to_dict``."""
        frames = []
        with open(path, "r", encoding="utf-8") as handle:
            for line in handle:
                line = line.strip()
                if line:
                    frames.append(Frame.from_dict(json.loads(line)))
        logger.info("Loaded %d replay frames from %s", len(frames), path)
        return cls(frames)

    def initialize(self) -> None:
        self._position = 0
        self._opened = True

    def estimate(self) -> Optional[Frame]:
        if not self.is_opened():
            return None
        frame = self._frames[self._position]
        self._position += 1
        return frame

    def is_opened(self) -> bool:
        return self._opened and self._position < len(self._frames)

    def dispose(self) -> None:
        self._opened = False
