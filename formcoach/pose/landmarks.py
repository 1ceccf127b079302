"""
Pose Landmarks
==============

Named body landmarks and the per-frame landmark set.

Coordinates are pixels relative to the video frame; ``visibility`` is the
model's confidence in [0, 1].
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple


class LandmarkName(str, Enum):
    """The 33 MediaPipe Pose landmarks, in model index order."""
    NOSE = "nose"
    LEFT_EYE_INNER = "left_eye_inner"
    LEFT_EYE = "left_eye"
    LEFT_EYE_OUTER = "left_eye_outer"
    RIGHT_EYE_INNER = "right_eye_inner"
    RIGHT_EYE = "right_eye"
    RIGHT_EYE_OUTER = "right_eye_outer"
    LEFT_EAR = "left_ear"
    RIGHT_EAR = "right_ear"
    MOUTH_LEFT = "mouth_left"
    MOUTH_RIGHT = "mouth_right"
    LEFT_SHOULDER = "left_shoulder"
    RIGHT_SHOULDER = "right_shoulder"
    LEFT_ELBOW = "left_elbow"
    RIGHT_ELBOW = "right_elbow"
    LEFT_WRIST = "left_wrist"
    RIGHT_WRIST = "right_wrist"
    LEFT_PINKY = "left_pinky"
    RIGHT_PINKY = "right_pinky"
    LEFT_INDEX = "left_index"
    RIGHT_INDEX = "right_index"
    LEFT_THUMB = "left_thumb"
    RIGHT_THUMB = "right_thumb"
    LEFT_HIP = "left_hip"
    RIGHT_HIP = "right_hip"
    LEFT_KNEE = "left_knee"
    RIGHT_KNEE = "right_knee"
    LEFT_ANKLE = "left_ankle"
    RIGHT_ANKLE = "right_ankle"
    LEFT_HEEL = "left_heel"
    RIGHT_HEEL = "right_heel"
    LEFT_FOOT_INDEX = "left_foot_index"
    RIGHT_FOOT_INDEX = "right_foot_index"

    @classmethod
    def from_index(cls, index: int) -> "LandmarkName":
        """Map a pose model landmark index to its name."""
        return _BY_INDEX[index]


_BY_INDEX = list(LandmarkName)

# Skeleton edges drawn on the overlay
SKELETON_CONNECTIONS: Tuple[Tuple[LandmarkName, LandmarkName], ...] = (
    (LandmarkName.LEFT_SHOULDER, LandmarkName.RIGHT_SHOULDER),
    (LandmarkName.LEFT_SHOULDER, LandmarkName.LEFT_ELBOW),
    (LandmarkName.LEFT_ELBOW, LandmarkName.LEFT_WRIST),
    (LandmarkName.RIGHT_SHOULDER, LandmarkName.RIGHT_ELBOW),
    (LandmarkName.RIGHT_ELBOW, LandmarkName.RIGHT_WRIST),
    (LandmarkName.LEFT_HIP, LandmarkName.RIGHT_HIP),
    (LandmarkName.LEFT_SHOULDER, LandmarkName.LEFT_HIP),
    (LandmarkName.RIGHT_SHOULDER, LandmarkName.RIGHT_HIP),
    (LandmarkName.LEFT_HIP, LandmarkName.LEFT_KNEE),
    (LandmarkName.LEFT_KNEE, LandmarkName.LEFT_ANKLE),
    (LandmarkName.RIGHT_HIP, LandmarkName.RIGHT_KNEE),
    (LandmarkName.RIGHT_KNEE, LandmarkName.RIGHT_ANKLE),
)


@dataclass(frozen=True)
class Landmark:
    """A named body joint position with a confidence score."""
    name: LandmarkName
    x: float
    y: float
    visibility: float = 1.0


@dataclass
class Frame:
    """
    All landmarks estimated for one video frame.

    Attributes:
        landmarks: Mapping of landmark name to landmark
        width: Frame width in pixels
        height: Frame height in pixels
        timestamp: Capture time in seconds
        image: Source BGR image, kept only for drawing
    """
    landmarks: Dict[LandmarkName, Landmark] = field(default_factory=dict)
    width: int = 0
    height: int = 0
    timestamp: float = field(default_factory=time.monotonic)
    image: Any = None

    def get(self, name: LandmarkName) -> Optional[Landmark]:
        return self.landmarks.get(name)

    def visible(self, name: LandmarkName, threshold: float) -> Optional[Landmark]:
        """Return the landmark if it is present and above ``threshold`` visibility."""
        lm = self.landmarks.get(name)
        if lm is None or lm.visibility <= threshold:
            return None
        return lm

    def require(self, threshold: float, *names: LandmarkName) -> Optional[Tuple[Landmark, ...]]:
        """
        Look up several landmarks at once.

        Returns:
            The landmarks in the order requested, or None if any of them is
            missing or not visible enough
        """
        found = []
        for name in names:
            lm = self.visible(name, threshold)
            if lm is None:
                return None
            found.append(lm)
        return tuple(found)

    @classmethod
    def from_normalized(cls, points: Iterable[Any], width: int, height: int,
                        timestamp: Optional[float] = None, image: Any = None) -> "Frame":
        """
        Build a frame from model output in normalized [0, 1] coordinates.

        Args:
            points: Objects with ``x``, ``y`` and optional ``visibility``, in
                model index order
            width: Frame width in pixels
            height: Frame height in pixels
        """
        landmarks = {}
        for index, point in enumerate(points):
            if index >= len(_BY_INDEX):
                break
            name = _BY_INDEX[index]
            visibility = getattr(point, "visibility", None)
            landmarks[name] = Landmark(
                name=name,
                x=point.x * width,
                y=point.y * height,
                visibility=1.0 if visibility is None else float(visibility),
            )
        return cls(
            landmarks=landmarks,
            width=width,
            height=height,
            timestamp=time.monotonic() if timestamp is None else timestamp,
            image=image,
        )

    @classmethod
    def from_points(cls, points: Mapping[Any, Any], width: int = 640, height: int = 480,
                    timestamp: Optional[float] = None) -> "Frame":
        """
        Build a frame from pixel coordinates keyed by landmark name.

        Values are ``(x, y)`` or ``(x, y, visibility)`` tuples.
        """
        landmarks = {}
        for key, value in points.items():
            name = LandmarkName(key)
            x, y = value[0], value[1]
            visibility = value[2] if len(value) > 2 else 1.0
            landmarks[name] = Landmark(name, float(x), float(y), float(visibility))
        return cls(
            landmarks=landmarks,
            width=width,
            height=height,
            timestamp=time.monotonic() if timestamp is None else timestamp,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize landmarks for replay files."""
        return {
            "width": self.width,
            "height": self.height,
            "timestamp": self.timestamp,
            "landmarks": [
                {"name": lm.name.value, "x": lm.x, "y": lm.y, "visibility": lm.visibility}
                for lm in self.landmarks.values()
            ],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Frame":
        points = {
            item["name"]: (item["x"], item["y"], item.get("visibility", 1.0))
            for item in data.get("landmarks", [])
        }
        return cls.from_points(
            points,
            width=int(data.get("width", 640)),
            height=int(data.get("height", 480)),
            timestamp=data.get("timestamp"),
        )
