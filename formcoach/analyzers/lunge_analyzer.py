"""
Lunge Analyzer Module
=====================

Front-knee depth and hip level checks, and knee-angle rep detection.

The front knee is taken to be the more bent of the two visible knees.
"""

from typing import Optional, Tuple

from ..config.settings import LungeThresholds
from ..pose.geometry import calculate_angle, vertical_distance
from ..pose.landmarks import Frame, LandmarkName
from .base import SIDES, ExerciseKind, FormResult, FormRule, ThresholdRepRule, side_landmark


def front_knee(rule, frame: Frame) -> Optional[Tuple[str, float]]:
    """Return ``(side, knee_angle)`` for the most bent visible knee."""
    best = None
    for side in SIDES:
        leg = rule.require(frame, *(side_landmark(side, j) for j in ("hip", "knee", "ankle")))
        if not leg:
            continue
        angle = calculate_angle(*leg)
        if best is None or angle < best[1]:
            best = (side, angle)
    return best


class LungeFormRule(FormRule):
    """Lunge depth and hip level."""

    kind = ExerciseKind.LUNGE

    def __init__(self, thresholds: Optional[LungeThresholds] = None,
                 visibility_threshold: float = 0.4):
        super().__init__(thresholds or LungeThresholds(), visibility_threshold)

    def check(self, frame: Frame, result: FormResult) -> None:
        t = self.thresholds
        front = front_knee(self, frame)
        if front:
            side, knee_angle = front
            joints = (side_landmark(side, "hip"), side_landmark(side, "knee"),
                      side_landmark(side, "ankle"))
            if knee_angle < t.knee_angle_min:
                result.flag("Front knee too bent, come up a little", *joints)
            elif t.knee_angle_max < knee_angle < t.standing_knee_angle:
                result.flag("Lunge deeper", *joints)

        hips = self.require(frame, LandmarkName.LEFT_HIP, LandmarkName.RIGHT_HIP)
        if hips and vertical_distance(*hips) > t.hip_level_px:
            result.flag("Keep your hips level", LandmarkName.LEFT_HIP, LandmarkName.RIGHT_HIP)


class LungeRepRule(ThresholdRepRule):
    """Front knee angle below the down threshold, then back above the up threshold."""

    kind = ExerciseKind.LUNGE

    def __init__(self, thresholds: Optional[LungeThresholds] = None,
                 visibility_threshold: float = 0.4):
        super().__init__(thresholds or LungeThresholds(), visibility_threshold)

    @property
    def down_threshold(self) -> float:
        return self.thresholds.rep_down_angle

    @property
    def up_threshold(self) -> float:
        return self.thresholds.rep_up_angle

    def signal(self, frame: Frame) -> Optional[float]:
        front = front_knee(self, frame)
        return front[1] if front else None
