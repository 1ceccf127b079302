"""
Push-up Analyzer Module
=======================

Push-up body line and elbow checks, and elbow-angle rep detection.
"""

from typing import Optional

from ..config.settings import PushUpThresholds
from ..pose.geometry import calculate_angle
from ..pose.landmarks import Frame
from .base import SIDES, ExerciseKind, FormResult, FormRule, ThresholdRepRule, side_landmark


class PushUpFormRule(FormRule):
    """Keeps the shoulder-hip-ankle line straight and the elbows in range."""

    kind = ExerciseKind.PUSH_UP

    def __init__(self, thresholds: Optional[PushUpThresholds] = None,
                 visibility_threshold: float = 0.4):
        super().__init__(thresholds or PushUpThresholds(), visibility_threshold)

    def check(self, frame: Frame, result: FormResult) -> None:
        t = self.thresholds
        for side in SIDES:
            shoulder, hip, ankle = (side_landmark(side, j) for j in ("shoulder", "hip", "ankle"))
            body = self.require(frame, shoulder, hip, ankle)
            if body and calculate_angle(*body) < t.body_line_min:
                result.flag("Keep hips straight", shoulder, hip, ankle)

        for side in SIDES:
            shoulder, elbow, wrist = (side_landmark(side, j) for j in ("shoulder", "elbow", "wrist"))
            arm = self.require(frame, shoulder, elbow, wrist)
            if not arm:
                continue
            elbow_angle = calculate_angle(*arm)
            if elbow_angle < t.elbow_angle_min:
                result.flag("Too deep, stop a little higher", elbow, wrist)
            elif elbow_angle > t.elbow_angle_max:
                result.flag("Don't lock out your elbows", elbow, wrist)


class PushUpRepRule(ThresholdRepRule):
    """Elbow angle below the down threshold, then back above the up threshold."""

    kind = ExerciseKind.PUSH_UP

    def __init__(self, thresholds: Optional[PushUpThresholds] = None,
                 visibility_threshold: float = 0.4):
        super().__init__(thresholds or PushUpThresholds(), visibility_threshold)

    @property
    def down_threshold(self) -> float:
        return self.thresholds.rep_down_angle

    @property
    def up_threshold(self) -> float:
        return self.thresholds.rep_up_angle

    def signal(self, frame: Frame) -> Optional[float]:
        return elbow_angle_signal(self, frame)


def elbow_angle_signal(rule, frame: Frame) -> Optional[float]:
    """Elbow angle of the first side whose arm is fully visible."""
    for side in SIDES:
        arm = rule.require(frame, *(side_landmark(side, j) for j in ("shoulder", "elbow", "wrist")))
        if arm:
            return calculate_angle(*arm)
    return None
