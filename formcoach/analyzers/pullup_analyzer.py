"""
Pull-up Analyzer Module
=======================

Graded elbow-angle feedback and rep detection for pull-ups.
"""

from typing import Optional

from ..config.settings import PullUpThresholds
from ..pose.geometry import calculate_angle
from ..pose.landmarks import Frame
from .base import SIDES, ExerciseKind, FormResult, FormRule, ThresholdRepRule, side_landmark
from .pushup_analyzer import elbow_angle_signal


class PullUpFormRule(FormRule):
    """
    Grades how far the user pulled, from the elbow angle.

    Only the partial and extended bands flag the elbows; the top band is
    positive feedback. Angles between the bands say nothing.
    """

    kind = ExerciseKind.PULL_UP

    def __init__(self, thresholds: Optional[PullUpThresholds] = None,
                 visibility_threshold: float = 0.4):
        super().__init__(thresholds or PullUpThresholds(), visibility_threshold)

    def check(self, frame: Frame, result: FormResult) -> None:
        t = self.thresholds
        for side in SIDES:
            shoulder, elbow, wrist = (side_landmark(side, j) for j in ("shoulder", "elbow", "wrist"))
            arm = self.require(frame, shoulder, elbow, wrist)
            if not arm:
                continue
            elbow_angle = calculate_angle(*arm)
            if elbow_angle < t.perfect_angle:
                result.feedback = "Perfect! Chin over the bar"
            elif t.partial_angle_min <= elbow_angle <= t.partial_angle_max:
                result.flag("Almost there, pull higher", elbow)
            elif elbow_angle > t.extended_angle:
                result.flag("Pull higher", elbow, wrist)


class PullUpRepRule(ThresholdRepRule):
    """Elbows bend past the down threshold, then extend past the up threshold."""

    kind = ExerciseKind.PULL_UP

    def __init__(self, thresholds: Optional[PullUpThresholds] = None,
                 visibility_threshold: float = 0.4):
        super().__init__(thresholds or PullUpThresholds(), visibility_threshold)

    @property
    def down_threshold(self) -> float:
        return self.thresholds.rep_down_angle

    @property
    def up_threshold(self) -> float:
        return self.thresholds.rep_up_angle

    def signal(self, frame: Frame) -> Optional[float]:
        return elbow_angle_signal(self, frame)
