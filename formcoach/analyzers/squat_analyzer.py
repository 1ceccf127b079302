"""
Squat Analyzer Module
=====================

Squat form checks and rep detection.

Classes:
    SquatFormRule: Knee depth, knees-past-toes, back and knee cave checks
    SquatRepRule: Hip-knee vertical distance rep signal
"""

from typing import Optional

from ..config.settings import SquatThresholds
from ..pose.geometry import calculate_angle, horizontal_distance, vertical_distance
from ..pose.landmarks import Frame, LandmarkName
from .base import SIDES, ExerciseKind, FormResult, FormRule, ThresholdRepRule, side_landmark


class SquatFormRule(FormRule):
    """
    Squat form checks, applied to each visible side.

    Attributes:
        thresholds (SquatThresholds): Angle and pixel limits
    """

    kind = ExerciseKind.SQUAT

    def __init__(self, thresholds: Optional[SquatThresholds] = None,
                 visibility_threshold: float = 0.4):
        super().__init__(thresholds or SquatThresholds(), visibility_threshold)

    def check(self, frame: Frame, result: FormResult) -> None:
        t = self.thresholds
        for side in SIDES:
            hip, knee, ankle = (side_landmark(side, j) for j in ("hip", "knee", "ankle"))
            leg = self.require(frame, hip, knee, ankle)
            if leg:
                knee_angle = calculate_angle(*leg)
                if knee_angle < t.knee_angle_min:
                    result.flag("Squat too deep", hip, knee, ankle)
                elif t.knee_angle_max < knee_angle < t.standing_knee_angle:
                    result.flag("Lower your hips", hip, knee, ankle)

        for side in SIDES:
            knee, ankle = side_landmark(side, "knee"), side_landmark(side, "ankle")
            pair = self.require(frame, knee, ankle)
            if pair and pair[0].x > pair[1].x + t.knee_over_toe_px:
                result.flag("Keep knees behind toes", knee, ankle)

        for side in SIDES:
            shoulder, hip = side_landmark(side, "shoulder"), side_landmark(side, "hip")
            pair = self.require(frame, shoulder, hip)
            if pair and horizontal_distance(*pair) > t.back_offset_px:
                result.flag("Keep back straight", shoulder, hip)

        knees = self.require(frame, LandmarkName.LEFT_KNEE, LandmarkName.RIGHT_KNEE)
        if knees and horizontal_distance(*knees) < t.knee_separation_min_px:
            result.flag("Push knees outward", LandmarkName.LEFT_KNEE, LandmarkName.RIGHT_KNEE)


class SquatRepRule(ThresholdRepRule):
    """
    Counts squats from the vertical hip-knee distance.

    Standing puts the hip well above the knee; at depth the two are close.
    """

    kind = ExerciseKind.SQUAT

    def __init__(self, thresholds: Optional[SquatThresholds] = None,
                 visibility_threshold: float = 0.4):
        super().__init__(thresholds or SquatThresholds(), visibility_threshold)

    @property
    def down_threshold(self) -> float:
        return self.thresholds.rep_down_distance_px

    @property
    def up_threshold(self) -> float:
        return self.thresholds.rep_up_distance_px

    def signal(self, frame: Frame) -> Optional[float]:
        for side in SIDES:
            pair = self.require(frame, side_landmark(side, "hip"), side_landmark(side, "knee"))
            if pair:
                return vertical_distance(*pair)
        return None
