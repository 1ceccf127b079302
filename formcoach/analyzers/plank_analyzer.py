"""
Plank Analyzer Module
=====================

Plank body line feedback. Planks are held, not counted, so the rep rule never
changes phase.
"""

from typing import Optional

from ..config.settings import PlankThresholds
from ..pose.geometry import reflex_aware_angle
from ..pose.landmarks import Frame
from .base import SIDES, ExerciseKind, FormResult, FormRule, NullRepRule, side_landmark


class PlankFormRule(FormRule):
    """
    Shoulder-hip-ankle line measured on the floor side.

    Below ``body_line_min`` the hips sag toward the floor; above
    ``body_line_max`` they pike up.
    """

    kind = ExerciseKind.PLANK

    def __init__(self, thresholds: Optional[PlankThresholds] = None,
                 visibility_threshold: float = 0.4):
        super().__init__(thresholds or PlankThresholds(), visibility_threshold)

    def check(self, frame: Frame, result: FormResult) -> None:
        t = self.thresholds
        for side in SIDES:
            shoulder, hip, ankle = (side_landmark(side, j) for j in ("shoulder", "hip", "ankle"))
            body = self.require(frame, shoulder, hip, ankle)
            if not body:
                continue
            line = reflex_aware_angle(*body)
            if line < t.body_line_min:
                result.flag("Hips sagging, lift them up", shoulder, hip, ankle)
            elif line > t.body_line_max:
                result.flag("Hips too high, lower them", shoulder, hip, ankle)


class PlankRepRule(NullRepRule):
    kind = ExerciseKind.PLANK
