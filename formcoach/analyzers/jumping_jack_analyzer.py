"""
Jumping Jack Analyzer Module
============================

Arm and leg coordination checks, and compound rep detection.

Classes:
    JumpingJackFormRule: Straight arms overhead, arms and legs in sync
    JumpingJackRepRule: Arms raised AND legs spread completes a rep
"""

from typing import Optional, Tuple

from ..config.settings import JumpingJackThresholds
from ..pose.geometry import calculate_angle, horizontal_distance
from ..pose.landmarks import Frame, LandmarkName
from .base import (
    SIDES,
    ExerciseKind,
    FormResult,
    FormRule,
    Phase,
    RepRule,
    RepUpdate,
    side_landmark,
)


def _arm(rule, frame: Frame):
    """Shoulder and wrist of the first side with both visible."""
    for side in SIDES:
        arm = rule.require(frame, side_landmark(side, "shoulder"), side_landmark(side, "wrist"))
        if arm:
            return arm
    return None


def _feet_gap(rule, frame: Frame) -> Optional[float]:
    ankles = rule.require(frame, LandmarkName.LEFT_ANKLE, LandmarkName.RIGHT_ANKLE)
    return horizontal_distance(*ankles) if ankles else None


class JumpingJackFormRule(FormRule):
    """Arms straight when overhead; arms and legs open together."""

    kind = ExerciseKind.JUMPING_JACK

    def __init__(self, thresholds: Optional[JumpingJackThresholds] = None,
                 visibility_threshold: float = 0.4):
        super().__init__(thresholds or JumpingJackThresholds(), visibility_threshold)

    def check(self, frame: Frame, result: FormResult) -> None:
        t = self.thresholds
        for side in SIDES:
            shoulder, elbow, wrist = (side_landmark(side, j) for j in ("shoulder", "elbow", "wrist"))
            arm = self.require(frame, shoulder, elbow, wrist)
            if arm and arm[2].y < arm[0].y and calculate_angle(*arm) < t.arm_angle_min:
                result.flag("Straighten your arms", elbow, wrist)

        arm = _arm(self, frame)
        gap = _feet_gap(self, frame)
        if arm is None or gap is None:
            return
        shoulder, wrist = arm
        arms_up = wrist.y < shoulder.y - t.arms_up_offset_px
        legs_spread = gap > t.legs_spread_px
        if arms_up and not legs_spread:
            result.flag("Spread legs wider", LandmarkName.LEFT_ANKLE, LandmarkName.RIGHT_ANKLE)
        elif legs_spread and not arms_up:
            result.flag("Raise arms higher", LandmarkName.LEFT_WRIST, LandmarkName.RIGHT_WRIST)


class JumpingJackRepRule(RepRule):
    """
    Counts a rep when the user opens up from a closed stance.

    Open (arms raised above the shoulder AND feet wider than
    ``legs_spread_px``) moves down -> up and completes a rep. Closed (wrists
    below the shoulder AND feet closer than ``legs_together_px``) moves
    back to down.
    """

    kind = ExerciseKind.JUMPING_JACK

    def __init__(self, thresholds: Optional[JumpingJackThresholds] = None,
                 visibility_threshold: float = 0.4):
        super().__init__(thresholds or JumpingJackThresholds(), visibility_threshold)

    def hysteresis(self) -> Tuple[float, float]:
        return self.thresholds.legs_together_px, self.thresholds.legs_spread_px

    def update(self, frame: Frame, phase: Phase) -> RepUpdate:
        t = self.thresholds
        arm = _arm(self, frame)
        gap = _feet_gap(self, frame)
        if arm is None or gap is None:
            return RepUpdate(phase)
        shoulder, wrist = arm

        is_open = wrist.y < shoulder.y - t.arms_up_offset_px and gap > t.legs_spread_px
        is_closed = wrist.y > shoulder.y and gap < t.legs_together_px
        if phase is Phase.DOWN and is_open:
            return RepUpdate(Phase.UP, rep_completed=True)
        if phase is Phase.UP and is_closed:
            return RepUpdate(Phase.DOWN)
        return RepUpdate(phase)
