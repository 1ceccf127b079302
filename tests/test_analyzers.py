"""
Unit tests for the per-exercise form rules.
"""

import pytest

from formcoach.analyzers import (
    ExerciseKind,
    JumpingJackFormRule,
    LungeFormRule,
    NullFormRule,
    PlankFormRule,
    PullUpFormRule,
    PushUpFormRule,
    SquatFormRule,
    SquatRepRule,
    build_rules,
)
from formcoach.analyzers.lunge_analyzer import front_knee
from formcoach.config import SquatThresholds, ThresholdConfig
from formcoach.pose import LandmarkName as L
from pose_helpers import arm, frame, leg


class TestExerciseKind:
    """Exercise names resolve to one rule family."""

    @pytest.mark.parametrize("name,kind", [
        ("Squats", ExerciseKind.SQUAT),
        ("Jump Squats", ExerciseKind.SQUAT),
        ("Push-ups", ExerciseKind.PUSH_UP),
        ("PULL-UPS", ExerciseKind.PULL_UP),
        ("Walking Lunges", ExerciseKind.LUNGE),
        ("Side Plank", ExerciseKind.PLANK),
        ("Jumping Jacks", ExerciseKind.JUMPING_JACK),
        ("Jump Rope", ExerciseKind.JUMPING_JACK),
        ("Bicep Curl", ExerciseKind.UNKNOWN),
        ("", ExerciseKind.UNKNOWN),
        (None, ExerciseKind.UNKNOWN),
    ])
    def test_from_name(self, name, kind):
        assert ExerciseKind.from_name(name) is kind

    def test_build_rules_pairs_by_kind(self):
        form_rule, rep_rule = build_rules(ExerciseKind.SQUAT)
        assert isinstance(form_rule, SquatFormRule)
        assert isinstance(rep_rule, SquatRepRule)

    def test_unknown_exercise_has_no_feedback(self):
        form_rule, _ = build_rules(ExerciseKind.UNKNOWN)
        assert isinstance(form_rule, NullFormRule)
        result = form_rule.evaluate(frame(**leg(40), **arm(20)))
        assert result.incorrect_joints == set()
        assert result.feedback == ""


class TestSquatForm:
    """Test suite for squat form checks."""

    def setup_method(self):
        self.rule = SquatFormRule()

    def test_too_deep(self):
        result = self.rule.evaluate(frame(**leg(60)))
        assert result.feedback == "Squat too deep"
        assert result.incorrect_joints == {L.LEFT_HIP, L.LEFT_KNEE, L.LEFT_ANKLE}

    def test_not_deep_enough(self):
        result = self.rule.evaluate(frame(**leg(130)))
        assert result.feedback == "Lower your hips"

    def test_good_depth_and_standing_are_clean(self):
        assert self.rule.evaluate(frame(**leg(90))).is_correct
        assert self.rule.evaluate(frame(**leg(175))).is_correct

    def test_right_side_is_checked(self):
        result = self.rule.evaluate(frame(**leg(60, side="right")))
        assert result.incorrect_joints == {L.RIGHT_HIP, L.RIGHT_KNEE, L.RIGHT_ANKLE}

    def test_boundary_is_deterministic(self):
        """The same frame at exactly 70 degrees always gives the same result."""
        squat = frame(**leg(70))
        first = self.rule.evaluate(squat)
        for _ in range(5):
            again = self.rule.evaluate(squat)
            assert again.incorrect_joints == first.incorrect_joints
            assert again.feedback == first.feedback

    def test_low_visibility_landmarks_are_ignored(self):
        assert self.rule.evaluate(frame(**leg(40, visibility=0.2))).is_correct

    def test_knees_past_toes(self):
        result = self.rule.evaluate(frame(left_knee=(340, 300), left_ankle=(300, 400)))
        assert result.feedback == "Keep knees behind toes"
        assert result.incorrect_joints == {L.LEFT_KNEE, L.LEFT_ANKLE}

    def test_back_not_straight(self):
        result = self.rule.evaluate(frame(left_shoulder=(300, 100), left_hip=(380, 200)))
        assert result.feedback == "Keep back straight"
        assert result.incorrect_joints == {L.LEFT_SHOULDER, L.LEFT_HIP}

    def test_last_check_wins_and_joints_accumulate(self):
        """Knees caving runs after knees-past-toes, so its message is shown."""
        result = self.rule.evaluate(frame(
            left_knee=(340, 300), left_ankle=(300, 400),
            right_knee=(360, 300), right_ankle=(350, 400),
        ))
        assert result.feedback == "Push knees outward"
        assert result.incorrect_joints == {L.LEFT_KNEE, L.LEFT_ANKLE, L.RIGHT_KNEE}

    def test_thresholds_are_configurable(self):
        rule = SquatFormRule(SquatThresholds(knee_angle_min=50.0))
        assert rule.evaluate(frame(**leg(60))).is_correct

    def test_build_rules_uses_threshold_config(self):
        config = ThresholdConfig(squat=SquatThresholds(knee_angle_min=50.0))
        form_rule, _ = build_rules(ExerciseKind.SQUAT, config)
        assert form_rule.evaluate(frame(**leg(60))).is_correct


class TestPushUpForm:
    """Test suite for push-up form checks."""

    def setup_method(self):
        self.rule = PushUpFormRule()

    def test_sagging_hips(self):
        result = self.rule.evaluate(frame(
            left_shoulder=(100, 200), left_hip=(300, 260), left_ankle=(500, 200)))
        assert result.feedback == "Keep hips straight"
        assert result.incorrect_joints == {L.LEFT_SHOULDER, L.LEFT_HIP, L.LEFT_ANKLE}

    def test_straight_body(self):
        result = self.rule.evaluate(frame(
            left_shoulder=(100, 200), left_hip=(300, 200), left_ankle=(500, 200)))
        assert result.is_correct

    def test_elbows_too_bent(self):
        result = self.rule.evaluate(frame(**arm(60)))
        assert result.feedback == "Too deep, stop a little higher"
        assert result.incorrect_joints == {L.LEFT_ELBOW, L.LEFT_WRIST}

    def test_locked_out_elbows(self):
        result = self.rule.evaluate(frame(**arm(175)))
        assert result.feedback == "Don't lock out your elbows"

    def test_mid_range_elbows(self):
        assert self.rule.evaluate(frame(**arm(120))).is_correct


class TestPullUpForm:
    """Pull-up feedback is graded by elbow angle."""

    def setup_method(self):
        self.rule = PullUpFormRule()

    def test_perfect(self):
        result = self.rule.evaluate(frame(**arm(30)))
        assert result.feedback == "Perfect! Chin over the bar"
        assert result.is_correct

    def test_partial(self):
        result = self.rule.evaluate(frame(**arm(120)))
        assert result.feedback == "Almost there, pull higher"
        assert result.incorrect_joints == {L.LEFT_ELBOW}

    def test_extended(self):
        result = self.rule.evaluate(frame(**arm(170)))
        assert result.feedback == "Pull higher"
        assert result.incorrect_joints == {L.LEFT_ELBOW, L.LEFT_WRIST}

    def test_between_bands(self):
        result = self.rule.evaluate(frame(**arm(80)))
        assert result.feedback == ""
        assert result.is_correct


class TestLungeForm:
    """Test suite for lunge form checks."""

    def setup_method(self):
        self.rule = LungeFormRule()

    def test_front_knee_is_most_bent(self):
        lunge = frame(**leg(90, "left", knee=(250, 300)), **leg(170, "right", knee=(350, 300)))
        side, angle = front_knee(self.rule, lunge)
        assert side == "left"
        assert angle == pytest.approx(90.0)

    def test_front_knee_too_bent(self):
        result = self.rule.evaluate(frame(**leg(60)))
        assert result.feedback == "Front knee too bent, come up a little"
        assert L.LEFT_KNEE in result.incorrect_joints

    def test_not_deep_enough(self):
        result = self.rule.evaluate(frame(**leg(130, "right")))
        assert result.feedback == "Lunge deeper"
        assert L.RIGHT_KNEE in result.incorrect_joints

    def test_good_depth(self):
        assert self.rule.evaluate(frame(**leg(90))).is_correct

    def test_hips_not_level(self):
        result = self.rule.evaluate(frame(left_hip=(250, 200), right_hip=(350, 250)))
        assert result.feedback == "Keep your hips level"
        assert result.incorrect_joints == {L.LEFT_HIP, L.RIGHT_HIP}


class TestPlankForm:
    """Test suite for plank body line checks."""

    def setup_method(self):
        self.rule = PlankFormRule()

    def test_sagging(self):
        result = self.rule.evaluate(frame(
            right_shoulder=(100, 200), right_hip=(300, 260), right_ankle=(500, 200)))
        assert result.feedback == "Hips sagging, lift them up"
        assert result.incorrect_joints == {L.RIGHT_SHOULDER, L.RIGHT_HIP, L.RIGHT_ANKLE}

    def test_piking(self):
        result = self.rule.evaluate(frame(
            left_shoulder=(100, 200), left_hip=(300, 140), left_ankle=(500, 200)))
        assert result.feedback == "Hips too high, lower them"

    def test_straight(self):
        result = self.rule.evaluate(frame(
            left_shoulder=(100, 200), left_hip=(300, 205), left_ankle=(500, 210)))
        assert result.is_correct


class TestJumpingJackForm:
    """Test suite for jumping jack checks."""

    def setup_method(self):
        self.rule = JumpingJackFormRule()

    def test_bent_arm_overhead(self):
        result = self.rule.evaluate(frame(
            left_shoulder=(300, 200), left_elbow=(320, 120), left_wrist=(300, 60)))
        assert result.feedback == "Straighten your arms"
        assert result.incorrect_joints == {L.LEFT_ELBOW, L.LEFT_WRIST}

    def test_straight_arm_overhead(self):
        result = self.rule.evaluate(frame(
            left_shoulder=(300, 200), left_elbow=(300, 130), left_wrist=(300, 60)))
        assert result.is_correct

    def test_arms_up_legs_together(self):
        result = self.rule.evaluate(frame(
            left_shoulder=(300, 200), left_wrist=(300, 100),
            left_ankle=(290, 450), right_ankle=(310, 450)))
        assert result.feedback == "Spread legs wider"
        assert result.incorrect_joints == {L.LEFT_ANKLE, L.RIGHT_ANKLE}

    def test_legs_spread_arms_down(self):
        result = self.rule.evaluate(frame(
            left_shoulder=(300, 200), left_wrist=(300, 300),
            left_ankle=(250, 450), right_ankle=(350, 450)))
        assert result.feedback == "Raise arms higher"


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
