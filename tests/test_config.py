"""
Unit tests for configuration loading.
"""

import pytest

from formcoach.config import (
    MIN_HYSTERESIS_MARGIN,
    SquatThresholds,
    ThresholdConfig,
    get_camera_config,
    get_session_config,
    get_threshold_config,
)


class TestThresholdConfig:
    def test_defaults_are_valid(self):
        ThresholdConfig().validate()

    def test_small_gap_is_rejected(self):
        config = ThresholdConfig(squat=SquatThresholds(rep_down_distance_px=100.0,
                                                       rep_up_distance_px=105.0))
        with pytest.raises(ValueError, match="squat"):
            config.validate()

    def test_gap_equal_to_margin_is_allowed(self):
        config = ThresholdConfig(squat=SquatThresholds(
            rep_down_distance_px=100.0, rep_up_distance_px=100.0 + MIN_HYSTERESIS_MARGIN))
        config.validate()

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SQUAT_KNEE_ANGLE_MIN", "65")
        monkeypatch.setenv("JUMPING_JACK_LEGS_SPREAD_PX", "90")
        config = get_threshold_config()
        assert config.squat.knee_angle_min == 65.0
        assert config.jumping_jack.legs_spread_px == 90.0
        assert config.push_up == ThresholdConfig().push_up

    def test_env_override_is_validated(self, monkeypatch):
        monkeypatch.setenv("PUSH_UP_REP_UP_ANGLE", "105")
        with pytest.raises(ValueError, match="push_up"):
            get_threshold_config()


class TestEnvironmentConfig:
    def test_camera(self, monkeypatch):
        monkeypatch.setenv("CAMERA_INDEX", "2")
        monkeypatch.setenv("CAMERA_CAPTURE_THREAD", "false")
        config = get_camera_config()
        assert config.index == 2
        assert config.capture_thread is False

    def test_camera_auto_detect(self, monkeypatch):
        monkeypatch.delenv("CAMERA_INDEX", raising=False)
        assert get_camera_config().index is None

    def test_session(self, monkeypatch):
        monkeypatch.setenv("HISTORY_PATH", "/tmp/history.json")
        monkeypatch.setenv("MANUAL_FALLBACK", "no")
        monkeypatch.setenv("VISIBILITY_THRESHOLD", "0.6")
        config = get_session_config()
        assert config.history_path == "/tmp/history.json"
        assert config.manual_fallback is False
        assert config.visibility_threshold == 0.6


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
