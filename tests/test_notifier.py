"""
Unit tests for the spoken notifier.
"""

import time

import pytest

import formcoach.session.notifier as notifier_module
from formcoach.session import SpeechNotifier


class FakeEngine:
    def __init__(self):
        self.said = []
        self.stopped = False

    def say(self, text):
        self.said.append(text)

    def runAndWait(self):
        return None

    def stop(self):
        self.stopped = True


def wait_for(condition, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.01)
    return condition()


@pytest.fixture
def engine(monkeypatch):
    fake = FakeEngine()
    monkeypatch.setattr(notifier_module.pyttsx3, "init", lambda: fake)
    return fake


@pytest.fixture
def speech(engine):
    speaker = SpeechNotifier()
    yield speaker
    speaker.close()


@pytest.fixture
def spoken(speech):
    """Capture queued phrases instead of handing them to the worker."""
    queued = []
    speech._speak = queued.append
    return queued


class TestFeedback:
    def test_repeated_feedback_is_spoken_once(self, speech, spoken):
        for _ in range(5):
            speech.feedback("Squat too deep")
        assert spoken == ["Squat too deep"]

    def test_flicker_through_empty_does_not_repeat(self, speech, spoken):
        for text in ["Squat too deep", "", "Squat too deep", "", "Squat too deep"]:
            speech.feedback(text)
        assert spoken == ["Squat too deep"]

    def test_new_message_is_spoken(self, speech, spoken):
        for text in ["Squat too deep", "", "Keep back straight", "Squat too deep"]:
            speech.feedback(text)
        assert spoken == ["Squat too deep", "Keep back straight", "Squat too deep"]

    def test_empty_feedback_is_silent(self, speech, spoken):
        speech.feedback("")
        assert spoken == []


class TestSpeech:
    def test_success_and_message_are_queued(self, speech, spoken):
        speech.success(3)
        speech.message("Workout saved!", "3 reps of Squats recorded")
        speech.message("Camera access denied", "Please allow camera access", error=True)
        assert spoken == ["3", "Workout saved!", "Camera access denied"]

    def test_worker_speaks_queued_text(self, speech, engine):
        speech.success(1)
        speech.feedback("Lower your hips")
        assert wait_for(lambda: engine.said == ["1", "Lower your hips"])

    def test_close_is_idempotent_and_joins_worker(self, engine):
        speaker = SpeechNotifier()
        speaker.close()
        speaker.close()
        assert not speaker.speech_thread.is_alive()
        assert engine.stopped

    def test_engine_failure_keeps_running(self, monkeypatch):
        def broken():
            raise RuntimeError("no audio device")

        monkeypatch.setattr(notifier_module.pyttsx3, "init", broken)
        speaker = SpeechNotifier()
        speaker.success(1)
        speaker.close()
        assert not speaker.speech_thread.is_alive()


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
