"""
Shared fixtures for formcoach tests.
"""

import os
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, os.path.dirname(__file__))

from formcoach.session import Exercise, InMemoryHistoryStore  # noqa: E402
from pose_helpers import RecordingNotifier  # noqa: E402


@pytest.fixture
def squats():
    return Exercise(
        id="ex-1",
        name="Squats",
        description="Bodyweight squat",
        category="strength",
        difficulty="beginner",
        target_muscles=["quadriceps", "glutes"],
    )


@pytest.fixture
def store():
    return InMemoryHistoryStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()
