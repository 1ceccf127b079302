"""
Session Module
==============

Workout session lifecycle, history persistence and notifications.
"""

from .controller import SessionController, parse_target
from .history import HistoryStore, InMemoryHistoryStore, JsonHistoryStore
from .models import Exercise, Session, SessionState, SessionSummary
from .notifier import Notifier, SpeechNotifier

__all__ = [
    "SessionController",
    "parse_target",
    "HistoryStore",
    "InMemoryHistoryStore",
    "JsonHistoryStore",
    "Exercise",
    "Session",
    "SessionState",
    "SessionSummary",
    "Notifier",
    "SpeechNotifier",
]
