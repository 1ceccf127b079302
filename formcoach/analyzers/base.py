"""
Analyzer Base Classes
=====================

Exercise kinds, rep phases and the form/rep rule interfaces shared by every
exercise analyzer.

A ``FormRule`` inspects one frame and reports incorrect joints plus a single
feedback message. A ``RepRule`` advances the up/down phase owned by the
session and reports when a rep completes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Set, Tuple

from ..pose.landmarks import Frame, LandmarkName


class ExerciseKind(str, Enum):
    """Exercise families with their own form and rep rules."""
    SQUAT = "squat"
    PUSH_UP = "push_up"
    PULL_UP = "pull_up"
    LUNGE = "lunge"
    PLANK = "plank"
    JUMPING_JACK = "jumping_jack"
    UNKNOWN = "unknown"

    @classmethod
    def from_name(cls, exercise_name: Optional[str]) -> "ExerciseKind":
        """
        Resolve the kind from a catalog exercise name.

        Matching is a case-insensitive keyword search; the first keyword found
        wins, so "Jump Squats" resolves to SQUAT.
        """
        lowered = (exercise_name or "").lower()
        for keyword, kind in _KEYWORDS:
            if keyword in lowered:
                return kind
        return cls.UNKNOWN


_KEYWORDS = (
    ("squat", ExerciseKind.SQUAT),
    ("push", ExerciseKind.PUSH_UP),
    ("pull", ExerciseKind.PULL_UP),
    ("lunge", ExerciseKind.LUNGE),
    ("plank", ExerciseKind.PLANK),
    ("jack", ExerciseKind.JUMPING_JACK),
    ("jump", ExerciseKind.JUMPING_JACK),
)


class Phase(str, Enum):
    """Rep counter phase."""
    UP = "up"
    DOWN = "down"


@dataclass
class FormResult:
    """
    Outcome of one form evaluation pass.

    ``incorrect_joints`` collects every joint flagged in the pass; ``feedback``
    holds the message of the last check that fired.
    """
    incorrect_joints: Set[LandmarkName] = field(default_factory=set)
    feedback: str = ""

    def flag(self, feedback: str, *joints: LandmarkName) -> None:
        self.incorrect_joints.update(joints)
        self.feedback = feedback

    @property
    def is_correct(self) -> bool:
        return not self.incorrect_joints


@dataclass(frozen=True)
class RepUpdate:
    """New phase after one frame and whether a rep completed on it."""
    phase: Phase
    rep_completed: bool = False


# Left side first, then right
SIDES = ("left", "right")


def side_landmark(side: str, joint: str) -> LandmarkName:
    """``side_landmark("left", "knee")`` -> ``LandmarkName.LEFT_KNEE``."""
    return LandmarkName(f"{side}_{joint}")


class FormRule(ABC):
    """Geometric form checks for one exercise kind."""

    kind: ExerciseKind = ExerciseKind.UNKNOWN

    def __init__(self, thresholds=None, visibility_threshold: float = 0.4):
        self.thresholds = thresholds
        self.visibility_threshold = visibility_threshold

    def require(self, frame: Frame, *names: LandmarkName):
        return frame.require(self.visibility_threshold, *names)

    def evaluate(self, frame: Frame) -> FormResult:
        """Run every check on ``frame`` and return the combined result."""
        result = FormResult()
        self.check(frame, result)
        return result

    @abstractmethod
    def check(self, frame: Frame, result: FormResult) -> None:
        """Apply this exercise's checks, flagging into ``result``."""


class RepRule(ABC):
    """Up/down rep detection for one exercise kind."""

    kind: ExerciseKind = ExerciseKind.UNKNOWN

    def __init__(self, thresholds=None, visibility_threshold: float = 0.4):
        self.thresholds = thresholds
        self.visibility_threshold = visibility_threshold

    def require(self, frame: Frame, *names: LandmarkName):
        return frame.require(self.visibility_threshold, *names)

    @abstractmethod
    def update(self, frame: Frame, phase: Phase) -> RepUpdate:
        """Advance ``phase`` using ``frame``."""

    def hysteresis(self) -> Optional[Tuple[float, float]]:
        """The (down, up) thresholds of the rep signal, if it has one."""
        return None


class ThresholdRepRule(RepRule):
    """
    Rep rule driven by a single scalar signal with two thresholds.

    Below ``down_threshold`` moves up -> down. Above ``up_threshold`` moves
    down -> up and completes a rep. Values between the two never change the
    phase.
    """

    @property
    @abstractmethod
    def down_threshold(self) -> float:
        ...

    @property
    @abstractmethod
    def up_threshold(self) -> float:
        ...

    @abstractmethod
    def signal(self, frame: Frame) -> Optional[float]:
        """Primary signal for this frame, or None if its landmarks are not visible."""

    def hysteresis(self) -> Tuple[float, float]:
        return self.down_threshold, self.up_threshold

    def update(self, frame: Frame, phase: Phase) -> RepUpdate:
        value = self.signal(frame)
        if value is None:
            return RepUpdate(phase)
        if phase is Phase.UP and value < self.down_threshold:
            return RepUpdate(Phase.DOWN)
        if phase is Phase.DOWN and value > self.up_threshold:
            return RepUpdate(Phase.UP, rep_completed=True)
        return RepUpdate(phase)


class NullFormRule(FormRule):
    """Form rule for exercises without checks."""

    def check(self, frame: Frame, result: FormResult) -> None:
        return None


class NullRepRule(RepRule):
    """Rep rule for exercises without an automatic rep signal."""

    def update(self, frame: Frame, phase: Phase) -> RepUpdate:
        return RepUpdate(phase)
