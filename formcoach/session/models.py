"""
Session Models
==============

Catalog exercise records, the live workout session and its saved summary.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Set

from ..analyzers.base import ExerciseKind, Phase
from ..pose.landmarks import LandmarkName


@dataclass(frozen=True)
class Exercise:
    """Exercise entry from the external catalog."""
    id: str
    name: str
    description: str = ""
    category: str = ""
    difficulty: str = ""
    target_muscles: List[str] = field(default_factory=list)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Exercise":
        """Build from a catalog row; unknown columns such as ``video_url`` are ignored."""
        return cls(
            id=str(record.get("id", "")),
            name=record["name"],
            description=record.get("description") or "",
            category=record.get("category") or "",
            difficulty=record.get("difficulty") or "",
            target_muscles=list(record.get("target_muscles") or []),
        )

    @property
    def kind(self) -> ExerciseKind:
        return ExerciseKind.from_name(self.name)


class SessionState(str, Enum):
    """Workout session lifecycle."""
    COLLECTING_TARGET = "collecting_target"
    RUNNING = "running"
    COMPLETE = "complete"


@dataclass
class Session:
    """
    One workout attempt at a target rep count.

    Only ``current_reps`` and ``phase`` carry over between frames;
    ``last_feedback`` and ``incorrect_joints`` describe the latest frame.
    """
    exercise: Exercise
    target_reps: int
    current_reps: int = 0
    phase: Phase = Phase.UP
    last_feedback: str = ""
    incorrect_joints: Set[LandmarkName] = field(default_factory=set)

    @property
    def progress(self) -> float:
        return min(1.0, self.current_reps / self.target_reps) if self.target_reps else 0.0

    @property
    def target_reached(self) -> bool:
        return self.current_reps >= self.target_reps


@dataclass(frozen=True)
class SessionSummary:
    """Record appended to the workout history when a session completes."""
    exercise_name: str
    reps: int
    target_reps: int
    difficulty: str
    category: str
    timestamp: str

    @classmethod
    def from_session(cls, session: Session, when: Optional[datetime] = None) -> "SessionSummary":
        when = when or datetime.now(timezone.utc)
        return cls(
            exercise_name=session.exercise.name,
            reps=session.current_reps,
            target_reps=session.target_reps,
            difficulty=session.exercise.difficulty,
            category=session.exercise.category,
            timestamp=when.isoformat(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SessionSummary":
        return cls(
            exercise_name=data["exercise_name"],
            reps=int(data["reps"]),
            target_reps=int(data["target_reps"]),
            difficulty=data.get("difficulty", ""),
            category=data.get("category", ""),
            timestamp=data["timestamp"],
        )
