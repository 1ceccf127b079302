"""
Exercise Analyzers Module
=========================

Form and rep rules for each supported exercise, and the registry that pairs
them by exercise kind.
"""

from typing import Dict, Optional, Tuple, Type

from ..config.settings import ThresholdConfig
from .base import (
    ExerciseKind,
    FormResult,
    FormRule,
    NullFormRule,
    NullRepRule,
    Phase,
    RepRule,
    RepUpdate,
    ThresholdRepRule,
)
from .jumping_jack_analyzer import JumpingJackFormRule, JumpingJackRepRule
from .lunge_analyzer import LungeFormRule, LungeRepRule
from .plank_analyzer import PlankFormRule, PlankRepRule
from .pullup_analyzer import PullUpFormRule, PullUpRepRule
from .pushup_analyzer import PushUpFormRule, PushUpRepRule
from .squat_analyzer import SquatFormRule, SquatRepRule

RULE_REGISTRY: Dict[ExerciseKind, Tuple[Type[FormRule], Type[RepRule], Optional[str]]] = {
    ExerciseKind.SQUAT: (SquatFormRule, SquatRepRule, "squat"),
    ExerciseKind.PUSH_UP: (PushUpFormRule, PushUpRepRule, "push_up"),
    ExerciseKind.PULL_UP: (PullUpFormRule, PullUpRepRule, "pull_up"),
    ExerciseKind.LUNGE: (LungeFormRule, LungeRepRule, "lunge"),
    ExerciseKind.PLANK: (PlankFormRule, PlankRepRule, "plank"),
    ExerciseKind.JUMPING_JACK: (JumpingJackFormRule, JumpingJackRepRule, "jumping_jack"),
    ExerciseKind.UNKNOWN: (NullFormRule, NullRepRule, None),
}


def build_rules(
    kind: ExerciseKind,
    thresholds: Optional[ThresholdConfig] = None,
    visibility_threshold: float = 0.4,
) -> Tuple[FormRule, RepRule]:
    """
    Instantiate the form and rep rules for an exercise kind.

    Args:
        kind: Exercise kind resolved from the catalog entry
        thresholds: Per-exercise thresholds, defaults when omitted
        visibility_threshold: Minimum landmark visibility for any check

    Returns:
        ``(form_rule, rep_rule)``
    """
    thresholds = thresholds or ThresholdConfig()
    form_cls, rep_cls, section = RULE_REGISTRY[kind]
    section_thresholds = getattr(thresholds, section) if section else None
    return (
        form_cls(section_thresholds, visibility_threshold),
        rep_cls(section_thresholds, visibility_threshold),
    )


__all__ = [
    "ExerciseKind",
    "FormResult",
    "FormRule",
    "NullFormRule",
    "NullRepRule",
    "Phase",
    "RepRule",
    "RepUpdate",
    "ThresholdRepRule",
    "RULE_REGISTRY",
    "build_rules",
    "SquatFormRule",
    "SquatRepRule",
    "PushUpFormRule",
    "PushUpRepRule",
    "PullUpFormRule",
    "PullUpRepRule",
    "LungeFormRule",
    "LungeRepRule",
    "PlankFormRule",
    "PlankRepRule",
    "JumpingJackFormRule",
    "JumpingJackRepRule",
]
