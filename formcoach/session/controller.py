"""
Session Controller
==================

Drives one workout from the target rep prompt to a saved summary.

Lifecycle::

    collecting_target --start()--> running --target reached--> complete
            ^                         |                            |
            +-------- cancel() -------+---------- done() ----------+

Usage:
    controller = SessionController(exercise, source_factory, history)
    if controller.start("10"):
        controller.run(on_frame=draw)
"""

import logging
import threading
from typing import Any, Callable, Optional

from ..analyzers import FormResult, build_rules
from ..config.settings import SessionConfig, ThresholdConfig
from ..exceptions import CameraUnavailableError, InvalidTargetError, ModelInitError
from ..pose.landmarks import Frame
from ..pose.source import LandmarkSource
from .history import HistoryStore
from .models import Exercise, Session, SessionState, SessionSummary
from .notifier import Notifier

logger = logging.getLogger(__name__)

FrameCallback = Callable[[Frame, Session], None]


def parse_target(value: Any) -> int:
    """
    Validate a target rep count from user input.

    Raises:
        InvalidTargetError: if ``value`` is not a positive whole number
    """
    if isinstance(value, bool):
        raise InvalidTargetError(f"Invalid rep target: {value!r}")
    if isinstance(value, int):
        target = value
    else:
        try:
            target = int(str(value).strip())
        except (TypeError, ValueError):
            raise InvalidTargetError(f"Invalid rep target: {value!r}") from None
    if target <= 0:
        raise InvalidTargetError(f"Rep target must be positive, got {target}")
    return target


class SessionController:
    """
    Owns the active session and the landmark source feeding it.

    Frames are analyzed one at a time: form rules first, then the rep rule,
    both on the same frame. Rep registration and lifecycle changes hold a
    lock so manual reps from another thread are never lost.

    Attributes:
        state (SessionState): Current lifecycle state
        session (Session): Active session, None while collecting the target
        degraded (bool): Running without pose estimation (manual reps only)
        summary (SessionSummary): Summary saved at completion
    """

    def __init__(
        self,
        exercise: Exercise,
        source_factory: Callable[[], LandmarkSource],
        history: HistoryStore,
        notifier: Optional[Notifier] = None,
        thresholds: Optional[ThresholdConfig] = None,
        config: Optional[SessionConfig] = None,
    ):
        self.exercise = exercise
        self.kind = exercise.kind
        self.config = config or SessionConfig()
        self.form_rule, self.rep_rule = build_rules(
            self.kind, thresholds, self.config.visibility_threshold
        )
        self.history = history
        self.notifier = notifier or Notifier()
        self._source_factory = source_factory
        self._source: Optional[LandmarkSource] = None
        self._lock = threading.RLock()

        self.state = SessionState.COLLECTING_TARGET
        self.session: Optional[Session] = None
        self.degraded = False
        self.summary: Optional[SessionSummary] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, target: Any) -> bool:
        """
        Validate the target and start detecting.

        Args:
            target: Rep count as entered by the user

        Returns:
            True once running, False if the camera or model failed

        Raises:
            InvalidTargetError: if ``target`` is not a positive integer
        """
        with self._lock:
            if self.state is not SessionState.COLLECTING_TARGET:
                logger.warning("start() ignored in state %s", self.state.value)
                return False

            try:
                target_reps = parse_target(target)
            except InvalidTargetError:
                self.notifier.message(
                    "Invalid input", "Please enter a valid number of reps", error=True
                )
                raise

            source: Optional[LandmarkSource] = self._source_factory()
            degraded = False
            try:
                source.initialize()
            except CameraUnavailableError:
                logger.exception("Camera unavailable")
                self._dispose(source)
                self.notifier.message(
                    "Camera access denied", "Please allow camera access to continue", error=True
                )
                return False
            except ModelInitError:
                logger.exception("Pose model failed to load")
                self._dispose(source)
                self.notifier.message(
                    "Motion sensing error", "Failed to initialize motion detection", error=True
                )
                if not self.config.manual_fallback:
                    return False
                source = None
                degraded = True
                self.notifier.message("Manual mode", "Use the manual rep button to count reps")

            self._source = source
            self.degraded = degraded
            self.summary = None
            self.session = Session(exercise=self.exercise, target_reps=target_reps)
            self.state = SessionState.RUNNING
            logger.info("Started %s session: %d reps (%s)",
                        self.exercise.name, target_reps, self.kind.value)
            return True

    def cancel(self) -> None:
        """Stop detection, release the source and reset. Safe from any state."""
        with self._lock:
            self._release_source()
            self.session = None
            self.degraded = False
            self.state = SessionState.COLLECTING_TARGET

    def done(self) -> bool:
        """Leave the completion screen for a fresh target prompt."""
        with self._lock:
            if self.state is not SessionState.COMPLETE:
                return False
            self.cancel()
            return True

    # ------------------------------------------------------------------
    # Frame analysis
    # ------------------------------------------------------------------

    def process_frame(self, frame: Frame) -> Optional[FormResult]:
        """
        Analyze one frame: form feedback, then the rep decision.

        Returns:
            The form result, or None when not running
        """
        with self._lock:
            session = self.session
            if self.state is not SessionState.RUNNING or session is None:
                return None

            result = self.form_rule.evaluate(frame)
            session.incorrect_joints = set(result.incorrect_joints)
            session.last_feedback = result.feedback
            self.notifier.feedback(result.feedback)

            update = self.rep_rule.update(frame, session.phase)
            session.phase = update.phase
            if update.rep_completed:
                self._register_rep()
            return result

    def manual_rep(self) -> bool:
        """Count one rep by hand. Only available while running."""
        with self._lock:
            if self.state is not SessionState.RUNNING:
                return False
            self._register_rep()
            return True

    def run(self, on_frame: Optional[FrameCallback] = None) -> SessionState:
        """
        Pull and analyze frames until complete, cancelled or the source closes.

        A frame whose estimation raises is logged and skipped.

        Args:
            on_frame: Called after each analyzed frame, e.g. to draw it

        Returns:
            The state when the loop stopped
        """
        source = self._source
        if self.state is not SessionState.RUNNING or source is None:
            return self.state

        while (self.state is SessionState.RUNNING
               and self._source is source
               and source.is_opened()):
            try:
                frame = source.estimate()
            except Exception:
                logger.exception("Pose estimation failed, skipping frame")
                continue
            if frame is None:
                continue
            self.process_frame(frame)
            if on_frame is not None and self.session is not None:
                on_frame(frame, self.session)
        return self.state

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _register_rep(self) -> None:
        session = self.session
        session.current_reps += 1
        self.notifier.success(session.current_reps)
        if session.target_reached:
            self._complete()

    def _complete(self) -> None:
        session = self.session
        self.state = SessionState.COMPLETE
        self._release_source()
        self.summary = SessionSummary.from_session(session)
        try:
            self.history.append(self.summary)
        except (OSError, ValueError):
            logger.exception("Failed to save workout history")
            self.notifier.message("Save failed", "Workout could not be recorded", error=True)
            return
        self.notifier.message(
            "Workout saved!", f"{session.current_reps} reps of {self.exercise.name} recorded"
        )

    def _release_source(self) -> None:
        source, self._source = self._source, None
        self._dispose(source)

    @staticmethod
    def _dispose(source: Optional[LandmarkSource]) -> None:
        if source is None:
            return
        try:
            source.dispose()
        except Exception:
            logger.exception("Failed to release landmark source")
