"""
Session Notifications
=====================

Fire-and-forget success signals, toast-style messages and spoken feedback.

Classes:
    Notifier: Logs every notification
    SpeechNotifier: Also speaks them with pyttsx3 from a worker thread
"""

import logging
import queue
import threading
from typing import Optional

import pyttsx3

logger = logging.getLogger(__name__)


class Notifier:
    """Base notifier; records notifications in the log only."""

    def success(self, reps: int) -> None:
        """Signal that a rep was counted."""
        logger.info("Rep %d counted", reps)

    def message(self, title: str, description: str = "", error: bool = False) -> None:
        """Show a short user-facing message."""
        if error:
            logger.warning("%s: %s", title, description)
        else:
            logger.info("%s: %s", title, description)

    def feedback(self, text: str) -> None:
        """Form feedback for the latest frame changed."""
        return None

    def close(self) -> None:
        return None


class SpeechNotifier(Notifier):
    """
    Notifier with text-to-speech output.

    pyttsx3 must run in the same thread as ``runAndWait()``, so speech is
    queued to a dedicated worker thread. Repeated feedback is spoken once.
    """

    def __init__(self):
        self.last_feedback: Optional[str] = None
        self.speech_queue: "queue.Queue[Optional[str]]" = queue.Queue()
        self._stop_speech = False
        self.speech_thread = threading.Thread(target=self._speech_worker, daemon=True)
        self.speech_thread.start()

    def _speak(self, text: str) -> None:
        if text:
            self.speech_queue.put(text)

    def _speech_worker(self) -> None:
        """Worker thread for text-to-speech."""
        try:
            engine = pyttsx3.init()
        except Exception:
            logger.exception("Text-to-speech unavailable, continuing without audio")
            engine = None

        while not self._stop_speech:
            try:
                payload = self.speech_queue.get(timeout=0.5)
            except queue.Empty:
                continue
            if payload is None:
                break
            if engine:
                try:
                    engine.say(payload)
                    engine.runAndWait()
                except Exception:
                    logger.exception("Speech output failed")

        if engine:
            try:
                engine.stop()
            except Exception:
                logger.debug("Speech engine stop failed", exc_info=True)

    def success(self, reps: int) -> None:
        super().success(reps)
        self._speak(str(reps))

    def message(self, title: str, description: str = "", error: bool = False) -> None:
        super().message(title, description, error)
        self._speak(title)

    def feedback(self, text: str) -> None:
        if text and text != self.last_feedback:
            self.last_feedback = text
            self._speak(text)

    def close(self) -> None:
        """Stop the speech worker. Safe to call more than once."""
        if self._stop_speech:
            return
        self._stop_speech = True
        self.speech_queue.put(None)
        self.speech_thread.join(timeout=2.0)
