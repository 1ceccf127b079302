"""
Session Overlay
===============

Draws the skeleton, rep counter and form feedback on a video frame.
Joints flagged by the form rules are drawn in red.
"""

from typing import Optional

import cv2
import numpy as np

from ..pose.landmarks import SKELETON_CONNECTIONS, Frame
from ..session.models import Session

WHITE = (255, 255, 255)
RED = (68, 68, 239)  # BGR
HEADER = (245, 117, 16)


def draw_skeleton(image: np.ndarray, frame: Frame, session: Session,
                  visibility_threshold: float = 0.4) -> None:
    """Draw limbs and keypoints, highlighting incorrect joints."""
    incorrect = session.incorrect_joints
    for start, end in SKELETON_CONNECTIONS:
        a = frame.visible(start, visibility_threshold)
        b = frame.visible(end, visibility_threshold)
        if a is None or b is None:
            continue
        bad = start in incorrect or end in incorrect
        cv2.line(image, (int(a.x), int(a.y)), (int(b.x), int(b.y)),
                 RED if bad else WHITE, 5 if bad else 3, cv2.LINE_AA)

    for lm in frame.landmarks.values():
        if lm.visibility <= visibility_threshold:
            continue
        color = RED if lm.name in incorrect else WHITE
        cv2.circle(image, (int(lm.x), int(lm.y)), 5, color, -1, cv2.LINE_AA)


def draw_session_overlay(image: np.ndarray, frame: Frame, session: Session,
                         visibility_threshold: float = 0.4,
                         feedback: Optional[str] = None) -> np.ndarray:
    """
    Draw UI overlay with counters and feedback.

    Args:
        image: BGR frame, drawn on in place
        frame: Landmarks estimated for ``image``
        session: Session whose state is shown

    Returns:
        The same image, for chaining
    """
    frame_h, frame_w = image.shape[:2]
    draw_skeleton(image, frame, session, visibility_threshold)

    # Header bar
    cv2.rectangle(image, (0, 0), (350, 73), HEADER, -1)
    cv2.putText(image, "REPS", (15, 12),
                cv2.FONT_HERSHEY_SIMPLEX, 0.5, (0, 0, 0), 1, cv2.LINE_AA)
    cv2.putText(image, f"{session.current_reps}/{session.target_reps}", (10, 60),
                cv2.FONT_HERSHEY_SIMPLEX, 1.6, WHITE, 2, cv2.LINE_AA)
    cv2.putText(image, "STAGE", (250, 12),
                cv2.FONT_HERSHEY_SIMPLEX, 0.5, (0, 0, 0), 1, cv2.LINE_AA)
    cv2.putText(image, session.phase.value.upper(), (245, 60),
                cv2.FONT_HERSHEY_SIMPLEX, 1.6, WHITE, 2, cv2.LINE_AA)

    # Progress bar
    cv2.rectangle(image, (0, frame_h - 6), (int(frame_w * session.progress), frame_h), RED, -1)

    if feedback is None:
        feedback = session.last_feedback
        if not frame.landmarks:
            feedback = "Please make your full body visible"

    # Feedback bar
    if feedback:
        cv2.rectangle(image, (0, frame_h - 66), (frame_w, frame_h - 6), (0, 0, 0), -1)
        cv2.putText(image, feedback, (20, frame_h - 26),
                    cv2.FONT_HERSHEY_SIMPLEX, 1.0, (0, 255, 255), 2, cv2.LINE_AA)
    return image
