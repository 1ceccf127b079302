"""
Form Coach Runner
=================

Main entry point: runs one workout session from the command line.

Usage:
    python run.py --exercise "Squats" --reps 10
    python run.py --exercise "Push-ups" --reps 5 --replay pushups.jsonl
    python run.py --exercise "Squats" --reps 5 --record squats.jsonl
    python run.py --history

Keys in the video window:
    m - count a rep manually
    q - quit the session
"""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

import cv2

from formcoach.config import (
    get_camera_config,
    get_pose_config,
    get_session_config,
    get_threshold_config,
)
from formcoach.exceptions import InvalidTargetError
from formcoach.pose import Frame, ReplayLandmarkSource
from formcoach.session import (
    Exercise,
    JsonHistoryStore,
    Notifier,
    Session,
    SessionController,
    SessionState,
    SpeechNotifier,
)
from formcoach.utils import MediaPipeLandmarkSource, draw_session_overlay

WINDOW_NAME = "Form Coach"

logger = logging.getLogger("formcoach")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pose-based rep counter and form coach")
    parser.add_argument("--exercise", help="Exercise name, e.g. 'Squats' or 'Push-ups'")
    parser.add_argument("--reps", help="Target rep count (prompted when omitted)")
    parser.add_argument("--category", default="", help="Exercise category for the summary")
    parser.add_argument("--difficulty", default="", help="beginner, intermediate or advanced")
    parser.add_argument("--replay", help="Replay landmarks from a JSON-lines file")
    parser.add_argument("--record", help="Write camera landmarks to a JSON-lines file")
    parser.add_argument("--history-path", help="Workout history file")
    parser.add_argument("--history", action="store_true", help="Print saved workouts and exit")
    parser.add_argument("--no-speech", action="store_true", help="Disable spoken feedback")
    return parser.parse_args(argv)


def print_history(store: JsonHistoryStore) -> None:
    items = store.all()
    if not items:
        print("No workouts recorded yet.")
        return
    for item in items:
        print(f"{item.timestamp}  {item.exercise_name:<20} {item.reps}/{item.target_reps}"
              f"  {item.category} {item.difficulty}".rstrip())


def _manual_loop(controller: SessionController) -> None:
    """Manual counting when pose detection is unavailable."""
    while controller.state is SessionState.RUNNING:
        reply = input("Press Enter to count a rep, q to quit: ").strip().lower()
        if reply == "q":
            controller.cancel()
        else:
            controller.manual_rep()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    session_config = get_session_config()
    if args.no_speech:
        session_config.speech_enabled = False
    store = JsonHistoryStore(args.history_path or session_config.history_path)

    if args.history:
        print_history(store)
        return 0
    if not args.exercise:
        print("--exercise is required", file=sys.stderr)
        return 2

    exercise = Exercise(
        id="",
        name=args.exercise,
        category=args.category,
        difficulty=args.difficulty,
    )
    if args.replay:
        try:
            replay = ReplayLandmarkSource.from_json(args.replay)
        except (OSError, KeyError, ValueError) as exc:
            print(f"Cannot read replay file {args.replay}: {exc}", file=sys.stderr)
            return 2
        source_factory = lambda: replay  # noqa: E731
    else:
        source_factory = lambda: MediaPipeLandmarkSource(  # noqa: E731
            get_camera_config(), get_pose_config()
        )

    record = None
    if args.record and not args.replay:
        try:
            record = open(args.record, "w", encoding="utf-8")
        except OSError as exc:
            print(f"Cannot write landmarks to {args.record}: {exc}", file=sys.stderr)
            return 2

    source_label = "replay" if args.replay else "camera"
    notifier = SpeechNotifier() if session_config.speech_enabled else Notifier()
    try:
        return _run_session(args, exercise, source_factory, store, notifier,
                            session_config, source_label, record)
    finally:
        if record is not None:
            record.close()
        notifier.close()


def _run_session(args, exercise, source_factory, store, notifier,
                 session_config, source_label, record) -> int:
    controller = SessionController(
        exercise,
        source_factory,
        store,
        notifier=notifier,
        thresholds=get_threshold_config(),
        config=session_config,
    )

    print(f"""
╔══════════════════════════════════════════════════════╗
║          Form Coach                                  ║
╠══════════════════════════════════════════════════════╣
║  Exercise: {exercise.name[:40]:<42}║
║  Rules:    {controller.kind.value:<42}║
║  Source:   {source_label:<42}║
╚══════════════════════════════════════════════════════╝
    """)

    target = args.reps
    started = False
    while not started:
        if target is None:
            target = input("How many reps? ")
        try:
            started = controller.start(target)
        except InvalidTargetError as exc:
            print(exc, file=sys.stderr)
            if args.reps is not None:
                return 2
            target = None
            continue
        if not started:
            return 1

    def on_frame(frame: Frame, session: Session) -> None:
        if record is not None:
            record.write(json.dumps(frame.to_dict()) + "\n")
        if frame.image is None:
            return
        image = draw_session_overlay(
            frame.image.copy(), frame, session, session_config.visibility_threshold
        )
        cv2.imshow(WINDOW_NAME, image)
        key = cv2.waitKey(1) & 0xFF
        if key == ord("q"):
            controller.cancel()
        elif key == ord("m"):
            controller.manual_rep()

    try:
        if controller.degraded:
            _manual_loop(controller)
        else:
            controller.run(on_frame=on_frame)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        if not args.replay:
            cv2.destroyAllWindows()

    if controller.state is SessionState.COMPLETE:
        summary = controller.summary
        print(f"Workout complete! {summary.reps} reps of {summary.exercise_name}")
        controller.done()
        return 0
    reps = controller.session.current_reps if controller.session else 0
    print(f"Session ended at {reps} reps")
    controller.cancel()
    return 1


if __name__ == "__main__":
    sys.exit(main())
