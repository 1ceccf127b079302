"""
Form Coach
==========

Real-time exercise form feedback and rep counting from MediaPipe pose
landmarks.

Modules:
    - pose: Landmark types, geometry helpers and landmark sources
    - analyzers: Per-exercise form and rep rules
    - session: Workout session lifecycle, history and notifications
    - config: Camera, model, session and threshold settings
    - utils: Camera capture, MediaPipe source and overlay drawing
"""

__version__ = "1.0.0"
__author__ = "AI Fitness Monitor Team"
