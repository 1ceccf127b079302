"""
Geometry Utilities
==================

Joint angles and distances between landmarks, in degrees and pixels.

Pixel thresholds depend on how far the user stands from the camera; they are
tuned for a 640x480 frame with the whole body in view.
"""

from typing import Any, Tuple

import numpy as np


def _xy(point: Any) -> Tuple[float, float]:
    if point is None:
        raise ValueError("landmark is missing")
    if hasattr(point, "x") and hasattr(point, "y"):
        return float(point.x), float(point.y)
    return float(point[0]), float(point[1])


def calculate_angle(a: Any, b: Any, c: Any) -> float:
    """
    Calculate angle between three points.

    Args:
        a: First point (landmark or [x, y])
        b: Middle point (vertex)
        c: Third point

    Returns:
        Unsigned angle at ``b`` in degrees, in [0, 180]

    Raises:
        ValueError: if any point is None
    """
    a = np.array(_xy(a))
    b = np.array(_xy(b))
    c = np.array(_xy(c))
    radians = np.arctan2(c[1] - b[1], c[0] - b[0]) - np.arctan2(
        a[1] - b[1], a[0] - b[0]
    )
    angle = np.abs(radians * 180.0 / np.pi)
    if angle > 180.0:
        angle = 360 - angle
    return float(angle)


def horizontal_distance(a: Any, b: Any) -> float:
    """Absolute difference of the x coordinates."""
    return abs(_xy(a)[0] - _xy(b)[0])


def vertical_distance(a: Any, b: Any) -> float:
    """Absolute difference of the y coordinates."""
    return abs(_xy(a)[1] - _xy(b)[1])


def distance(a: Any, b: Any) -> float:
    ax, ay = _xy(a)
    bx, by = _xy(b)
    return float(np.hypot(bx - ax, by - ay))


def midpoint(a: Any, b: Any) -> Tuple[float, float]:
    ax, ay = _xy(a)
    bx, by = _xy(b)
    return (ax + bx) / 2.0, (ay + by) / 2.0


def is_above_line(point: Any, start: Any, end: Any) -> bool:
    """
    Whether ``point`` sits above the line through ``start`` and ``end``.

    Image y grows downward, so "above" means a smaller y than the line at the
    point's x. A vertical line has no above side and returns False.
    """
    px, py = _xy(point)
    sx, sy = _xy(start)
    ex, ey = _xy(end)
    if ex == sx:
        return False
    line_y = sy + (ey - sy) * (px - sx) / (ex - sx)
    return py < line_y


def reflex_aware_angle(a: Any, b: Any, c: Any) -> float:
    """
    Angle at ``b`` measured on the lower side of the ``a``-``c`` line.

    Returns a value in [0, 360): below 180 when ``b`` drops under the line,
    above 180 when ``b`` rises over it.
    """
    angle = calculate_angle(a, b, c)
    if is_above_line(b, a, c):
        return 360.0 - angle
    return angle
