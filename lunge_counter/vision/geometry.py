"""Joint angle geometry."""
from __future__ import annotations

from typing import Protocol

import numpy as np


class Point2D(Protocol):
    x: float
    y: float


def calculate_angle(first: Point2D, middle: Point2D, last: Point2D) -> float:
    """Angle at ``middle`` swept from the ``first`` ray to the ``last`` ray, in degrees.

    The result lies in [0, 360) and is directional: swapping ``first`` and
    ``last`` yields ``360 - angle`` for non-collinear points. Coincident
    points give a determinate value because ``arctan2(0, 0) == 0``.
    """
    to_last = np.arctan2(last.y - middle.y, last.x - middle.x)
    to_first = np.arctan2(first.y - middle.y, first.x - middle.x)
    angle = float(np.degrees(to_last - to_first))
    if angle < 0:
        angle += 360.0
    # rays on either side of the -x axis (or tiny negative differences) land on exactly 360.0
    if angle >= 360.0:
        angle -= 360.0
    return abs(angle)
