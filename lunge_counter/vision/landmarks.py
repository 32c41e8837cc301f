"""Pose landmark types and the BlazePose index contract.

The landmark indices follow the MediaPipe Pose Landmarker output ordering
(33 points per body). Indices are stable across frames, so the same joint
always sits at the same position of a frame's landmark list.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Sequence

import numpy as np


@dataclass(frozen=True)
class Landmark:
    """Normalized joint position for one frame."""

    x: float
    y: float
    z: float = 0.0
    visibility: float = 1.0


class PoseLandmark(IntEnum):
    NOSE = 0
    LEFT_EYE_INNER = 1
    LEFT_EYE = 2
    LEFT_EYE_OUTER = 3
    RIGHT_EYE_INNER = 4
    RIGHT_EYE = 5
    RIGHT_EYE_OUTER = 6
    LEFT_EAR = 7
    RIGHT_EAR = 8
    MOUTH_LEFT = 9
    MOUTH_RIGHT = 10
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_ELBOW = 13
    RIGHT_ELBOW = 14
    LEFT_WRIST = 15
    RIGHT_WRIST = 16
    LEFT_PINKY = 17
    RIGHT_PINKY = 18
    LEFT_INDEX = 19
    RIGHT_INDEX = 20
    LEFT_THUMB = 21
    RIGHT_THUMB = 22
    LEFT_HIP = 23
    RIGHT_HIP = 24
    LEFT_KNEE = 25
    RIGHT_KNEE = 26
    LEFT_ANKLE = 27
    RIGHT_ANKLE = 28
    LEFT_HEEL = 29
    RIGHT_HEEL = 30
    LEFT_FOOT_INDEX = 31
    RIGHT_FOOT_INDEX = 32


# Joints the lunge tracker reads on every frame
REQUIRED_LANDMARKS = (
    PoseLandmark.LEFT_SHOULDER,
    PoseLandmark.RIGHT_SHOULDER,
    PoseLandmark.LEFT_HIP,
    PoseLandmark.RIGHT_HIP,
    PoseLandmark.LEFT_KNEE,
    PoseLandmark.RIGHT_KNEE,
    PoseLandmark.LEFT_ANKLE,
    PoseLandmark.RIGHT_ANKLE,
)


def required_landmark_count() -> int:
    """Minimum length a landmark list needs for the lunge tracker."""
    return max(int(idx) for idx in REQUIRED_LANDMARKS) + 1


def landmarks_from_array(points: np.ndarray | Sequence[Sequence[float]]) -> List[Landmark]:
    """Build landmarks from an ``(N, 2..4)`` array of ``x, y[, z[, visibility]]`` rows."""
    arr = np.asarray(points, dtype=float)
    if arr.ndim != 2 or arr.shape[1] < 2:
        raise ValueError(f"expected an (N, 2..4) array, got shape {arr.shape}")
    out: List[Landmark] = []
    for row in arr:
        z = float(row[2]) if arr.shape[1] > 2 else 0.0
        vis = float(row[3]) if arr.shape[1] > 3 else 1.0
        out.append(Landmark(x=float(row[0]), y=float(row[1]), z=z, visibility=vis))
    return out


def blank_pose(fill: Iterable[float] = (0.5, 0.5)) -> List[Landmark]:
    """Full-size landmark list with every joint at the same point."""
    x, y = tuple(fill)[:2]
    return [Landmark(x=float(x), y=float(y)) for _ in PoseLandmark]
