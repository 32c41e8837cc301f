"""Lunge posture classification, rep counting, progress smoothing and feedback.

One ``LungeRepCounter`` lives for a whole exercise session. Each call to
``set_results`` processes one frame of pose detections:

    landmarks -> joint angles -> per-side lunge classification
              -> rep transitions, smoothed progress, feedback message
              -> listener notifications

The counter holds no lock; callers must serialize frames.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, List, Optional, Protocol, Sequence

import numpy as np
from loguru import logger

from lunge_counter.core.config import (
    ANGLE_TOLERANCE,
    PROGRESS_SMOOTHING_FACTOR,
    TARGET_ANGLE,
    Settings,
    get_settings,
)
from lunge_counter.vision.geometry import calculate_angle
from lunge_counter.vision.landmarks import (
    REQUIRED_LANDMARKS,
    PoseLandmark,
    landmarks_from_array,
    required_landmark_count,
)

MAX_PROGRESS = 1.0


class Feedback(str, Enum):
    KEEP_ONE_LEG_STRAIGHT = "Keep one leg straight"
    RIGHT_LEG_GOOD = "Good lunge position with right leg"
    LEFT_LEG_GOOD = "Good lunge position with left leg"
    BEND_RIGHT_KNEE = "Bend your right knee more"
    BEND_LEFT_KNEE = "Bend your left knee more"


class RepCounterListener(Protocol):
    """Receiver of the per-frame notifications (UI, reporting, transport)."""

    def on_rep_completed(self) -> None: ...

    def on_progress(self, value: float) -> None: ...

    def on_feedback(self, message: str) -> None: ...


@dataclass
class LungeAngles:
    right_hip: float
    right_knee: float
    left_hip: float
    left_knee: float


@dataclass
class LungeFrame:
    """What a processed frame produced, for callers that want more than the notifications."""

    angles: LungeAngles
    right_lunge: bool
    left_lunge: bool
    reps: int
    raw_progress: float
    progress: float
    feedback: Feedback

    def to_dict(self) -> dict:
        result = asdict(self)
        result["feedback"] = self.feedback.value
        return result


def is_lunge_position(
    hip_angle: float,
    knee_angle: float,
    target: float = TARGET_ANGLE,
    tolerance: float = ANGLE_TOLERANCE,
) -> bool:
    """True when both angles deviate from ``target`` by strictly less than ``tolerance``."""
    return abs(hip_angle - target) < tolerance and abs(knee_angle - target) < tolerance


def calculate_progress(
    angle: float,
    target: float = TARGET_ANGLE,
    tolerance: float = ANGLE_TOLERANCE,
) -> float:
    """Linear closeness of ``angle`` to ``target``: 1 on target, 0 at or beyond ``tolerance``."""
    raw = MAX_PROGRESS - abs(angle - target) / tolerance * MAX_PROGRESS
    return max(0.0, min(MAX_PROGRESS, raw))


class ExerciseRepCounter(ABC):
    """Base for exercise trackers; forwards notifications to the injected listener."""

    def __init__(self, listener: RepCounterListener) -> None:
        self.listener = listener

    def increment_rep_count(self) -> None:
        self.listener.on_rep_completed()

    def send_progress_update(self, progress: float) -> None:
        self.listener.on_progress(progress)

    def send_feedback_message(self, message: str) -> None:
        self.listener.on_feedback(message)

    @abstractmethod
    def set_results(self, poses: Optional[Sequence[Any]]) -> Optional[LungeFrame]:
        """Process the detections of one frame."""


class LungeRepCounter(ExerciseRepCounter):
    """Counts alternating-leg lunges from a stream of single-body pose frames."""

    def __init__(self, listener: RepCounterListener, settings: Optional[Settings] = None) -> None:
        super().__init__(listener)
        self.settings = settings or get_settings()
        self.target_angle: float = float(self.settings.lunge_target_angle)
        self.angle_tolerance: float = float(self.settings.lunge_angle_tolerance)
        self.smoothing_factor: float = float(self.settings.lunge_progress_smoothing)
        self._last_right_lunge: bool = False
        self._last_left_lunge: bool = False
        self._current_progress: float = 0.0

    # --- Public API -----------------------------------------------------

    @property
    def current_progress(self) -> float:
        return self._current_progress

    @property
    def last_right_lunge(self) -> bool:
        return self._last_right_lunge

    @property
    def last_left_lunge(self) -> bool:
        return self._last_left_lunge

    def set_results(self, poses: Optional[Sequence[Any]]) -> Optional[LungeFrame]:
        """Classify the first detected body and notify the listener.

        Frames without a body, with too few landmarks or with non-finite
        coordinates are skipped: no state changes and no notifications.
        """
        landmarks = self._first_body(poses)
        if landmarks is None:
            return None

        angles = self.compute_angles(landmarks)
        if angles is None:
            return None

        is_right_lunge = self.is_lunge_position(angles.right_hip, angles.right_knee)
        is_left_lunge = self.is_lunge_position(angles.left_hip, angles.left_knee)

        reps = self._count_reps(is_right_lunge, is_left_lunge)

        raw_progress = max(
            self.calculate_progress(angles.right_hip),
            self.calculate_progress(angles.left_hip),
        )
        smoothed = (
            self._current_progress * self.smoothing_factor
            + raw_progress * (1.0 - self.smoothing_factor)
        )
        # float rounding may push the average a hair past the bounds
        self._current_progress = max(0.0, min(MAX_PROGRESS, smoothed))
        self.send_progress_update(self._current_progress)

        feedback = self.provide_feedback(
            is_right_lunge,
            is_left_lunge,
            angles.right_hip,
            angles.left_hip,
        )
        return LungeFrame(
            angles=angles,
            right_lunge=is_right_lunge,
            left_lunge=is_left_lunge,
            reps=reps,
            raw_progress=raw_progress,
            progress=self._current_progress,
            feedback=feedback,
        )

    def compute_angles(self, landmarks: Sequence[Any]) -> Optional[LungeAngles]:
        """Hip (shoulder-hip-knee) and knee (hip-knee-ankle) angles for both sides."""
        lm = PoseLandmark
        try:
            coords = np.array(
                [[landmarks[int(idx)].x, landmarks[int(idx)].y] for idx in REQUIRED_LANDMARKS],
                dtype=float,
            )
        except (AttributeError, TypeError, ValueError) as exc:
            logger.warning("Skipping frame with malformed landmark entry: {}", exc)
            return None
        if not np.all(np.isfinite(coords)):
            logger.warning("Skipping frame with non-finite landmark coordinates")
            return None
        return LungeAngles(
            right_hip=calculate_angle(landmarks[lm.RIGHT_SHOULDER], landmarks[lm.RIGHT_HIP], landmarks[lm.RIGHT_KNEE]),
            right_knee=calculate_angle(landmarks[lm.RIGHT_HIP], landmarks[lm.RIGHT_KNEE], landmarks[lm.RIGHT_ANKLE]),
            left_hip=calculate_angle(landmarks[lm.LEFT_SHOULDER], landmarks[lm.LEFT_HIP], landmarks[lm.LEFT_KNEE]),
            left_knee=calculate_angle(landmarks[lm.LEFT_HIP], landmarks[lm.LEFT_KNEE], landmarks[lm.LEFT_ANKLE]),
        )

    def is_lunge_position(self, hip_angle: float, knee_angle: float) -> bool:
        return is_lunge_position(hip_angle, knee_angle, self.target_angle, self.angle_tolerance)

    def calculate_progress(self, angle: float) -> float:
        return calculate_progress(angle, self.target_angle, self.angle_tolerance)

    def provide_feedback(
        self,
        is_right_lunge: bool,
        is_left_lunge: bool,
        right_angle: float,
        left_angle: float,
    ) -> Feedback:
        """Pick and send the single feedback message for this frame.

        When neither leg is in position, the hip farther from the target
        gets the correction; ties go to the left leg.
        """
        if is_right_lunge and is_left_lunge:
            feedback = Feedback.KEEP_ONE_LEG_STRAIGHT
        elif is_right_lunge:
            feedback = Feedback.RIGHT_LEG_GOOD
        elif is_left_lunge:
            feedback = Feedback.LEFT_LEG_GOOD
        elif abs(right_angle - self.target_angle) > abs(left_angle - self.target_angle):
            feedback = Feedback.BEND_RIGHT_KNEE
        else:
            feedback = Feedback.BEND_LEFT_KNEE
        self.send_feedback_message(feedback.value)
        return feedback

    # --- Internal helpers -----------------------------------------------

    def _first_body(self, poses: Optional[Sequence[Any]]) -> Optional[List[Any]]:
        if poses is None or len(poses) == 0:
            logger.debug("No body detected; skipping frame")
            return None
        body = poses[0]
        if body is None or len(body) == 0:
            logger.debug("Empty landmark set; skipping frame")
            return None
        if isinstance(body, np.ndarray):
            try:
                body = landmarks_from_array(body)
            except ValueError as exc:
                logger.warning("Skipping frame with malformed landmark array: {}", exc)
                return None
        needed = required_landmark_count()
        if len(body) < needed:
            logger.warning("Skipping frame with {} landmarks (need at least {})", len(body), needed)
            return None
        return list(body)

    def _count_reps(self, is_right_lunge: bool, is_left_lunge: bool) -> int:
        # Both sides compare against the same previous-frame snapshot
        reps = 0
        if is_right_lunge and not self._last_right_lunge and not is_left_lunge:
            logger.info("Lunge rep counted on right leg")
            self.increment_rep_count()
            reps += 1
        if is_left_lunge and not self._last_left_lunge and not is_right_lunge:
            logger.info("Lunge rep counted on left leg")
            self.increment_rep_count()
            reps += 1
        self._last_right_lunge = is_right_lunge
        self._last_left_lunge = is_left_lunge
        return reps


__all__ = [
    "ANGLE_TOLERANCE",
    "ExerciseRepCounter",
    "Feedback",
    "LungeAngles",
    "LungeFrame",
    "LungeRepCounter",
    "PROGRESS_SMOOTHING_FACTOR",
    "RepCounterListener",
    "TARGET_ANGLE",
    "calculate_progress",
    "is_lunge_position",
]
