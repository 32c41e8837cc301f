from __future__ import annotations

import math
from typing import List, Tuple

import pytest

from lunge_counter.core.session import LungeSession
from lunge_counter.vision.landmarks import Landmark, PoseLandmark, blank_pose
from lunge_counter.vision.lunge import LungeRepCounter

STRAIGHT = (180.0, 180.0)
LUNGE = (90.0, 90.0)


class RecordingListener:
    """Keeps every notification in arrival order."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, object]] = []

    def on_rep_completed(self) -> None:
        self.events.append(("rep", None))

    def on_progress(self, value: float) -> None:
        self.events.append(("progress", value))

    def on_feedback(self, message: str) -> None:
        self.events.append(("feedback", message))

    def of(self, kind: str) -> list:
        return [payload for name, payload in self.events if name == kind]


def _place_leg(pose: List[Landmark], side: str, hip_angle: float, knee_angle: float, x: float) -> None:
    # Builds shoulder/hip/knee/ankle so the directional angles come out as requested
    hip = (x, 0.5)
    shoulder = (x, 0.2)
    thigh = math.radians(hip_angle - 90.0)
    knee = (hip[0] + 0.2 * math.cos(thigh), hip[1] + 0.2 * math.sin(thigh))
    shin = thigh + math.pi + math.radians(knee_angle)
    ankle = (knee[0] + 0.2 * math.cos(shin), knee[1] + 0.2 * math.sin(shin))
    for name, pt in (("SHOULDER", shoulder), ("HIP", hip), ("KNEE", knee), ("ANKLE", ankle)):
        pose[PoseLandmark[f"{side}_{name}"]] = Landmark(x=pt[0], y=pt[1])


@pytest.fixture
def make_pose():
    def factory(right: Tuple[float, float] = STRAIGHT, left: Tuple[float, float] = STRAIGHT) -> List[Landmark]:
        pose = blank_pose()
        _place_leg(pose, "RIGHT", right[0], right[1], x=0.6)
        _place_leg(pose, "LEFT", left[0], left[1], x=0.4)
        return pose

    return factory


@pytest.fixture
def recorder() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def session() -> LungeSession:
    return LungeSession()


@pytest.fixture
def counter(session: LungeSession) -> LungeRepCounter:
    return LungeRepCounter(session)
