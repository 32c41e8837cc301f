"""Vision package exports."""

from .geometry import calculate_angle
from .landmarks import Landmark, PoseLandmark, landmarks_from_array
from .lunge import Feedback, LungeFrame, LungeRepCounter, RepCounterListener

__all__ = [
    "Feedback",
    "Landmark",
    "LungeFrame",
    "LungeRepCounter",
    "PoseLandmark",
    "RepCounterListener",
    "calculate_angle",
    "landmarks_from_array",
]
