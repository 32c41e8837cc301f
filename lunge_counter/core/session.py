"""LungeSession: accumulates tracker notifications for one exercise session.

- Owns the authoritative rep total, summed from rep-completed events
- Keeps the latest smoothed progress and feedback message
- Counts frames that produced notifications
"""
from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from typing import Optional


@dataclass
class LungeSession:
    rep_count: int = 0
    progress: float = 0.0
    feedback: Optional[str] = None
    frames_processed: int = 0
    started_at: float = field(default_factory=lambda: time.time())
    last_update: Optional[float] = None

    def on_rep_completed(self) -> None:
        self.rep_count += 1

    def on_progress(self, value: float) -> None:
        # Progress is sent exactly once per processed frame
        self.progress = float(value)
        self.frames_processed += 1
        self.last_update = time.time()

    def on_feedback(self, message: str) -> None:
        self.feedback = message

    def to_dict(self) -> dict:
        result = asdict(self)
        result["progress"] = round(self.progress, 4)
        return result
