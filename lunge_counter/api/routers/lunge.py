"""Lunge tracking endpoint router.

Feeds landmark frames pushed by a pose-estimation client into the session's
LungeRepCounter and reports the accumulated session state.
"""
from __future__ import annotations

import threading

from fastapi import APIRouter
from loguru import logger

from lunge_counter.api.schemas import Envelope, FrameInput, FrameOutput, SessionOutput
from lunge_counter.core.session import LungeSession
from lunge_counter.vision.landmarks import Landmark
from lunge_counter.vision.lunge import LungeRepCounter

router = APIRouter()

# Frames must reach the counter one at a time
_lock = threading.Lock()
_session = LungeSession()
_counter = LungeRepCounter(_session)


def start_session() -> LungeSession:
    """Replace the tracker and its listener with fresh ones."""
    global _session, _counter
    with _lock:
        _session = LungeSession()
        _counter = LungeRepCounter(_session)
        return _session


@router.post("/lunge/frame", response_model=Envelope)
async def lunge_frame(payload: FrameInput) -> Envelope:
    poses = [
        [Landmark(x=lm.x, y=lm.y, z=lm.z, visibility=lm.visibility) for lm in body]
        for body in payload.poses
    ]
    with _lock:
        frame = _counter.set_results(poses)
        status = SessionOutput.model_validate(_session.to_dict())
    data: dict = {"session": status.model_dump(), "skipped": frame is None, "frame": None}
    if frame is not None:
        data["frame"] = FrameOutput.model_validate(frame.to_dict()).model_dump()
        logger.debug(
            "lunge frame reps={} progress={:.3f} feedback={}",
            status.rep_count,
            frame.progress,
            frame.feedback.value,
        )
    return Envelope(success=True, data=data)


@router.get("/lunge/status", response_model=Envelope)
async def lunge_status() -> Envelope:
    with _lock:
        status = SessionOutput.model_validate(_session.to_dict())
    return Envelope(success=True, data=status.model_dump())


@router.post("/lunge/session", response_model=Envelope)
async def lunge_new_session() -> Envelope:
    session = start_session()
    logger.info("Started new lunge session")
    return Envelope(success=True, data=SessionOutput.model_validate(session.to_dict()).model_dump())
