"""Pydantic schemas for request/response payloads.

All endpoints use a standardized JSON envelope: {"success": bool, "data": any, "error": str|None}
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class Envelope(BaseModel):
    success: bool = True
    data: Optional[dict] = None
    error: Optional[str] = None


class LandmarkInput(BaseModel):
    x: float
    y: float
    z: float = 0.0
    visibility: float = Field(ge=0.0, le=1.0, default=1.0)


class FrameInput(BaseModel):
    # One landmark list per detected body; only the first body is analyzed
    poses: List[List[LandmarkInput]] = Field(default_factory=list)


class AnglesOutput(BaseModel):
    right_hip: float
    right_knee: float
    left_hip: float
    left_knee: float


class FrameOutput(BaseModel):
    angles: AnglesOutput
    right_lunge: bool
    left_lunge: bool
    reps: int
    raw_progress: float
    progress: float
    feedback: str


class SessionOutput(BaseModel):
    rep_count: int
    progress: float
    feedback: str | None = None
    frames_processed: int
    started_at: float
    last_update: float | None = None
