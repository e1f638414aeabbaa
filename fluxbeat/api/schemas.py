"""Pydantic request/response models for API."""

from pydantic import BaseModel, Field


class DetectRequest(BaseModel):
    samples: list[float]
    sample_rate: int = Field(gt=0)
    sensitivity: float | None = None
    min_time_gap: float | None = Field(default=None, ge=0)


class BeatResponse(BaseModel):
    time: float
    strength: float
    type: str = "beat"


class DetectResponse(BaseModel):
    beats: list[BeatResponse]
    frame_count: int = 0
    duration: float = 0.0


# WebSocket message types

class BeatMessage(BaseModel):
    type: str = "beat"
    time: float
    strength: float
    beat_type: str = "beat"


class DoneMessage(BaseModel):
    type: str = "done"
    beat_count: int = 0
    duration: float = 0.0
