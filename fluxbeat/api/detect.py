"""Batch beat detection endpoint."""

import asyncio
import logging

import numpy as np
from fastapi import APIRouter, HTTPException

from fluxbeat.api.schemas import BeatResponse, DetectRequest, DetectResponse
from fluxbeat.analysis.detector import BeatDetector
from fluxbeat.analysis.framing import frame_count
from fluxbeat.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()


def make_detector(min_time_gap: float | None = None) -> BeatDetector:
    """Build a detector from settings, optionally overriding the gap."""
    return BeatDetector(
        frame_size=settings.frame_size,
        hop_size=settings.hop_size,
        min_time_gap=settings.min_time_gap if min_time_gap is None else min_time_gap,
    )


@router.post("/beats", response_model=DetectResponse)
async def detect_beats(request: DetectRequest):
    """Detect beats in a block of mono samples."""
    if len(request.samples) > settings.max_samples:
        raise HTTPException(400, f"Signal too long (max {settings.max_samples} samples)")

    sensitivity = settings.sensitivity if request.sensitivity is None else request.sensitivity
    audio = np.asarray(request.samples, dtype=np.float64)

    try:
        detector = make_detector(request.min_time_gap)
        loop = asyncio.get_running_loop()
        beats = await loop.run_in_executor(
            None, detector.detect_beats, audio, request.sample_rate, sensitivity,
        )
    except Exception:
        logger.exception("Beat detection failed")
        raise HTTPException(500, "Detection failed")

    return DetectResponse(
        beats=[BeatResponse(time=b.time, strength=b.strength, type=b.type) for b in beats],
        frame_count=frame_count(len(audio), settings.frame_size, settings.hop_size),
        duration=len(audio) / request.sample_rate,
    )
