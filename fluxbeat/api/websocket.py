"""WebSocket endpoint for live beat detection."""

import asyncio
import logging

import numpy as np
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from fluxbeat.api.detect import make_detector
from fluxbeat.api.schemas import BeatMessage, DoneMessage
from fluxbeat.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()


def _beat_message(beat) -> dict:
    return BeatMessage(time=beat.time, strength=beat.strength, beat_type=beat.type).model_dump()


@router.websocket("/ws/beats")
async def live_beats(
    websocket: WebSocket,
    sample_rate: int | None = None,
    sensitivity: float | None = None,
):
    """Live beat detection via WebSocket.

    Protocol:
    - Client sends binary Float32 PCM chunks (mono, ``sample_rate`` Hz)
    - Client sends the text message ``"end"`` to finish
    - Server sends JSON messages:
      - {"type": "beat", "time": T, "strength": S, "beat_type": "beat"}
      - {"type": "done", "beat_count": N, "duration": D}
      - {"type": "error", "message": "..."}
    """
    await websocket.accept()

    sr = settings.sample_rate if sample_rate is None else sample_rate
    if sensitivity is None:
        sensitivity = settings.sensitivity
    beat_count = 0

    try:
        stream = make_detector().stream(sr=sr, sensitivity=sensitivity)
        loop = asyncio.get_running_loop()

        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                logger.info(f"Client disconnected after {stream.duration:.1f}s")
                break

            data = message.get("bytes")
            if data is not None:
                # Decode Float32 PCM
                chunk = np.frombuffer(data, dtype=np.float32)
                beats = await loop.run_in_executor(None, stream.push, chunk)
                for beat in beats:
                    beat_count += 1
                    await websocket.send_json(_beat_message(beat))
                continue

            if message.get("text") == "end":
                for beat in stream.flush():
                    beat_count += 1
                    await websocket.send_json(_beat_message(beat))
                await websocket.send_json(
                    DoneMessage(beat_count=beat_count, duration=stream.duration).model_dump()
                )
                await websocket.close()
                break

    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.exception("Live beat detection failed")
        try:
            await websocket.send_json({"type": "error", "message": str(e)})
            await websocket.close()
        except Exception:
            logger.debug("Could not report error to client", exc_info=True)
