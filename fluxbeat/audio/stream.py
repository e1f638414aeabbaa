"""Chunked sample buffer for live audio streaming."""

from __future__ import annotations

import numpy as np

from fluxbeat.analysis.framing import check_frame_params


class FrameStream:
    """Turns arbitrarily sized audio chunks into analysis frames.

    Frames come out at the same absolute offsets :class:`Frames` would
    produce for the concatenated signal. Only the samples still needed by
    upcoming frames are kept.

    Parameters
    ----------
    frame_size:
        Samples per frame. Defaults to 2048.
    hop_size:
        Samples between frame starts. Defaults to 512.
    """

    def __init__(self, frame_size: int = 2048, hop_size: int = 512) -> None:
        check_frame_params(frame_size, hop_size)
        self.frame_size = frame_size
        self.hop_size = hop_size
        self._pending = np.zeros(0, dtype=np.float64)
        self._pending_start = 0  # absolute index of self._pending[0]
        self._next_offset = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def append(self, chunk: np.ndarray) -> list[tuple[int, np.ndarray]]:
        """Add a chunk and return every frame it completes."""
        chunk = np.asarray(chunk, dtype=np.float64).ravel()
        if len(chunk) == 0:
            return []

        self._pending = np.concatenate([self._pending, chunk])
        end = self._pending_start + len(self._pending)

        frames = []
        while self._next_offset + self.frame_size <= end:
            start = self._next_offset - self._pending_start
            frames.append((self._next_offset, self._pending[start:start + self.frame_size].copy()))
            self._next_offset += self.hop_size

        # Samples before the next frame start are never read again.
        drop = self._next_offset - self._pending_start
        if drop > 0:
            self._pending = self._pending[drop:]
            self._pending_start = self._next_offset

        return frames

    @property
    def next_offset(self) -> int:
        """Absolute offset of the next frame to be produced."""
        return self._next_offset

    @property
    def n_samples(self) -> int:
        """Total samples received so far."""
        return self._pending_start + len(self._pending)

    def clear(self) -> None:
        """Reset the stream."""
        self._pending = np.zeros(0, dtype=np.float64)
        self._pending_start = 0
        self._next_offset = 0
