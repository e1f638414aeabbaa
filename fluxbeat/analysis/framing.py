"""Segmentation of a signal into overlapping analysis frames."""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np


def frame_count(n_samples: int, frame_size: int, hop_size: int) -> int:
    """Number of full frames that fit in *n_samples* samples."""
    if n_samples < frame_size:
        return 0
    return (n_samples - frame_size) // hop_size + 1


def check_frame_params(frame_size: int, hop_size: int) -> None:
    """Raise ``ValueError`` unless ``0 < hop_size <= frame_size``."""
    if frame_size <= 0 or hop_size <= 0:
        raise ValueError(
            f"frame_size and hop_size must be positive (got {frame_size}, {hop_size})"
        )
    if hop_size > frame_size:
        raise ValueError(f"hop_size {hop_size} exceeds frame_size {frame_size}")


class Frames:
    """Lazy, restartable sequence of ``(offset, frame)`` pairs.

    A frame starts at every multiple of ``hop_size`` for which the whole
    frame fits inside the signal. Signals shorter than ``frame_size``
    produce no frames. Frames are read-only views into the signal.

    Parameters
    ----------
    audio:
        Mono signal.
    frame_size:
        Samples per frame. Defaults to 2048.
    hop_size:
        Samples between consecutive frame starts. Defaults to 512.
    """

    def __init__(self, audio: np.ndarray, frame_size: int = 2048, hop_size: int = 512) -> None:
        check_frame_params(frame_size, hop_size)
        self._audio = np.asarray(audio).ravel()
        self.frame_size = frame_size
        self.hop_size = hop_size

    def __len__(self) -> int:
        return frame_count(len(self._audio), self.frame_size, self.hop_size)

    def __iter__(self) -> Iterator[tuple[int, np.ndarray]]:
        view = self._audio.view()
        view.flags.writeable = False
        for k in range(len(self)):
            offset = k * self.hop_size
            yield offset, view[offset:offset + self.frame_size]
