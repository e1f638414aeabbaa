"""Beat type classification hook."""

from __future__ import annotations

from typing import Protocol

import numpy as np

from fluxbeat.analysis.models import DEFAULT_BEAT_TYPE


class BeatClassifier(Protocol):
    def __call__(self, frame: np.ndarray | None, *, time: float, strength: float) -> str: ...


def classify_beat(frame: np.ndarray | None, *, time: float, strength: float) -> str:
    """Placeholder classifier: every onset is labelled ``"beat"``."""
    return DEFAULT_BEAT_TYPE
