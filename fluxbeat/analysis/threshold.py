"""Turn flux values into candidate beats."""

from __future__ import annotations

import numpy as np

from fluxbeat.analysis.classify import BeatClassifier, classify_beat
from fluxbeat.analysis.models import BeatEvent


def threshold_onset(
    flux: float,
    offset: int,
    hop_size: int,
    sr: int,
    sensitivity: float = 0.5,
    frame: np.ndarray | None = None,
    classifier: BeatClassifier = classify_beat,
) -> BeatEvent | None:
    """Return a candidate beat if *flux* exceeds *sensitivity*.

    *sensitivity* is a raw flux threshold, not a probability; it is not
    range-checked. The event time is the end of the hop starting at
    *offset*, i.e. ``(offset + hop_size) / sr``.
    """
    if not flux > sensitivity:
        return None

    time = (offset + hop_size) / sr
    label = classifier(frame, time=time, strength=flux)
    return BeatEvent(time=time, strength=flux, type=label)
