"""Core data models for beat detection."""

from dataclasses import dataclass

DEFAULT_BEAT_TYPE = "beat"


@dataclass
class BeatEvent:
    """A single detected beat."""
    time: float  # seconds, end of the hop that produced it
    strength: float  # spectral flux, >= 0
    type: str = DEFAULT_BEAT_TYPE
