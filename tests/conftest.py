"""Shared test fixtures for beat detection tests."""

import numpy as np
import pytest
from fastapi.testclient import TestClient

from fluxbeat.main import app

SR = 44100


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


def generate_click_track(
    bpm: float,
    duration_seconds: float = 4.0,
    sr: int = SR,
    accent_every: int = 4,
    accent_ratio: float = 2.0,
) -> tuple[np.ndarray, list[float]]:
    """Generate a synthetic click track with accented downbeats.

    Returns (mono audio, click start times in seconds).
    """
    n_samples = int(duration_seconds * sr)
    audio = np.zeros(n_samples, dtype=np.float32)

    beat_interval = 60.0 / bpm  # seconds per beat
    click_samples = int(0.02 * sr)  # 20ms click

    # Short sine burst with envelope
    t_click = np.arange(click_samples) / sr
    click = np.sin(2 * np.pi * 1000 * t_click) * np.exp(-t_click * 100)

    click_times = []
    beat = 0
    # First click after a short lead-in so it is not in the very first frame
    time = 0.25
    while time < duration_seconds - 0.1:
        sample_pos = int(time * sr)
        amplitude = accent_ratio if beat % accent_every == 0 else 1.0

        end = min(sample_pos + click_samples, n_samples)
        audio[sample_pos:end] += click[:end - sample_pos] * amplitude
        click_times.append(sample_pos / sr)

        time += beat_interval
        beat += 1

    peak = np.max(np.abs(audio))
    if peak > 0:
        audio = audio / peak

    return audio, click_times


@pytest.fixture
def make_click_track():
    return generate_click_track


@pytest.fixture
def click_120():
    """Click track at 120 BPM."""
    return generate_click_track(bpm=120)


class FirstSampleTransform:
    """Stub transform: every bin carries the frame's first sample.

    Makes the spectrum a direct function of the signal level at the frame
    start, so flux values can be computed by hand.
    """

    def __init__(self, size: int = 2048):
        self.size = size
        self.calls = 0

    def __call__(self, frame):
        self.calls += 1
        if len(frame) != self.size:
            raise ValueError(f"bad block length {len(frame)}")
        return np.full(self.size, complex(frame[0], 0.0))


@pytest.fixture
def first_sample_transform():
    return FirstSampleTransform()


def step_signal(n_samples: int = 4096, step_at: int = 1024, level: float = 1.0) -> np.ndarray:
    """Silence followed by a constant level from *step_at* on."""
    audio = np.zeros(n_samples, dtype=np.float64)
    audio[step_at:] = level
    return audio


@pytest.fixture
def step_4096():
    """4096 samples stepping up at sample 1024 (frame index 2 at hop 512)."""
    return step_signal()


@pytest.fixture
def transform_factory():
    return FirstSampleTransform
