"""Spectral-flux beat detector.

Pipeline per frame: magnitude half-spectrum -> positive flux against the
previous frame -> threshold -> candidate beat. Candidates are then merged by
:func:`deduplicate_beats`. Frames are processed strictly in offset order.
"""

import logging

import numpy as np

from fluxbeat.analysis.classify import BeatClassifier, classify_beat
from fluxbeat.analysis.dedup import DEFAULT_MIN_TIME_GAP, BeatDeduplicator, deduplicate_beats
from fluxbeat.analysis.flux import SpectralFluxComputer
from fluxbeat.analysis.framing import Frames, check_frame_params
from fluxbeat.analysis.models import BeatEvent
from fluxbeat.analysis.spectrum import FFTTransform, ForwardTransform, magnitude_spectrum
from fluxbeat.analysis.threshold import threshold_onset
from fluxbeat.audio.stream import FrameStream

logger = logging.getLogger(__name__)


def _check_sr(sr: int) -> None:
    if sr <= 0:
        raise ValueError(f"Sample rate must be positive, got {sr}")


class BeatDetector:
    """Detects beats with spectral flux.

    The previous-spectrum state lives in a :class:`SpectralFluxComputer`
    created for each pass, so the detector itself only carries
    configuration and separate passes never share state.

    Parameters
    ----------
    frame_size:
        Analysis frame length in samples. Defaults to 2048.
    hop_size:
        Samples between frame starts. Defaults to 512.
    min_time_gap:
        Deduplication window in seconds. Defaults to 0.08.
    transform:
        Forward transform for ``frame_size`` samples. Defaults to
        :class:`FFTTransform`.
    classifier:
        Beat type labeller. Defaults to :func:`classify_beat`.
    """

    def __init__(
        self,
        frame_size: int = 2048,
        hop_size: int = 512,
        min_time_gap: float = DEFAULT_MIN_TIME_GAP,
        transform: ForwardTransform | None = None,
        classifier: BeatClassifier | None = None,
    ):
        check_frame_params(frame_size, hop_size)
        self.frame_size = frame_size
        self.hop_size = hop_size
        self.min_time_gap = min_time_gap
        self.transform = transform if transform is not None else FFTTransform(frame_size)
        self.classifier = classifier if classifier is not None else classify_beat

    def _candidate(
        self,
        flux_state: SpectralFluxComputer,
        offset: int,
        frame: np.ndarray,
        sr: int,
        sensitivity: float,
    ) -> BeatEvent | None:
        spectrum = magnitude_spectrum(frame, self.transform)
        flux = flux_state.update(spectrum)
        candidate = threshold_onset(
            flux, offset, self.hop_size, sr, sensitivity,
            frame=frame, classifier=self.classifier,
        )
        if candidate is not None:
            logger.debug(f"Candidate at {candidate.time:.4f}s (flux {flux:.4f})")
        return candidate

    def detect_candidates(
        self,
        audio: np.ndarray,
        sr: int = 44100,
        sensitivity: float = 0.5,
    ) -> list[BeatEvent]:
        """Return raw thresholded candidates, before deduplication."""
        _check_sr(sr)
        audio = np.asarray(audio, dtype=np.float64)
        flux_state = SpectralFluxComputer()

        candidates = []
        for offset, frame in Frames(audio, self.frame_size, self.hop_size):
            candidate = self._candidate(flux_state, offset, frame, sr, sensitivity)
            if candidate is not None:
                candidates.append(candidate)
        return candidates

    def detect_beats(
        self,
        audio: np.ndarray,
        sr: int = 44100,
        sensitivity: float = 0.5,
    ) -> list[BeatEvent]:
        """Detect beats in *audio*, sorted by time and deduplicated."""
        candidates = self.detect_candidates(audio, sr, sensitivity)
        beats = self.filter_beats(candidates)
        logger.info(
            f"Detected {len(beats)} beats from {len(candidates)} candidates "
            f"in {len(audio) / sr:.1f}s of audio at {sr}Hz"
        )
        return beats

    def filter_beats(
        self,
        candidates: list[BeatEvent],
        min_time_gap: float | None = None,
    ) -> list[BeatEvent]:
        """Deduplicate *candidates*, by default with this detector's gap."""
        if min_time_gap is None:
            min_time_gap = self.min_time_gap
        return deduplicate_beats(candidates, min_time_gap)

    def onset_strength(self, audio: np.ndarray) -> np.ndarray:
        """Return the spectral flux of every frame (first frame is 0)."""
        audio = np.asarray(audio, dtype=np.float64)
        flux_state = SpectralFluxComputer()
        frames = Frames(audio, self.frame_size, self.hop_size)
        envelope = np.zeros(len(frames), dtype=np.float64)
        for k, (_offset, frame) in enumerate(frames):
            envelope[k] = flux_state.update(magnitude_spectrum(frame, self.transform))
        return envelope

    def stream(self, sr: int = 44100, sensitivity: float = 0.5) -> "BeatStream":
        """Start a chunked detection pass."""
        return BeatStream(self, sr, sensitivity)


class BeatStream:
    """One detection pass fed incrementally.

    Beats are returned as soon as no later candidate can replace them; the
    concatenation of every :meth:`push` result and :meth:`flush` equals
    :meth:`BeatDetector.detect_beats` on the concatenated audio. Not safe
    to feed from several threads at once.
    """

    def __init__(self, detector: BeatDetector, sr: int = 44100, sensitivity: float = 0.5):
        _check_sr(sr)
        self.detector = detector
        self.sr = sr
        self.sensitivity = sensitivity
        self._frames = FrameStream(detector.frame_size, detector.hop_size)
        self._flux = SpectralFluxComputer()
        self._dedup = BeatDeduplicator(detector.min_time_gap)
        self.candidate_count = 0

    def push(self, chunk: np.ndarray) -> list[BeatEvent]:
        """Feed a chunk of samples; return the beats it finalized."""
        beats = []
        for offset, frame in self._frames.append(chunk):
            candidate = self.detector._candidate(self._flux, offset, frame, self.sr, self.sensitivity)
            if candidate is None:
                continue
            self.candidate_count += 1
            released = self._dedup.push(candidate)
            if released is not None:
                beats.append(released)

        # Earliest time any future candidate can carry.
        horizon = (self._frames.next_offset + self.detector.hop_size) / self.sr
        released = self._dedup.advance(horizon)
        if released is not None:
            beats.append(released)
        return beats

    def flush(self) -> list[BeatEvent]:
        """End the pass and return the beat still held back, if any."""
        last = self._dedup.flush()
        logger.info(
            f"Stream ended after {self._frames.n_samples / self.sr:.1f}s, "
            f"{self.candidate_count} candidates"
        )
        return [last] if last is not None else []

    @property
    def duration(self) -> float:
        """Seconds of audio received so far."""
        return self._frames.n_samples / self.sr
