"""Half-spectrum magnitudes from an injected forward transform."""

from __future__ import annotations

from typing import Protocol

import numpy as np
import scipy.fft


class ForwardTransform(Protocol):
    """Real-to-complex forward transform of a fixed block length.

    Returns either a complex array of N coefficients or an (N, 2) array of
    ``(real, imag)`` pairs.
    """

    def __call__(self, frame: np.ndarray) -> np.ndarray: ...


class FFTTransform:
    """Default transform backed by ``scipy.fft.fft``."""

    def __init__(self, size: int = 2048) -> None:
        self.size = size

    def __call__(self, frame: np.ndarray) -> np.ndarray:
        if len(frame) != self.size:
            raise ValueError(f"Expected a frame of {self.size} samples, got {len(frame)}")
        return scipy.fft.fft(frame)


def magnitude_spectrum(frame: np.ndarray, transform: ForwardTransform) -> np.ndarray:
    """Return ``sqrt(re^2 + im^2)`` of the first ``len(frame) // 2`` bins.

    Bins past the midpoint mirror the lower half for real input and are
    dropped. Errors raised by *transform* propagate unchanged.
    """
    coeffs = np.asarray(transform(frame))
    n_bins = len(frame) // 2

    if np.iscomplexobj(coeffs):
        return np.abs(coeffs[:n_bins]).astype(np.float64)

    if coeffs.ndim != 2 or coeffs.shape[1] != 2:
        raise ValueError(
            "Transform must return a complex array or an (N, 2) array of "
            f"(real, imag) pairs, got {coeffs.dtype} array of shape {coeffs.shape}"
        )

    # (real, imag) pairs
    pairs = coeffs[:n_bins].astype(np.float64)
    return np.hypot(pairs[:, 0], pairs[:, 1])
