"""Spectral flux: positive frame-to-frame magnitude increase."""

from __future__ import annotations

import numpy as np


def spectral_flux(current: np.ndarray, previous: np.ndarray | None) -> float:
    """Mean positive increase of *current* over *previous*, per bin.

    Decreases are ignored. Without a previous spectrum the flux is 0.
    """
    if previous is None:
        return 0.0
    rise = np.maximum(current - previous, 0.0)
    return float(rise.sum() / len(current))


class SpectralFluxComputer:
    """Holds the previous spectrum of one detection pass."""

    def __init__(self) -> None:
        self.previous: np.ndarray | None = None

    def reset(self) -> None:
        self.previous = None

    def update(self, spectrum: np.ndarray) -> float:
        """Return the flux of *spectrum* and make it the new previous one."""
        flux = spectral_flux(spectrum, self.previous)
        self.previous = spectrum
        return flux
