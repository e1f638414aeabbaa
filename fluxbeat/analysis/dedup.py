"""Greedy temporal deduplication of candidate beats.

Candidates closer than ``min_time_gap`` to the currently kept beat compete
with it: a strictly stronger candidate replaces the kept beat (time and
strength both move), a weaker or equal one is dropped. The window is
always measured from the beat currently kept, so a chain of closely spaced
stronger candidates can slide the kept beat forward past the original
window. This is not grid bucketing.
"""

from __future__ import annotations

from collections.abc import Iterable

from fluxbeat.analysis.models import BeatEvent

DEFAULT_MIN_TIME_GAP = 0.08  # seconds


class BeatDeduplicator:
    """Online form of :func:`deduplicate_beats`.

    Candidates must be pushed in time order. The kept beat is held back
    until nothing later can replace it, then returned from :meth:`push`,
    :meth:`advance` or :meth:`flush`.
    """

    def __init__(self, min_time_gap: float = DEFAULT_MIN_TIME_GAP) -> None:
        self.min_time_gap = min_time_gap
        self._held: BeatEvent | None = None

    @property
    def held(self) -> BeatEvent | None:
        return self._held

    def push(self, candidate: BeatEvent) -> BeatEvent | None:
        """Offer a candidate; return the beat it finalizes, if any."""
        last = self._held
        if last is None:
            self._held = candidate
            return None

        if candidate.time - last.time > self.min_time_gap:
            self._held = candidate
            return last

        if candidate.strength > last.strength:
            self._held = candidate
        return None

    def advance(self, time: float) -> BeatEvent | None:
        """Release the held beat if no candidate at or after *time* can replace it.

        *time* must not be later than any candidate still to be pushed.
        """
        last = self._held
        if last is not None and time - last.time > self.min_time_gap:
            self._held = None
            return last
        return None

    def flush(self) -> BeatEvent | None:
        """Release the held beat at end of input."""
        last, self._held = self._held, None
        return last


def deduplicate_beats(
    candidates: Iterable[BeatEvent],
    min_time_gap: float = DEFAULT_MIN_TIME_GAP,
) -> list[BeatEvent]:
    """Keep only the strongest beat within each ``min_time_gap`` window."""
    dedup = BeatDeduplicator(min_time_gap)
    kept = []
    for candidate in candidates:
        released = dedup.push(candidate)
        if released is not None:
            kept.append(released)

    last = dedup.flush()
    if last is not None:
        kept.append(last)
    return kept
