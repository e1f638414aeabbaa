"""Tests for greedy beat deduplication."""

import numpy as np
import pytest

from fluxbeat.analysis.dedup import BeatDeduplicator, deduplicate_beats
from fluxbeat.analysis.models import BeatEvent


def _beats(*pairs) -> list[BeatEvent]:
    return [BeatEvent(time=t, strength=s) for t, s in pairs]


def _pairs(beats) -> list[tuple[float, float]]:
    return [(b.time, b.strength) for b in beats]


def test_empty_input_gives_empty_output():
    assert deduplicate_beats([]) == []


def test_single_candidate_is_kept():
    assert _pairs(deduplicate_beats(_beats((0.5, 0.1)))) == [(0.5, 0.1)]


def test_stronger_candidate_replaces_earlier_one():
    beats = _beats((0.10, 0.6), (0.15, 0.9), (0.30, 0.4))
    assert _pairs(deduplicate_beats(beats, min_time_gap=0.08)) == [(0.15, 0.9), (0.30, 0.4)]


def test_weaker_candidate_within_gap_is_dropped():
    beats = _beats((0.10, 0.9), (0.15, 0.6), (0.30, 0.4))
    assert _pairs(deduplicate_beats(beats)) == [(0.10, 0.9), (0.30, 0.4)]


def test_equal_strength_keeps_earlier():
    beats = _beats((0.10, 0.5), (0.12, 0.5))
    assert _pairs(deduplicate_beats(beats)) == [(0.10, 0.5)]


def test_gap_exactly_equal_is_within_window():
    beats = _beats((0.0, 0.9), (0.25, 0.1))
    assert _pairs(deduplicate_beats(beats, min_time_gap=0.25)) == [(0.0, 0.9)]


def test_chained_replacements_slide_the_kept_beat():
    beats = _beats((0.10, 0.5), (0.15, 0.6), (0.21, 0.7), (0.28, 0.8))
    # each step is within 0.08 of the beat it replaces, though 0.28 is
    # 0.18 away from the first candidate
    assert _pairs(deduplicate_beats(beats)) == [(0.28, 0.8)]


def test_window_measured_from_replaced_beat():
    # 0.16 is within 0.08 of 0.10 -> replaces it; 0.22 is then compared
    # with 0.16 (not 0.10) and is weaker, so it is dropped
    beats = _beats((0.10, 0.2), (0.16, 0.9), (0.22, 0.5), (0.40, 0.3))
    assert _pairs(deduplicate_beats(beats)) == [(0.16, 0.9), (0.40, 0.3)]


def test_output_never_keeps_two_beats_within_gap():
    rng = np.random.default_rng(7)
    times = np.cumsum(rng.uniform(0.005, 0.1, size=500))
    beats = [BeatEvent(time=float(t), strength=float(s)) for t, s in zip(times, rng.random(500))]

    kept = deduplicate_beats(beats, min_time_gap=0.08)
    gaps = np.diff([b.time for b in kept])
    assert np.all(gaps > 0.08)


def test_online_matches_batch():
    rng = np.random.default_rng(11)
    times = np.cumsum(rng.uniform(0.01, 0.12, size=200))
    beats = [BeatEvent(time=float(t), strength=float(s)) for t, s in zip(times, rng.random(200))]

    dedup = BeatDeduplicator(0.08)
    online = [b for b in (dedup.push(c) for c in beats) if b is not None]
    last = dedup.flush()
    if last is not None:
        online.append(last)

    assert online == deduplicate_beats(beats, 0.08)


def test_advance_releases_only_after_gap():
    dedup = BeatDeduplicator(0.08)
    first = BeatEvent(time=0.1, strength=1.0)
    assert dedup.push(first) is None
    assert dedup.advance(0.15) is None
    assert dedup.held is first
    assert dedup.advance(0.2) is first
    assert dedup.held is None
    assert dedup.flush() is None


def test_flush_on_empty_returns_none():
    assert BeatDeduplicator().flush() is None


@pytest.mark.parametrize("gap", [0.0, 0.08, 1.0])
def test_output_times_strictly_increasing(gap):
    beats = _beats((0.1, 0.3), (0.12, 0.5), (0.5, 0.2), (0.51, 0.1), (2.0, 1.0))
    kept = deduplicate_beats(beats, gap)
    times = [b.time for b in kept]
    assert times == sorted(set(times))
