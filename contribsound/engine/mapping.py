# contribsound/engine/mapping.py
"""
Contribution count -> musical parameters.

- pitch:    linear C4..C6 ramp over 0..100 contributions
- duration: note value picked by count band, scaled by tempo
- harmony:  just-intonation chords for busy days
"""

from __future__ import annotations

from fractions import Fraction
from typing import Optional, Tuple

# =============================================================================
# CONSTANTS
# =============================================================================

MIN_FREQ = 261.63  # C4
MAX_FREQ = 1046.5  # C6
FULL_SCALE_COUNT = 100.0

MAJOR_TRIAD: Tuple[Fraction, ...] = (Fraction(1), Fraction(5, 4), Fraction(3, 2))
MINOR_TRIAD: Tuple[Fraction, ...] = (Fraction(1), Fraction(6, 5), Fraction(3, 2))
POWER_DYAD: Tuple[Fraction, ...] = (Fraction(1), Fraction(3, 2))

# (min count, beats): whole, half, quarter, eighth; anything lower is a sixteenth
_DURATION_BANDS: Tuple[Tuple[int, float], ...] = (
    (50, 4.0),
    (25, 2.0),
    (10, 1.0),
    (5, 0.5),
)
_SHORTEST_BEATS = 0.25
LONGEST_NOTE_BEATS = _DURATION_BANDS[0][1]

# =============================================================================
# MAPPERS
# =============================================================================

def frequency_for(count: int) -> float:
    if count <= 0:
        return MIN_FREQ
    freq = (count / FULL_SCALE_COUNT) * (MAX_FREQ - MIN_FREQ) + MIN_FREQ
    return min(freq, MAX_FREQ)


def duration_for(count: int, tempo_bpm: float) -> float:
    """Note length in seconds; busier days hold longer notes."""
    beat = 60.0 / float(tempo_bpm)
    for threshold, beats in _DURATION_BANDS:
        if count >= threshold:
            return beat * beats
    return beat * _SHORTEST_BEATS


def chord_ratios(count: int) -> Optional[Tuple[Fraction, ...]]:
    if count >= 50:
        return MAJOR_TRIAD
    if count >= 25:
        return MINOR_TRIAD
    if count >= 10:
        return POWER_DYAD
    return None


def chord_for(count: int, base_freq: float) -> Optional[Tuple[float, ...]]:
    """
    Pitches sounded together for this day, or None for a single note.
    Ratios are exact: base * numerator / denominator, no equal temperament.
    """
    ratios = chord_ratios(count)
    if ratios is None:
        return None
    return tuple(base_freq * r.numerator / r.denominator for r in ratios)
