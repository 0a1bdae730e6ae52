# contribsound/engine/renderer.py
"""
Contribution days -> notes -> samples -> WAV bytes.

One pipeline serves both modes:
- config=None: the classic sonification (sine, 0.1s per day, amplitude 0.5)
- RenderConfig: tempo-driven durations, chords, instrument timbre, volume
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np

from contribsound.engine.mapping import chord_for, duration_for, frequency_for
from contribsound.engine.waveforms import Instrument, synthesize, waveform_for
from contribsound.engine.wav import encode_wav
from contribsound.models.day import DayRecord
from contribsound.models.render import SAMPLE_RATE, Note, RenderConfig

logger = logging.getLogger("contribsound.engine")

SIMPLE_NOTE_SEC = 0.1
SIMPLE_AMPLITUDE = 0.5

# =============================================================================
# NOTE PLANNING
# =============================================================================

def plan_notes(days: Sequence[DayRecord], config: Optional[RenderConfig] = None) -> List[Note]:
    """One note per day, in input order."""
    notes: List[Note] = []
    for day in days:
        count = day.contributionCount
        freq = frequency_for(count)
        if config is None:
            notes.append(Note(pitches=(freq,), duration_seconds=SIMPLE_NOTE_SEC))
            continue
        chord = chord_for(count, freq)
        notes.append(Note(
            pitches=chord if chord is not None else (freq,),
            duration_seconds=duration_for(count, config.tempo_bpm),
        ))
    return notes


def note_sample_count(note: Note, sample_rate: int) -> int:
    return int(round(sample_rate * note.duration_seconds))

# =============================================================================
# SAMPLE RENDERING
# =============================================================================

def render_samples(
    days: Sequence[DayRecord],
    config: Optional[RenderConfig] = None,
    *,
    rnd: Optional[np.random.RandomState] = None,
) -> np.ndarray:
    """
    Flat float64 buffer for the whole sequence.
    Each note restarts its local time at t=0; phase is not carried across notes.
    """
    if config is None:
        instrument, amplitude, sample_rate = Instrument.PIANO, SIMPLE_AMPLITUDE, SAMPLE_RATE
    else:
        instrument, amplitude, sample_rate = config.instrument, config.volume, config.sample_rate_hz

    wave = waveform_for(instrument, rnd=rnd)
    chunks: List[np.ndarray] = []
    for note in plan_notes(days, config):
        n = note_sample_count(note, sample_rate)
        t = np.arange(n, dtype=np.float64) / float(sample_rate)
        chunks.append(synthesize(wave, note.pitches, t) * amplitude)

    if not chunks:
        return np.zeros(0, dtype=np.float64)
    return np.concatenate(chunks)


def render(
    days: Sequence[DayRecord],
    config: Optional[RenderConfig] = None,
    *,
    rnd: Optional[np.random.RandomState] = None,
) -> bytes:
    """
    Sonify contribution days into canonical mono 16-bit PCM WAV bytes.

    An empty sequence is valid and yields a header-only WAV.
    """
    sample_rate = SAMPLE_RATE if config is None else config.sample_rate_hz
    samples = render_samples(days, config, rnd=rnd)
    logger.info(
        f"🎼 Rendered {len(days)} days -> {samples.size} samples "
        f"({samples.size / sample_rate:.2f}s @ {sample_rate} Hz, "
        f"mode={'simple' if config is None else config.instrument.name.lower()})"
    )
    return encode_wav(samples, sample_rate)
