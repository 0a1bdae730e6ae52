# contribsound/engine/waveforms.py
"""
Instrument oscillators.

Every waveform maps (frequency Hz, time array in seconds) -> amplitude array.
Values are nominally in [-1, 1]; the PCM quantizer clamps anything outside.
"""

from __future__ import annotations

from enum import IntEnum
from functools import partial
from typing import Callable, Optional, Sequence

import numpy as np

TWOPI = 2.0 * np.pi

Waveform = Callable[[float, np.ndarray], np.ndarray]


class Instrument(IntEnum):
    PIANO = 1
    FLUTE = 2
    GUITAR = 3
    VIOLIN = 4
    CLARINET = 5
    DRUM = 6
    BAGLAMA = 7
    VIOLIN_VIBRATO = 8

    @classmethod
    def resolve(cls, instrument_id: int) -> "Instrument":
        """Unknown ids play as PIANO."""
        try:
            return cls(int(instrument_id))
        except (TypeError, ValueError):
            return cls.PIANO


# =============================================================================
# OSCILLATORS
# =============================================================================

def sine(freq: float, t: np.ndarray) -> np.ndarray:
    return np.sin(TWOPI * freq * t)


def sine_with_octave(freq: float, t: np.ndarray) -> np.ndarray:
    """Fundamental plus half-amplitude first harmonic, rescaled by 1.5."""
    return (np.sin(TWOPI * freq * t) + 0.5 * np.sin(TWOPI * freq * 2.0 * t)) / 1.5


def triangle(freq: float, t: np.ndarray) -> np.ndarray:
    return (2.0 / np.pi) * np.arcsin(np.sin(TWOPI * freq * t))


def sawtooth(freq: float, t: np.ndarray) -> np.ndarray:
    period = 1.0 / freq
    return 2.0 * np.mod(t, period) / period - 1.0


def square(freq: float, t: np.ndarray) -> np.ndarray:
    return np.sign(np.sin(TWOPI * freq * t))


def noise_burst(freq: float, t: np.ndarray, rnd: Optional[np.random.RandomState] = None) -> np.ndarray:
    """
    Decaying white noise; pitch is ignored.
    Pass a seeded RandomState for reproducible output.
    """
    rnd = rnd if rnd is not None else np.random.RandomState()
    t = np.asarray(t, dtype=np.float64)
    return rnd.uniform(-1.0, 1.0, size=t.shape) * np.exp(-5.0 * t)


def am_tone(freq: float, t: np.ndarray) -> np.ndarray:
    """Carrier at f modulated by a sine at f/2."""
    return np.sin(TWOPI * freq * t) * np.sin(TWOPI * freq * 0.5 * t)


def vibrato(freq: float, t: np.ndarray) -> np.ndarray:
    # 5 Hz vibrato, modulation index 5
    return np.sin(TWOPI * freq * t + 5.0 * np.sin(TWOPI * 5.0 * t))


# =============================================================================
# DISPATCH
# =============================================================================

def waveform_for(instrument: int, rnd: Optional[np.random.RandomState] = None) -> Waveform:
    inst = Instrument.resolve(instrument)
    if inst is Instrument.PIANO:
        return sine
    if inst is Instrument.FLUTE:
        return sine_with_octave
    if inst is Instrument.GUITAR:
        return triangle
    if inst is Instrument.VIOLIN:
        return sawtooth
    if inst is Instrument.CLARINET:
        return square
    if inst is Instrument.DRUM:
        return partial(noise_burst, rnd=rnd)
    if inst is Instrument.BAGLAMA:
        return am_tone
    if inst is Instrument.VIOLIN_VIBRATO:
        return vibrato
    return sine


def synthesize(wave: Waveform, pitches: Sequence[float], t: np.ndarray) -> np.ndarray:
    """Evaluate a waveform at one pitch, or average it across a chord."""
    if len(pitches) == 1:
        return np.asarray(wave(pitches[0], t), dtype=np.float64)
    voices = [wave(f, t) for f in pitches]
    return np.mean(np.stack(voices), axis=0)
