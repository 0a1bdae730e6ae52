import numpy as np
import pytest

from contribsound.engine import waveforms
from contribsound.engine.waveforms import Instrument, synthesize, waveform_for

SR = 44100
T = np.arange(SR // 4, dtype=np.float64) / SR


@pytest.mark.parametrize("instrument_id", [0, 9, -3, 42])
def test_unknown_instrument_falls_back_to_sine(instrument_id: int) -> None:
    assert Instrument.resolve(instrument_id) is Instrument.PIANO
    assert waveform_for(instrument_id) is waveforms.sine


@pytest.mark.parametrize("instrument", list(Instrument))
def test_every_instrument_stays_in_unit_range(instrument: Instrument) -> None:
    wave = waveform_for(instrument, rnd=np.random.RandomState(1))
    for freq in (261.63, 440.0, 1046.5):
        out = wave(freq, T)
        assert out.shape == T.shape
        assert np.all(np.abs(out) <= 1.0 + 1e-9)


def test_tonal_instruments_start_silent() -> None:
    for inst in (Instrument.PIANO, Instrument.FLUTE, Instrument.GUITAR,
                 Instrument.CLARINET, Instrument.BAGLAMA, Instrument.VIOLIN_VIBRATO):
        assert waveform_for(inst)(440.0, np.zeros(1))[0] == pytest.approx(0.0, abs=1e-12)


def test_sawtooth_starts_at_minus_one_and_ramps() -> None:
    out = waveforms.sawtooth(100.0, np.array([0.0, 0.0025, 0.005]))
    assert out == pytest.approx([-1.0, -0.5, 0.0])


def test_square_is_sign_of_sine() -> None:
    out = waveforms.square(440.0, T)
    assert set(np.unique(out)).issubset({-1.0, 0.0, 1.0})
    assert np.array_equal(out, np.sign(np.sin(2 * np.pi * 440.0 * T)))


def test_flute_is_normalized_harmonic_mix() -> None:
    f = 330.0
    expected = (np.sin(2 * np.pi * f * T) + 0.5 * np.sin(4 * np.pi * f * T)) / 1.5
    assert np.allclose(waveforms.sine_with_octave(f, T), expected)


def test_am_tone_matches_half_frequency_modulator() -> None:
    f = 523.25
    expected = np.sin(2 * np.pi * f * T) * np.sin(np.pi * f * T)
    assert np.allclose(waveforms.am_tone(f, T), expected)


def test_noise_is_reproducible_with_seeded_source() -> None:
    a = waveform_for(Instrument.DRUM, rnd=np.random.RandomState(7))(440.0, T)
    b = waveform_for(Instrument.DRUM, rnd=np.random.RandomState(7))(440.0, T)
    assert np.array_equal(a, b)


def test_noise_follows_decay_envelope() -> None:
    out = waveforms.noise_burst(440.0, T, rnd=np.random.RandomState(3))
    assert np.all(np.abs(out) <= np.exp(-5.0 * T) + 1e-12)
    assert np.abs(out[:1000]).mean() > np.abs(out[-1000:]).mean()


def test_chord_is_mean_of_voices() -> None:
    pitches = (440.0, 550.0, 660.0)
    expected = sum(np.sin(2 * np.pi * f * T) for f in pitches) / 3.0
    assert np.allclose(synthesize(waveforms.sine, pitches, T), expected)


def test_single_pitch_is_passthrough() -> None:
    assert np.array_equal(synthesize(waveforms.triangle, (440.0,), T), waveforms.triangle(440.0, T))
