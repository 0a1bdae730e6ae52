import struct

import numpy as np
import pytest

from contribsound import DayRecord, RenderConfig, render, render_samples
from contribsound.engine.mapping import chord_for, frequency_for
from contribsound.engine.renderer import note_sample_count, plan_notes
from contribsound.engine.wav import HEADER_SIZE


def _days(*counts: int) -> list[DayRecord]:
    return [DayRecord(date=f"2023-01-{i + 1:02d}", contributionCount=c) for i, c in enumerate(counts)]


def _header(data: bytes) -> tuple:
    return struct.unpack("<4sI4s4sIHHIIHH4sI", data[:HEADER_SIZE])


def test_simple_mode_single_idle_day() -> None:
    data = render(_days(0))
    header = _header(data)

    assert header[7] == 44100
    assert header[12] == 8820
    assert len(data) == HEADER_SIZE + 8820

    pcm = np.frombuffer(data[HEADER_SIZE:], dtype="<i2")
    assert pcm.size == 4410
    assert pcm[0] == 0


def test_simple_mode_is_half_amplitude_sine() -> None:
    samples = render_samples(_days(0))
    t = np.arange(4410) / 44100
    assert np.allclose(samples, 0.5 * np.sin(2 * np.pi * 261.63 * t))


def test_simple_mode_ignores_chords_and_tempo() -> None:
    notes = plan_notes(_days(0, 60, 30))
    assert [n.duration_seconds for n in notes] == [0.1, 0.1, 0.1]
    assert all(len(n.pitches) == 1 for n in notes)
    assert render_samples(_days(0, 60, 30)).size == 3 * 4410


def test_custom_mode_busy_day_is_whole_note_major_triad() -> None:
    config = RenderConfig(instrument_id=1, tempo_bpm=120, volume=0.5)
    days = _days(60)

    (note,) = plan_notes(days, config)
    assert note.duration_seconds == 2.0
    assert note.pitches == chord_for(60, frequency_for(60))

    data = render(days, config)
    assert _header(data)[12] == 2 * 88200
    assert len(data) == HEADER_SIZE + 2 * 88200

    samples = render_samples(days, config)
    t = np.arange(88200) / 44100
    expected = 0.5 * np.mean([np.sin(2 * np.pi * f * t) for f in note.pitches], axis=0)
    assert np.allclose(samples, expected)


def test_each_note_restarts_at_t_zero() -> None:
    config = RenderConfig()
    days = _days(60, 0)
    first = note_sample_count(plan_notes(days, config)[0], 44100)

    samples = render_samples(days, config)
    assert samples[first] == pytest.approx(0.0, abs=1e-12)
    assert samples.size == first + note_sample_count(plan_notes(days, config)[1], 44100)


def test_days_concatenate_in_input_order() -> None:
    config = RenderConfig(instrument_id=5)
    a = render_samples(_days(60), config)
    b = render_samples(_days(7), config)
    both = render_samples(_days(60, 7), config)
    assert np.array_equal(both, np.concatenate([a, b]))


def test_volume_scales_amplitude() -> None:
    loud = render_samples(_days(3), RenderConfig(volume=1.0))
    quiet = render_samples(_days(3), RenderConfig(volume=0.25))
    assert np.allclose(quiet, loud * 0.25)
    assert np.abs(loud).max() <= 1.0


def test_unknown_instrument_renders_like_sine() -> None:
    days = _days(0, 12, 55)
    assert render(days, RenderConfig(instrument_id=42)) == render(days, RenderConfig(instrument_id=1))


def test_header_rate_follows_config() -> None:
    config = RenderConfig(sample_rate_hz=8000, tempo_bpm=60)
    data = render(_days(10), config)
    header = _header(data)
    assert header[7] == 8000
    assert header[8] == 16000
    assert header[12] == 2 * 8000


def test_drum_is_reproducible_with_seed() -> None:
    config = RenderConfig(instrument_id=6)
    days = _days(0, 30)
    a = render(days, config, rnd=np.random.RandomState(11))
    b = render(days, config, rnd=np.random.RandomState(11))
    assert a == b


def test_empty_input_yields_header_only_wav() -> None:
    assert len(render([])) == HEADER_SIZE
    assert len(render([], RenderConfig())) == HEADER_SIZE
    assert render_samples([]).size == 0
