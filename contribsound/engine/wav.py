# contribsound/engine/wav.py
"""
PCM quantization and the canonical 44-byte WAV container.

Layout (little-endian):
    RIFF <36 + data size> WAVE
    fmt  <16> PCM=1 mono=1 <rate> <rate * 2> blockAlign=2 bits=16
    data <2 * samples> <int16 samples>
"""

from __future__ import annotations

import struct

import numpy as np

HEADER_SIZE = 44
PCM_FORMAT = 1
NUM_CHANNELS = 1
BITS_PER_SAMPLE = 16
BLOCK_ALIGN = NUM_CHANNELS * BITS_PER_SAMPLE // 8
PCM_FULL_SCALE = 32767
MAX_SAMPLE_RATE = 384000
# RIFF sizes are uint32: 36 + data size must fit
MAX_SAMPLES = (0xFFFFFFFF - 36) // BLOCK_ALIGN

_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")


def quantize(samples: np.ndarray) -> bytes:
    """
    Float samples -> little-endian int16 PCM.

    Clamps to [-1, 1] and truncates toward zero after scaling, so the output
    stays within [-32767, 32767]. NaN becomes silence.
    """
    x = np.asarray(samples, dtype=np.float64).reshape(-1)
    x = np.nan_to_num(x, nan=0.0, posinf=1.0, neginf=-1.0)
    x = np.clip(x, -1.0, 1.0)
    return (x * PCM_FULL_SCALE).astype("<i2").tobytes()


def wav_header(sample_count: int, sample_rate: int) -> bytes:
    data_size = int(sample_count) * BLOCK_ALIGN
    return _HEADER.pack(
        b"RIFF",
        36 + data_size,
        b"WAVE",
        b"fmt ",
        16,
        PCM_FORMAT,
        NUM_CHANNELS,
        int(sample_rate),
        int(sample_rate) * BLOCK_ALIGN,
        BLOCK_ALIGN,
        BITS_PER_SAMPLE,
        b"data",
        data_size,
    )


def encode_wav(samples: np.ndarray, sample_rate: int) -> bytes:
    pcm = quantize(samples)
    return wav_header(len(pcm) // BLOCK_ALIGN, sample_rate) + pcm
