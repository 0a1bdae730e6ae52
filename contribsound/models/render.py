from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from contribsound.core.errors import ConfigurationError
from contribsound.engine.mapping import LONGEST_NOTE_BEATS
from contribsound.engine.wav import MAX_SAMPLE_RATE, MAX_SAMPLES
from contribsound.engine.waveforms import Instrument

SAMPLE_RATE = 44100


class RenderConfig(BaseModel):
    """
    Custom rendering parameters.

    Unknown instrument ids are accepted and play as the default sine.
    """

    model_config = ConfigDict(frozen=True)

    instrument_id: int = 1
    tempo_bpm: float = Field(120.0, gt=0, allow_inf_nan=False)
    volume: float = Field(0.5, ge=0.0, le=1.0)
    sample_rate_hz: int = Field(SAMPLE_RATE, gt=0, le=MAX_SAMPLE_RATE)

    @model_validator(mode="after")
    def _longest_note_fits(self) -> "RenderConfig":
        # whole notes are the longest: 4 beats of 60/tempo seconds
        seconds = LONGEST_NOTE_BEATS * 60.0 / self.tempo_bpm
        samples = self.sample_rate_hz * seconds
        if not math.isfinite(samples) or samples > MAX_SAMPLES:
            raise ValueError(
                f"tempo_bpm={self.tempo_bpm} makes a {seconds}s note, too long for a WAV at {self.sample_rate_hz} Hz"
            )
        return self

    @property
    def instrument(self) -> Instrument:
        return Instrument.resolve(self.instrument_id)

    @classmethod
    def from_params(
        cls,
        *,
        instrument_id: Optional[int] = None,
        tempo_bpm: Optional[float] = None,
        volume: Optional[float] = None,
        sample_rate_hz: Optional[int] = None,
    ) -> "RenderConfig":
        """Build from loose caller values; None keeps the default."""
        values = {
            "instrument_id": instrument_id,
            "tempo_bpm": tempo_bpm,
            "volume": volume,
            "sample_rate_hz": sample_rate_hz,
        }
        try:
            return cls(**{k: v for k, v in values.items() if v is not None})
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            raise ConfigurationError(f"Invalid render config ({fields}): {e}") from e


@dataclass(frozen=True)
class Note:
    pitches: tuple[float, ...]
    duration_seconds: float
