from contribsound.core.errors import (
    ConfigurationError,
    ContribSoundError,
    DataFetchError,
    EmptyInputError,
    InvalidYearError,
    TranscodeError,
    UserNotFoundError,
)
from contribsound.engine.renderer import render, render_samples
from contribsound.engine.waveforms import Instrument
from contribsound.models import DayRecord, Note, RenderConfig

__all__ = [
    "ConfigurationError",
    "ContribSoundError",
    "DataFetchError",
    "DayRecord",
    "EmptyInputError",
    "Instrument",
    "InvalidYearError",
    "Note",
    "RenderConfig",
    "TranscodeError",
    "UserNotFoundError",
    "render",
    "render_samples",
]
