from contribsound.models.day import DayRecord
from contribsound.models.render import SAMPLE_RATE, Note, RenderConfig

__all__ = ["DayRecord", "Note", "RenderConfig", "SAMPLE_RATE"]
