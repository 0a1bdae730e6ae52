# contribsound/services/music.py
"""
Contribution music service.

Responsibilities:
- Resolve the day range (whole calendar, or one validated year)
- Refuse to sonify an empty calendar (EmptyInputError -> 404)
- Render WAV, optionally hand it to the MP3 transcoder
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Optional

from contribsound.core.config import settings
from contribsound.core.errors import EmptyInputError, InvalidYearError
from contribsound.engine.renderer import render
from contribsound.models.day import DayRecord
from contribsound.models.render import RenderConfig
from contribsound.services.calendar import available_years, filter_year, year_bounds
from contribsound.services.github import ContributionSource, GitHubContributionSource
from contribsound.services.transcode import encode_mp3, require_ffmpeg

logger = logging.getLogger("contribsound.music")

Transcoder = Callable[[bytes], bytes]


def _default_transcoder(wav_bytes: bytes) -> bytes:
    return encode_mp3(wav_bytes, bitrate=settings.mp3_bitrate, ffmpeg_binary=settings.ffmpeg_binary)


class MusicService:
    def __init__(
        self,
        source: Optional[ContributionSource] = None,
        transcoder: Optional[Transcoder] = None,
    ):
        self.source = source or GitHubContributionSource()
        self.transcoder = transcoder or _default_transcoder

    def years(self, username: str, today: Optional[date] = None) -> List[int]:
        today = today or date.today()
        return available_years(self.source.created_at(username), today)

    def contribution_days(
        self,
        username: str,
        year: Optional[int] = None,
        today: Optional[date] = None,
    ) -> List[DayRecord]:
        today = today or date.today()

        if year is None:
            days = self.source.fetch_days(username)
        else:
            years = self.years(username, today)
            if year not in years:
                raise InvalidYearError(
                    f"Invalid year {year} for '{username}'. Available: {years[0]}-{years[-1]}"
                    if years
                    else f"Invalid year {year} for '{username}'."
                )
            start, end = year_bounds(year, today)
            days = filter_year(self.source.fetch_days(username, since=start, until=end), year, today)

        if not days:
            scope = f" in {year}" if year is not None else ""
            raise EmptyInputError(f"No contribution data found for '{username}'{scope}.")
        return days

    def render_wav(
        self,
        username: str,
        config: Optional[RenderConfig] = None,
        year: Optional[int] = None,
        today: Optional[date] = None,
    ) -> bytes:
        days = self.contribution_days(username, year=year, today=today)
        logger.info(f"🎛️ Render | user={username} | year={year or 'all'} | days={len(days)}")
        return render(days, config)

    def render_mp3(
        self,
        username: str,
        config: Optional[RenderConfig] = None,
        year: Optional[int] = None,
        today: Optional[date] = None,
    ) -> bytes:
        if self.transcoder is _default_transcoder:
            require_ffmpeg(settings.ffmpeg_binary)
        return self.transcoder(self.render_wav(username, config=config, year=year, today=today))
