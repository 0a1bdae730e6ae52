# contribsound/cli.py
"""
Command line entry point.

Usage:
    contribsound render days.json -o out.wav
    contribsound render days.json -o out.mp3 --mp3 --instrument 3 --tempo 140
    contribsound github octocat -o octocat.mp3 --year 2023
    contribsound years octocat
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence

import orjson

from contribsound.core.config import settings
from contribsound.core.errors import ConfigurationError, ContribSoundError, DataFetchError
from contribsound.engine.renderer import render
from contribsound.models.day import DayRecord
from contribsound.models.render import RenderConfig
from contribsound.services.calendar import flatten_calendar
from contribsound.services.music import MusicService
from contribsound.services.transcode import encode_mp3, require_ffmpeg

logger = logging.getLogger("contribsound")


def load_days(path: Path) -> List[DayRecord]:
    """
    Accepts either a flat list of days or a GitHub calendar object:
    [{"date": ..., "contributionCount": ...}, ...]  or  {"weeks": [...]}
    """
    if not path.exists():
        raise ConfigurationError(f"Input file not found: {path}")
    try:
        data: Any = orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as e:
        raise ConfigurationError(f"Input is not valid JSON: {path}") from e

    if isinstance(data, dict) and "weeks" in data:
        try:
            return flatten_calendar(data["weeks"])
        except DataFetchError as e:
            raise ConfigurationError(f"Malformed calendar in {path}: {e}") from e
    if isinstance(data, list):
        try:
            return [DayRecord.model_validate(d) for d in data]
        except ValueError as e:
            raise ConfigurationError(f"Malformed day record in {path}: {e}") from e
    raise ConfigurationError(f"Unsupported input shape in {path}: expected a list of days or {{'weeks': [...]}}")


def _config_from_args(args: argparse.Namespace) -> Optional[RenderConfig]:
    # No custom flag at all -> classic sonification
    if args.instrument is None and args.tempo is None and args.volume is None:
        return None
    return RenderConfig.from_params(
        instrument_id=args.instrument if args.instrument is not None else 1,
        tempo_bpm=args.tempo,
        volume=args.volume,
    )


def _add_render_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("-o", "--output", type=Path, required=True, help="Output audio file")
    p.add_argument(
        "--instrument",
        type=int,
        help="1 piano, 2 flute, 3 guitar, 4 violin, 5 clarinet, 6 drum, 7 baglama, 8 violin vibrato",
    )
    p.add_argument("--tempo", type=float, help="Tempo in BPM (default 120)")
    p.add_argument("--volume", type=float, help="Volume 0.0-1.0 (default 0.5)")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="contribsound",
        description="Turn a contribution calendar into music",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    p_render = sub.add_parser("render", help="Render a local JSON calendar")
    p_render.add_argument("input", type=Path, help="JSON days file")
    _add_render_flags(p_render)
    p_render.add_argument("--mp3", action="store_true", help="Encode to MP3 via ffmpeg")

    p_github = sub.add_parser("github", help="Fetch a GitHub user's calendar and render it")
    p_github.add_argument("username")
    p_github.add_argument("--year", type=int, help="Restrict to one calendar year")
    _add_render_flags(p_github)
    p_github.add_argument("--wav", action="store_true", help="Write WAV instead of MP3")

    p_years = sub.add_parser("years", help="List the years a GitHub user has been active")
    p_years.add_argument("username")

    return ap


def run(args: argparse.Namespace, service: Optional[MusicService] = None) -> None:
    if args.command == "years":
        years = (service or MusicService()).years(args.username)
        print(orjson.dumps({"username": args.username, "years": years}).decode("utf-8"))
        return

    config = _config_from_args(args)

    if args.command == "render":
        if args.mp3:
            require_ffmpeg(settings.ffmpeg_binary)
        days = load_days(args.input)
        audio = render(days, config)
        if args.mp3:
            audio = encode_mp3(audio, bitrate=settings.mp3_bitrate, ffmpeg_binary=settings.ffmpeg_binary)
    else:
        service = service or MusicService()
        if args.wav:
            audio = service.render_wav(args.username, config=config, year=args.year)
        else:
            audio = service.render_mp3(args.username, config=config, year=args.year)

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(audio)
    logger.info(f"💾 Saved: {args.output} ({len(audio)} bytes)")


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)

    try:
        run(args)
    except ContribSoundError as e:
        logger.error(f"❌ {type(e).__name__} ({e.status_code}): {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
