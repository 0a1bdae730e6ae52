from __future__ import annotations

import logging
import subprocess
import tempfile
from pathlib import Path

from contribsound.core.errors import TranscodeError

logger = logging.getLogger("contribsound.transcode")


def require_ffmpeg(ffmpeg_binary: str = "ffmpeg") -> None:
    try:
        subprocess.run([ffmpeg_binary, "-version"], check=True, capture_output=True)
    except (OSError, subprocess.CalledProcessError) as e:
        raise TranscodeError(f"{ffmpeg_binary} not found. Install ffmpeg to export MP3.") from e


def encode_mp3(
    wav_bytes: bytes,
    *,
    bitrate: str = "192k",
    ffmpeg_binary: str = "ffmpeg",
) -> bytes:
    """
    WAV bytes in, MP3 bytes out.
    Temporary files live only for the duration of the call.
    """
    with tempfile.TemporaryDirectory(prefix="contribsound-") as tmp:
        inp = Path(tmp) / "input.wav"
        out = Path(tmp) / "output.mp3"
        inp.write_bytes(wav_bytes)

        cmd = [
            ffmpeg_binary,
            "-y",
            "-i",
            str(inp),
            "-codec:a",
            "libmp3lame",
            "-b:a",
            bitrate,
            "-f",
            "mp3",
            str(out),
        ]
        _run(cmd)

        if not out.exists():
            raise TranscodeError(f"Encoder produced no output: {' '.join(cmd)}")
        mp3 = out.read_bytes()

    logger.info(f"🎧 MP3 encoded: {len(wav_bytes)} -> {len(mp3)} bytes ({bitrate})")
    return mp3


def _run(cmd: list[str]) -> None:
    try:
        p = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as e:
        raise TranscodeError(f"Could not start encoder: {cmd[0]}") from e
    if p.returncode != 0:
        raise TranscodeError(f"Command failed: {' '.join(cmd)}\nSTDERR:\n{p.stderr}")
