import subprocess
from pathlib import Path
from typing import Any

import pytest

from contribsound.core.errors import TranscodeError
from contribsound.services import transcode


def test_encode_mp3_runs_ffmpeg(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict = {}

    def fake_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        seen["cmd"] = cmd
        seen["input"] = Path(cmd[cmd.index("-i") + 1]).read_bytes()
        Path(cmd[-1]).write_bytes(b"ID3fake-mp3")
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)

    out = transcode.encode_mp3(b"RIFFdata", bitrate="128k", ffmpeg_binary="/opt/ffmpeg")

    assert out == b"ID3fake-mp3"
    assert seen["input"] == b"RIFFdata"
    cmd = seen["cmd"]
    assert cmd[0] == "/opt/ffmpeg"
    assert cmd[cmd.index("-codec:a") + 1] == "libmp3lame"
    assert cmd[cmd.index("-b:a") + 1] == "128k"
    # temp files are cleaned up
    assert not Path(cmd[-1]).exists()


def test_encode_mp3_failure_carries_stderr(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        return subprocess.CompletedProcess(cmd, 1, stdout="", stderr="Invalid data found")

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(TranscodeError, match="Invalid data found"):
        transcode.encode_mp3(b"not a wav")


def test_encode_mp3_missing_binary(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(TranscodeError):
        transcode.encode_mp3(b"RIFF")
    with pytest.raises(TranscodeError):
        transcode.require_ffmpeg("no-such-ffmpeg")


def test_encode_mp3_without_output(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        subprocess, "run", lambda cmd, **kw: subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")
    )
    with pytest.raises(TranscodeError, match="no output"):
        transcode.encode_mp3(b"RIFF")
