import os
import subprocess

import pytest

from app.core.errors import ProcessingError
from app.platform.adapters import remux_ffmpeg
from app.platform.adapters.remux_ffmpeg import FFmpegFastStartRemuxer


def writing_run(payload: bytes, returncode: int = 0, stderr: bytes = b"", calls: list | None = None):
    """Pretend to be ffmpeg: write `payload` to the output path (last argument)."""
    def run(cmd, **kwargs):
        if calls is not None:
            calls.append(cmd)
        with open(cmd[-1], "wb") as f:
            f.write(payload)
        return subprocess.CompletedProcess(cmd, returncode, stdout=b"", stderr=stderr)
    return run


@pytest.fixture
def staged(tmp_path) -> str:
    path = tmp_path / "tubely-upload-1.mp4"
    path.write_bytes(b"\x00\x00\x00\x18ftypmp42")
    return str(path)


def test_remux_copies_streams_with_faststart(monkeypatch, staged) -> None:
    calls: list = []
    monkeypatch.setattr(remux_ffmpeg.subprocess, "run", writing_run(b"moov-first", calls=calls))

    out = FFmpegFastStartRemuxer("ffmpeg").remux(staged)

    assert out == staged + ".processing"
    with open(out, "rb") as f:
        assert f.read() == b"moov-first"
    cmd = calls[0]
    assert cmd[0] == "ffmpeg"
    assert cmd[cmd.index("-i") + 1] == staged
    assert cmd[cmd.index("-c") + 1] == "copy"
    assert cmd[cmd.index("-movflags") + 1] == "faststart"
    assert cmd[cmd.index("-f") + 1] == "mp4"


def test_remux_empty_output_is_an_error(monkeypatch, staged) -> None:
    monkeypatch.setattr(remux_ffmpeg.subprocess, "run", writing_run(b""))
    with pytest.raises(ProcessingError) as exc:
        FFmpegFastStartRemuxer().remux(staged)
    assert "empty" in exc.value.message
    assert not os.path.exists(staged + ".processing")


def test_remux_failure_carries_diagnostics(monkeypatch, staged) -> None:
    monkeypatch.setattr(
        remux_ffmpeg.subprocess, "run",
        writing_run(b"partial", returncode=1, stderr=b"moov atom not found"),
    )
    with pytest.raises(ProcessingError) as exc:
        FFmpegFastStartRemuxer().remux(staged)
    assert "moov atom not found" in exc.value.message
    assert exc.value.stage == "remux"
    assert not os.path.exists(staged + ".processing")


def test_remux_missing_output(monkeypatch, staged) -> None:
    monkeypatch.setattr(
        remux_ffmpeg.subprocess, "run",
        lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 0, stdout=b"", stderr=b""),
    )
    with pytest.raises(ProcessingError):
        FFmpegFastStartRemuxer().remux(staged)


def test_remux_empty_output_carries_diagnostics(monkeypatch, staged) -> None:
    monkeypatch.setattr(
        remux_ffmpeg.subprocess, "run",
        writing_run(b"", stderr=b"[mp4 @ 0x1] moov atom not found"),
    )
    with pytest.raises(ProcessingError) as exc:
        FFmpegFastStartRemuxer().remux(staged)
    assert "empty" in exc.value.message
    assert "moov atom not found" in exc.value.message


def test_remux_missing_output_carries_diagnostics(monkeypatch, staged) -> None:
    monkeypatch.setattr(
        remux_ffmpeg.subprocess, "run",
        lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 0, stdout=b"", stderr=b"[mp4 @ 0x1] moov atom not found"),
    )
    with pytest.raises(ProcessingError) as exc:
        FFmpegFastStartRemuxer().remux(staged)
    assert "moov atom not found" in exc.value.message


def test_remux_missing_binary(monkeypatch, staged) -> None:
    def run(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])
    monkeypatch.setattr(remux_ffmpeg.subprocess, "run", run)
    with pytest.raises(ProcessingError):
        FFmpegFastStartRemuxer().remux(staged)
    assert os.path.exists(staged)
