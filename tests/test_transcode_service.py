"""
Transcoder tests. `run_cmd` is replaced so FFmpeg never runs.
"""

import pytest

from phone_compressor.domain.exceptions import TranscodeFailureException
from phone_compressor.domain.media import VideoFile
from phone_compressor.services.transcode_service import VideoTranscoder


@pytest.fixture
def clip(video_dir):
    directory = video_dir("IMG_0042.MOV")
    return VideoFile(directory / "IMG_0042.MOV")


def test_command_line(clip):
    transcoder = VideoTranscoder(clip, "libx265", ffmpeg_cmd="ffmpeg")
    assert transcoder.build_command() == [
        "ffmpeg",
        "-hide_banner",
        "-loglevel", "warning",
        "-y",
        "-i", str(clip.path),
        "-c:v", "libx265",
        "-c:a", "aac",
        "-b:a", "256k",
        str(clip.directory / "Converted" / "IMG_0042_conv.MOV"),
    ]


def test_successful_encode(clip, fake_ffmpeg):
    transcoder = VideoTranscoder(clip, "libvpx-vp9", ffmpeg_cmd="/opt/bin/ffmpeg")
    output = transcoder.encode()

    assert output == clip.directory / "Converted" / "IMG_0042_conv.MOV"
    assert output.read_bytes() == b"converted"
    assert transcoder.encoded_size == len(b"converted")
    assert fake_ffmpeg.commands == [transcoder.build_command()]
    assert fake_ffmpeg.commands[0][0] == "/opt/bin/ffmpeg"
    assert clip.path.read_bytes() == b"\x00" * 64


def test_failed_encode_removes_partial_output(clip, fake_ffmpeg):
    fake_ffmpeg.returncode = 1

    with pytest.raises(TranscodeFailureException, match="exited with code 1"):
        VideoTranscoder(clip, "libx265").encode()
    assert not clip.converted_path.exists()


def test_ffmpeg_not_startable(clip, monkeypatch):
    monkeypatch.setattr(
        "phone_compressor.services.transcode_service.run_cmd", lambda *a, **k: None
    )
    with pytest.raises(TranscodeFailureException, match="could not start FFmpeg"):
        VideoTranscoder(clip, "libx265").encode()


def test_ffmpeg_not_startable_keeps_earlier_output(clip, monkeypatch):
    clip.converted_dir.mkdir()
    clip.converted_path.write_bytes(b"complete output from an earlier run")
    monkeypatch.setattr(
        "phone_compressor.services.transcode_service.run_cmd", lambda *a, **k: None
    )

    with pytest.raises(TranscodeFailureException):
        VideoTranscoder(clip, "libx265").encode()
    assert clip.converted_path.read_bytes() == b"complete output from an earlier run"


def test_success_without_output(clip, fake_ffmpeg):
    fake_ffmpeg.write_output = False

    with pytest.raises(TranscodeFailureException, match="missing"):
        VideoTranscoder(clip, "libx265").encode()


def test_existing_output_is_overwritten(clip, fake_ffmpeg):
    clip.converted_dir.mkdir()
    clip.converted_path.write_bytes(b"stale")

    VideoTranscoder(clip, "libx265").encode()
    assert clip.converted_path.read_bytes() == b"converted"
