"""
Shared fixtures. No test needs a real ffmpeg, ffprobe or libmediainfo.
"""

import subprocess
from pathlib import Path
from types import SimpleNamespace
from typing import Dict, List, Optional

import pytest
from loguru import logger


class FakeMediaInfo:
    """Stands in for `pymediainfo.MediaInfo`, keyed by file name."""

    encoded_dates: Dict[str, Optional[str]] = {}
    opened_streams: List = []

    @classmethod
    def parse(cls, media_stream):
        cls.opened_streams.append(media_stream)
        name = Path(media_stream.name).name
        if name not in cls.encoded_dates:
            return SimpleNamespace(general_tracks=[])
        return SimpleNamespace(
            general_tracks=[SimpleNamespace(encoded_date=cls.encoded_dates[name])]
        )


@pytest.fixture
def fake_media_info(monkeypatch):
    FakeMediaInfo.encoded_dates = {}
    FakeMediaInfo.opened_streams = []
    monkeypatch.setattr("phone_compressor.services.metadata_service.MediaInfo", FakeMediaInfo)
    return FakeMediaInfo


@pytest.fixture
def fake_probe(monkeypatch):
    """Replaces `ffmpeg.probe`; set `codecs[file name]` to the reported video codec."""
    state = SimpleNamespace(codecs={}, calls=[])

    def probe(filename, cmd="ffprobe", **kwargs):
        state.calls.append((filename, cmd, kwargs))
        codec = state.codecs.get(Path(filename).name, "h264")
        return {
            "streams": [
                {"index": 0, "codec_type": "audio", "codec_name": "aac"},
                {"index": 1, "codec_type": "video", "codec_name": codec},
            ],
            "format": {"filename": filename},
        }

    monkeypatch.setattr("phone_compressor.services.inspection_service.ffmpeg.probe", probe)
    return state


@pytest.fixture
def fake_ffmpeg(monkeypatch):
    """Replaces `run_cmd` in the transcode service; writes the output file on success."""
    state = SimpleNamespace(commands=[], returncode=0, write_output=True)

    def run_cmd(cmd_list, **kwargs):
        state.commands.append(list(cmd_list))
        if state.write_output:
            Path(cmd_list[-1]).write_bytes(b"converted")
        return subprocess.CompletedProcess(cmd_list, state.returncode, "", "")

    monkeypatch.setattr("phone_compressor.services.transcode_service.run_cmd", run_cmd)
    return state


@pytest.fixture
def log_records():
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="TRACE")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def video_dir(tmp_path):
    def make(*names: str) -> Path:
        for name in names:
            (tmp_path / name).write_bytes(b"\x00" * 64)
        return tmp_path

    return make
