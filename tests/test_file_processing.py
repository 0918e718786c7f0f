"""
Directory scanning tests.
"""

import pytest

from phone_compressor.domain.exceptions import DirectoryNotFoundException
from phone_compressor.services.file_processing_service import (
    ProcessVideoFiles,
    is_video_file,
)


def test_returns_exactly_the_matching_subset(video_dir):
    directory = video_dir(
        "a.mp4", "b.AVI", "c.Mkv", "d.MOV", "notes.txt", "image.jpg", "clip.mp4.part", "mp4"
    )
    names = {p.name for p in ProcessVideoFiles(directory).files}
    assert names == {"a.mp4", "b.AVI", "c.Mkv", "d.MOV"}


def test_subdirectories_are_ignored(video_dir):
    directory = video_dir("clip.mov")
    (directory / "folder.mp4").mkdir()
    converted = directory / "Converted"
    converted.mkdir()
    (converted / "clip_conv.mov").write_bytes(b"x")

    names = [p.name for p in ProcessVideoFiles(directory).files]
    assert names == ["clip.mov"]


def test_empty_directory(tmp_path):
    assert ProcessVideoFiles(tmp_path).files == ()


def test_missing_directory_raises(tmp_path):
    with pytest.raises(DirectoryNotFoundException) as excinfo:
        ProcessVideoFiles(tmp_path / "missing")
    assert excinfo.value.directory == (tmp_path / "missing").resolve()


def test_file_instead_of_directory_raises(video_dir):
    directory = video_dir("clip.mp4")
    with pytest.raises(DirectoryNotFoundException):
        ProcessVideoFiles(directory / "clip.mp4")


@pytest.mark.parametrize(
    "name, expected",
    [("x.mp4", True), ("x.MP4", True), ("x.avi", True), ("x.mkv", True), ("x.mov", True),
     ("x.webm", False), ("x.txt", False), ("mp4", False)],
)
def test_is_video_file(tmp_path, name, expected):
    assert is_video_file(tmp_path / name) is expected
