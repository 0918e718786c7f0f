from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

from ..config.common import CONVERTED_DIR_NAME, CONVERTED_FILE_SUFFIX
from ..config.video import CODEC_ENCODER_MAP, DEFAULT_VIDEO_ENCODER


class VideoFile:
    """
    Represents a single source video discovered in the input directory.

    The object is read-only: the original file is never modified, moved or
    renamed. It only knows where its converted counterpart belongs.

    Attributes:
        path (Path): The absolute path to the video file.
        filename (str): The name of the file, including its extension.
        stem (str): The filename without its extension.
        suffix (str): The extension as found on disk (case preserved).
        directory (Path): The directory containing the file.
        size (int): The size of the file in bytes.
    """

    def __init__(self, path: Path):
        if not path.is_file():
            raise FileNotFoundError(f"Video file not found: {path}")
        self.path: Path = path.resolve()
        self.filename: str = self.path.name
        self.stem: str = self.path.stem
        self.suffix: str = self.path.suffix
        self.directory: Path = self.path.parent
        self.size: int = self.path.stat().st_size

    @property
    def converted_dir(self) -> Path:
        return self.directory / CONVERTED_DIR_NAME

    @property
    def converted_name(self) -> str:
        return f"{self.stem}{CONVERTED_FILE_SUFFIX}{self.suffix}"

    @property
    def converted_path(self) -> Path:
        return self.converted_dir / self.converted_name

    def __repr__(self) -> str:
        return f"VideoFile({self.path!s})"


@dataclass(frozen=True)
class StreamInfo:
    """One entry of the `streams` list reported by ffprobe."""

    index: int
    codec_type: str
    codec_name: Optional[str]

    @classmethod
    def from_probe(cls, stream: Dict[str, Any], position: int = 0) -> "StreamInfo":
        """
        Builds a `StreamInfo` from one ffprobe stream object.

        A missing or non-numeric `index` falls back to `position`, the entry's
        place in the `streams` list.
        """
        try:
            index = int(stream.get("index", position))
        except (TypeError, ValueError):
            logger.debug(f"Invalid stream index {stream.get('index')!r}, using {position}")
            index = position
        codec_name = stream.get("codec_name")
        return cls(
            index=index,
            codec_type=str(stream.get("codec_type") or "").lower(),
            codec_name=str(codec_name).lower() if codec_name else None,
        )


def parse_streams(probe: Dict[str, Any]) -> List[StreamInfo]:
    """
    Converts an ffprobe JSON document into a list of `StreamInfo`.

    Entries that are not objects are ignored. A document without a `streams`
    key yields an empty list. Malformed fields never raise.
    """
    streams = probe.get("streams") or []
    if not isinstance(streams, list):
        logger.warning(f"Unexpected 'streams' value in probe data: {type(streams).__name__}")
        return []
    return [
        StreamInfo.from_probe(s, position)
        for position, s in enumerate(streams)
        if isinstance(s, dict)
    ]


def first_video_stream(streams: List[StreamInfo]) -> Optional[StreamInfo]:
    """Returns the first stream whose type is 'video', or None."""
    return next((s for s in streams if s.codec_type == "video"), None)


def select_video_encoder(codec_name: Optional[str]) -> str:
    """
    Maps a source video codec to the FFmpeg encoder used for re-compression.

    The mapping is total: unknown, empty or missing codecs resolve to
    `DEFAULT_VIDEO_ENCODER`.
    """
    return CODEC_ENCODER_MAP.get((codec_name or "").strip().lower(), DEFAULT_VIDEO_ENCODER)
