"""
Provides the service that discovers the video files to convert.

Only the input directory itself is scanned. Subdirectories, including the
`Converted` output directory, are never entered.
"""

from pathlib import Path
from typing import Tuple

from loguru import logger

from ..config.video import VIDEO_EXTENSIONS
from ..domain.exceptions import DirectoryNotFoundException


def is_video_file(path: Path) -> bool:
    return path.suffix.lower() in VIDEO_EXTENSIONS


class ProcessVideoFiles:
    """
    Discovers the video files of an input directory.

    Attributes:
        source_dir (Path): The resolved input directory.
        files (Tuple[Path, ...]): Matching files, in filesystem enumeration order.
    """

    source_dir: Path
    files: Tuple[Path, ...] = tuple()

    def __init__(self, path: Path):
        """
        Resolves the input directory and scans it.

        Args:
            path: The input directory.

        Raises:
            DirectoryNotFoundException: If `path` does not exist or is not a directory.
        """
        resolved_path = path.expanduser().resolve()
        if not resolved_path.is_dir():
            raise DirectoryNotFoundException(resolved_path)
        self.source_dir = resolved_path
        self.set_files_to_process()

    def set_files_to_process(self):
        """Populates `self.files` with the regular files that carry a video extension."""
        self.files = tuple(
            entry
            for entry in self.source_dir.iterdir()
            if entry.is_file() and is_video_file(entry)
        )
        logger.debug(f"Found {len(self.files)} video file(s) in {self.source_dir}")
        for i, f_path in enumerate(self.files):
            logger.trace(f"  {i + 1}. {f_path.name}")

