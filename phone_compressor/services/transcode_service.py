"""
This module defines the VideoTranscoder, the service that re-encodes one phone
video into the `Converted` directory with FFmpeg.
"""

from pathlib import Path
from typing import List, Optional

from loguru import logger

from ..config.common import COMMAND_TEXT
from ..config.video import AUDIO_BIT_RATE, AUDIO_ENCODER, FFMPEG_LOG_LEVEL
from ..domain.exceptions import TranscodeFailureException
from ..domain.media import VideoFile
from ..utils.ffmpeg_utils import run_cmd, stderr_tail
from ..utils.format_utils import formatted_size


class VideoTranscoder:
    """
    Re-encodes a video with a codec-appropriate encoder and fixed audio settings.

    The output always goes to `<input dir>/Converted/<stem>_conv<ext>`. Once FFmpeg
    has run, it leaves either a complete output file behind or no output file at
    all. If FFmpeg cannot be started, an existing output is left untouched.
    """

    def __init__(self, video_file: VideoFile, video_encoder: str, ffmpeg_cmd: str = "ffmpeg"):
        """
        Args:
            video_file: The source video.
            video_encoder: The FFmpeg video encoder, e.g. 'libx265'.
            ffmpeg_cmd: The command or path used to start FFmpeg.
        """
        self.original_video_file = video_file
        self.encoder_codec_name = video_encoder
        self.audio_encoder_codec_name = AUDIO_ENCODER
        self.audio_bit_rate = AUDIO_BIT_RATE
        self.ffmpeg_cmd = ffmpeg_cmd
        self.encoded_dir: Path = video_file.converted_dir
        self.encoded_file: Path = video_file.converted_path
        self.encoded_size: int = 0
        self.encode_cmd_list: List[str] = []

    def build_command(self) -> List[str]:
        """Builds the FFmpeg argument list for this conversion."""
        return [
            self.ffmpeg_cmd,
            "-hide_banner",
            "-loglevel", FFMPEG_LOG_LEVEL,
            "-y",
            "-i", str(self.original_video_file.path),
            "-c:v", self.encoder_codec_name,
            "-c:a", self.audio_encoder_codec_name,
            "-b:a", self.audio_bit_rate,
            str(self.encoded_file),
        ]

    def _remove_partial_output(self):
        if not self.encoded_file.exists():
            return
        try:
            self.encoded_file.unlink()
            logger.debug(f"Removed incomplete output {self.encoded_file.name}")
        except OSError as e:
            logger.error(f"Could not remove incomplete output {self.encoded_file}: {e}")

    def encode(self) -> Path:
        """
        Runs FFmpeg and returns the path of the finished output file.

        Raises:
            TranscodeFailureException: If FFmpeg cannot be started, exits with an
                error, or reports success without producing the output file.
        """
        self.encoded_dir.mkdir(parents=True, exist_ok=True)
        self.encode_cmd_list = self.build_command()

        res = run_cmd(
            self.encode_cmd_list,
            src_file_for_log=self.original_video_file.path,
            show_cmd=True,
            cmd_log_file_path=self.encoded_dir / COMMAND_TEXT,
        )

        failure_reason: Optional[str] = None
        if res is None:
            failure_reason = f"could not start FFmpeg ({self.ffmpeg_cmd})"
        elif res.returncode != 0:
            failure_reason = f"FFmpeg exited with code {res.returncode}"
            tail = stderr_tail(res.stderr)
            if tail:
                failure_reason += f": {tail}"
        elif not self.encoded_file.is_file():
            failure_reason = f"FFmpeg reported success, but {self.encoded_file.name} is missing"

        if failure_reason:
            # FFmpeg never touched the output if it could not be started.
            if res is not None:
                self._remove_partial_output()
            raise TranscodeFailureException(self.original_video_file.path, failure_reason)

        self.encoded_size = self.encoded_file.stat().st_size
        logger.info(
            f"Encoded {self.original_video_file.filename} -> {self.encoded_file.name} "
            f"({formatted_size(self.original_video_file.size)} -> {formatted_size(self.encoded_size)})"
        )
        return self.encoded_file
