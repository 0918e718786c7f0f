import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional

from loguru import logger
from tqdm import tqdm

from ..config.common import CONVERTED_DIR_NAME
from ..config.video import DEFAULT_DST_RULE, DST_RULES
from ..domain.exceptions import (
    InspectionFailureException,
    MissingTimestampException,
    TranscodeFailureException,
)
from ..domain.media import VideoFile
from ..domain.timestamps import LocalClock, reconstruct_local_time
from ..services.file_processing_service import ProcessVideoFiles
from ..services.file_time_service import apply_file_times
from ..services.inspection_service import inspect_video_encoder
from ..services.logging_service import ErrorLog, SuccessLog
from ..services.metadata_service import read_media_encoded_date
from ..services.transcode_service import VideoTranscoder
from ..utils.format_utils import format_timedelta, formatted_size

STATUS_CONVERTED = "converted"
STATUS_SKIPPED = "skipped"
STATUS_FAILED = "failed"


@dataclass
class FileResult:
    """Outcome of processing one source file."""

    source: Path
    status: str
    reason: str = ""
    output: Optional[Path] = None


@dataclass
class BatchResult:
    """Outcomes of a whole run, in processing order."""

    results: List[FileResult] = field(default_factory=list)

    def _with_status(self, status: str) -> List[FileResult]:
        return [r for r in self.results if r.status == status]

    @property
    def converted(self) -> List[FileResult]:
        return self._with_status(STATUS_CONVERTED)

    @property
    def skipped(self) -> List[FileResult]:
        return self._with_status(STATUS_SKIPPED)

    @property
    def failed(self) -> List[FileResult]:
        return self._with_status(STATUS_FAILED)

    @property
    def ok(self) -> bool:
        return not self.failed


class ConversionPipeline:
    """
    Converts every video of one directory, strictly one file after another.

    For each file: read the media-encoded date (skip the file if there is none),
    determine the source codec, transcode into `Converted`, then stamp the output
    with the reconstructed local capture time.

    A failure while inspecting or transcoding a file is recorded and the batch
    moves on to the next file; `BatchResult.ok` tells the caller whether any
    file failed.
    """

    def __init__(
        self,
        input_dir: Path,
        ffmpeg_cmd: str = "ffmpeg",
        ffprobe_cmd: str = "ffprobe",
        dst_rule: str = DEFAULT_DST_RULE,
        clock: Optional[LocalClock] = None,
        show_progress: bool = True,
    ):
        """
        Args:
            input_dir: Directory holding the phone videos.
            ffmpeg_cmd: Command or path used to start FFmpeg.
            ffprobe_cmd: Command or path used to start ffprobe.
            dst_rule: "fixed" or "system", see `domain.timestamps`.
            clock: Local offset and DST flag; read from the system when omitted.
            show_progress: Whether to draw the tqdm progress bar.

        Raises:
            DirectoryNotFoundException: If `input_dir` is not an existing directory.
            ValueError: If `dst_rule` is not a known rule name.
        """
        self.process_files_handler = ProcessVideoFiles(input_dir)
        self.project_dir: Path = self.process_files_handler.source_dir
        self.ffmpeg_cmd = ffmpeg_cmd
        self.ffprobe_cmd = ffprobe_cmd
        if dst_rule not in DST_RULES:
            raise ValueError(f"Unknown DST rule: {dst_rule!r}")
        self.dst_rule = dst_rule
        self.clock = clock or LocalClock.from_system()
        self.show_progress = show_progress

    def capture_local_time(self, video_file: VideoFile, encoded_date: datetime) -> datetime:
        """
        Reconstructs the local capture time and checks that it can be stored as a file time.

        Runs before anything is written, so an unusable date never leaves an
        unstamped output behind.

        Raises:
            MissingTimestampException: If the date shifted into local time falls
                outside the range `datetime` or the platform clock can represent.
        """
        try:
            local_time = reconstruct_local_time(encoded_date, self.clock, self.dst_rule)
            local_time.timestamp()
        except (OverflowError, ValueError, OSError) as e:
            raise MissingTimestampException(
                video_file.path, f"media-encoded date {encoded_date} is out of range ({e})"
            ) from e
        return local_time

    def process_single_file(self, path: Path) -> FileResult:
        """
        Runs all steps for one file.

        Raises:
            MissingTimestampException: If the file carries no usable media-encoded date.
            InspectionFailureException: If ffprobe fails for the file.
            TranscodeFailureException: If FFmpeg fails for the file.
        """
        started = time.monotonic()
        video_file = VideoFile(path)

        encoded_date = read_media_encoded_date(video_file.path)
        if encoded_date is None:
            raise MissingTimestampException(video_file.path, "no media-encoded date")
        local_time = self.capture_local_time(video_file, encoded_date)

        source_codec, video_encoder = inspect_video_encoder(video_file.path, self.ffprobe_cmd)

        transcoder = VideoTranscoder(video_file, video_encoder, ffmpeg_cmd=self.ffmpeg_cmd)
        output_path = transcoder.encode()

        apply_file_times(output_path, local_time)
        logger.debug(
            f"{output_path.name}: media encoded {encoded_date} UTC -> file time {local_time}"
        )

        elapsed = format_timedelta(timedelta(seconds=time.monotonic() - started))
        SuccessLog(video_file.converted_dir).write(
            {
                "source": video_file.filename,
                "output": output_path.name,
                "source_codec": source_codec or "none",
                "video_encoder": video_encoder,
                "source_size": formatted_size(video_file.size),
                "output_size": formatted_size(transcoder.encoded_size),
                "media_encoded_utc": encoded_date.isoformat(sep=" "),
                "file_time_local": local_time.isoformat(sep=" "),
                "dst_rule": self.dst_rule,
                "elapsed": elapsed,
                "ended_datetime": datetime.now().isoformat(sep=" ", timespec="seconds"),
            }
        )
        return FileResult(path, STATUS_CONVERTED, output=output_path)

    def _record_failure(self, path: Path, error_name: str, reason: str) -> FileResult:
        logger.error(f"Failed to convert {path.name}: {reason}")
        ErrorLog(self.project_dir / CONVERTED_DIR_NAME).write(
            f"{error_name} for: {path.name}",
            f"Reason: {reason}",
            f"Time: {datetime.now().isoformat(sep=' ', timespec='seconds')}",
        )
        return FileResult(path, STATUS_FAILED, reason=reason)

    def process_multi_file(self) -> BatchResult:
        """Processes every discovered file in discovery order and returns the outcomes."""
        files_to_process_paths: List[Path] = list(self.process_files_handler.files)
        total = len(files_to_process_paths)
        batch_result = BatchResult()

        if not files_to_process_paths:
            logger.info(f"No video files to process in {self.project_dir}")
            return batch_result

        logger.info(f"Files to process in {self.project_dir}: {total}")

        with tqdm(
            total=total, unit="file", disable=not self.show_progress, dynamic_ncols=True
        ) as progress:
            for index, file_path in enumerate(files_to_process_paths):
                progress.set_description(f"{file_path.name}")
                logger.debug(
                    f"[{index}/{total}] {index * 100 // total}% complete, processing {file_path.name}"
                )
                try:
                    file_result = self.process_single_file(file_path)
                except MissingTimestampException as e:
                    logger.warning(f"Skipping {file_path.name}: {e.reason}")
                    file_result = FileResult(file_path, STATUS_SKIPPED, reason=e.reason)
                except (InspectionFailureException, TranscodeFailureException) as e:
                    file_result = self._record_failure(file_path, type(e).__name__, e.reason)
                except (OSError, OverflowError) as e:
                    # Unreadable source, vanished file, or timestamps that could not be written.
                    file_result = self._record_failure(file_path, type(e).__name__, str(e))
                batch_result.results.append(file_result)
                progress.update(1)

        logger.debug(f"[{total}/{total}] 100% complete")
        return batch_result

    def log_summary(self, batch_result: BatchResult):
        logger.info(
            f"Converted: {len(batch_result.converted)}, "
            f"skipped: {len(batch_result.skipped)}, "
            f"failed: {len(batch_result.failed)}"
        )
        for skipped in batch_result.skipped:
            logger.info(f"  skipped {skipped.source.name}: {skipped.reason}")
        for failed in batch_result.failed:
            logger.error(f"  failed  {failed.source.name}: {failed.reason}")

    def run(self) -> BatchResult:
        logger.info(f"Starting conversion in: {self.project_dir}")
        batch_result = self.process_multi_file()
        self.log_summary(batch_result)
        return batch_result

