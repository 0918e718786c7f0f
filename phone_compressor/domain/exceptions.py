"""
Defines custom exception types for the Phone Video Compressor.

These exceptions allow for more specific and expressive error handling throughout
the conversion pipeline. Instead of catching a generic `Exception`, the pipeline
can catch `MissingTimestampException` and skip a file, or catch
`TranscodeFailureException` and record the failure before moving on.

All custom exceptions inherit from the base `PhoneCompressorException`.
"""
from pathlib import Path


class PhoneCompressorException(Exception):
    """Base class for all custom exceptions in the Phone Video Compressor."""

    pass


class DirectoryNotFoundException(PhoneCompressorException):
    """
    Raised when the input directory does not exist or is not a directory.

    This is the only fatal condition: nothing is processed and the application
    exits before touching any file.
    """

    def __init__(self, directory: Path):
        self.directory = directory
        super().__init__(f"Input directory not found: {directory}")


# --- Per-file exceptions ---
class FileProcessingException(PhoneCompressorException):
    """Base class for exceptions that concern a single video file."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path.name}: {reason}")


class MissingTimestampException(FileProcessingException):
    """
    Raised when a file has no usable media-encoded date.

    Without the capture time the converted file could not carry the original
    date, so the file is skipped rather than converted. This is not a failure
    of the batch.
    """

    pass


class InspectionFailureException(FileProcessingException):
    """
    Raised when ffprobe fails or its output cannot be parsed.

    The video codec is never guessed in this case; the file is not converted.
    """

    pass


class TranscodeFailureException(FileProcessingException):
    """
    Raised when FFmpeg exits with an error, cannot be started, or produces no output.

    Any partial output FFmpeg wrote has already been removed when this is
    raised. The timestamp step never runs after it.
    """

    pass
