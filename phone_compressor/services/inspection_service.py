"""
Determines a video's source codec with ffprobe and picks the matching encoder.
"""

from pathlib import Path
from pprint import pformat
from typing import Any, Dict, Optional, Tuple

import ffmpeg
from loguru import logger

from ..config.video import FFPROBE_VERBOSITY
from ..domain.exceptions import InspectionFailureException
from ..domain.media import first_video_stream, parse_streams, select_video_encoder
from ..utils.ffmpeg_utils import stderr_tail


def probe_media(path: Path, ffprobe_cmd: str = "ffprobe") -> Dict[str, Any]:
    """
    Runs ffprobe on a file and returns its JSON document.

    `ffmpeg.probe` runs `ffprobe -show_format -show_streams -of json -v quiet <file>`
    with stdout captured on its own, so only the JSON document is parsed.

    Raises:
        InspectionFailureException: If ffprobe cannot be started, exits with an
            error or prints something that is not a JSON object.
    """
    try:
        probe = ffmpeg.probe(str(path), cmd=ffprobe_cmd, v=FFPROBE_VERBOSITY)
    except ffmpeg.Error as e:
        stderr_text = e.stderr.decode("utf-8", errors="replace") if e.stderr else ""
        raise InspectionFailureException(
            path, f"ffprobe failed: {stderr_tail(stderr_text) or 'no error output'}"
        ) from e
    except OSError as e:
        raise InspectionFailureException(
            path, f"could not start ffprobe ({ffprobe_cmd}): {e}"
        ) from e
    except ValueError as e:
        # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors.
        raise InspectionFailureException(path, f"unparseable ffprobe output: {e}") from e

    if not isinstance(probe, dict):
        raise InspectionFailureException(
            path, f"unexpected ffprobe output type: {type(probe).__name__}"
        )
    logger.trace(f"Probe data for {path.name}:\n{pformat(probe)}")
    return probe


def get_video_codec(path: Path, ffprobe_cmd: str = "ffprobe") -> Optional[str]:
    """Returns the codec name of the first video stream, or None if there is none."""
    video_stream = first_video_stream(parse_streams(probe_media(path, ffprobe_cmd)))
    if video_stream is None:
        logger.warning(f"No video stream reported for {path.name}")
        return None
    return video_stream.codec_name


def inspect_video_encoder(path: Path, ffprobe_cmd: str = "ffprobe") -> Tuple[Optional[str], str]:
    """
    Determines the source codec and the encoder to use for it.

    Returns:
        A tuple of (source codec or None, encoder name).
    """
    codec_name = get_video_codec(path, ffprobe_cmd)
    encoder = select_video_encoder(codec_name)
    logger.debug(f"{path.name}: source codec {codec_name!r} -> encoder {encoder!r}")
    return codec_name, encoder
