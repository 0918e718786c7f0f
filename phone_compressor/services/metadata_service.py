"""
Reads the media-encoded date embedded in a video container.

Windows Explorer shows this value as the "Media encoded" extended property.
Here it is read cross-platform with MediaInfo (through pymediainfo) from the
`encoded_date` field of the General track. Phones write it in UTC.
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Optional

from loguru import logger
from pymediainfo import MediaInfo

from ..config.video import QUICKTIME_ZERO_DATE

# Matches "2024-07-04 15:00:00", "2024-07-04T15:00:00.000" and the like anywhere
# in the value, so "UTC 2024-07-04 15:00:00" and "2024-07-04 15:00:00 UTC" both parse.
_DATE_PATTERN = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[ T](\d{2}):(\d{2}):(\d{2})"
)


def parse_encoded_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parses a MediaInfo date string into a naive datetime holding UTC.

    When several values are present (" / " separated) the first one wins.
    Fractional seconds are dropped.

    Returns:
        The parsed datetime, or None when the value is empty, unparseable or the
        QuickTime zero date.
    """
    if not value:
        return None
    first_value = str(value).split(" / ")[0].strip()
    match = _DATE_PATTERN.search(first_value)
    if not match:
        logger.debug(f"Unrecognized encoded_date value: {value!r}")
        return None
    try:
        parsed = datetime(*(int(part) for part in match.groups()))
    except ValueError:
        logger.debug(f"Invalid encoded_date value: {value!r}")
        return None
    if parsed == datetime.fromisoformat(QUICKTIME_ZERO_DATE):
        return None
    return parsed


def read_media_encoded_date(path: Path) -> Optional[datetime]:
    """
    Reads and parses the media-encoded date of a video file.

    The file is opened here and handed to MediaInfo as a file object; the
    handle is closed on leaving the `with` block, before the next file is read.

    Args:
        path: The video file.

    Returns:
        The UTC media-encoded date, or None when the file does not carry one.
    """
    with path.open("rb") as media_stream:
        media_info = MediaInfo.parse(media_stream)

    general_tracks = media_info.general_tracks
    if not general_tracks:
        logger.debug(f"No General track reported for {path.name}")
        return None

    raw_value = general_tracks[0].encoded_date
    logger.debug(f"encoded_date for {path.name}: {raw_value!r}")
    return parse_encoded_date(raw_value)
