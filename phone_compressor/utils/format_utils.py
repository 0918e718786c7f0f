"""
Formatting of durations and byte counts for log lines and the YAML conversion log.
"""

from datetime import timedelta

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")
_UNIT_STEP = 1024


def format_timedelta(td_object: timedelta) -> str:
    """
    Renders an elapsed time as zero-padded hours, minutes and seconds.

    7261 seconds becomes "02:01:01". Hours are not wrapped at 24. Anything that is
    not a timedelta, and any negative duration, renders as "00:00:00".
    """
    seconds = int(td_object.total_seconds()) if isinstance(td_object, timedelta) else 0
    minutes, seconds = divmod(max(seconds, 0), 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours:02}:{minutes:02}:{seconds:02}"


def formatted_size(size_bytes: float) -> str:
    """
    Renders a byte count with a binary unit: 512 -> "512 B", 1536 -> "1.50 KB",
    2097152 -> "2 MB". Whole values drop their ".00"; sizes of zero or less are "0 B".
    """
    if size_bytes <= 0:
        return "0 B"

    value = float(size_bytes)
    unit_index = 0
    while value >= _UNIT_STEP and unit_index < len(_SIZE_UNITS) - 1:
        value /= _UNIT_STEP
        unit_index += 1

    if unit_index == 0:
        return f"{int(value)} B"
    number = f"{value:.2f}"
    if number.endswith(".00"):
        number = number[:-3]
    return f"{number} {_SIZE_UNITS[unit_index]}"
