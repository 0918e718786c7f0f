"""
Applies a reconstructed capture time to a converted file's filesystem timestamps.

Modification and access times are set everywhere with `os.utime`. On Windows the
creation time is set explicitly through `SetFileTime`. On macOS it follows
`os.utime` when the new time is earlier. Elsewhere it is left alone.
"""

import ctypes
import os
import sys
from datetime import datetime
from pathlib import Path

from loguru import logger

# FILETIME counts 100 ns intervals since 1601-01-01; the Unix epoch is this many seconds later.
_FILETIME_EPOCH_OFFSET_SECONDS = 11_644_473_600
_FILETIME_TICKS_PER_SECOND = 10_000_000


def _to_filetime(timestamp: float):
    from ctypes import wintypes

    ticks = int((timestamp + _FILETIME_EPOCH_OFFSET_SECONDS) * _FILETIME_TICKS_PER_SECOND)
    return wintypes.FILETIME(ticks & 0xFFFFFFFF, ticks >> 32)


def _set_windows_creation_time(path: Path, timestamp: float):
    from ctypes import wintypes

    kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)
    kernel32.CreateFileW.restype = wintypes.HANDLE
    kernel32.CreateFileW.argtypes = (
        wintypes.LPCWSTR, wintypes.DWORD, wintypes.DWORD, wintypes.LPVOID,
        wintypes.DWORD, wintypes.DWORD, wintypes.HANDLE,
    )

    generic_write = 0x40000000
    open_existing = 3
    file_flag_backup_semantics = 0x02000000
    invalid_handle_value = wintypes.HANDLE(-1).value

    handle = kernel32.CreateFileW(
        str(path), generic_write, 0, None, open_existing, file_flag_backup_semantics, None
    )
    if handle in (None, 0, invalid_handle_value):
        raise ctypes.WinError(ctypes.get_last_error())
    try:
        creation_ft = _to_filetime(timestamp)
        # NULL access/write times leave those untouched; os.utime handles them.
        if not kernel32.SetFileTime(handle, ctypes.byref(creation_ft), None, None):
            raise ctypes.WinError(ctypes.get_last_error())
    finally:
        kernel32.CloseHandle(handle)


def apply_file_times(path: Path, local_time: datetime) -> float:
    """
    Sets the creation and modification time of `path` to `local_time`.

    Args:
        path: The converted file.
        local_time: Naive local wall-clock datetime.

    Returns:
        The POSIX timestamp that was applied.

    Raises:
        OSError: If the timestamps cannot be written.
    """
    timestamp = local_time.timestamp()
    os.utime(path, (timestamp, timestamp))

    if sys.platform == "win32":
        _set_windows_creation_time(path, timestamp)
    elif sys.platform == "darwin":
        # APFS/HFS+ pull the birth time back when the new mtime is older than it.
        logger.debug(
            f"Set modification time of {path.name}; its creation time follows only if it was later."
        )
    else:
        logger.debug(
            f"Creation time cannot be set on {sys.platform}; set modification time of {path.name} only."
        )
    return timestamp
