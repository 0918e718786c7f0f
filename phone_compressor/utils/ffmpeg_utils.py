"""
This module provides utility functions related to FFmpeg and ffprobe.
It includes the lookup of the executables to use and a robust function for
running command-line processes with their output relayed to the logger.
"""

import os
import shlex
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from ..config.common import MODULE_PATH


def resolve_executable(
    tool_name: str,
    configured: Optional[str] = None,
    ffmpeg_dir: Optional[Path] = MODULE_PATH,
) -> str:
    """
    Determines the command or path used to start an external tool.

    Priority: an explicitly configured path or command, then the tool inside
    `ffmpeg_dir` from the user config, then the bare name found on PATH.

    Args:
        tool_name: "ffmpeg" or "ffprobe".
        configured: A path or command given on the command line or in the config.
        ffmpeg_dir: Directory expected to hold the executable. Defaults to
                    `paths.ffmpeg_dir` of the default user config.

    Returns:
        The command to execute.
    """
    if configured:
        return str(configured)

    exe_name = f"{tool_name}.exe" if sys.platform == "win32" else tool_name
    if ffmpeg_dir and ffmpeg_dir.is_dir():
        configured_path = ffmpeg_dir / exe_name
        if configured_path.is_file():
            logger.debug(f"Using {tool_name} from configured path: '{configured_path}'")
            return str(configured_path)
        logger.warning(
            f"`ffmpeg_dir` is configured, but '{exe_name}' was not found there. Falling back to system PATH."
        )
    return tool_name


def format_cmd(cmd_list: List[str]) -> str:
    """Creates a display-friendly, correctly quoted version of a command list."""
    if os.name == "nt":
        return subprocess.list2cmdline(cmd_list)
    return shlex.join(cmd_list)


def run_cmd(
    cmd_list: List[str],
    src_file_for_log: Path = Path(),
    show_cmd: bool = False,
    cmd_log_file_path: Optional[Path] = None,
) -> Optional[subprocess.CompletedProcess]:
    """
    Executes an external command and captures its output.

    This is a wrapper around Python's `subprocess.run` that adds logging and
    error handling. stdout and stderr are captured separately and forwarded to
    the logger, so the tool's own messages are neither lost nor mixed with
    anything the caller parses.

    Args:
        cmd_list: The command to execute as a list of arguments.
        src_file_for_log: The source file being processed, used for logging context
                          in case of an error.
        show_cmd: If True, the command will be logged at the DEBUG level before execution.
        cmd_log_file_path: If provided, the executed command string will be appended
                           to this file.

    Returns:
        A `subprocess.CompletedProcess` once the process has run (whatever its
        return code). Returns `None` if the command could not be started.
    """
    if not cmd_list:
        logger.error("run_cmd received an empty command list.")
        return None

    cmd_list = [str(part) for part in cmd_list]
    display_cmd_str = format_cmd(cmd_list)

    if show_cmd:
        logger.debug(f"Executing command: {display_cmd_str}")

    if cmd_log_file_path:
        try:
            cmd_log_file_path.parent.mkdir(parents=True, exist_ok=True)
            with cmd_log_file_path.open("a", encoding="utf-8") as cmd_f:
                cmd_f.write(display_cmd_str + "\n")
        except OSError as e:
            logger.error(f"Failed to write command to log file {cmd_log_file_path}: {e}")

    try:
        result = subprocess.run(
            cmd_list,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            stdin=subprocess.DEVNULL,
            shell=False,
        )
    except OSError as e:
        # FileNotFoundError / PermissionError when the executable cannot be started.
        logger.error(
            f"Error: Could not start '{cmd_list[0]}' for {src_file_for_log.name or 'N/A'} "
            f"({type(e).__name__}: {e}). Ensure it's in your system's PATH or configured correctly."
        )
        return None

    if result.stdout and len(result.stdout) > 500:
        logger.trace(f"Command stdout (truncated): {result.stdout[:500]}...")
    elif result.stdout:
        logger.trace(f"Command stdout: {result.stdout}")

    # Distinguish between error output and informational warnings on stderr.
    if result.stderr and result.returncode != 0:
        logger.debug(f"Command stderr (error, rc={result.returncode}): {result.stderr}")
    elif result.stderr:
        logger.trace(f"Command stderr (non-error, rc={result.returncode}): {result.stderr}")

    return result


def stderr_tail(text: Optional[str], max_lines: int = 5) -> str:
    """Returns the last few non-empty lines of a tool's stderr for error messages."""
    if not text:
        return ""
    lines = [line for line in text.strip().splitlines() if line.strip()]
    return "\n".join(lines[-max_lines:])
