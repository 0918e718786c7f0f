"""
This module provides classes for writing conversion records to disk.

It separates logging concerns into specific classes for handling errors (ErrorLog)
and successes (SuccessLog). Success logs are written in a machine-readable YAML
format, while error logs are in a human-readable text format for easy debugging.
Both live in the output directory, next to the converted files, and are separate
from the real-time console logging done with loguru.
"""

from pathlib import Path
from typing import Dict, List, Union

import yaml
from loguru import logger

from ..config.common import ERROR_LOG_TEXT, SUCCESS_LOG_YAML


class Log:
    """
    A base class for all logging operations.

    Its main purpose is to handle the basic setup of log file paths and directories.
    """

    # A decorative separator line used in text-based logs for better readability.
    linesep_marker: str = "=" * 50

    def __init__(self, log_dir: Path):
        """
        Initializes the Log instance.

        Args:
            log_dir: The directory the log file lives in. It is created if missing.
        """
        self.log_file_path: Path  # To be defined by the subclass.
        self.log_dir: Path = log_dir.resolve()
        self.log_dir.mkdir(parents=True, exist_ok=True)

    def write(self, log_content: Union[dict, list, str]):
        raise NotImplementedError("Subclasses must implement the write() method.")


class ErrorLog(Log):
    """
    Handles the writing of error logs to a plain text file.

    Each new error is appended to the log file, making it a chronological record
    of the files that could not be converted.
    """

    def __init__(self, error_log_dir: Path, filename: str = ERROR_LOG_TEXT):
        super().__init__(error_log_dir)
        self.log_file_path = self.log_dir / filename

    def write(self, *error_messages: str):
        """
        Appends one or more error messages to the log file, followed by a separator line.

        Args:
            *error_messages: Pieces of the error message, one per line.
        """
        if not error_messages:
            return

        content_to_write = "\n".join(error_messages) + "\n" + self.linesep_marker + "\n"

        try:
            with self.log_file_path.open("a", encoding="utf-8") as f:
                f.write(content_to_write)
        except OSError as e:
            # Fall back to the console so the message is not lost.
            logger.error(f"Failed to write to error log {self.log_file_path}: {e}")
            for msg in error_messages:
                logger.error(f"  - {msg}")


class SuccessLog(Log):
    """
    Handles structured logging for successful conversions in YAML format.

    The file always holds a YAML list. Every entry gets an `index` one higher than
    the largest index already present, so repeated runs keep appending.
    """

    def __init__(self, success_log_dir: Path, filename: str = SUCCESS_LOG_YAML):
        super().__init__(success_log_dir)
        self.log_file_path = self.log_dir / filename
        self.log_entries: List[Dict] = []

    def _load_entries(self) -> List[Dict]:
        if not self.log_file_path.is_file():
            return []
        try:
            with self.log_file_path.open("r", encoding="utf-8") as f:
                loaded_entries = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.error(
                f"Error reading/parsing success log {self.log_file_path}: {e}. Starting a new log."
            )
            return []
        if loaded_entries is None:
            return []
        if not isinstance(loaded_entries, list):
            logger.warning(
                f"Success log {self.log_file_path} contained unexpected data. Starting a new log."
            )
            return []
        return loaded_entries

    def write(self, new_log_entry: dict):
        """
        Appends a structured entry to the YAML file.

        Args:
            new_log_entry: A dictionary describing one successful conversion.
        """
        if not isinstance(new_log_entry, dict):
            logger.error("SuccessLog.write expects a dictionary as a log entry.")
            return

        self.log_entries = self._load_entries()
        current_max_index = max(
            (entry.get("index", 0) for entry in self.log_entries if isinstance(entry, dict)),
            default=0,
        )
        self.log_entries.append({"index": current_max_index + 1, **new_log_entry})

        try:
            with self.log_file_path.open("w", encoding="utf-8") as f:
                yaml.dump(
                    self.log_entries,
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                    allow_unicode=True,
                    indent=4,
                    width=220,
                )
        except OSError as e:
            logger.error(f"Failed to write to success log {self.log_file_path}: {e}")
