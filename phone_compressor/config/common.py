"""
Common configuration settings used throughout the application.

This module contains globally shared configuration settings and constants that are
used across the Phone Video Compressor: logging format, output directory layout,
log file names and external tool locations. It also handles the loading of
user-specific configuration from an external YAML file, allowing for easy
customization without modifying the source code.
"""
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

# --- User-Defined Configuration ---
# This block loads user-specific settings from a 'config.user.yaml' file located
# at the project root. Example:
#
#   paths:
#     ffmpeg_dir: C:/tools/ffmpeg/bin
#     ffprobe: /opt/ffmpeg/bin/ffprobe
#   timestamps:
#     dst_rule: fixed
#   logging:
#     level: INFO

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
USER_CONFIG_PATH = PROJECT_ROOT / "config.user.yaml"


def load_user_config(config_path: Path) -> Dict[str, Any]:
    """
    Reads a user configuration YAML file.

    A missing file is not an error; an empty dict is returned and the built-in
    defaults apply. A file that cannot be parsed is reported and ignored.

    Args:
        config_path: Path to the YAML file.

    Returns:
        The parsed mapping, or an empty dict.
    """
    if not config_path.is_file():
        logger.debug(f"User config '{config_path}' not found. Using built-in defaults.")
        return {}
    try:
        with config_path.open("r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not load or parse '{config_path}': {e}")
        return {}
    if not isinstance(user_config, dict):
        logger.warning(f"User config '{config_path}' is not a mapping. Ignoring it.")
        return {}
    return user_config


def config_value(user_config: Dict[str, Any], section: str, key: str) -> Optional[Any]:
    """Returns `user_config[section][key]`, or None when either level is missing."""
    section_values = user_config.get(section) or {}
    if not isinstance(section_values, dict):
        return None
    return section_values.get(key)


USER_CONFIG: Dict[str, Any] = load_user_config(USER_CONFIG_PATH)

# The directory containing the FFmpeg and ffprobe executables. If not provided,
# the application assumes the executables are available in the system's PATH.
_ffmpeg_dir_str = config_value(USER_CONFIG, "paths", "ffmpeg_dir")
MODULE_PATH: Path | None = Path(_ffmpeg_dir_str) if _ffmpeg_dir_str else None


# --- Logging Configuration ---

# The format string for the Loguru logger.
LOGGER_FORMAT = (
    "<green>{time:MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR")


# --- Directory and File Management ---

# Name of the output directory created beneath the input directory. Nothing is
# ever written outside of it.
CONVERTED_DIR_NAME = "Converted"

# Appended to the original stem to name the converted file: clip.mp4 -> clip_conv.mp4
CONVERTED_FILE_SUFFIX = "_conv"

# The text file inside the output directory that records every FFmpeg command line.
COMMAND_TEXT = "cmd.txt"

# Structured YAML record of successful conversions, kept in the output directory.
SUCCESS_LOG_YAML = "conversion_log.yaml"

# Plain text record of failed conversions, kept in the output directory.
ERROR_LOG_TEXT = "error.txt"


# --- Exit Codes ---
EXIT_OK = 0
EXIT_FILE_FAILURES = 1
EXIT_DIRECTORY_NOT_FOUND = 2
