"""
Command-Line Interface (CLI) for the Phone Video Compressor.

This module uses Python's `argparse` to define and parse the command-line
arguments, merges them with the optional user configuration file, configures
the logger and runs the conversion pipeline.
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger
from tqdm import tqdm

from .config.common import (
    DEFAULT_LOG_LEVEL,
    EXIT_DIRECTORY_NOT_FOUND,
    EXIT_FILE_FAILURES,
    EXIT_OK,
    LOG_LEVELS,
    LOGGER_FORMAT,
    USER_CONFIG,
    config_value,
    load_user_config,
)
from .config.video import DEFAULT_DST_RULE, DST_RULES
from .domain.exceptions import DirectoryNotFoundException
from .pipeline.conversion_pipeline import ConversionPipeline
from .utils.ffmpeg_utils import resolve_executable
from .utils.tool_check import ExternalTools


def get_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parses command-line arguments.

    Args:
        argv: Argument list to parse; `sys.argv[1:]` when None.

    Returns:
        argparse.Namespace: The parsed command-line arguments.
    """
    parser = argparse.ArgumentParser(
        description=(
            "Compress phone videos with FFmpeg into a 'Converted' subdirectory, "
            "keeping the original capture date on the new files."
        )
    )
    parser.add_argument(
        "input_dir", nargs="?", default=None,
        help="Directory containing the videos. Defaults to the current working directory.",
    )
    parser.add_argument(
        "--ffmpeg", type=str, default=None, help="Path to the ffmpeg executable."
    )
    parser.add_argument(
        "--ffprobe", type=str, default=None, help="Path to the ffprobe executable."
    )
    parser.add_argument(
        "--dst-rule", type=str, default=None, choices=DST_RULES,
        help=(
            "How local time is derived from the UTC capture date: 'fixed' uses the US "
            "transition approximation, 'system' uses this machine's timezone rules. "
            f"Default: {DEFAULT_DST_RULE}."
        ),
    )
    parser.add_argument(
        "--log-level", type=str.upper, default=None, choices=LOG_LEVELS,
        help="Set the logging level.",
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to a YAML user config used instead of 'config.user.yaml'.",
    )
    parser.add_argument(
        "--skip-tool-check", action="store_true",
        help="Do not run 'ffmpeg -version' / 'ffprobe -version' before starting.",
    )
    parser.add_argument(
        "--no-progress", action="store_true", help="Do not draw the progress bar."
    )
    return parser.parse_args(argv)


def setup_logger(level: str):
    """Routes loguru output through tqdm so log lines do not break the progress bar."""
    logger.remove()
    logger.add(
        lambda message: tqdm.write(message, end="", file=sys.stderr),
        level=level,
        format=LOGGER_FORMAT,
        colorize=sys.stderr.isatty(),
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Runs the application and returns its exit code.

    Exit codes: 0 when every processed file succeeded (skipped files included),
    1 when at least one file failed, 2 when the input directory does not exist.
    """
    args = get_args(argv)

    user_config = load_user_config(Path(args.config)) if args.config else USER_CONFIG

    log_level = args.log_level or config_value(user_config, "logging", "level") or DEFAULT_LOG_LEVEL
    setup_logger(str(log_level).upper())
    logger.debug(f"Parsed arguments: {args}")

    ffmpeg_dir_str = config_value(user_config, "paths", "ffmpeg_dir")
    ffmpeg_dir = Path(ffmpeg_dir_str) if ffmpeg_dir_str else None
    ffmpeg_cmd = resolve_executable(
        "ffmpeg", args.ffmpeg or config_value(user_config, "paths", "ffmpeg"), ffmpeg_dir
    )
    ffprobe_cmd = resolve_executable(
        "ffprobe", args.ffprobe or config_value(user_config, "paths", "ffprobe"), ffmpeg_dir
    )

    dst_rule = args.dst_rule or config_value(user_config, "timestamps", "dst_rule") or DEFAULT_DST_RULE
    if dst_rule not in DST_RULES:
        logger.warning(f"Unknown dst_rule '{dst_rule}' in config; using '{DEFAULT_DST_RULE}'.")
        dst_rule = DEFAULT_DST_RULE

    if args.input_dir:
        project_path = Path(args.input_dir)
        logger.info(f"Target directory specified: {project_path}")
    else:
        project_path = Path.cwd()
        logger.info(f"No target directory specified, using current working directory: {project_path}")

    try:
        pipeline = ConversionPipeline(
            project_path,
            ffmpeg_cmd=ffmpeg_cmd,
            ffprobe_cmd=ffprobe_cmd,
            dst_rule=dst_rule,
            show_progress=not args.no_progress,
        )
    except DirectoryNotFoundException as e:
        logger.error(f"{e}. Nothing was processed.")
        return EXIT_DIRECTORY_NOT_FOUND

    if not args.skip_tool_check:
        ExternalTools.verify(ffmpeg_cmd, ffprobe_cmd)

    batch_result = pipeline.run()
    if not batch_result.ok:
        logger.error(f"{len(batch_result.failed)} file(s) could not be converted.")
        return EXIT_FILE_FAILURES

    logger.success("Phone Video Compressor finished.")
    return EXIT_OK
