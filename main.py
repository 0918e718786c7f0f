"""
Main entry point for the Phone Video Compressor.

This script configures an initial logger and hands over to the CLI, which
parses the command-line arguments, runs the conversion pipeline and returns
the exit code.
"""

import sys

from loguru import logger

from phone_compressor.cli import main
from phone_compressor.config.common import LOGGER_FORMAT

# Configure the logger for initial setup.
# The level is overridden once the command-line arguments have been parsed.
logger.remove()
log_level = "DEBUG" if __debug__ else "INFO"
logger.add(sys.stderr, level=log_level, format=LOGGER_FORMAT)


if __name__ == "__main__":
    sys.exit(main())
