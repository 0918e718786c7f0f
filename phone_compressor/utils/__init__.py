"""
Utilities Package for the Phone Video Compressor.

Modules:
    - ffmpeg_utils.py: Locating the FFmpeg/ffprobe executables and running
      external commands with their output relayed to the logger.
    - format_utils.py: Human-readable durations and file sizes.
    - tool_check.py: Startup verification that the external tools can run.
"""
