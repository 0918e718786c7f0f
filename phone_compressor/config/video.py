"""
Configuration settings related to video processing.

This module defines the recognized video file extensions, the mapping from a
source video codec to the encoder used for re-compression, the fixed audio
settings and the settings used to reconstruct capture timestamps.
"""
from typing import Dict

# --- General Video Settings ---
# Compared against the lowercased file suffix.
VIDEO_EXTENSIONS = (".mp4", ".avi", ".mkv", ".mov")

# --- Encoder Settings ---
# Source codec (as reported by ffprobe's `codec_name`) -> FFmpeg video encoder.
CODEC_ENCODER_MAP: Dict[str, str] = {
    "hevc": "libx265",
    "vp9": "libvpx-vp9",
    "h264": "libx264",
}
# Used for every codec missing from CODEC_ENCODER_MAP, including no video stream at all.
DEFAULT_VIDEO_ENCODER = "libx265"

AUDIO_ENCODER = "aac"
AUDIO_BIT_RATE = "256k"

# Passed to `-loglevel` so FFmpeg only reports warnings and errors.
FFMPEG_LOG_LEVEL = "warning"
# Passed to ffprobe's `-v` so only the JSON document is printed.
FFPROBE_VERBOSITY = "quiet"

# --- Timestamp Settings ---
DST_RULE_FIXED = "fixed"
DST_RULE_SYSTEM = "system"
DST_RULES = (DST_RULE_FIXED, DST_RULE_SYSTEM)
DEFAULT_DST_RULE = DST_RULE_FIXED

# US transition approximation: DST starts on the first Sunday on/after
# March 8 and ends on the first Sunday on/after November 1.
DST_BEGIN_MONTH_DAY = (3, 8)
DST_END_MONTH_DAY = (11, 1)
DST_SHIFT_MINUTES = 60

# QuickTime stores "no date" as zero seconds since 1904-01-01; MediaInfo reports
# that as a real date, so it is treated as absent.
QUICKTIME_ZERO_DATE = "1904-01-01 00:00:00"
