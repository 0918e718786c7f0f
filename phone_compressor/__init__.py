"""
Phone Video Compressor.

Batch-compresses phone-recorded videos with FFmpeg and stamps the converted
files with the original capture time.

Subpackages:
- config: static settings and the optional `config.user.yaml` loader
- domain: models, exceptions and the capture-time reconstruction
- services: scanning, metadata reading, inspection, transcoding, file times, record logs
- pipeline: the sequential batch driver
- utils: external process helpers and formatting
"""

__version__ = "1.0.0"
