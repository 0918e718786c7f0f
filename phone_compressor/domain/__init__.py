"""
This package contains the core domain models and rules of the Phone Video Compressor.

The domain layer is independent of the external tools and of the filesystem
side effects performed by the services.

Modules:
    exceptions.py: Custom exception types for each failure the pipeline
                   distinguishes (missing directory, missing timestamp,
                   inspection failure, transcode failure).
    media.py: The `VideoFile` model, ffprobe stream parsing and the total
              codec-to-encoder mapping.
    timestamps.py: The reconstruction of a local capture time from a UTC
                   media-encoded date, including the fixed daylight-saving rule.
"""
