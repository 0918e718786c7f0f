"""
Configuration Package for the Phone Video Compressor.

This package centralizes all the static configuration settings for the application.
By separating configuration from the application logic, it becomes easier to manage
and modify parameters without changing the core code.

This package includes settings for:
- Common application settings like logging formats, output directory names and exit codes.
- User-overridable paths for external tools like FFmpeg and ffprobe (`config.user.yaml`).
- Video extensions, the codec-to-encoder table, audio settings and the DST rule.
"""
