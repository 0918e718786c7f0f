"""
Services Package for the Phone Video Compressor.

This package contains the "service layer" of the application. Each service
performs one step of the per-file conversion and is coordinated by the
pipeline:

- **File Processing Service (`ProcessVideoFiles`):**
  Discovers the video files of the input directory.

- **Metadata Service (`read_media_encoded_date`):**
  Reads the UTC media-encoded date embedded in the container via MediaInfo.

- **Inspection Service (`inspect_video_encoder`):**
  Runs ffprobe to find the source video codec and picks the encoder for it.

- **Transcode Service (`VideoTranscoder`):**
  Builds and runs the FFmpeg command that writes into `Converted`.

- **File Time Service (`apply_file_times`):**
  Writes the reconstructed capture time as creation and modification time.

- **Logging Service (`SuccessLog`, `ErrorLog`):**
  Writes the YAML record of conversions and the text record of failures,
  separate from the real-time console logging.
"""
