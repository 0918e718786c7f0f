"""
This package contains the conversion pipeline of the Phone Video Compressor.

The pipeline discovers the files, runs every per-file step in order, reports
progress, and collects the outcome of each file for the final summary and
the exit code.
"""
