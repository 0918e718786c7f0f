"""
This module provides the ExternalTools class, which verifies at startup that
FFmpeg and ffprobe can be executed.
"""
import subprocess

from loguru import logger


class ExternalTools:
    """
    Startup checks for the external executables the pipeline depends on.

    A failed check is reported but does not stop the application: every file
    would then fail its own inspection or transcoding step and be reported there.
    """

    @staticmethod
    def verify_tool(tool_cmd: str) -> bool:
        """
        Runs `<tool> -version` and logs the first line of its output.

        Args:
            tool_cmd: The command or path of the executable.

        Returns:
            True if the tool ran successfully, False otherwise.
        """
        try:
            result = subprocess.run(
                [tool_cmd, "-version"],
                check=True,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except subprocess.CalledProcessError as e:
            logger.error(f"'{tool_cmd} -version' failed (return code {e.returncode}):\n{e.stderr}")
            return False
        except OSError:
            logger.error(
                f"'{tool_cmd}' could not be started. Please ensure it is installed and accessible.\n"
                "You can either add it to your system's PATH, pass its location on the command line, "
                "or specify it in the 'config.user.yaml' file."
            )
            return False

        version_output_lines = result.stdout.splitlines()
        first_line = version_output_lines[0] if version_output_lines else "(no output)"
        logger.info(f"{tool_cmd}: {first_line}")
        return True

    @staticmethod
    def verify(ffmpeg_cmd: str, ffprobe_cmd: str) -> bool:
        """Checks both FFmpeg and ffprobe. Returns True only if both are usable."""
        ffmpeg_ok = ExternalTools.verify_tool(ffmpeg_cmd)
        ffprobe_ok = ExternalTools.verify_tool(ffprobe_cmd)
        return ffmpeg_ok and ffprobe_ok
