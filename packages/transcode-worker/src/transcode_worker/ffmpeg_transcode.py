"""
FFmpeg-based transcoder: rescale a local video into a local output file.

Runs ffmpeg as a subprocess without blocking the event loop. Completion is a single
awaited result: return on exit code 0, TranscodeError otherwise.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from transcode_shared import TranscodeError, TranscodeProfile

logger = logging.getLogger(__name__)

# Lines of ffmpeg stderr kept in the failure reason
STDERR_TAIL_LINES = 5


def build_ffmpeg_command(
    input_path: str | Path,
    output_path: str | Path,
    profile: TranscodeProfile,
    *,
    ffmpeg_binary: str = "ffmpeg",
) -> list[str]:
    """
    Build the ffmpeg command line for one transcode.

    -y overwrites leftovers from an earlier failed run of the same key.
    """
    cmd = [
        ffmpeg_binary,
        "-y",
        "-hide_banner",
        "-loglevel",
        "error",
        "-i",
        str(input_path),
        "-vf",
        profile.scale_filter,
    ]
    if profile.video_codec:
        cmd += ["-c:v", profile.video_codec]
    if profile.audio_codec:
        cmd += ["-c:a", profile.audio_codec]
    cmd.append(str(output_path))
    return cmd


def _stderr_tail(stderr: bytes | None) -> str:
    if not stderr:
        return ""
    lines = stderr.decode("utf-8", errors="ignore").strip().splitlines()
    return "\n".join(lines[-STDERR_TAIL_LINES:])


class FfmpegTranscoder:
    """Transcoder implementation backed by the ffmpeg CLI."""

    def __init__(
        self,
        *,
        ffmpeg_binary: str = "ffmpeg",
        timeout_sec: float | None = None,
    ) -> None:
        self._ffmpeg_binary = ffmpeg_binary
        self._timeout_sec = timeout_sec

    async def convert(
        self,
        input_path: str | Path,
        output_path: str | Path,
        profile: TranscodeProfile,
    ) -> None:
        """
        Transcode input_path into output_path under profile.

        Raises:
            TranscodeError: ffmpeg missing, exited non-zero, or exceeded timeout_sec.
                The output file may exist partially; callers treat it as garbage.
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        cmd = build_ffmpeg_command(
            input_path, output_path, profile, ffmpeg_binary=self._ffmpeg_binary
        )
        logger.debug("ffmpeg: %s", " ".join(cmd))
        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise TranscodeError(f"ffmpeg not found: {self._ffmpeg_binary}") from e

        try:
            _, stderr = await asyncio.wait_for(process.communicate(), timeout=self._timeout_sec)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise TranscodeError(f"ffmpeg timed out after {self._timeout_sec}s") from None

        if process.returncode != 0:
            tail = _stderr_tail(stderr)
            reason = f"ffmpeg exited with code {process.returncode}"
            if tail:
                reason = f"{reason}: {tail}"
            logger.warning("ffmpeg: %s -> %s failed: %s", input_path, output_path, reason)
            raise TranscodeError(reason)
        logger.info("ffmpeg: %s -> %s finished (%s)", input_path, output_path, profile.scale_filter)
