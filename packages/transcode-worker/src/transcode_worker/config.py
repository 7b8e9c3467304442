"""
App config from environment with defaults.
Uses pydantic-settings so all env vars are validated and documented in one model.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from transcode_shared import TranscodeProfile

MIN_TARGET_HEIGHT = 16
MAX_TARGET_HEIGHT = 4320


class WorkerSettings(BaseSettings):
    """
    All environment variables used by the transcode worker.
    Env vars are read from os.environ (UPPER_SNAKE_CASE by default).
    """

    model_config = SettingsConfigDict(
        env_file=None,  # .env is loaded via bootstrap_env() before settings are read
        extra="ignore",
    )

    # HTTP listener
    host: str = "0.0.0.0"
    port: int = 3000

    # Local scratch roots (raw intake, processed output)
    raw_scratch_dir: Path = Path("./raw-videos")
    processed_scratch_dir: Path = Path("./processed-videos")

    # Remote buckets
    raw_bucket_name: str = "raw-videos"
    processed_bucket_name: str = "processed-videos"

    # Transcoding
    ffmpeg_binary: str = "ffmpeg"
    target_height: int = 360
    transcode_timeout_sec: float | None = None

    # Opt-in: acknowledge notifications whose output is already published without reprocessing
    skip_if_published: bool = False

    log_level: str = "INFO"

    @field_validator("target_height", mode="before")
    @classmethod
    def parse_and_clamp_target_height(cls, v: object) -> int:
        if isinstance(v, int):
            return max(MIN_TARGET_HEIGHT, min(v, MAX_TARGET_HEIGHT))
        if isinstance(v, str):
            try:
                n = int(v)
                return max(MIN_TARGET_HEIGHT, min(n, MAX_TARGET_HEIGHT))
            except ValueError:
                return 360
        return 360

    @field_validator("transcode_timeout_sec", mode="before")
    @classmethod
    def empty_timeout_means_none(cls, v: object) -> object:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v

    @property
    def profile(self) -> TranscodeProfile:
        return TranscodeProfile(height=self.target_height)


def get_settings() -> WorkerSettings:
    """Return validated settings from current environment."""
    return WorkerSettings()


def bootstrap_env() -> None:
    """
    Load .env from path in TRANSCODE_ENV_FILE if set.
    Call once at startup before get_settings() so vars from the file are in os.environ.
    """
    import os

    import dotenv

    path = os.environ.get("TRANSCODE_ENV_FILE")
    if path:
        dotenv.load_dotenv(Path(path).resolve())
