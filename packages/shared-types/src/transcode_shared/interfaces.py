"""
Cloud-agnostic interfaces for remote object storage and video transcoding.

Implementations (GCS and S3 blob stores, the ffmpeg transcoder) live in separate
packages. The job controller depends on these interfaces and receives the
implementation by injection.
"""

from pathlib import Path
from typing import Protocol, runtime_checkable

from .models import TranscodeProfile


@runtime_checkable
class BlobStore(Protocol):
    """Remote object storage: download/upload files by bucket and key, publish objects."""

    def download_file(self, bucket: str, key: str, path: str | Path) -> None:
        """Download bucket/key to a local path.
        Raises BlobNotFoundError if the object does not exist, BlobStoreError on transfer failure."""
        ...

    def upload_file(self, bucket: str, key: str, path: str | Path) -> None:
        """Upload a local file to bucket/key. Raises BlobStoreError on failure."""
        ...

    def make_public(self, bucket: str, key: str) -> None:
        """Make bucket/key publicly readable. Call only after the upload completed."""
        ...

    def exists(self, bucket: str, key: str) -> bool:
        """Return True if the object exists, False otherwise."""
        ...


@runtime_checkable
class Transcoder(Protocol):
    """Convert a local input file into a local output file under a profile."""

    async def convert(
        self,
        input_path: str | Path,
        output_path: str | Path,
        profile: TranscodeProfile,
    ) -> None:
        """
        Complete once the output file is fully written.

        Raises TranscodeError on failure; any output left behind is garbage.
        """
        ...
