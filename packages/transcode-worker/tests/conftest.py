"""Pytest fixtures: in-memory blob store, scripted transcoder, scratch space, controller."""

from __future__ import annotations

import asyncio
import base64
import json
from pathlib import Path

import pytest

from transcode_shared import (
    BlobNotFoundError,
    BlobStoreError,
    ScratchRole,
    TranscodeError,
    TranscodeProfile,
)
from transcode_worker.controller import JobController
from transcode_worker.scratch import ScratchSpace

RAW_BUCKET = "raw-videos"
PROCESSED_BUCKET = "processed-videos"


class FakeBlobStore:
    """BlobStore for tests: in-memory objects, records every call in order."""

    def __init__(self) -> None:
        self.objects: dict[tuple[str, str], bytes] = {}
        self.public: set[tuple[str, str]] = set()
        self.calls: list[tuple[str, str, str]] = []
        self.fail_download: BlobStoreError | None = None
        self.fail_upload: BlobStoreError | None = None
        self.fail_make_public: BlobStoreError | None = None
        self.fail_exists: Exception | None = None

    def download_file(self, bucket: str, key: str, path: str | Path) -> None:
        self.calls.append(("download", bucket, key))
        if self.fail_download is not None:
            raise self.fail_download
        if (bucket, key) not in self.objects:
            raise BlobNotFoundError(bucket, key)
        Path(path).write_bytes(self.objects[(bucket, key)])

    def upload_file(self, bucket: str, key: str, path: str | Path) -> None:
        self.calls.append(("upload", bucket, key))
        if self.fail_upload is not None:
            raise self.fail_upload
        self.objects[(bucket, key)] = Path(path).read_bytes()

    def make_public(self, bucket: str, key: str) -> None:
        self.calls.append(("make_public", bucket, key))
        if self.fail_make_public is not None:
            raise self.fail_make_public
        assert (bucket, key) in self.objects, "make_public before upload"
        self.public.add((bucket, key))

    def exists(self, bucket: str, key: str) -> bool:
        self.calls.append(("exists", bucket, key))
        if self.fail_exists is not None:
            raise self.fail_exists
        return (bucket, key) in self.objects

    def network_calls(self) -> list[str]:
        return [name for name, _, _ in self.calls]


class FakeTranscoder:
    """Transcoder for tests: writes a marked copy, or fails after writing partial output."""

    def __init__(self) -> None:
        self.calls: list[tuple[Path, Path, TranscodeProfile]] = []
        self.fail_reason: str | None = None
        self.write_partial_on_failure = False
        self.delay_sec = 0.0

    async def convert(
        self,
        input_path: str | Path,
        output_path: str | Path,
        profile: TranscodeProfile,
    ) -> None:
        self.calls.append((Path(input_path), Path(output_path), profile))
        if self.delay_sec:
            await asyncio.sleep(self.delay_sec)
        if self.fail_reason is not None:
            if self.write_partial_on_failure:
                Path(output_path).write_bytes(b"partial")
            raise TranscodeError(self.fail_reason)
        data = Path(input_path).read_bytes()
        Path(output_path).write_bytes(b"360p:" + data)


def scratch_files(scratch: ScratchSpace) -> list[Path]:
    return sorted(
        p
        for root in (scratch.root(role) for role in ScratchRole)
        if root.exists()
        for p in root.iterdir()
    )


@pytest.fixture
def scratch(tmp_path: Path) -> ScratchSpace:
    s = ScratchSpace(tmp_path / "raw-videos", tmp_path / "processed-videos")
    s.ensure_roots()
    return s


@pytest.fixture
def blob_store() -> FakeBlobStore:
    store = FakeBlobStore()
    store.objects[(RAW_BUCKET, "clip1.mp4")] = b"raw clip bytes"
    return store


@pytest.fixture
def transcoder() -> FakeTranscoder:
    return FakeTranscoder()


@pytest.fixture
def controller(
    scratch: ScratchSpace, blob_store: FakeBlobStore, transcoder: FakeTranscoder
) -> JobController:
    return JobController(
        scratch=scratch,
        storage=blob_store,
        transcoder=transcoder,
        raw_bucket=RAW_BUCKET,
        processed_bucket=PROCESSED_BUCKET,
    )


@pytest.fixture
def dedup_controller(
    scratch: ScratchSpace, blob_store: FakeBlobStore, transcoder: FakeTranscoder
) -> JobController:
    """Controller that acknowledges jobs whose output is already published."""
    return JobController(
        scratch=scratch,
        storage=blob_store,
        transcoder=transcoder,
        raw_bucket=RAW_BUCKET,
        processed_bucket=PROCESSED_BUCKET,
        skip_if_published=True,
    )


@pytest.fixture
def list_scratch_files():
    """Return a function listing every file under both scratch roots."""
    return scratch_files


@pytest.fixture
def make_push_body():
    """Return a function building a push delivery body around a JSON-serializable payload."""

    def _make(payload: object, *, raw_data: str | None = None) -> str:
        data = raw_data
        if data is None:
            data = base64.b64encode(json.dumps(payload).encode()).decode()
        return json.dumps(
            {
                "message": {"data": data, "messageId": "1"},
                "subscription": "projects/test/subscriptions/transcode",
            }
        )

    return _make
