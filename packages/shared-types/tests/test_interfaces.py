"""Tests for cloud abstraction interfaces (mock implementations)."""

import asyncio
from pathlib import Path

from transcode_shared import BlobStore, TranscodeProfile, Transcoder


class MockBlobStore:
    """Minimal BlobStore implementation for testing."""

    def __init__(self) -> None:
        self.objects: dict[tuple[str, str], bytes] = {}
        self.public: set[tuple[str, str]] = set()

    def download_file(self, bucket: str, key: str, path: str | Path) -> None:
        Path(path).write_bytes(self.objects[(bucket, key)])

    def upload_file(self, bucket: str, key: str, path: str | Path) -> None:
        self.objects[(bucket, key)] = Path(path).read_bytes()

    def make_public(self, bucket: str, key: str) -> None:
        self.public.add((bucket, key))

    def exists(self, bucket: str, key: str) -> bool:
        return (bucket, key) in self.objects


class MockTranscoder:
    """Minimal Transcoder that copies input to output."""

    async def convert(
        self,
        input_path: str | Path,
        output_path: str | Path,
        profile: TranscodeProfile,
    ) -> None:
        Path(output_path).write_bytes(Path(input_path).read_bytes())


def test_blob_store_protocol_runtime_check() -> None:
    assert isinstance(MockBlobStore(), BlobStore)


def test_transcoder_protocol_runtime_check() -> None:
    assert isinstance(MockTranscoder(), Transcoder)


def test_object_without_methods_is_not_blob_store() -> None:
    assert not isinstance(object(), BlobStore)


def test_mock_blob_store_round_trip(tmp_path: Path) -> None:
    store = MockBlobStore()
    src = tmp_path / "in.mp4"
    src.write_bytes(b"video")
    store.upload_file("b", "k", src)
    assert store.exists("b", "k")
    dest = tmp_path / "out.mp4"
    store.download_file("b", "k", dest)
    assert dest.read_bytes() == b"video"


def test_mock_transcoder_writes_output(tmp_path: Path) -> None:
    src = tmp_path / "in.mp4"
    src.write_bytes(b"raw")
    out = tmp_path / "out.mp4"
    asyncio.run(MockTranscoder().convert(src, out, TranscodeProfile()))
    assert out.read_bytes() == b"raw"
