"""Errors raised by blob store and transcoder implementations."""


class TranscodeError(Exception):
    """The external converter rejected or crashed on its input."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class BlobStoreError(Exception):
    """Transfer to or from remote object storage failed."""

    def __init__(self, bucket: str, key: str, reason: str) -> None:
        super().__init__(f"{bucket}/{key}: {reason}")
        self.bucket = bucket
        self.key = key
        self.reason = reason


class BlobNotFoundError(BlobStoreError):
    """The requested remote object does not exist."""

    def __init__(self, bucket: str, key: str) -> None:
        super().__init__(bucket, key, "object not found")
