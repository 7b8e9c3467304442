"""Shared types and conventions for the video transcode worker."""

from .errors import BlobNotFoundError, BlobStoreError, TranscodeError
from .interfaces import BlobStore, Transcoder
from .keys import (
    PROCESSED_KEY_PREFIX,
    derive_processed_key,
    validate_object_key,
)
from .logging_config import configure_logging
from .models import (
    JobDescriptor,
    JobOutcome,
    OutcomeKind,
    PushEnvelope,
    PushMessage,
    ScratchFileRef,
    ScratchRole,
    StorageObjectNotification,
    TranscodeProfile,
)

__version__ = "0.1.0"
__all__ = [
    "BlobNotFoundError",
    "BlobStore",
    "BlobStoreError",
    "JobDescriptor",
    "JobOutcome",
    "OutcomeKind",
    "PROCESSED_KEY_PREFIX",
    "PushEnvelope",
    "PushMessage",
    "ScratchFileRef",
    "ScratchRole",
    "StorageObjectNotification",
    "TranscodeError",
    "TranscodeProfile",
    "Transcoder",
    "configure_logging",
    "derive_processed_key",
    "validate_object_key",
]
