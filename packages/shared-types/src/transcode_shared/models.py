"""Pydantic models for job descriptors, scratch files, outcomes, profiles and push payloads."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .keys import derive_processed_key


class ScratchRole(str, Enum):
    """Local scratch root a file belongs to."""

    RAW = "raw"
    PROCESSED = "processed"


class JobDescriptor(BaseModel):
    """Validated unit of work derived from one inbound notification."""

    model_config = ConfigDict(frozen=True)

    source_key: str = Field(..., description="Raw object key (e.g. clip1.mp4)")
    derived_key: str = Field(
        ..., description="Processed object key (e.g. processed-clip1.mp4)"
    )

    @classmethod
    def for_source_key(cls, source_key: str) -> "JobDescriptor":
        """Build a descriptor whose derived_key follows the processed-key convention."""
        return cls(source_key=source_key, derived_key=derive_processed_key(source_key))


class ScratchFileRef(BaseModel):
    """A local on-disk artifact tied to a logical key within one scratch root."""

    model_config = ConfigDict(frozen=True)

    key: str
    local_path: Path
    role: ScratchRole


# --- Job outcome ---

class OutcomeKind(str, Enum):
    """Terminal result of one job."""

    SUCCESS = "success"
    ALREADY_PUBLISHED = "already_published"
    VALIDATION_FAILURE = "validation_failure"
    TRANSCODE_FAILURE = "transcode_failure"
    FETCH_FAILURE = "fetch_failure"
    PUBLISH_FAILURE = "publish_failure"


class JobOutcome(BaseModel):
    """Tagged result produced once per job."""

    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    reason: str | None = Field(None, description="Failure detail; None on success")
    source_key: str | None = None
    derived_key: str | None = None

    @property
    def ok(self) -> bool:
        return self.kind in (OutcomeKind.SUCCESS, OutcomeKind.ALREADY_PUBLISHED)

    @classmethod
    def success(cls, descriptor: JobDescriptor) -> "JobOutcome":
        return cls(
            kind=OutcomeKind.SUCCESS,
            source_key=descriptor.source_key,
            derived_key=descriptor.derived_key,
        )

    @classmethod
    def already_published(cls, descriptor: JobDescriptor) -> "JobOutcome":
        return cls(
            kind=OutcomeKind.ALREADY_PUBLISHED,
            source_key=descriptor.source_key,
            derived_key=descriptor.derived_key,
        )

    @classmethod
    def validation_failure(
        cls, reason: str, descriptor: JobDescriptor | None = None
    ) -> "JobOutcome":
        return cls(
            kind=OutcomeKind.VALIDATION_FAILURE,
            reason=reason,
            source_key=descriptor.source_key if descriptor else None,
            derived_key=descriptor.derived_key if descriptor else None,
        )

    @classmethod
    def transcode_failure(cls, descriptor: JobDescriptor, reason: str) -> "JobOutcome":
        return cls(
            kind=OutcomeKind.TRANSCODE_FAILURE,
            reason=reason,
            source_key=descriptor.source_key,
            derived_key=descriptor.derived_key,
        )

    @classmethod
    def fetch_failure(cls, descriptor: JobDescriptor, reason: str) -> "JobOutcome":
        return cls(
            kind=OutcomeKind.FETCH_FAILURE,
            reason=reason,
            source_key=descriptor.source_key,
            derived_key=descriptor.derived_key,
        )

    @classmethod
    def publish_failure(cls, descriptor: JobDescriptor, reason: str) -> "JobOutcome":
        return cls(
            kind=OutcomeKind.PUBLISH_FAILURE,
            reason=reason,
            source_key=descriptor.source_key,
            derived_key=descriptor.derived_key,
        )


# --- Transcode profile ---

class TranscodeProfile(BaseModel):
    """
    Fixed output constraints for one transcode.

    A negative width lets ffmpeg compute it from the height, preserving aspect ratio;
    -2 additionally rounds it to an even number, which yuv420p encoders require.
    """

    model_config = ConfigDict(frozen=True)

    height: int = Field(360, ge=16, le=4320, description="Target vertical resolution")
    width: int = Field(-2, description="Target width; -1/-2 auto-compute from height")
    video_codec: str | None = Field(None, description="e.g. libx264; None keeps ffmpeg default")
    audio_codec: str | None = Field(None, description="e.g. aac; None keeps ffmpeg default")

    @property
    def scale_filter(self) -> str:
        return f"scale={self.width}:{self.height}"


# --- Push notification (HTTP envelope from the message broker) ---

class PushMessage(BaseModel):
    """Inner message of a push delivery; data is base64-encoded JSON."""

    data: str = Field(..., description="Base64-encoded notification payload")
    message_id: str | None = Field(None, alias="messageId")
    attributes: dict[str, str] | None = None

    model_config = ConfigDict(populate_by_name=True)


class PushEnvelope(BaseModel):
    """HTTP body of a push delivery: {message: {data: <base64>}, subscription?}."""

    message: PushMessage
    subscription: str | None = None


class StorageObjectNotification(BaseModel):
    """Decoded object-finalized notification: the raw object's name (and bucket)."""

    name: str = Field(..., description="Raw object key")
    bucket: str | None = None
