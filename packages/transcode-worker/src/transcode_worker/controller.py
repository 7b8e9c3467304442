"""
Job controller: fetch -> transcode -> publish -> cleanup for one notification.

Steps run strictly in order. Fetch, transcode and publish share one failure scope:
whichever step fails, the job's raw and processed scratch files are deleted
(best-effort) and a tagged outcome is returned. Cleanup never changes the outcome.
Blob store calls are synchronous SDK calls and run in worker threads so other
jobs keep progressing while one waits on the network.
"""

from __future__ import annotations

import asyncio
import logging

from transcode_shared import (
    BlobStore,
    BlobStoreError,
    JobDescriptor,
    JobOutcome,
    ScratchRole,
    TranscodeError,
    TranscodeProfile,
    Transcoder,
    validate_object_key,
)

from .key_locks import KeyLocks
from .scratch import ScratchSpace

logger = logging.getLogger(__name__)


class JobController:
    """Drives one job's lifecycle against injected scratch, storage and transcoder."""

    def __init__(
        self,
        *,
        scratch: ScratchSpace,
        storage: BlobStore,
        transcoder: Transcoder,
        raw_bucket: str,
        processed_bucket: str,
        profile: TranscodeProfile | None = None,
        locks: KeyLocks | None = None,
        skip_if_published: bool = False,
    ) -> None:
        self._scratch = scratch
        self._storage = storage
        self._transcoder = transcoder
        self._raw_bucket = raw_bucket
        self._processed_bucket = processed_bucket
        self._profile = profile or TranscodeProfile()
        self._locks = locks or KeyLocks()
        self._skip_if_published = skip_if_published

    @property
    def locks(self) -> KeyLocks:
        return self._locks

    async def process(self, descriptor: JobDescriptor) -> JobOutcome:
        """Run the job to a terminal outcome. Local scratch holds none of its files afterwards."""
        for field, key in (
            ("source_key", descriptor.source_key),
            ("derived_key", descriptor.derived_key),
        ):
            reason = validate_object_key(key)
            if reason is not None:
                logger.warning("transcode: invalid %s=%r: %s", field, key, reason)
                return JobOutcome.validation_failure(f"{field}: {reason}", descriptor)

        async with self._locks.hold(descriptor.source_key, descriptor.derived_key):
            return await self._run(descriptor)

    async def _run(self, descriptor: JobDescriptor) -> JobOutcome:
        source_key = descriptor.source_key
        derived_key = descriptor.derived_key
        logger.info("transcode: source_key=%s derived_key=%s start", source_key, derived_key)

        if self._skip_if_published and await self._already_published(descriptor):
            logger.info(
                "transcode: source_key=%s derived_key=%s already published, skipping",
                source_key,
                derived_key,
            )
            return JobOutcome.already_published(descriptor)

        raw_path = self._scratch.ref(source_key, ScratchRole.RAW).local_path
        processed_path = self._scratch.ref(derived_key, ScratchRole.PROCESSED).local_path
        try:
            try:
                await asyncio.to_thread(
                    self._storage.download_file, self._raw_bucket, source_key, raw_path
                )
            except BlobStoreError as e:
                logger.warning("transcode: source_key=%s fetch failed: %s", source_key, e)
                return JobOutcome.fetch_failure(descriptor, str(e))
            logger.info("transcode: source_key=%s fetch complete", source_key)

            try:
                await self._transcoder.convert(raw_path, processed_path, self._profile)
            except TranscodeError as e:
                logger.warning(
                    "transcode: source_key=%s transcode failed: %s", source_key, e.reason
                )
                return JobOutcome.transcode_failure(descriptor, e.reason)
            logger.info("transcode: source_key=%s transcode complete -> %s", source_key, derived_key)

            try:
                await asyncio.to_thread(
                    self._storage.upload_file, self._processed_bucket, derived_key, processed_path
                )
                await asyncio.to_thread(
                    self._storage.make_public, self._processed_bucket, derived_key
                )
            except BlobStoreError as e:
                logger.warning("transcode: derived_key=%s publish failed: %s", derived_key, e)
                return JobOutcome.publish_failure(descriptor, str(e))
            logger.info(
                "transcode: derived_key=%s published to %s", derived_key, self._processed_bucket
            )
        except Exception:
            logger.exception(
                "transcode: source_key=%s derived_key=%s unexpected failure",
                source_key,
                derived_key,
            )
            raise
        finally:
            self._scratch.delete_job_files(descriptor)

        logger.info("transcode: source_key=%s derived_key=%s complete", source_key, derived_key)
        return JobOutcome.success(descriptor)

    async def _already_published(self, descriptor: JobDescriptor) -> bool:
        try:
            return await asyncio.to_thread(
                self._storage.exists, self._processed_bucket, descriptor.derived_key
            )
        except Exception as e:
            logger.warning(
                "transcode: derived_key=%s existence check failed, processing anyway: %s",
                descriptor.derived_key,
                e,
            )
            return False
