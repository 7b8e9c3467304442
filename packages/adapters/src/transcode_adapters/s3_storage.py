"""S3 implementation of BlobStore."""

from __future__ import annotations

import logging
from pathlib import Path

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import BotoCoreError, ClientError

from transcode_shared import BlobNotFoundError, BlobStoreError

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = ("404", "NoSuchKey", "NotFound")


class S3BlobStore:
    """BlobStore implementation using S3 (managed transfers; multipart above the boto3 threshold)."""

    def __init__(
        self,
        *,
        region_name: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        self._client = boto3.client(
            "s3",
            region_name=region_name,
            endpoint_url=endpoint_url,
        )

    def download_file(self, bucket: str, key: str, path: str | Path) -> None:
        """Download s3://bucket/key to a local path."""
        try:
            self._client.download_file(bucket, key, str(path))
        except ClientError as e:
            if e.response["Error"]["Code"] in _NOT_FOUND_CODES:
                raise BlobNotFoundError(bucket, key) from e
            raise BlobStoreError(bucket, key, str(e)) from e
        except BotoCoreError as e:
            raise BlobStoreError(bucket, key, str(e)) from e
        logger.info("s3://%s/%s downloaded to %s", bucket, key, path)

    def upload_file(self, bucket: str, key: str, path: str | Path) -> None:
        """Upload a local file to s3://bucket/key."""
        try:
            self._client.upload_file(str(path), bucket, key)
        except (ClientError, BotoCoreError, S3UploadFailedError) as e:
            raise BlobStoreError(bucket, key, str(e)) from e
        logger.info("%s uploaded to s3://%s/%s", path, bucket, key)

    def make_public(self, bucket: str, key: str) -> None:
        """Set the public-read canned ACL on the object."""
        try:
            self._client.put_object_acl(Bucket=bucket, Key=key, ACL="public-read")
        except (ClientError, BotoCoreError) as e:
            raise BlobStoreError(bucket, key, str(e)) from e
        logger.info("s3://%s/%s made public", bucket, key)

    def exists(self, bucket: str, key: str) -> bool:
        """Return True if the object exists, False otherwise."""
        try:
            self._client.head_object(Bucket=bucket, Key=key)
            return True
        except ClientError as e:
            if e.response["Error"]["Code"] in _NOT_FOUND_CODES:
                return False
            raise
