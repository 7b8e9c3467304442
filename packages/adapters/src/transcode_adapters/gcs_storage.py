"""GCP Cloud Storage implementation of BlobStore."""

from __future__ import annotations

import logging
from pathlib import Path

from google.api_core.exceptions import GoogleAPICallError, NotFound
from google.auth.exceptions import TransportError
from google.cloud import storage as gcs_storage
from requests.exceptions import RequestException

from transcode_shared import BlobNotFoundError, BlobStoreError

logger = logging.getLogger(__name__)

# API errors plus transport failures (auth refresh, connection resets)
_STORAGE_ERRORS = (GoogleAPICallError, TransportError, RequestException)


class GCSBlobStore:
    """BlobStore implementation using google-cloud-storage."""

    def __init__(
        self,
        *,
        project: str | None = None,
        client: gcs_storage.Client | None = None,
    ) -> None:
        self._client = client if client is not None else gcs_storage.Client(project=project)

    def _blob(self, bucket: str, key: str) -> gcs_storage.Blob:
        return self._client.bucket(bucket).blob(key)

    def download_file(self, bucket: str, key: str, path: str | Path) -> None:
        """Download gs://bucket/key to a local path."""
        try:
            self._blob(bucket, key).download_to_filename(str(path))
        except NotFound as e:
            raise BlobNotFoundError(bucket, key) from e
        except _STORAGE_ERRORS as e:
            raise BlobStoreError(bucket, key, str(e)) from e
        logger.info("gs://%s/%s downloaded to %s", bucket, key, path)

    def upload_file(self, bucket: str, key: str, path: str | Path) -> None:
        """Upload a local file to gs://bucket/key (resumable for large files)."""
        try:
            self._blob(bucket, key).upload_from_filename(str(path))
        except _STORAGE_ERRORS as e:
            raise BlobStoreError(bucket, key, str(e)) from e
        logger.info("%s uploaded to gs://%s/%s", path, bucket, key)

    def make_public(self, bucket: str, key: str) -> None:
        """Grant allUsers read on the object (requires fine-grained bucket ACLs)."""
        try:
            self._blob(bucket, key).make_public()
        except _STORAGE_ERRORS as e:
            raise BlobStoreError(bucket, key, str(e)) from e
        logger.info("gs://%s/%s made public", bucket, key)

    def exists(self, bucket: str, key: str) -> bool:
        """Return True if the object exists, False otherwise."""
        return self._blob(bucket, key).exists()
