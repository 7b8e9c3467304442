"""
Platform adapter facade: build a BlobStore from env by PLATFORM (gcp | aws).

Reads PLATFORM (default "gcp") and builds the matching blob store. Apps import from
this module so the implementation choice lives in one place.

Optional env vars:
- GCP_PROJECT (gcp): project for the storage client; default from credentials.
- AWS_REGION / AWS_DEFAULT_REGION (aws): default us-east-1.
- AWS_ENDPOINT_URL (aws): e.g. for LocalStack.
"""

import os

from transcode_shared.interfaces import BlobStore

SUPPORTED_PLATFORMS = ("gcp", "aws")


def _platform() -> str:
    """Return PLATFORM env (gcp | aws), default gcp."""
    return (os.environ.get("PLATFORM", "gcp") or "gcp").strip().lower()


def _get_region() -> str:
    return os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION") or "us-east-1"


def _get_endpoint_url() -> str | None:
    return os.environ.get("AWS_ENDPOINT_URL") or None


def blob_store_from_env() -> BlobStore:
    """Build the BlobStore for the configured platform (default credentials)."""
    platform = _platform()
    if platform == "gcp":
        from .gcs_storage import GCSBlobStore

        return GCSBlobStore(project=os.environ.get("GCP_PROJECT") or None)
    if platform == "aws":
        from .s3_storage import S3BlobStore

        return S3BlobStore(
            region_name=_get_region(),
            endpoint_url=_get_endpoint_url(),
        )
    raise NotImplementedError(
        f"PLATFORM={platform!r} is not implemented; supported: {', '.join(SUPPORTED_PLATFORMS)}"
    )
