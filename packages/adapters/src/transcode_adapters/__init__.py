"""Blob store implementations (GCS, S3) and the platform facade that selects one."""

from .env_config import blob_store_from_env
from .gcs_storage import GCSBlobStore
from .s3_storage import S3BlobStore

__all__ = [
    "GCSBlobStore",
    "S3BlobStore",
    "blob_store_from_env",
]
