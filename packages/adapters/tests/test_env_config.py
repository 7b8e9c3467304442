"""Tests for platform facade: _platform() and blob_store_from_env()."""

import os
from unittest.mock import patch

import pytest

from transcode_adapters import S3BlobStore
from transcode_adapters.env_config import _platform, blob_store_from_env


def test_platform_default_is_gcp() -> None:
    """Without PLATFORM set, _platform() returns 'gcp'."""
    with patch.dict(os.environ, {}, clear=False):
        os.environ.pop("PLATFORM", None)
        assert _platform() == "gcp"


def test_platform_strips_and_lowercases() -> None:
    """PLATFORM is stripped and lowercased."""
    with patch.dict(os.environ, {"PLATFORM": "  AWS  "}):
        assert _platform() == "aws"


def test_blob_store_from_env_gcp_builds_gcs_store() -> None:
    with patch.dict(os.environ, {"PLATFORM": "gcp", "GCP_PROJECT": "my-project"}):
        with patch("transcode_adapters.gcs_storage.GCSBlobStore") as mock_cls:
            store = blob_store_from_env()
    mock_cls.assert_called_once_with(project="my-project")
    assert store is mock_cls.return_value


def test_blob_store_from_env_aws_builds_s3_store(aws_credentials) -> None:
    with patch.dict(os.environ, {"PLATFORM": "aws", "AWS_REGION": "eu-west-1"}):
        store = blob_store_from_env()
    assert isinstance(store, S3BlobStore)


def test_blob_store_from_env_unknown_platform_raises() -> None:
    with patch.dict(os.environ, {"PLATFORM": "azure"}):
        with pytest.raises(NotImplementedError, match="not implemented.*supported: gcp, aws"):
            blob_store_from_env()
