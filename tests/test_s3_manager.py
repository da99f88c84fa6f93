# ---------- TESTS FOR S3 MANAGER ----------

import pytest
from unittest.mock import MagicMock, patch

from skillpath.config import settings
from skillpath.utils.exceptions import ExternalServiceError
from skillpath.utils.s3_manager import build_object_key, upload_file


# Mock S3 client
@pytest.fixture
def mock_s3_client():
    """Create a mock S3 client."""
    client = MagicMock()
    client.put_object = MagicMock()
    return client


def test_build_object_key_keeps_extension():
    key = build_object_key("resumes", "My CV.PDF")
    assert key.startswith("resumes/")
    assert key.endswith(".pdf")
    assert build_object_key("resumes", "My CV.PDF") != key


def test_upload_without_bucket_returns_placeholder():
    assert upload_file("resumes", "cv.pdf", b"%PDF") == "https://fake-url.com/cv.pdf"


@patch("boto3.client")
def test_upload_puts_object(mock_boto_client, mock_s3_client, monkeypatch):
    monkeypatch.setattr(settings, "S3_UPLOADS_BUCKET", "skillpath-uploads")
    mock_boto_client.return_value = mock_s3_client

    url = upload_file("certificates", "aws.png", b"png-bytes", "image/png")

    kwargs = mock_s3_client.put_object.call_args.kwargs
    assert kwargs["Bucket"] == "skillpath-uploads"
    assert kwargs["Key"].startswith("certificates/")
    assert kwargs["Body"] == b"png-bytes"
    assert kwargs["ContentType"] == "image/png"
    assert url == (
        f"https://skillpath-uploads.s3.{settings.AWS_REGION}.amazonaws.com/{kwargs['Key']}"
    )


@patch("boto3.client")
def test_upload_failure_raises(mock_boto_client, mock_s3_client, monkeypatch):
    monkeypatch.setattr(settings, "S3_UPLOADS_BUCKET", "skillpath-uploads")
    mock_s3_client.put_object.side_effect = Exception("AccessDenied")
    mock_boto_client.return_value = mock_s3_client

    with pytest.raises(ExternalServiceError, match="Upload failed"):
        upload_file("resumes", "cv.pdf", b"%PDF")
