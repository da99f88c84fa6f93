"""
S3 Manager for Resume and Certificate Uploads.

This module stores uploaded files in S3 and returns their public URL. Files
are grouped by category ("resumes" or "certificates") under the uploads
bucket.

Environment Variables:
    S3_UPLOADS_BUCKET: Name of the S3 bucket for uploads
    AWS_REGION: Region used to build public object URLs

Note:
    When no bucket is configured, a placeholder URL is returned so that the
    wizard keeps working in local-only mode.
"""

import secrets
import time
from typing import Optional

from skillpath.config import settings
from skillpath.utils.exceptions import ExternalServiceError
from skillpath.utils.logger import get_logger

logger = get_logger(__name__)

PLACEHOLDER_URL = "https://fake-url.com/{filename}"


def build_object_key(category: str, filename: str) -> str:
    """Return a unique object key that keeps the original file extension."""
    extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
    return f"{category}/{secrets.token_hex(8)}_{int(time.time() * 1000)}.{extension}"


def upload_file(
    category: str,
    filename: str,
    content: bytes,
    content_type: Optional[str] = None,
) -> str:
    """Upload a file to S3 and return its public URL.

    Args:
        category: Upload category, "resumes" or "certificates".
        filename: Original filename (used for the extension).
        content: Raw file bytes.
        content_type: MIME type stored with the object.

    Returns:
        Public URL of the uploaded object, or a placeholder URL when no bucket
        is configured.

    Raises:
        ExternalServiceError: If the S3 upload fails.
    """
    bucket = settings.S3_UPLOADS_BUCKET
    if not bucket:
        logger.warning(
            "S3_UPLOADS_BUCKET not configured, returning placeholder URL",
            extra={"extra_fields": {"category": category, "upload_filename": filename}},
        )
        return PLACEHOLDER_URL.format(filename=filename)

    key = build_object_key(category, filename)

    try:
        import boto3

        s3_client = boto3.client("s3", region_name=settings.AWS_REGION)
        s3_client.put_object(
            Bucket=bucket,
            Key=key,
            Body=content,
            ContentType=content_type or "application/octet-stream",
        )
    except Exception as e:
        logger.error(
            "Failed to upload file to S3",
            extra={
                "extra_fields": {
                    "category": category,
                    "s3_key": key,
                    "error": str(e),
                    "error_type": type(e).__name__,
                }
            },
            exc_info=True,
        )
        raise ExternalServiceError("Upload failed") from e

    url = f"https://{bucket}.s3.{settings.AWS_REGION}.amazonaws.com/{key}"
    logger.info(
        "Uploaded file to S3",
        extra={"extra_fields": {"category": category, "s3_key": key}},
    )
    return url
