"""
DynamoDB Manager for Published Profiles.

This module handles the remote store operations for published profile
snapshots. Each snapshot is one item keyed by its share_id, so writing the
same share_id twice overwrites the item (upsert semantics).

Item layout:
    share_id (str): partition key
    profile (str): JSON-encoded Profile snapshot
    completed_at (str): ISO timestamp of the publish that wrote the snapshot
    job_title (str): denormalized for console browsing

Environment Variables:
    DYNAMODB_TABLE_NAME: Name of the DynamoDB table (default: "skillpath-profiles")
    PROFILE_STORE_MODE: "local" disables the remote store entirely

Note:
    The boto3 resource is created lazily so that local development works
    without AWS credentials.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from skillpath.config import settings
from skillpath.utils.exceptions import ExternalServiceError
from skillpath.utils.logger import get_logger

logger = get_logger(__name__)

# Initialize DynamoDB resource (lazy initialization)
_dynamodb_resource: Optional[Any] = None


def get_dynamodb_resource() -> Optional[Any]:
    """Get or create DynamoDB resource using lazy initialization.

    Returns:
        boto3 DynamoDB resource, or None if the remote store is disabled or
        boto3 cannot create a resource.
    """
    global _dynamodb_resource
    if not settings.remote_store_enabled():
        return None
    if _dynamodb_resource is None:
        try:
            import boto3

            _dynamodb_resource = boto3.resource(
                "dynamodb", region_name=settings.AWS_REGION
            )
        except Exception as e:
            logger.warning(
                "DynamoDB resource not available",
                extra={
                    "extra_fields": {
                        "operation": "dynamodb_resource_init",
                        "error": str(e),
                    }
                },
            )
            _dynamodb_resource = None
    return _dynamodb_resource


def put_profile(share_id: str, profile: Dict[str, Any]) -> str:
    """Upsert a profile snapshot under its share_id.

    Args:
        share_id: Share identifier of the snapshot.
        profile: Profile snapshot. `completed_at` is taken from the profile if
            present, otherwise set to now.

    Returns:
        The completed_at timestamp stored with the item.

    Raises:
        ExternalServiceError: If the remote store is not available.
        Exception: If the DynamoDB operation fails.
    """
    dynamodb = get_dynamodb_resource()
    if dynamodb is None:
        raise ExternalServiceError("Remote profile store not configured")

    completed_at = profile.get("completed_at") or datetime.now(timezone.utc).isoformat()

    try:
        table = dynamodb.Table(settings.DYNAMODB_TABLE_NAME)
        table.put_item(
            Item={
                "share_id": share_id,
                "profile": json.dumps(profile, default=str),
                "completed_at": completed_at,
                "job_title": str(profile.get("job_title") or ""),
            }
        )
        logger.info(
            "Stored profile snapshot",
            extra={"extra_fields": {"share_id": share_id}},
        )
        return completed_at

    except Exception as e:
        logger.error(
            "Failed to store profile snapshot in DynamoDB",
            extra={
                "extra_fields": {
                    "share_id": share_id,
                    "error": str(e),
                    "error_type": type(e).__name__,
                }
            },
            exc_info=True,
        )
        raise


def get_profile(share_id: str) -> Optional[Dict[str, Any]]:
    """Retrieve a profile snapshot by share_id.

    Args:
        share_id: Share identifier of the snapshot.

    Returns:
        The Profile snapshot, or None if not found, if the remote store is not
        available, or if the DynamoDB operation fails.
    """
    try:
        dynamodb = get_dynamodb_resource()
        if dynamodb is None:
            return None

        table = dynamodb.Table(settings.DYNAMODB_TABLE_NAME)
        response = table.get_item(Key={"share_id": share_id})

        if "Item" not in response:
            return None

        item = response["Item"]
        profile = json.loads(item["profile"])
        if "completed_at" in item:
            profile.setdefault("completed_at", item["completed_at"])
        profile["share_id"] = share_id
        return profile

    except Exception as e:
        logger.error(
            "Failed to get profile snapshot from DynamoDB",
            extra={
                "extra_fields": {
                    "share_id": share_id,
                    "error": str(e),
                    "error_type": type(e).__name__,
                }
            },
            exc_info=True,
        )
        return None
