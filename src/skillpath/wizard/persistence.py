"""
Persistence Gateway for Published Profiles.

CLASSES:
    PersistenceGateway

FUNCTIONS:
    new_share_id   (public)

Publishing writes a snapshot of the Profile keyed by its share_id. The remote
store (DynamoDB) is tried first; on any failure the snapshot goes to the local
scoped store instead. Reads follow the same order.
"""

import secrets
import string
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from skillpath.utils import dynamodb_manager
from skillpath.utils.local_store import PROFILE_SCOPE, KeyValueStore
from skillpath.utils.logger import get_logger

logger = get_logger(__name__)

SHARE_ID_ALPHABET = string.ascii_letters + string.digits + "_-"
SHARE_ID_LENGTH = 10


def new_share_id(length: int = SHARE_ID_LENGTH) -> str:
    """Return a new opaque, URL-safe share identifier."""
    return "".join(secrets.choice(SHARE_ID_ALPHABET) for _ in range(length))


class PersistenceGateway:
    """Saves and loads published Profile snapshots.

    Args:
        local_store (KeyValueStore): Local scoped store used as fallback.
        remote_put (Optional[Callable]): Remote upsert, (share_id, snapshot) -> completed_at.
            Must raise on failure. Defaults to dynamodb_manager.put_profile.
        remote_get (Optional[Callable]): Remote read, share_id -> snapshot or None.
            Defaults to dynamodb_manager.get_profile.
    """

    def __init__(
        self,
        local_store: KeyValueStore,
        remote_put: Optional[Callable[[str, Dict[str, Any]], Any]] = None,
        remote_get: Optional[Callable[[str], Optional[Dict[str, Any]]]] = None,
    ):
        self.local_store = local_store
        self._remote_put = remote_put
        self._remote_get = remote_get

    # ------------------------------
    # Public interface
    # ------------------------------
    def publish(self, profile: Dict[str, Any]) -> str:
        """Publish a snapshot of the profile.

        A share_id is minted if the profile has none; an existing share_id is
        always reused, so repeated publishes overwrite one logical record.

        Args:
            profile (Dict[str, Any]): The Profile to publish.

        Returns:
            str: The share_id actually used.
        """
        share_id = profile.get("share_id") or new_share_id()
        snapshot = {
            **profile,
            "share_id": share_id,
            "completed_at": datetime.now(timezone.utc).isoformat(),
        }

        try:
            (self._remote_put or dynamodb_manager.put_profile)(share_id, snapshot)
            logger.info(
                "Published profile to remote store",
                extra={"extra_fields": {"share_id": share_id}},
            )
            return share_id
        except Exception as e:
            logger.warning(
                "Remote publish failed, falling back to local store",
                extra={
                    "extra_fields": {
                        "share_id": share_id,
                        "error": str(e),
                        "error_type": type(e).__name__,
                        "fallback": "local",
                    }
                },
            )

        self.local_store.set(self._key(share_id), snapshot)
        logger.info(
            "Published profile to local store",
            extra={"extra_fields": {"share_id": share_id}},
        )
        return share_id

    def fetch(self, share_id: str) -> Optional[Dict[str, Any]]:
        """Load a published snapshot.

        Args:
            share_id (str): The share identifier.

        Returns:
            The snapshot, or None when neither the remote nor the local store
            has it. Never raises.
        """
        if not share_id:
            return None

        try:
            snapshot = (self._remote_get or dynamodb_manager.get_profile)(share_id)
        except Exception as e:
            logger.warning(
                "Remote fetch failed",
                extra={"extra_fields": {"share_id": share_id, "error": str(e)}},
            )
            snapshot = None
        if snapshot:
            return snapshot

        snapshot = self.local_store.get(self._key(share_id))
        if snapshot:
            return snapshot

        logger.info(
            "Profile snapshot not found",
            extra={"extra_fields": {"share_id": share_id}},
        )
        return None

    # ------------------------------
    # Internal functions
    # ------------------------------
    @staticmethod
    def _key(share_id: str) -> str:
        return f"{PROFILE_SCOPE}{share_id}"
