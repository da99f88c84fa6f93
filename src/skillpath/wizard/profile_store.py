"""
Profile Store for a Wizard Session.

CLASSES:
    ProfileStore

The store is the single source of truth for one in-progress wizard session.
Every mutation is a shallow merge funneled through one lock, so overlapping
writes are serialized and the last write wins.
"""

import copy
import threading
from typing import Any, Dict, Optional

from skillpath.config.profile_schemas import default_profile
from skillpath.config.validation_constants import TOTAL_STEPS
from skillpath.utils.exceptions import InvalidStep
from skillpath.utils.local_store import SESSION_SCOPE, KeyValueStore
from skillpath.utils.logger import get_logger

logger = get_logger(__name__)


class ProfileStore:
    """Holds the mutable Profile of one wizard session.

    Args:
        session_id (Optional[str]): Session identifier, used as the persistence key.
        backing (Optional[KeyValueStore]): Scoped key-value store the Profile is
            saved to after every mutation. When given and it already holds the
            session, the Profile is restored from it.
        total_steps (int): Number of wizard steps (N).

    Attributes:
        revision (int): Incremented on every mutation.
        epoch (int): Incremented on reset() and by the controller when the user
            leaves a step. External results captured under an older epoch are
            discarded.
    """

    def __init__(
        self,
        session_id: Optional[str] = None,
        backing: Optional[KeyValueStore] = None,
        total_steps: int = TOTAL_STEPS,
    ):
        self.session_id = session_id
        self.total_steps = total_steps
        self.revision = 0
        self.epoch = 0
        self._backing = backing
        self._lock = threading.RLock()
        self._profile = default_profile()

        if backing is not None and session_id:
            saved = backing.get(self._key)
            if isinstance(saved, dict):
                self._profile = {**self._profile, **saved}
                self._profile["current_step"] = self._clamp(
                    self._profile.get("current_step", 1)
                )

    # ------------------------------
    # Public interface
    # ------------------------------
    def get(self) -> Dict[str, Any]:
        """Return a snapshot of the current Profile."""
        with self._lock:
            return copy.deepcopy(self._profile)

    def patch(self, partial: Dict[str, Any]) -> Dict[str, Any]:
        """Shallow-merge partial into the Profile and return the new snapshot.

        Unknown keys are kept as-is. Never fails. A current_step in the patch
        is clamped into [1, total_steps].
        """
        with self._lock:
            self._profile = {**self._profile, **copy.deepcopy(dict(partial or {}))}
            self._profile["current_step"] = self._clamp(self._profile.get("current_step"))
            self._commit()
            return copy.deepcopy(self._profile)

    def advance(self) -> int:
        """Move to the next step, staying on the last one. Returns the step."""
        with self._lock:
            return self._set_step(min(self.current_step + 1, self.total_steps))

    def retreat(self) -> int:
        """Move to the previous step, staying on step 1. Returns the step."""
        with self._lock:
            return self._set_step(max(self.current_step - 1, 1))

    def go_to(self, step: int) -> int:
        """Jump directly to step.

        Raises:
            InvalidStep: If step is not an integer in [1, total_steps]. The
                Profile is left unchanged.
        """
        if isinstance(step, bool) or not isinstance(step, int):
            raise InvalidStep(step, self.total_steps)
        if step < 1 or step > self.total_steps:
            raise InvalidStep(step, self.total_steps)
        with self._lock:
            return self._set_step(step)

    def reset(self) -> Dict[str, Any]:
        """Replace the Profile with the defaults (step 1). Irreversible."""
        with self._lock:
            self._profile = default_profile()
            self.epoch += 1
            self._commit()
            logger.info(
                "Profile reset",
                extra={"extra_fields": {"session_id": self.session_id}},
            )
            return copy.deepcopy(self._profile)

    def bump_epoch(self) -> int:
        """Invalidate outstanding external results. Returns the new epoch."""
        with self._lock:
            self.epoch += 1
            return self.epoch

    @property
    def current_step(self) -> int:
        with self._lock:
            return self._profile["current_step"]

    # ------------------------------
    # Internal functions
    # ------------------------------
    @property
    def _key(self) -> str:
        return f"{SESSION_SCOPE}{self.session_id}"

    def _clamp(self, step: Any) -> int:
        try:
            step = int(step)
        except (TypeError, ValueError):
            return 1
        return max(1, min(step, self.total_steps))

    def _set_step(self, step: int) -> int:
        self._profile = {**self._profile, "current_step": step}
        self._commit()
        return step

    def _commit(self) -> None:
        self.revision += 1
        if self._backing is not None and self.session_id:
            self._backing.set(self._key, self._profile)
