"""
Wizard Session Registry.

CLASSES:
    SessionRegistry

Maps session ids to their WizardController. Session Profiles are saved to the
local scoped store, so a session can be resumed after a process restart when
LOCAL_STORE_DIR is configured. At most max_active controllers are held; the
least recently used one is dropped and rebuilt from the store on next use.
"""

import threading
import uuid
from collections import OrderedDict
from typing import Optional, Tuple

from skillpath.agents.question_generator import QuestionGeneratorAgent
from skillpath.agents.skill_analyzer import SkillAnalyzerAgent
from skillpath.config import settings
from skillpath.utils.exceptions import SessionNotFound
from skillpath.utils.local_store import SESSION_SCOPE, KeyValueStore
from skillpath.utils.logger import get_logger
from skillpath.wizard.controller import WizardController
from skillpath.wizard.persistence import PersistenceGateway
from skillpath.wizard.profile_store import ProfileStore

logger = get_logger(__name__)


class SessionRegistry:
    """Creates, resumes and forgets wizard sessions.

    Args:
        local_store (KeyValueStore): Backing store for session Profiles.
        gateway (Optional[PersistenceGateway]): Shared publish gateway.
            Defaults to one backed by local_store.
        max_active (Optional[int]): Controllers held in memory.
            Defaults to MAX_ACTIVE_SESSIONS.
    """

    def __init__(
        self,
        local_store: KeyValueStore,
        gateway: Optional[PersistenceGateway] = None,
        max_active: Optional[int] = None,
    ):
        self.local_store = local_store
        self.gateway = gateway or PersistenceGateway(local_store)
        self.generator = QuestionGeneratorAgent()
        self.analyzer = SkillAnalyzerAgent()
        self.max_active = max(1, max_active or settings.MAX_ACTIVE_SESSIONS)
        self._controllers: "OrderedDict[str, WizardController]" = OrderedDict()
        self._lock = threading.Lock()

    def create(self) -> Tuple[str, WizardController]:
        """Start a new session with the default Profile."""
        session_id = str(uuid.uuid4())
        controller = self._build(session_id)
        # Persist the defaults right away so the session can be resumed
        controller.store.reset()
        with self._lock:
            self._hold(session_id, controller)
        logger.info(
            "Session created", extra={"extra_fields": {"session_id": session_id}}
        )
        return session_id, controller

    def get(self, session_id: str) -> WizardController:
        """Return the controller of a session.

        Raises:
            SessionNotFound: If the session is neither active nor saved.
        """
        with self._lock:
            controller = self._controllers.get(session_id)
            if controller is not None:
                self._controllers.move_to_end(session_id)
                return controller
            if f"{SESSION_SCOPE}{session_id}" not in self.local_store:
                raise SessionNotFound(session_id)
            controller = self._build(session_id)
            self._hold(session_id, controller)
        logger.info(
            "Session resumed from local store",
            extra={"extra_fields": {"session_id": session_id}},
        )
        return controller

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._controllers.pop(session_id, None)
        self.local_store.delete(f"{SESSION_SCOPE}{session_id}")

    def _hold(self, session_id: str, controller: WizardController) -> None:
        # Caller holds self._lock
        self._controllers[session_id] = controller
        while len(self._controllers) > self.max_active:
            evicted, _ = self._controllers.popitem(last=False)
            logger.debug(
                "Session evicted from memory",
                extra={"extra_fields": {"session_id": evicted}},
            )

    def _build(self, session_id: str) -> WizardController:
        store = ProfileStore(session_id=session_id, backing=self.local_store)
        return WizardController(
            store,
            self.gateway,
            generator=self.generator,
            analyzer=self.analyzer,
        )
