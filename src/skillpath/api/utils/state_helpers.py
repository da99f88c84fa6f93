"""
State Helper Functions.

Process-wide wizard state shared by the routes: the local scoped store, the
persistence gateway and the session registry.
"""

from skillpath.config import settings
from skillpath.utils.local_store import KeyValueStore
from skillpath.wizard.controller import WizardController
from skillpath.wizard.persistence import PersistenceGateway
from skillpath.wizard.sessions import SessionRegistry

# Sessions and offline snapshots. In Lambda, LOCAL_STORE_DIR points under /tmp,
# which only lives as long as the container; published profiles go to DynamoDB
local_store = KeyValueStore(settings.LOCAL_STORE_DIR)
gateway = PersistenceGateway(local_store)
registry = SessionRegistry(local_store, gateway)


def get_controller(session_id: str) -> WizardController:
    """Return the controller of a session.

    Raises:
        SessionNotFound: Mapped to HTTP 404 by the exception handlers.
    """
    return registry.get(session_id)
