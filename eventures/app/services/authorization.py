"""
Ownership‑scoped authorization for event mutations.

Only the user who created an event may update or delete it.  The guard
is stateless and looks only at the principal and the event record it
is handed; the caller is responsible for fetching the record first.
"""

import logging
from enum import Enum

from ..schemas.user import Principal
from .event_store import EventRecord

logger = logging.getLogger(__name__)


class Action(str, Enum):
    UPDATE = "update"
    DELETE = "delete"


def authorize(principal: Principal, event: EventRecord, action: Action) -> bool:
    """Return ``True`` if ``principal`` may perform ``action`` on ``event``."""
    allowed = principal.id == event.owner_id
    if not allowed:
        logger.warning(
            "User %s (id %s) may not %s event %s owned by user %s",
            principal.username,
            principal.id,
            action.value,
            event.id,
            event.owner_id,
        )
    return allowed
