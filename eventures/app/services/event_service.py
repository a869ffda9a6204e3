"""
Business logic for events.

``EventService`` orchestrates the event validator, the authorization
guard and the ``EventStore``.  Every mutation takes the calling
principal as an explicit argument.  Outcomes are returned as result
variants (see ``results``).

For update and delete the checks run in a fixed order: existence
first, then validation of the draft, then ownership.  The read and
the write happen inside a single write transaction, so two writers of
the same event are serialized and the last one wins.
"""

import logging
from typing import Callable, List, Optional, Union

from eventures.app.core.db import write_transaction
from eventures.app.schemas.event import EventBindingModel, EventPatchModel
from eventures.app.schemas.user import Principal

from .authorization import Action, authorize
from .event_store import EventRecord, EventStore
from .results import Forbidden, NotFound, Success, ValidationFailed
from .validation import validate_event

logger = logging.getLogger(__name__)


class EventService:
    """Service for creating, reading, updating and deleting events."""

    @classmethod
    async def list_events(cls, owner_id: Optional[int] = None) -> List[EventRecord]:
        """Return all events, or only those owned by ``owner_id``.

        Each call runs a fresh query.
        """
        return EventStore.list_events(owner_id=owner_id)

    @classmethod
    async def count_events(cls, owner_id: Optional[int] = None) -> int:
        return EventStore.count_events(owner_id=owner_id)

    @classmethod
    async def get_event(cls, event_id: int) -> Union[Success, NotFound]:
        event = EventStore.get_event(event_id)
        if event is None:
            return NotFound(event_id)
        return Success(event)

    @classmethod
    async def create_event(cls, principal: Principal, draft: EventBindingModel) -> Union[Success, ValidationFailed]:
        """Validate ``draft`` and store it as a new event owned by ``principal``."""
        errors = validate_event(draft)
        if errors:
            logger.warning("User %s submitted an invalid event: %s", principal.username, errors)
            return ValidationFailed(tuple(errors))
        event = EventStore.insert_event(draft, owner_id=principal.id)
        logger.info("User %s created event #%s '%s'", principal.username, event.id, event.name)
        return Success(event)

    @classmethod
    async def update_event(
        cls, event_id: int, principal: Principal, draft: EventBindingModel
    ) -> Union[Success, NotFound, ValidationFailed, Forbidden]:
        """Replace every mutable field of an event with the values in ``draft``."""
        return cls._update(event_id, principal, lambda existing: draft)

    @classmethod
    async def patch_event(
        cls, event_id: int, principal: Principal, patch: EventPatchModel
    ) -> Union[Success, NotFound, ValidationFailed, Forbidden]:
        """Apply only the fields present in ``patch``; the merged event is validated."""
        changes = patch.model_dump(exclude_unset=True)
        return cls._update(
            event_id,
            principal,
            lambda existing: existing.to_binding().model_copy(update=changes),
        )

    @classmethod
    def _update(
        cls,
        event_id: int,
        principal: Principal,
        make_draft: Callable[[EventRecord], EventBindingModel],
    ) -> Union[Success, NotFound, ValidationFailed, Forbidden]:
        with write_transaction() as cursor:
            existing = EventStore.get_event(event_id, cursor=cursor)
            if existing is None:
                logger.warning("User %s tried to update missing event #%s", principal.username, event_id)
                return NotFound(event_id)
            draft = make_draft(existing)
            errors = validate_event(draft)
            if errors:
                logger.warning("Invalid update of event #%s by %s: %s", event_id, principal.username, errors)
                return ValidationFailed(tuple(errors))
            if not authorize(principal, existing, Action.UPDATE):
                return Forbidden(event_id, principal.id)
            EventStore.update_event(event_id, draft, cursor=cursor)
        logger.info("User %s updated event #%s", principal.username, event_id)
        return Success()

    @classmethod
    async def delete_event(cls, event_id: int, principal: Principal) -> Union[Success, NotFound, Forbidden]:
        """Delete an event and return its last state for confirmation."""
        with write_transaction() as cursor:
            existing = EventStore.get_event(event_id, cursor=cursor)
            if existing is None:
                logger.warning("User %s tried to delete missing event #%s", principal.username, event_id)
                return NotFound(event_id)
            if not authorize(principal, existing, Action.DELETE):
                return Forbidden(event_id, principal.id)
            EventStore.delete_event(event_id, cursor=cursor)
        logger.info("User %s deleted event #%s '%s'", principal.username, event_id, existing.name)
        return Success(existing)
