"""
Controller for the server‑rendered event pages.

Actions return plain result objects (``ViewResult``, ``BadRequest``,
``Redirect``) that ``web.router`` turns into HTTP responses, so the
controller can be exercised without a web server.  Mutating actions
take the principal explicitly.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Set, Tuple, Union

from eventures.app.schemas.event import EventBindingModel
from eventures.app.schemas.user import Principal
from eventures.app.services.binding import bind_event, invalid_messages
from eventures.app.services.event_service import EventService
from eventures.app.services.results import Success, ValidationFailed
from eventures.app.services.validation import EVENT_FIELDS

ALL_EVENTS_URL = "/events/all"


@dataclass(frozen=True)
class ViewResult:
    view: str
    model: Any
    event_id: Optional[int] = None
    errors: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class BadRequest:
    pass


@dataclass(frozen=True)
class Redirect:
    location: str


ActionResult = Union[ViewResult, BadRequest, Redirect]


def bind_event_form(form: Mapping[str, str]) -> Tuple[EventBindingModel, Set[str]]:
    """Build a draft from submitted form fields.

    Blank inputs become ``None``.  Inputs that cannot be parsed (e.g.
    ``"abc"`` for the ticket count) are also dropped and their field
    names returned, so the page can say the value was invalid rather
    than missing.
    """
    data = {}
    for attr, _ in EVENT_FIELDS:
        value = (form.get(attr) or "").strip()
        data[attr] = value or None
    return bind_event(data)


class EventsController:
    """Event pages: list, create, edit and delete."""

    async def all(self) -> ViewResult:
        events = await EventService.list_events()
        return ViewResult("all", [event.to_listing() for event in events])

    async def create(self) -> ViewResult:
        return ViewResult("create", EventBindingModel())

    async def create_post(self, principal: Principal, form: Mapping[str, str]) -> ActionResult:
        draft, invalid = bind_event_form(form)
        result = await EventService.create_event(principal, draft)
        if isinstance(result, ValidationFailed):
            return ViewResult("create", draft, errors=invalid_messages(result.messages, invalid))
        return Redirect(ALL_EVENTS_URL)

    async def edit(self, event_id: int) -> ActionResult:
        result = await EventService.get_event(event_id)
        if not isinstance(result, Success):
            return BadRequest()
        return ViewResult("edit", result.payload.to_binding(), event_id=event_id)

    async def edit_post(self, event_id: int, principal: Principal, form: Mapping[str, str]) -> ActionResult:
        draft, invalid = bind_event_form(form)
        result = await EventService.update_event(event_id, principal, draft)
        if isinstance(result, ValidationFailed):
            return ViewResult("edit", draft, event_id=event_id, errors=invalid_messages(result.messages, invalid))
        if not isinstance(result, Success):
            return BadRequest()
        return Redirect(ALL_EVENTS_URL)

    async def delete(self, event_id: int) -> ActionResult:
        result = await EventService.get_event(event_id)
        if not isinstance(result, Success):
            return BadRequest()
        return ViewResult("delete", result.payload.to_listing(), event_id=event_id)

    async def delete_post(self, event_id: int, principal: Principal) -> ActionResult:
        result = await EventService.delete_event(event_id, principal)
        if not isinstance(result, Success):
            return BadRequest()
        return Redirect(ALL_EVENTS_URL)
