"""
Event endpoints for API v1.

Handlers translate service results into HTTP responses and contain no
business rules.  A mutation of someone else's event is answered
exactly like a missing event, so the API never reveals which ids
exist.

Request bodies are read as raw JSON and bound by ``services.binding``
rather than declared as typed parameters.  A body with wrong types, or
no body at all, therefore still reaches the service: an unknown id is
reported as not found whatever was sent, and type errors come back in
the same 400 ``ValidationMsg`` as every other validation problem.
"""

import json
import logging
from typing import AbstractSet, Any, List, Optional, Union

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse

from eventures.app.core.security import get_current_user
from eventures.app.schemas.common import ResponseMsg, ValidationMsg
from eventures.app.schemas.event import EventBindingModel, EventListingModel, EventPatchModel
from eventures.app.schemas.user import Principal
from eventures.app.services.binding import bind_event, invalid_messages
from eventures.app.services.event_service import EventService
from eventures.app.services.results import Forbidden, NotFound, Success, ValidationFailed, combine_messages

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ValidationMsg},
    status.HTTP_404_NOT_FOUND: {"model": ResponseMsg},
}


def json_body(model) -> dict:
    """OpenAPI request body for a handler that reads the payload itself."""
    schema = model.model_json_schema(by_alias=True)
    return {"requestBody": {"content": {"application/json": {"schema": schema}}}}


async def event_payload(request: Request) -> Any:
    """The decoded JSON body, or ``None`` if it is empty or not JSON."""
    body = await request.body()
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return None


def error_response(
    result: Union[NotFound, Forbidden, ValidationFailed], invalid: AbstractSet[str] = frozenset()
) -> JSONResponse:
    """Map a failed service result to its JSON error response.

    ``invalid`` names the fields dropped during binding; their
    "required" messages are reported as "invalid".
    """
    if isinstance(result, ValidationFailed):
        messages = invalid_messages(result.messages, set(invalid))
        body = ValidationMsg(message=combine_messages(messages), errors=list(messages))
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())
    if isinstance(result, Forbidden):
        logger.info("Reporting forbidden access to event #%s as not found", result.id)
    body = ResponseMsg(message=NotFound(result.id).message)
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=body.model_dump())


def listing_response(listing: EventListingModel, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=listing.model_dump(mode="json", by_alias=True))


@router.get("/count", response_model=int)
async def count_events() -> int:
    """Return the number of events.

    Public; clients use it to check that the API is reachable.
    """
    return await EventService.count_events()


@router.get("/", response_model=List[EventListingModel])
async def list_events(
    owner_id: Optional[int] = Query(None, alias="ownerId"),
    current_user: Principal = Depends(get_current_user),
) -> List[EventListingModel]:
    """List all events, or only the events of ``ownerId``."""
    events = await EventService.list_events(owner_id=owner_id)
    return [event.to_listing() for event in events]


@router.get("/{event_id}", response_model=EventListingModel, responses=ERROR_RESPONSES)
async def get_event(event_id: int, current_user: Principal = Depends(get_current_user)):
    result = await EventService.get_event(event_id)
    if not isinstance(result, Success):
        return error_response(result)
    return listing_response(result.payload.to_listing(), status.HTTP_200_OK)


@router.post(
    "/",
    response_model=EventListingModel,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    openapi_extra=json_body(EventBindingModel),
)
async def create_event(
    payload: Any = Depends(event_payload),
    current_user: Principal = Depends(get_current_user),
):
    """Create an event owned by the caller."""
    draft, invalid = bind_event(payload)
    result = await EventService.create_event(current_user, draft)
    if not isinstance(result, Success):
        return error_response(result, invalid)
    return listing_response(result.payload.to_listing(), status.HTTP_201_CREATED)


@router.put(
    "/{event_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=ERROR_RESPONSES,
    openapi_extra=json_body(EventBindingModel),
)
async def update_event(
    event_id: int,
    payload: Any = Depends(event_payload),
    current_user: Principal = Depends(get_current_user),
):
    """Replace all mutable fields of an event.  ``id`` and owner never change."""
    draft, invalid = bind_event(payload)
    result = await EventService.update_event(event_id, current_user, draft)
    if not isinstance(result, Success):
        return error_response(result, invalid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{event_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=ERROR_RESPONSES,
    openapi_extra=json_body(EventPatchModel),
)
async def patch_event(
    event_id: int,
    payload: Any = Depends(event_payload),
    current_user: Principal = Depends(get_current_user),
):
    """Update only the supplied fields of an event."""
    patch, invalid = bind_event(payload, EventPatchModel)
    result = await EventService.patch_event(event_id, current_user, patch)
    if not isinstance(result, Success):
        return error_response(result, invalid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{event_id}", response_model=EventListingModel, responses=ERROR_RESPONSES)
async def delete_event(event_id: int, current_user: Principal = Depends(get_current_user)):
    """Delete an event and return what was deleted."""
    result = await EventService.delete_event(event_id, current_user)
    if not isinstance(result, Success):
        return error_response(result)
    return listing_response(result.payload.to_listing(), status.HTTP_200_OK)
