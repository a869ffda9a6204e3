"""
Pydantic models for event data.

``EventBindingModel`` is the draft a client submits for create and
update; every field is optional so that the event validator, not the
schema, decides what is missing.  ``EventListingModel`` is the
representation returned by the API, including the generated ``id``
and the owner's username.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class EventBindingModel(BaseModel):
    """Draft of the mutable event fields."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, examples=["Dev Conference"])
    place: Optional[str] = Field(None, examples=["Sofia"])
    start: Optional[datetime] = Field(None, examples=["2026-11-01T09:00:00"])
    end: Optional[datetime] = Field(None, examples=["2026-11-01T18:00:00"])
    total_tickets: Optional[int] = Field(None, alias="totalTickets", examples=[120])
    price_per_ticket: Optional[Decimal] = Field(None, alias="pricePerTicket", examples=["20.00"])


class EventPatchModel(EventBindingModel):
    """Partial update; only the fields present in the request are applied."""


class EventListingModel(BaseModel):
    """Schema for reading an event from the API."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    name: str
    place: str
    start: datetime
    end: datetime
    total_tickets: int = Field(..., alias="totalTickets")
    price_per_ticket: Decimal = Field(..., alias="pricePerTicket")
    owner: str
