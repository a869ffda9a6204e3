"""Payloads shared by every endpoint."""

from typing import List

from pydantic import BaseModel, Field


class ResponseMsg(BaseModel):
    """Plain message body returned with error responses."""

    message: str = Field(..., examples=["Event #1 not found."])


class ValidationMsg(ResponseMsg):
    """Error body for rejected drafts.

    ``message`` holds the combined text a client can show as a single
    alert; ``errors`` holds the individual messages in field order.
    """

    errors: List[str] = Field(default_factory=list)
