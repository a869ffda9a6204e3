"""
Field validation for drafts submitted by clients.

Validators are pure functions: they look at a draft and return the
list of human‑readable problems in field declaration order, or an
empty list.  Every check runs; nothing stops at the first failure, so
a caller can report all problems in one message.  Presence checks for
every field come first, then format and range checks.

The same registration validator is used by the API and by the client
before it sends anything over the network.
"""

from decimal import Decimal
from typing import Any, List, Optional, Sequence, Tuple

# (attribute, label) in the order messages must appear.
EVENT_FIELDS: Sequence[Tuple[str, str]] = (
    ("name", "Name"),
    ("place", "Place"),
    ("start", "Start"),
    ("end", "End"),
    ("total_tickets", "Total Tickets"),
    ("price_per_ticket", "Price Per Ticket"),
)

# SQLite INTEGER is a signed 64-bit value.
MAX_TOTAL_TICKETS = 2**63 - 1

REGISTRATION_FIELDS: Sequence[Tuple[str, str]] = (
    ("username", "Username"),
    ("email", "Email"),
    ("password", "Password"),
    ("confirm_password", "Confirm Password"),
    ("first_name", "First Name"),
    ("last_name", "Last Name"),
)


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def required_messages(draft: Any, fields: Sequence[Tuple[str, str]]) -> List[str]:
    return [
        f"{label} field is required."
        for attr, label in fields
        if is_missing(getattr(draft, attr, None))
    ]


def validate_event(draft: Any) -> List[str]:
    """Return the problems with an event draft.

    ``draft`` is anything exposing the ``EVENT_FIELDS`` attributes,
    normally an ``EventBindingModel``.
    """
    messages = required_messages(draft, EVENT_FIELDS)

    total_tickets: Optional[int] = draft.total_tickets
    if total_tickets is not None and total_tickets <= 0:
        messages.append("Total Tickets must be a positive number.")
    elif total_tickets is not None and total_tickets > MAX_TOTAL_TICKETS:
        messages.append("Total Tickets is too large.")

    price: Optional[Decimal] = draft.price_per_ticket
    if price is not None and Decimal(price) < 0:
        messages.append("Price Per Ticket must not be negative.")

    if draft.start is not None and draft.end is not None:
        try:
            end_before_start = draft.end < draft.start
        except TypeError:
            # naive and aware datetimes cannot be ordered
            messages.append("Start and End must use the same time zone format.")
        else:
            if end_before_start:
                messages.append("End must not be before Start.")
    return messages


def validate_registration(draft: Any) -> List[str]:
    """Return the problems with a registration draft."""
    messages = required_messages(draft, REGISTRATION_FIELDS)
    if not is_missing(draft.email) and "@" not in draft.email:
        messages.append("Email is invalid.")
    if (
        not is_missing(draft.password)
        and not is_missing(draft.confirm_password)
        and draft.password != draft.confirm_password
    ):
        messages.append("Passwords do not match.")
    return messages
