"""Outcome variants returned by the services.

Handlers inspect the variant and map it to a transport response; no
variant is raised as an exception.
"""

from dataclasses import dataclass
from typing import Any, Tuple

MESSAGE_SEPARATOR = "\r\n"


def combine_messages(messages) -> str:
    """Join validation messages into the single text shown to a user.

    Every message is preceded by the separator, so the result starts
    with a line break.
    """
    return "".join(f"{MESSAGE_SEPARATOR}{message}" for message in messages)


@dataclass(frozen=True)
class Success:
    payload: Any = None


@dataclass(frozen=True)
class NotFound:
    id: int

    @property
    def message(self) -> str:
        return f"Event #{self.id} not found."


@dataclass(frozen=True)
class Forbidden:
    """The principal does not own the event it tried to mutate."""

    id: int
    principal_id: int


@dataclass(frozen=True)
class ValidationFailed:
    messages: Tuple[str, ...]

    @property
    def message(self) -> str:
        return combine_messages(self.messages)


@dataclass(frozen=True)
class Conflict(ValidationFailed):
    """A unique value (username, email) is already in use."""
