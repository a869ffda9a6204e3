"""
Binding of untrusted event payloads into drafts.

JSON bodies and HTML forms may hold values of the wrong type (``"abc"``
for the ticket count) or no usable body at all.  Binding never fails:
fields that cannot be parsed are dropped and reported back, and the
event validator then runs on what is left.  ``invalid_messages`` turns
the validator's "required" message for a dropped field into an
"invalid" one.
"""

from typing import Any, Iterable, List, Mapping, Optional, Set, Tuple, Type, TypeVar

from pydantic import ValidationError

from eventures.app.schemas.event import EventBindingModel

from .validation import EVENT_FIELDS

DraftT = TypeVar("DraftT", bound=EventBindingModel)

REQUIRED_SUFFIX = " field is required."


def _field_name(loc: Any) -> Optional[str]:
    for name, info in EventBindingModel.model_fields.items():
        if loc in (name, info.alias):
            return name
    return None


def bind_event(payload: Any, model: Type[DraftT] = EventBindingModel) -> Tuple[DraftT, Set[str]]:
    """Build a draft of type ``model`` from a mapping keyed by field name or alias.

    Keys that are absent stay unset, so a patch draft only carries what
    the caller sent.  Unknown keys such as ``id`` or ``ownerId`` are
    ignored.  Anything other than a mapping binds as an empty draft.
    """
    data = {}
    if isinstance(payload, Mapping):
        for key, value in payload.items():
            name = _field_name(key)
            if name is not None:
                data[name] = value
    try:
        return model.model_validate(data), set()
    except ValidationError as exc:
        invalid = {_field_name(err["loc"][0]) for err in exc.errors() if err["loc"]}
        invalid.discard(None)
        cleaned = {k: (None if k in invalid else v) for k, v in data.items()}
        return model.model_validate(cleaned), invalid


def invalid_messages(messages: Iterable[str], invalid: Set[str]) -> Tuple[str, ...]:
    labels = {dict(EVENT_FIELDS)[attr] for attr in invalid}
    result: List[str] = []
    for message in messages:
        label = message[: -len(REQUIRED_SUFFIX)] if message.endswith(REQUIRED_SUFFIX) else None
        result.append(f"{label} field is invalid." if label in labels else message)
    return tuple(result)
