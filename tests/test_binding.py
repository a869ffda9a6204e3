from eventures.app.schemas.event import EventPatchModel
from eventures.app.services.binding import bind_event, invalid_messages


def test_binds_aliases_and_field_names():
    draft, invalid = bind_event({"totalTickets": "5", "price_per_ticket": "1.50", "name": "Gig"})
    assert invalid == set()
    assert draft.total_tickets == 5
    assert str(draft.price_per_ticket) == "1.50"
    assert draft.name == "Gig"


def test_unknown_keys_are_ignored():
    draft, _ = bind_event({"id": 999, "ownerId": 7, "owner": "peter", "place": "Varna"})
    assert draft.model_dump(exclude_unset=True) == {"place": "Varna"}


def test_non_mapping_payloads_bind_as_empty_drafts():
    for payload in (None, [], "text", 42):
        draft, invalid = bind_event(payload)
        assert draft.model_dump(exclude_unset=True) == {}
        assert invalid == set()


def test_unparseable_values_are_dropped_and_reported():
    draft, invalid = bind_event({"totalTickets": "abc", "start": "yesterday", "place": "Sofia"})
    assert invalid == {"total_tickets", "start"}
    assert draft.total_tickets is None
    assert draft.start is None
    assert draft.place == "Sofia"


def test_patch_keeps_only_sent_fields():
    patch, invalid = bind_event({"pricePerTicket": "cheap"}, EventPatchModel)
    assert isinstance(patch, EventPatchModel)
    assert patch.model_dump(exclude_unset=True) == {"price_per_ticket": None}
    assert invalid == {"price_per_ticket"}


def test_invalid_messages_only_rewrite_dropped_fields():
    messages = ("Name field is required.", "Total Tickets field is required.", "End must not be before Start.")
    assert invalid_messages(messages, {"total_tickets"}) == (
        "Name field is required.",
        "Total Tickets field is invalid.",
        "End must not be before Start.",
    )
