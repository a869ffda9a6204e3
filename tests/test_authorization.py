import logging

from eventures.app.schemas.user import Principal
from eventures.app.services.authorization import Action, authorize


def test_owner_may_update_and_delete(seeded_events, maria):
    event = seeded_events[0]
    assert authorize(maria, event, Action.UPDATE)
    assert authorize(maria, event, Action.DELETE)


def test_other_user_is_refused_and_logged(seeded_events, peter, caplog):
    event = seeded_events[0]
    with caplog.at_level(logging.WARNING, logger="eventures.app.services.authorization"):
        assert not authorize(peter, event, Action.DELETE)
    assert "may not delete event" in caplog.text


def test_decision_depends_only_on_ids(seeded_events, maria):
    impostor = Principal(id=maria.id, username="someone-else")
    assert authorize(impostor, seeded_events[0], Action.UPDATE)
