import logging
from types import SimpleNamespace

import pytest

from location_admin.events import (
    CITY_MODULE_SCREEN_NAME,
    ContentEvent,
    ContentEventPayload,
    EventDispatcher,
    default_listeners,
)
from location_admin.exceptions import ContentEditVetoed


def _payload(**item):
    return ContentEventPayload(screen=CITY_MODULE_SCREEN_NAME, item=SimpleNamespace(**item))


def test_listeners_called_in_registration_order():
    calls = []
    dispatcher = EventDispatcher()
    dispatcher.listen(ContentEvent.CREATED, lambda p: calls.append(("first", p.item.id)))
    dispatcher.listen("created_content", lambda p: calls.append(("second", p.item.id)))
    dispatcher.listen(ContentEvent.DELETED, lambda p: calls.append(("deleted", p.item.id)))

    dispatcher.notify(ContentEvent.CREATED, _payload(id=7))
    assert calls == [("first", 7), ("second", 7)]


def test_failing_listener_is_logged_and_others_still_run(caplog):
    calls = []

    def boom(_payload):
        raise RuntimeError("listener down")

    dispatcher = EventDispatcher({ContentEvent.UPDATED: [boom, lambda p: calls.append(p.item.id)]})
    with caplog.at_level(logging.WARNING, logger="location_admin.events"):
        dispatcher.notify(ContentEvent.UPDATED, _payload(id=3))

    assert calls == [3]
    assert "failed for updated_content" in caplog.text


def test_before_edit_listener_can_veto():
    def veto(_payload):
        raise ContentEditVetoed("locked")

    dispatcher = EventDispatcher()
    dispatcher.listen(ContentEvent.BEFORE_EDIT, veto)
    with pytest.raises(ContentEditVetoed):
        dispatcher.notify(ContentEvent.BEFORE_EDIT, _payload(id=1))


def test_veto_outside_before_edit_is_ignored():
    def veto(_payload):
        raise ContentEditVetoed("too late")

    dispatcher = EventDispatcher({ContentEvent.DELETED: [veto]})
    dispatcher.notify(ContentEvent.DELETED, _payload(id=1))


def test_before_edit_listener_can_mutate_item():
    dispatcher = EventDispatcher()
    dispatcher.listen(ContentEvent.BEFORE_EDIT, lambda p: setattr(p.item, "name", p.item.name.upper()))
    payload = _payload(id=1, name="austin")
    dispatcher.notify(ContentEvent.BEFORE_EDIT, payload)
    assert payload.item.name == "AUSTIN"


def test_default_listeners_log_every_event(caplog):
    dispatcher = EventDispatcher(default_listeners())
    with caplog.at_level(logging.INFO, logger="location_admin.events"):
        for event in ContentEvent:
            dispatcher.notify(event, _payload(id=9))
    for event in ContentEvent:
        assert f"{event.value}: screen=city id=9" in caplog.text
