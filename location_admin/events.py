"""
Content lifecycle notifications.

Controllers call `notify(event, payload)`; the host application decides who
listens. Created/updated/deleted events are fire-and-forget. Before-edit
listeners run before the edit form renders and may mutate the item or veto
the edit by raising `ContentEditVetoed`.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Protocol

from location_admin.exceptions import ContentEditVetoed

logger = logging.getLogger(__name__)

CITY_MODULE_SCREEN_NAME = "city"


class ContentEvent(str, Enum):
    CREATED = "created_content"
    UPDATED = "updated_content"
    DELETED = "deleted_content"
    BEFORE_EDIT = "before_edit_content"


@dataclass
class ContentEventPayload:
    screen: str
    item: Any
    data: Dict[str, Any] = field(default_factory=dict)


Listener = Callable[[ContentEventPayload], None]


class Notifier(Protocol):
    def notify(self, event: ContentEvent, payload: ContentEventPayload) -> None: ...


class EventDispatcher:
    """In-process notifier fanning events out to registered listeners."""

    def __init__(self, listeners: Optional[Dict[ContentEvent, List[Listener]]] = None):
        self._listeners: Dict[ContentEvent, List[Listener]] = defaultdict(list)
        for event, registered in (listeners or {}).items():
            self._listeners[ContentEvent(event)].extend(registered)

    def listen(self, event: ContentEvent | str, listener: Listener) -> None:
        self._listeners[ContentEvent(event)].append(listener)

    def listeners_for(self, event: ContentEvent | str) -> List[Listener]:
        return list(self._listeners.get(ContentEvent(event), []))

    def notify(self, event: ContentEvent | str, payload: ContentEventPayload) -> None:
        event = ContentEvent(event)
        for listener in self.listeners_for(event):
            try:
                listener(payload)
            except ContentEditVetoed:
                if event is ContentEvent.BEFORE_EDIT:
                    raise
                logger.warning("Veto ignored for %s on %s", event.value, payload.screen)
            except Exception:
                logger.warning(
                    "Listener %r failed for %s on %s",
                    listener, event.value, payload.screen, exc_info=True,
                )


def log_content_event(event: ContentEvent) -> Listener:
    """Build a listener that writes one log line per event."""
    def _listener(payload: ContentEventPayload) -> None:
        logger.info(
            "%s: screen=%s id=%s",
            event.value, payload.screen, getattr(payload.item, "id", None),
        )
    return _listener


def default_listeners() -> Dict[ContentEvent, List[Listener]]:
    return {event: [log_content_event(event)] for event in ContentEvent}
