"""Lifecycle event bus with revocable hook groups.

Host adapters translate their own lifecycle notifications into ``Event``
objects and pass them to ``EventBus.emit``. Hooks are always registered into
an ``EventGroup`` so a feature can drop all of its hooks at once::

    bus = EventBus()
    group = bus.group("autosession.session")
    bus.subscribe({EventKind.DOCUMENT_ENTERED}, on_enter, group)
    bus.emit(Event(kind=EventKind.DOCUMENT_ENTERED))
    bus.clear(group)
"""

import logging
import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .host import Document

logger = logging.getLogger(__name__)


class EventKind(Enum):
    APP_STARTED = "app_started"
    DOCUMENT_ENTERED = "document_entered"
    DOCUMENT_OPENED = "document_opened"
    DOCUMENT_LEAVING = "document_leaving"
    APP_EXITING = "app_exiting"


class Event(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: EventKind
    document: Document | None = Field(default=None)

    @property
    def is_named(self) -> bool:
        return self.document is not None and self.document.is_named


Handler = Callable[[Event], None]


@dataclass(frozen=True)
class EventGroup:
    """Handle for a set of hook registrations."""

    name: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])


@dataclass(frozen=True)
class Registration:
    kind: EventKind
    handler: Handler
    group: EventGroup
    named_only: bool = False


class EventBus:
    """Registry of event kind to ordered handlers."""

    def __init__(self) -> None:
        self._by_kind: dict[EventKind, list[Registration]] = {}
        self._groups: dict[str, EventGroup] = {}

    def group(self, name: str, clear: bool = True) -> EventGroup:
        """Get or create a named group.

        Args:
            name: Group name
            clear: Revoke existing hooks of a group with the same name

        Returns:
            The group handle
        """
        existing = self._groups.get(name)
        if existing is not None:
            if clear:
                self.clear(existing)
            return existing

        group = EventGroup(name=name)
        self._groups[name] = group
        return group

    def subscribe(
        self,
        kinds: Iterable[EventKind],
        handler: Handler,
        group: EventGroup,
        named_only: bool = False,
    ) -> None:
        """Register a handler for each of the given event kinds.

        Args:
            kinds: Event kinds to listen for
            handler: Called with the event
            group: Group the registrations belong to
            named_only: Skip events without a named document
        """
        for kind in kinds:
            registration = Registration(
                kind=kind, handler=handler, group=group, named_only=named_only
            )
            self._by_kind.setdefault(kind, []).append(registration)
            logger.debug(f"[AUTOSESSION] Hook added to {group.name} for {kind.value}")

    def clear(self, group: EventGroup) -> int:
        """Revoke every hook in a group.

        Returns:
            Number of registrations removed
        """
        removed = 0
        for kind, registrations in self._by_kind.items():
            kept = [r for r in registrations if r.group != group]
            removed += len(registrations) - len(kept)
            self._by_kind[kind] = kept
        if removed:
            logger.debug(f"[AUTOSESSION] Cleared {removed} hooks from {group.name}")
        return removed

    def emit(self, event: Event) -> None:
        # Snapshot so handlers may emit or clear while we dispatch.
        registrations = list(self._by_kind.get(event.kind, []))
        for registration in registrations:
            if registration not in self._by_kind.get(event.kind, []):
                continue
            if registration.named_only and not event.is_named:
                continue
            registration.handler(event)

    def handlers(self, kind: EventKind) -> list[Handler]:
        return [r.handler for r in self._by_kind.get(kind, [])]

    def count(self, kind: EventKind, group: EventGroup | None = None) -> int:
        return sum(
            1
            for r in self._by_kind.get(kind, [])
            if group is None or r.group == group
        )
