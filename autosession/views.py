"""Per-document view snapshots.

A view holds only the cursor position and folds of a document. It is written
when the document leaves its window or the application exits, and read back
when the document is shown again. This runs whether or not a session is
tracked.
"""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from .errors import ViewRestoreError
from .events import Event, EventBus, EventKind
from .host import Document, Host
from .paths import is_readable, resolve_view_path

logger = logging.getLogger(__name__)

VIEW_GROUP = "autosession.view"
VIEW_OPTIONS = "cursor,folds"
SAVE_EVENTS = (EventKind.DOCUMENT_LEAVING, EventKind.APP_EXITING)


class CapturePolicy:
    """Decides whether a document's view is restored."""

    def should_capture(self, document: Document) -> bool:
        raise NotImplementedError


class Always(CapturePolicy):
    def should_capture(self, document: Document) -> bool:
        return True


class Never(CapturePolicy):
    def should_capture(self, document: Document) -> bool:
        return False


@dataclass(frozen=True)
class Predicate(CapturePolicy):
    func: Callable[[Document], bool]

    def should_capture(self, document: Document) -> bool:
        return bool(self.func(document))


def capture_policy(mkview: bool | Callable[[Document], bool]) -> CapturePolicy:
    if callable(mkview):
        return Predicate(mkview)
    return Always() if mkview else Never()


@contextmanager
def narrowed_view_options(host: Host, options: str = VIEW_OPTIONS) -> Iterator[None]:
    """Limit what the host puts in a view, restoring the old setting after."""
    previous = host.view_options
    host.view_options = options
    try:
        yield
    finally:
        host.view_options = previous


class ViewManager:
    def __init__(
        self,
        host: Host,
        events: EventBus,
        session_dir: Path,
        policy: CapturePolicy,
    ):
        self.host = host
        self.events = events
        self.session_dir = session_dir
        self.policy = policy
        self._group = events.group(VIEW_GROUP)

    def install(self) -> None:
        self.events.clear(self._group)
        self.events.subscribe(
            {EventKind.DOCUMENT_OPENED}, self._on_open, self._group, named_only=True
        )
        self.events.subscribe(SAVE_EVENTS, self._on_leave, self._group, named_only=True)

    def uninstall(self) -> None:
        self.events.clear(self._group)

    def view_path(self, document: Document) -> Path:
        return resolve_view_path(document.path, self.session_dir)

    def restore(self, document: Document) -> bool:
        """Restore a document's saved view.

        Missing or broken view files are expected, for example on the first
        open of a document, and only logged.

        Returns:
            True if a view was applied
        """
        if not self.policy.should_capture(document):
            return False

        path = self.view_path(document)
        if not is_readable(path):
            return False

        try:
            self.host.restore_view(path)
        except Exception as e:
            error = ViewRestoreError(path, details={"reason": str(e)})
            logger.debug(f"[AUTOSESSION] {error}", exc_info=True)
            return False

        logger.debug(f"[AUTOSESSION] Restored view: {path}")
        return True

    def save(self, document: Document) -> Path:
        """Write the cursor and fold state of a document, overwriting."""
        path = self.view_path(document)
        with narrowed_view_options(self.host):
            self.host.save_view(path)
        logger.debug(f"[AUTOSESSION] Saved view: {path}")
        return path

    def _on_open(self, event: Event) -> None:
        if event.document is None:
            return
        self.restore(event.document)

    def _on_leave(self, event: Event) -> None:
        if event.document is None:
            return
        self.save(event.document)
