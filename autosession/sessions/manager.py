"""Tracking of the per-directory session.

The manager is either untracked or tracking exactly one backing file. While
tracking, every document enter and application exit rewrites the snapshot.
"""

import logging
from pathlib import Path

from ..errors import (
    AlreadyTrackedError,
    AutosessionError,
    NotReadableError,
    RestrictedModeError,
    SnapshotError,
)
from ..events import Event, EventBus, EventKind
from ..host import Host, notify
from ..paths import is_readable, resolve_session_path
from .models import TrackedSession

logger = logging.getLogger(__name__)

SESSION_GROUP = "autosession.session"
PERSIST_EVENTS = (EventKind.DOCUMENT_ENTERED, EventKind.APP_EXITING)


class SessionManager:
    """Manager for loading, starting, and stopping the tracked session.

    Handles session lifecycle including:
    - Resolving the session file for the working directory
    - Restoring a saved layout and tracking its file
    - Creating or overwriting a session file and tracking it
    - Auto-saving the layout while a session is tracked
    - Untracking and deleting the backing file
    """

    def __init__(self, host: Host, events: EventBus, session_dir: Path):
        """Initialize session manager.

        Args:
            host: Application adapter providing the snapshot primitives
            events: Bus the auto-save hooks are registered on
            session_dir: Directory holding derived session files
        """
        self.host = host
        self.events = events
        self.session_dir = session_dir
        self._current: TrackedSession | None = None
        self._group = events.group(SESSION_GROUP)

    @property
    def current(self) -> TrackedSession | None:
        return self._current

    @property
    def tracked_path(self) -> Path | None:
        return self._current.path if self._current else None

    @property
    def is_tracking(self) -> bool:
        return self._current is not None

    def resolve(self, explicit: str | Path | None = None) -> Path:
        """Get the session file for an explicit path or the working directory."""
        return resolve_session_path(explicit, self.host.cwd(), self.session_dir)

    def load(self, explicit: str | Path | None = None, force: bool = False) -> Path:
        """Restore a session and start tracking it.

        Args:
            explicit: Session file to load, defaults to the working directory's
            force: Reload even if the file is already tracked

        Returns:
            Path of the loaded session

        Raises:
            NotReadableError: If the session file cannot be read
            AlreadyTrackedError: If the file is tracked and force is not set
            SnapshotError: If the host fails to restore the layout
        """
        target = self.resolve(explicit)
        if not is_readable(target):
            raise NotReadableError(target)
        if not force and self.tracked_path == target:
            raise AlreadyTrackedError(target)

        try:
            self.host.restore_snapshot(target)
        except AutosessionError:
            raise
        except Exception as e:
            raise SnapshotError(target, "load", str(e)) from e
        self._track(target, origin="load")
        logger.info(f"[AUTOSESSION] Loaded session: {target}")
        return target

    def start(self, explicit: str | Path | None = None, force: bool = False) -> Path:
        """Write a new session file and start tracking it.

        An existing file at the target is overwritten.

        Args:
            explicit: Session file to write, defaults to the working directory's
            force: Restart even if the file is already tracked

        Returns:
            Path of the started session

        Raises:
            AlreadyTrackedError: If the file is tracked and force is not set
            SnapshotError: If the session file cannot be written
        """
        target = self.resolve(explicit)
        if not force and self.tracked_path == target:
            raise AlreadyTrackedError(target)

        self._write(target)
        self._track(target, origin="start")
        logger.info(f"[AUTOSESSION] Tracking session: {target}")
        return target

    def stop(self) -> Path | None:
        """Stop tracking and delete the backing file.

        Returns:
            Path of the deleted session, None if nothing was tracked

        Raises:
            SnapshotError: If the file cannot be deleted, tracking is kept
        """
        session = self._current
        if session is None:
            self.disarm()
            logger.warning("[AUTOSESSION] Stop requested with no tracked session")
            return None

        if not session.path.exists():
            logger.warning(f"[AUTOSESSION] Session file already gone: {session.path}")
        try:
            session.path.unlink(missing_ok=True)
        except OSError as e:
            raise SnapshotError(session.path, "delete", str(e)) from e

        self.disarm()
        self._current = None
        logger.info(f"[AUTOSESSION] Deleted session: {session.path}")
        return session.path

    def save(self) -> bool:
        """Write the layout to the tracked session file.

        Returns:
            True if a snapshot was written
        """
        if self._current is None:
            return False
        if not self._write(self._current.path):
            return False
        self._current.record_save()
        return True

    def _write(self, path: Path) -> bool:
        if self.host.in_restricted_mode():
            logger.debug(f"[AUTOSESSION] Restricted mode, skipping save: {path}")
            return False
        try:
            self.host.save_snapshot(path)
        except RestrictedModeError:
            logger.debug(f"[AUTOSESSION] Host refused save, skipping: {path}")
            return False
        except AutosessionError:
            raise
        except Exception as e:
            raise SnapshotError(path, "save", str(e)) from e
        logger.debug(f"[AUTOSESSION] Saved session: {path}")
        return True

    def _track(self, path: Path, origin: str) -> None:
        self._current = TrackedSession(path=path, origin=origin)
        self._arm()

    def _arm(self) -> None:
        # Clear first so repeated load/start never stack hooks.
        self.disarm()
        self.events.subscribe(PERSIST_EVENTS, self._on_persist_event, self._group)

    def disarm(self) -> None:
        """Remove the auto-save hooks without changing what is tracked."""
        self.events.clear(self._group)

    def _on_persist_event(self, event: Event) -> None:
        try:
            self.save()
        except SnapshotError as e:
            logger.error(f"[AUTOSESSION] Auto-save failed: {e}")
            notify(self.host, e.args[0], logging.ERROR)
