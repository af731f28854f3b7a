"""Startup policy: resume the session for the working directory or create it."""

import logging
from pathlib import Path

from .errors import AutosessionError
from .events import Event, EventBus, EventKind
from .host import Host, notify
from .paths import is_readable
from .sessions import SessionManager

logger = logging.getLogger(__name__)

STARTUP_GROUP = "autosession.startup"


def bootstrap(sessions: SessionManager) -> Path:
    """Load the default session if it exists, otherwise start it."""
    session_file = sessions.resolve()
    if is_readable(session_file):
        return sessions.load(session_file)
    return sessions.start()


def arm_bootstrap(host: Host, events: EventBus, sessions: SessionManager) -> bool:
    """Run the bootstrap once the application has started.

    Nothing is armed when the application was given file arguments.

    Returns:
        True if the startup hook was registered
    """
    if host.argc() != 0:
        logger.debug("[AUTOSESSION] Started with file arguments, not auto-loading")
        return False

    group = events.group(STARTUP_GROUP)

    def on_started(event: Event) -> None:
        events.clear(group)
        try:
            session_file = bootstrap(sessions)
        except AutosessionError as e:
            logger.error(f"[AUTOSESSION] Bootstrap failed: {e}")
            notify(host, e.args[0], logging.ERROR)
            return
        if sessions.current and sessions.current.origin == "start":
            notify(host, f"Tracking session in `{session_file}`")

    events.subscribe({EventKind.APP_STARTED}, on_started, group)
    return True
