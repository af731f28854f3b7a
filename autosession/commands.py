"""User commands for managing the session by hand.

``SessionLoad[!] [FILE]``
    Load a session from FILE, or the default file for the working directory.
    With ``!`` the session is reloaded even if it is already tracked.

``SessionStart[!] [FILE]``
    Start tracking a new session stored in FILE, or the default file for the
    working directory. With ``!`` the session is restarted and overwritten
    even if it is already tracked.

``SessionStop``
    Stop tracking the current session, deleting its file.
"""

import logging

from .errors import AutosessionError
from .host import Command, CommandCall, Host, notify
from .sessions import SessionManager

logger = logging.getLogger(__name__)


def session_load(host: Host, sessions: SessionManager, call: CommandCall) -> None:
    try:
        sessions.load(call.file, force=call.bang)
    except AutosessionError as e:
        logger.info(f"[AUTOSESSION] SessionLoad failed: {e}")
        notify(host, e.args[0], logging.ERROR)


def session_start(host: Host, sessions: SessionManager, call: CommandCall) -> None:
    try:
        session_file = sessions.start(call.file, force=call.bang)
    except AutosessionError as e:
        logger.info(f"[AUTOSESSION] SessionStart failed: {e}")
        notify(host, e.args[0], logging.ERROR)
        return
    notify(host, f"Tracking session in `{session_file}`")


def session_stop(host: Host, sessions: SessionManager, call: CommandCall) -> None:
    try:
        session_file = sessions.stop()
    except AutosessionError as e:
        logger.info(f"[AUTOSESSION] SessionStop failed: {e}")
        notify(host, e.args[0], logging.ERROR)
        return
    if session_file is None:
        notify(host, "No session is being tracked", logging.WARNING)
        return
    notify(host, f"Deleted session `{session_file}`")


def user_commands(host: Host, sessions: SessionManager) -> list[Command]:
    """Build the SessionLoad, SessionStart and SessionStop commands."""
    return [
        Command(
            name="SessionLoad",
            description="Load session from a file",
            callback=lambda call: session_load(host, sessions, call),
            bang=True,
            nargs="?",
            complete="file",
        ),
        Command(
            name="SessionStart",
            description="Start tracking session",
            callback=lambda call: session_start(host, sessions, call),
            bang=True,
            nargs="?",
            complete="file",
        ),
        Command(
            name="SessionStop",
            description="Stop tracking session",
            callback=lambda call: session_stop(host, sessions, call),
        ),
    ]
