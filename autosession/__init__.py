"""Automatic per-directory sessions.

Launching the application with no file arguments resumes the session saved
for the working directory, or starts one. While a session is tracked the
layout is saved on every document enter and on exit. Document views (cursor
and folds) are saved and restored independently of sessions.

Usage::

    from autosession import setup

    autosession = setup(host, {"session_dir": "~/.local/state/sessions"})
    autosession.events.emit(Event(kind=EventKind.APP_STARTED))
"""

__all__ = [
    "setup",
    "Autosession",
    "AutosessionConfig",
    "AutosessionError",
    "AlreadyTrackedError",
    "CommandCall",
    "CommandError",
    "ConfigError",
    "Document",
    "Event",
    "EventBus",
    "EventKind",
    "Host",
    "NotReadableError",
    "SessionManager",
    "SnapshotError",
    "TrackedSession",
    "ViewManager",
]

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .bootstrap import STARTUP_GROUP, arm_bootstrap
from .commands import user_commands
from .config import AutosessionConfig
from .errors import (
    AlreadyTrackedError,
    AutosessionError,
    CommandError,
    ConfigError,
    NotReadableError,
    SnapshotError,
)
from .events import Event, EventBus, EventKind
from .host import Command, CommandCall, Document, Host
from .paths import view_dir
from .sessions import SessionManager, TrackedSession
from .views import ViewManager, capture_policy

logger = logging.getLogger(__name__)


def setup(
    host: Host,
    options: Mapping[str, Any] | AutosessionConfig | None = None,
    events: EventBus | None = None,
) -> "Autosession":
    """Create the session directories and install autosession on a host.

    Args:
        host: Application adapter.
        options: User options merged over the defaults.
        events: Bus the host emits lifecycle events on. A new one is created
            when omitted.

    Returns:
        The installed Autosession.

    Raises:
        ConfigError: If the options are invalid.
    """
    config = AutosessionConfig.from_options(options)
    autosession = Autosession(host, config, events or EventBus())
    autosession.install()
    return autosession


class Autosession:
    """Top-level context owning the session and view managers."""

    def __init__(self, host: Host, config: AutosessionConfig, events: EventBus):
        self.host = host
        self.config = config
        self.events = events
        self.session_dir = Path(config.session_dir).expanduser()

        self.sessions = SessionManager(host, events, self.session_dir)
        self.views: ViewManager | None = None
        if config.mkview is not False:
            self.views = ViewManager(
                host, events, self.session_dir, capture_policy(config.mkview)
            )
        self.commands: dict[str, Command] = {
            command.name: command for command in user_commands(host, self.sessions)
        }

    def install(self) -> None:
        self.session_dir.mkdir(parents=True, exist_ok=True)

        if self.config.create_user_commands:
            for command in self.commands.values():
                self.host.register_command(command)

        if self.config.auto_load:
            arm_bootstrap(self.host, self.events, self.sessions)

        if self.views is not None:
            view_dir(self.session_dir).mkdir(parents=True, exist_ok=True)
            self.views.install()

        logger.info(f"[AUTOSESSION] Installed, session dir: {self.session_dir}")

    def teardown(self) -> None:
        """Revoke every hook registered by autosession.

        The tracked session file is left on disk.
        """
        self.events.clear(self.events.group(STARTUP_GROUP, clear=False))
        self.sessions.disarm()
        if self.views is not None:
            self.views.uninstall()

    def run_command(
        self, name: str, args: list[str] | None = None, bang: bool = False
    ) -> None:
        """Invoke a user command by name.

        Raises:
            CommandError: If no such command exists.
        """
        command = self.commands.get(name)
        if command is None:
            raise CommandError(f"Unknown command `{name}`", details={"name": name})
        command.callback(CommandCall(args=args or [], bang=bang))
