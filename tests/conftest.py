"""Shared fixtures: an in-memory host that writes real snapshot files."""

import json
from pathlib import Path

import pytest  # type: ignore[import-not-found]

from autosession import Document, Event, EventBus, EventKind, setup
from autosession.host import Command


class FakeHost:
    """Minimal application stand-in.

    The layout is a list of open document paths. Views are per-document
    cursor positions. Both are stored as JSON so tests can inspect them.
    """

    def __init__(self, cwd: str, argc: int = 0):
        self._cwd = cwd
        self._argc = argc
        self.view_options = "cursor,folds,options,curdir"
        self.restricted = False
        self.layout: list[str] = []
        self.cursors: dict[str, list[int]] = {}
        self.current: Document | None = None
        self.events: EventBus | None = None

        self.saves: list[Path] = []
        self.restores: list[Path] = []
        self.view_saves: list[tuple[Path, str]] = []
        self.view_restores: list[Path] = []
        self.notifications: list[tuple[str, int]] = []
        self.commands: dict[str, Command] = {}

    def cwd(self) -> str:
        return self._cwd

    def argc(self) -> int:
        return self._argc

    def set_argc(self, argc: int) -> None:
        self._argc = argc

    def save_snapshot(self, path: Path) -> None:
        path.write_text(json.dumps({"documents": self.layout}))
        self.saves.append(path)

    def restore_snapshot(self, path: Path) -> None:
        self.restores.append(path)
        self.layout = json.loads(path.read_text())["documents"]
        for handle, doc_path in enumerate(self.layout, start=1):
            self.open(Document(handle=handle, path=doc_path))

    def save_view(self, path: Path) -> None:
        assert self.current is not None
        payload = {"view_options": self.view_options}
        payload["cursor"] = self.cursors.get(self.current.path, [1, 0])
        path.write_text(json.dumps(payload))
        self.view_saves.append((path, self.view_options))

    def restore_view(self, path: Path) -> None:
        assert self.current is not None
        self.view_restores.append(path)
        data = json.loads(path.read_text())
        self.cursors[self.current.path] = data["cursor"]

    def in_restricted_mode(self) -> bool:
        return self.restricted

    def notify(self, message: str, level: int) -> None:
        self.notifications.append((message, level))

    def register_command(self, command: Command) -> None:
        self.commands[command.name] = command

    # Event helpers

    def emit(self, kind: EventKind, document: Document | None = None) -> None:
        assert self.events is not None
        self.events.emit(Event(kind=kind, document=document))

    def open(self, document: Document) -> None:
        self.current = document
        if document.path and document.path not in self.layout:
            self.layout.append(document.path)
        self.emit(EventKind.DOCUMENT_OPENED, document)
        self.emit(EventKind.DOCUMENT_ENTERED, document)

    def close(self, document: Document) -> None:
        self.current = document
        self.emit(EventKind.DOCUMENT_LEAVING, document)
        if document.path in self.layout:
            self.layout.remove(document.path)
        self.current = None

    def exit(self) -> None:
        self.emit(EventKind.APP_EXITING, self.current)


@pytest.fixture
def session_dir(tmp_path: Path) -> Path:
    return tmp_path / "sessions"


@pytest.fixture
def host() -> FakeHost:
    return FakeHost(cwd="/home/u/proj")


@pytest.fixture
def bus(host: FakeHost) -> EventBus:
    events = EventBus()
    host.events = events
    return events


@pytest.fixture
def autosession(host: FakeHost, bus: EventBus, session_dir: Path):
    return setup(host, {"session_dir": session_dir}, events=bus)
