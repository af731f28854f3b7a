"""Interface between autosession and the application hosting it.

The host adapter owns the layout and view serialisation formats. autosession
only decides when to save or restore and which file to use.
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, Literal, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """A document as seen by lifecycle events.

    Attributes:
        handle: Host identifier for the open document
        path: File path, empty for unnamed documents
        filetype: Host file type, used by view capture predicates
    """

    model_config = ConfigDict(frozen=True)

    handle: int
    path: str = Field(default="")
    filetype: str = Field(default="")

    @property
    def is_named(self) -> bool:
        return bool(self.path)


class CommandCall(BaseModel):
    """Arguments of a command invocation, already split by the host."""

    args: list[str] = Field(default_factory=list)
    bang: bool = Field(default=False)

    @property
    def file(self) -> str | None:
        return self.args[0] if self.args else None


class Command(BaseModel):
    """A user command declared to the host."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    callback: Callable[[CommandCall], Any]
    bang: bool = Field(default=False)
    nargs: Literal["0", "?"] = Field(default="0")
    complete: str | None = Field(default=None)


@runtime_checkable
class Host(Protocol):
    """Operations autosession needs from the application."""

    view_options: str

    def cwd(self) -> str: ...

    def argc(self) -> int:
        """Number of file arguments the application was started with."""
        ...

    def save_snapshot(self, path: Path) -> None: ...

    def restore_snapshot(self, path: Path) -> None:
        """May emit further lifecycle events while documents are reopened."""
        ...

    def save_view(self, path: Path) -> None: ...

    def restore_view(self, path: Path) -> None: ...

    def in_restricted_mode(self) -> bool: ...

    def notify(self, message: str, level: int) -> None: ...

    def register_command(self, command: Command) -> None: ...


NOTIFY_PREFIX = "autosession: "


def notify(host: Host, message: str, level: int = logging.INFO) -> None:
    host.notify(f"{NOTIFY_PREFIX}{message}", level)
