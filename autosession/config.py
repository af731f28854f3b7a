"""Configuration for autosession."""

import os
import sys
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError

from .errors import ConfigError
from .host import Document

EXCLUDED_VIEW_FILETYPES = ("help", "man")


def xdg_state_home() -> Path:
    """Return the XDG state home directory.

    Uses ``$XDG_STATE_HOME`` if set, otherwise ``%LOCALAPPDATA%`` on Windows
    and ``~/.local/state`` elsewhere.
    """
    xdg = os.environ.get("XDG_STATE_HOME")
    if xdg:
        return Path(xdg)

    if sys.platform == "win32":
        local = os.environ.get("LOCALAPPDATA")
        if local:
            return Path(local)
        return Path.home() / "AppData" / "Local"

    return Path.home() / ".local" / "state"


def default_session_dir() -> Path:
    return xdg_state_home() / "autosession" / "sessions"


def default_mkview(document: Document) -> bool:
    return document.filetype not in EXCLUDED_VIEW_FILETYPES


class AutosessionConfig(BaseModel):
    """User options, validated once at setup and immutable afterwards.

    Attributes:
        auto_load: Load or start the session for the working directory when
            the application starts without file arguments
        create_user_commands: Register SessionLoad, SessionStart and
            SessionStop with the host
        mkview: Save and restore document views. Either a boolean or a
            predicate deciding per document whether to restore its view
        session_dir: Directory holding session and view files
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    auto_load: StrictBool = Field(default=True)
    create_user_commands: StrictBool = Field(default=True)
    mkview: StrictBool | Callable[[Document], bool] = Field(default=default_mkview)
    session_dir: Path = Field(default_factory=default_session_dir)

    @classmethod
    def from_options(
        cls, options: "Mapping[str, Any] | AutosessionConfig | None" = None
    ) -> "AutosessionConfig":
        """Merge user options over the defaults.

        Raises:
            ConfigError: If an option has the wrong type
        """
        if isinstance(options, AutosessionConfig):
            return options
        try:
            return cls.model_validate(dict(options or {}))
        except ValidationError as e:
            raise ConfigError(
                f"Invalid autosession options: {e.error_count()} error(s)",
                details={"errors": e.errors(include_url=False)},
            ) from e
