"""Exceptions raised by autosession."""

from pathlib import Path
from typing import Any


class AutosessionError(Exception):
    def __init__(
        self,
        message: str,
        *,
        error_type: str = "unknown",
        is_recoverable: bool = False,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.error_type = error_type
        self.is_recoverable = is_recoverable
        self.details = details or {}

    def __str__(self) -> str:
        return f"{self.error_type}: {super().__str__()}"


class NotReadableError(AutosessionError):
    def __init__(self, path: Path, details: dict[str, Any] | None = None):
        super().__init__(
            f"Cannot load session, file not readable `{path}`",
            error_type="not_readable",
            is_recoverable=True,
            details={"path": str(path), **(details or {})},
        )
        self.path = path


class AlreadyTrackedError(AutosessionError):
    def __init__(self, path: Path, details: dict[str, Any] | None = None):
        super().__init__(
            f"Already tracking session in `{path}`",
            error_type="already_tracked",
            is_recoverable=True,
            details={"path": str(path), **(details or {})},
        )
        self.path = path


class RestrictedModeError(AutosessionError):
    """Raised by host adapters that cannot capture a snapshot right now.

    The session manager treats it as a skipped save, never as a failure.
    """

    def __init__(self, message: str = "Input is in a restricted mode"):
        super().__init__(message, error_type="restricted_mode", is_recoverable=True)


class ViewRestoreError(AutosessionError):
    def __init__(self, path: Path, details: dict[str, Any] | None = None):
        super().__init__(
            f"Could not restore view from `{path}`",
            error_type="view_restore",
            is_recoverable=True,
            details={"path": str(path), **(details or {})},
        )
        self.path = path


class ConfigError(AutosessionError):
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            error_type="invalid_config",
            is_recoverable=False,
            details=details,
        )


class CommandError(AutosessionError):
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            error_type="invalid_command",
            is_recoverable=False,
            details=details,
        )


class SnapshotError(AutosessionError):
    """A session file could not be written, read, or removed."""

    def __init__(self, path: Path, action: str, reason: str):
        super().__init__(
            f"Could not {action} session `{path}`: {reason}",
            error_type="snapshot_failed",
            is_recoverable=True,
            details={"path": str(path), "action": action, "reason": reason},
        )
        self.path = path
        self.action = action
