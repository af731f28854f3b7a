"""Session management for autosession.

Tracks the session file of the working directory and keeps it saved.
"""

from .manager import SessionManager
from .models import TrackedSession

__all__ = ["SessionManager", "TrackedSession"]
