"""Session state models for autosession."""

from datetime import datetime
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class TrackedSession(BaseModel):
    """The session currently being auto-saved.

    Attributes:
        path: Backing file of the session
        origin: Whether tracking began with a load or a start
        tracked_at: When tracking began
        saved_at: When the snapshot was last written
        saves: Number of snapshots written while tracked
    """

    path: Path
    origin: Literal["load", "start"]
    tracked_at: datetime = Field(default_factory=datetime.now)
    saved_at: datetime | None = Field(default=None)
    saves: int = Field(default=0)

    def record_save(self) -> None:
        self.saves += 1
        self.saved_at = datetime.now()
