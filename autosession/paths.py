"""Session and view file naming.

A working directory maps to a session file by escaping every path separator
into ``%`` and appending ``.vim``::

    /home/u/proj  ->  {session_dir}/%home%u%proj.vim

View files for documents use the same scheme under ``{session_dir}/view``.
No other normalisation is done, so two paths that differ only by a literal
``%`` where the other has a separator resolve to the same file.
"""

import os
from pathlib import Path

ESCAPE_CHAR = "%"
SESSION_EXTENSION = ".vim"
VIEW_SUBDIR = "view"

_SEPARATORS = {"/", os.sep} | ({os.altsep} if os.altsep else set())


def escape_path(path: str | Path) -> str:
    """Flatten a path into a single file name component."""
    escaped = str(path)
    for sep in _SEPARATORS:
        escaped = escaped.replace(sep, ESCAPE_CHAR)
    return escaped


def resolve_session_path(
    explicit: str | Path | None, cwd: str | Path, session_dir: Path
) -> Path:
    """Get the session file for a working directory.

    Args:
        explicit: Caller supplied session file, returned as-is when given
        cwd: Working directory the session belongs to
        session_dir: Directory holding derived session files

    Returns:
        Path to the session file
    """
    if explicit:
        return Path(explicit)
    return session_dir / f"{escape_path(cwd)}{SESSION_EXTENSION}"


def view_dir(session_dir: Path) -> Path:
    return session_dir / VIEW_SUBDIR


def resolve_view_path(document_path: str | Path, session_dir: Path) -> Path:
    """Get the view snapshot file for a document."""
    return view_dir(session_dir) / f"{escape_path(document_path)}{SESSION_EXTENSION}"


def is_readable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.R_OK)
