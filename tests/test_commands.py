"""Tests for the SessionLoad, SessionStart and SessionStop commands."""

import logging
from pathlib import Path

import pytest  # type: ignore[import-not-found]

from autosession import CommandCall, CommandError, setup


def test_commands_registered_with_host(autosession, host):
    assert set(host.commands) == {"SessionLoad", "SessionStart", "SessionStop"}
    assert host.commands["SessionLoad"].bang is True
    assert host.commands["SessionLoad"].nargs == "?"
    assert host.commands["SessionLoad"].complete == "file"
    assert host.commands["SessionStop"].nargs == "0"
    assert host.commands["SessionStop"].bang is False


def test_commands_not_registered_when_disabled(host, bus, session_dir):
    autosession = setup(
        host,
        {"session_dir": session_dir, "create_user_commands": False},
        events=bus,
    )

    assert host.commands == {}
    assert "SessionStart" in autosession.commands


def test_session_start_notifies(autosession, host, session_dir):
    autosession.run_command("SessionStart")

    default_path = session_dir / "%home%u%proj.vim"
    assert autosession.sessions.tracked_path == default_path
    assert host.notifications == [
        (f"autosession: Tracking session in `{default_path}`", logging.INFO)
    ]


def test_session_start_twice_reports_error(autosession, host, session_dir):
    autosession.run_command("SessionStart")
    autosession.run_command("SessionStart")

    message, level = host.notifications[-1]
    assert message.startswith("autosession: Already tracking session in")
    assert level == logging.ERROR


def test_session_start_bang_forces(autosession, host):
    autosession.run_command("SessionStart")
    autosession.run_command("SessionStart", bang=True)

    assert len(host.saves) == 2
    assert all(level == logging.INFO for _, level in host.notifications)


def test_session_start_with_file(autosession, host, tmp_path):
    target = tmp_path / "named.vim"

    autosession.run_command("SessionStart", [str(target)])

    assert autosession.sessions.tracked_path == target
    assert target.exists()


def test_session_load_missing_reports_error(autosession, host, session_dir):
    autosession.run_command("SessionLoad")

    default_path = session_dir / "%home%u%proj.vim"
    assert host.notifications == [
        (
            f"autosession: Cannot load session, file not readable `{default_path}`",
            logging.ERROR,
        )
    ]
    assert autosession.sessions.tracked_path is None


def test_session_load_with_file(autosession, host, tmp_path):
    target = tmp_path / "saved.vim"
    target.write_text('{"documents": []}')

    autosession.run_command("SessionLoad", [str(target)])

    assert autosession.sessions.tracked_path == target
    assert host.restores == [target]


def test_session_load_bang_reloads(autosession, host, session_dir):
    autosession.run_command("SessionStart")
    autosession.run_command("SessionLoad", bang=True)

    assert host.restores == [session_dir / "%home%u%proj.vim"]


def test_session_stop_notifies(autosession, host, session_dir):
    autosession.run_command("SessionStart")
    host.notifications.clear()

    autosession.run_command("SessionStop")

    default_path = session_dir / "%home%u%proj.vim"
    assert not default_path.exists()
    assert host.notifications == [
        (f"autosession: Deleted session `{default_path}`", logging.INFO)
    ]


def test_session_stop_untracked_warns(autosession, host):
    autosession.run_command("SessionStop")

    assert host.notifications == [
        ("autosession: No session is being tracked", logging.WARNING)
    ]


def test_host_invokes_registered_callback(autosession, host):
    host.commands["SessionStart"].callback(CommandCall())

    assert autosession.sessions.is_tracking


def test_unknown_command_raises(autosession):
    with pytest.raises(CommandError) as exc_info:
        autosession.run_command("SessionList")

    assert exc_info.value.details == {"name": "SessionList"}


def test_command_call_file():
    assert CommandCall().file is None
    assert CommandCall(args=["a.vim"], bang=True).file == "a.vim"


def test_session_start_unwritable_reports_error(autosession, host, tmp_path):
    target = tmp_path / "missing-dir" / "x.vim"

    autosession.run_command("SessionStart", [str(target)])

    message, level = host.notifications[-1]
    assert message.startswith(f"autosession: Could not save session `{target}`")
    assert level == logging.ERROR
    assert autosession.sessions.tracked_path is None


def test_session_load_corrupt_reports_error(autosession, host, session_dir):
    default_path = session_dir / "%home%u%proj.vim"
    default_path.write_text("not json")

    autosession.run_command("SessionLoad")

    message, level = host.notifications[-1]
    assert message.startswith(f"autosession: Could not load session `{default_path}`")
    assert level == logging.ERROR
    assert autosession.sessions.tracked_path is None


def test_session_stop_delete_failure_reports_error(autosession, host, monkeypatch):
    autosession.run_command("SessionStart")
    tracked = autosession.sessions.tracked_path

    def refuse(self, missing_ok=False):
        raise PermissionError("read-only file system")

    monkeypatch.setattr(Path, "unlink", refuse)

    autosession.run_command("SessionStop")

    message, level = host.notifications[-1]
    assert message == (
        f"autosession: Could not delete session `{tracked}`: read-only file system"
    )
    assert level == logging.ERROR
    assert autosession.sessions.tracked_path == tracked
