"""Tests for the command line."""
from unittest.mock import patch

import pytest

from ayursutra import cli
from ayursutra.services import list_notifications


def test_list_therapies(capsys):
    cli.main(["list", "therapies"])
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 6
    assert lines[0].startswith("1 | Abhyanga | Massage Therapy")


def test_list_bookings(capsys):
    cli.main(["list", "bookings"])
    out = capsys.readouterr().out
    assert "1 | John Doe | Abhyanga | 2025-01-15 10:00 | completed (3/5)" in out


def test_stats(capsys):
    cli.main(["stats"])
    out = capsys.readouterr().out
    assert "Bookings   : 4" in out
    assert "Unread     : 4" in out
    assert "avg 4.67" in out


def test_notifications_mark_read(capsys):
    cli.main(["notifications", "--unread", "--mark-read"])
    out = capsys.readouterr().out
    assert out.count("*[") == 4
    assert "Notifications marked as read." in out
    assert list_notifications(unread=True) == []

    cli.main(["notifications", "--unread"])
    assert "No notifications." in capsys.readouterr().out


def test_serve_runs_uvicorn():
    with patch("ayursutra.cli.uvicorn.run") as run:
        cli.main(["serve", "--port", "9000"])
    args, kwargs = run.call_args
    assert args == ("ayursutra.api_main:app",)
    assert kwargs["port"] == 9000
    assert kwargs["reload"] is False


def test_unknown_entity_exits():
    with pytest.raises(SystemExit):
        cli.main(["list", "rooms"])
