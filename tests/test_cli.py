"""Tests for the command line interface."""

import json
from datetime import date, timedelta
from unittest.mock import patch

import click
import pytest
from click.testing import CliRunner

from almanac.cli import main, run_command
from almanac.config import Config
from almanac.core.events import EventStore, TitleValidationError, color_by_id
from almanac.session import CalendarSession, PastDateError


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def default_config():
    with patch("almanac.cli.load_config", return_value=Config(color_policy="id")):
        yield


@pytest.fixture
def today():
    return date(2024, 3, 15)


@pytest.fixture
def session(today):
    return CalendarSession(store=EventStore(color_picker=color_by_id), clock=lambda: today)


class TestMonthCommand:
    def test_prints_grid(self, runner):
        result = runner.invoke(main, ["month", "--date", "2024-03-15"])
        assert result.exit_code == 0
        assert "March 2024" in result.output
        assert "(25)" in result.output

    def test_offset(self, runner):
        result = runner.invoke(main, ["month", "--date", "2024-01-31", "--offset", "1"])
        assert result.exit_code == 0
        assert "February 2024" in result.output

    def test_json(self, runner):
        result = runner.invoke(main, ["month", "--date", "2024-03-15", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["month"] == "March 2024"
        assert len(data["days"]) == 42
        assert data["days"][0]["date"] == "2024-02-25"
        assert data["days"][-1]["date"] == "2024-04-06"

    def test_month_outside_range(self, runner):
        result = runner.invoke(main, ["month", "--date", "9999-11-15", "--offset", "1"])
        assert result.exit_code == 1
        assert "Error: The grid for 9999-12" in result.output

    def test_bad_date(self, runner):
        result = runner.invoke(main, ["month", "--date", "15/03/2024"])
        assert result.exit_code != 0
        assert "YYYY-MM-DD" in result.output


class TestShellCommand:
    def test_add_and_list(self, runner):
        future = (date.today() + timedelta(days=3)).isoformat()
        result = runner.invoke(main, ["shell"], input=f"add {future} Demo\nlist\nquit\n")
        assert result.exit_code == 0
        assert f"Added #1 Demo on {future}" in result.output
        assert "#1    Demo [red]" in result.output

    def test_error_keeps_shell_running(self, runner):
        result = runner.invoke(main, ["shell"], input="add 2000-01-01 Old\nhelp\nquit\n")
        assert result.exit_code == 0
        assert "Error: Cannot add events to a past day" in result.output
        assert "Commands:" in result.output

    def test_goto_last_month_keeps_shell_running(self, runner):
        future = (date.today() + timedelta(days=3)).isoformat()
        result = runner.invoke(
            main, ["shell"], input=f"add {future} Demo\ngoto 9999-12-01\nlist\nquit\n"
        )
        assert result.exit_code == 0
        assert "Error: The grid for 9999-12 runs outside the supported date range" in result.output
        assert "#1    Demo [red]" in result.output

    def test_next_past_last_month_keeps_shell_running(self, runner):
        result = runner.invoke(main, ["shell", "--date", "9999-11-01"], input="next\nnext\nhelp\nquit\n")
        assert result.exit_code == 0
        assert "Error: The grid for 9999-12" in result.output
        assert "Commands:" in result.output

    def test_unrenderable_start_date(self, runner):
        result = runner.invoke(main, ["shell", "--date", "9999-12-01"], input="quit\n")
        assert result.exit_code == 1
        assert "Error: The grid for 9999-12" in result.output

    def test_ends_on_eof(self, runner):
        result = runner.invoke(main, ["shell", "--date", "2024-03-15"], input="next\n")
        assert result.exit_code == 0
        assert "April 2024" in result.output


class TestRunCommand:
    def test_quit(self, session):
        assert run_command(session, "quit") is None
        assert run_command(session, "exit") is None

    def test_blank_line(self, session):
        assert run_command(session, "   ") == ""

    def test_navigation(self, session):
        assert "April 2024" in run_command(session, "next")
        assert "March 2024" in run_command(session, "prev")
        assert "June 2031" in run_command(session, "goto 2031-06-09")
        assert "March 2024" in run_command(session, "today")

    def test_add_rename_delete(self, session):
        assert run_command(session, "add 2024-03-20 Team sync") == "Added #1 Team sync on 2024-03-20"
        assert run_command(session, "rename 1 Retro") == "Renamed #1"
        assert session.events_on(date(2024, 3, 20))[0].title == "Retro"
        assert "#1 Retro" in run_command(session, "show")
        assert run_command(session, "delete #1") == "Deleted #1"
        assert run_command(session, "delete 1") == "No event #1"
        assert run_command(session, "rename 1 Again") == "No event #1"

    def test_add_past(self, session):
        with pytest.raises(PastDateError):
            run_command(session, "add 2024-03-01 Late")

    def test_add_blank(self, session):
        with pytest.raises(TitleValidationError):
            run_command(session, "add 2024-03-20   ")

    def test_bad_id(self, session):
        with pytest.raises(click.BadParameter):
            run_command(session, "delete abc")

    def test_draft_flow(self, session):
        assert "2024-03-15" in run_command(session, "new")
        assert run_command(session, "save") == "Draft needs a title before it can be saved."
        run_command(session, "title Standup")
        assert run_command(session, "save") == "Added #1 Standup on 2024-03-15"
        assert run_command(session, "save") == "No draft open. Start one with 'new'."

    def test_draft_on_past_day(self, session):
        assert run_command(session, "new 2024-03-01") == "Events can only be added today or later."

    def test_draft_cancel(self, session):
        run_command(session, "new 2024-03-20")
        assert run_command(session, "cancel") == "Draft discarded."
        assert session.draft is None

    def test_list(self, session):
        assert run_command(session, "list") == "No events."
        run_command(session, "add 2024-03-20 Demo")
        assert "Demo" in run_command(session, "list 2024-03-20")
        assert run_command(session, "list 2024-03-21") == "No events."

    def test_unknown(self, session):
        assert "Unknown command" in run_command(session, "dance")
