from datetime import datetime, timezone

import requests

from app.cli import render_table
from app.services.feed import LOAD_ERROR, Snapshot


def test_countdown_command_at_fixed_instant(runner):
    result = runner.invoke(args=["leaderboard", "countdown", "--at", "2026-10-17T12:00:00Z"])
    assert result.exit_code == 0
    assert result.output.strip() == "1d 11h 59m 0s"


def test_countdown_command_same_day_rollover(app, runner):
    app.config["PAYOUT_SUNDAY_ROLLOVER"] = "same_day"
    result = runner.invoke(args=["leaderboard", "countdown", "--at", "2026-10-18T23:59:30"])
    assert result.output.strip() == "0h 0m 0s"


def test_countdown_command_rejects_garbage(runner):
    result = runner.invoke(args=["leaderboard", "countdown", "--at", "next sunday"])
    assert result.exit_code != 0


def test_show_prints_table(runner, upstream):
    result = runner.invoke(args=["leaderboard", "show"])

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0].startswith("Next Payout In: ")
    assert "PLACE" in lines[1] and "PRIZE" in lines[1]
    assert "HIG***99" in lines[2] and "$25,000.00" in lines[2] and "$100" in lines[2]
    assert len(lines) == 5


def test_show_fails_on_upstream_error(runner, upstream):
    upstream.exc = requests.ConnectionError("nope")
    result = runner.invoke(args=["leaderboard", "show"])
    assert result.exit_code == 1
    assert LOAD_ERROR in result.output


def test_watch_stops_after_ticks(runner, upstream, monkeypatch):
    monkeypatch.setattr("app.cli.time.sleep", lambda s: None)
    result = runner.invoke(args=["leaderboard", "watch", "--interval", "60", "--ticks", "2"])
    assert result.exit_code == 0
    assert result.output.count("Next Payout In:") == 2


def test_render_table_states():
    assert render_table(Snapshot(), "this_week") == ["Loading..."]
    assert render_table(Snapshot(error=LOAD_ERROR), "this_week") == [LOAD_ERROR]
    empty = Snapshot(fetched_at=datetime.now(timezone.utc))
    assert render_table(empty, "this_month")[-1] == "No players qualified this month."
