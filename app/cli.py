# app/cli.py
import time
from datetime import datetime, timezone

import click

from app.filters import fmt_prize, fmt_wager, period_label
from app.services.feed import FeedTask, Snapshot
from app.services.payout_clock import countdown_text


def _parse_at(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise click.BadParameter(f"not an ISO timestamp: {value}") from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def render_table(snap: Snapshot, period: str) -> list[str]:
    """Plain-text version of the leaderboard table."""
    if snap.error:
        return [snap.error]
    if snap.loading:
        return ["Loading..."]
    lines = [f"{'PLACE':<7}{'USER':<14}{'WAGER':>16}{'PRIZE':>8}"]
    for row in snap.entries:
        lines.append(
            f"{str(row['place']) + '.':<7}{row['masked_name']:<14}"
            f"{fmt_wager(row['wager']):>16}{fmt_prize(row['prize']):>8}"
        )
    if not snap.entries:
        lines.append(f"No players qualified {period_label(period)}.")
    return lines


def register_cli(app):
    @app.cli.group("leaderboard")
    def leaderboard_cli():
        """Referral leaderboard in the terminal."""

    @leaderboard_cli.command("show")
    def show_cmd():
        """Fetch once and print the ranked table with the payout countdown."""
        snap = FeedTask(app).refresh()
        rollover = app.config["PAYOUT_SUNDAY_ROLLOVER"]
        click.echo(f"Next Payout In: {countdown_text(rollover=rollover)}")
        for line in render_table(snap, app.config["LEADERBOARD_PERIOD"]):
            click.echo(line)
        if snap.error:
            raise SystemExit(1)

    @leaderboard_cli.command("watch")
    @click.option("--interval", type=float, default=None,
                  help="Seconds between fetches (defaults to LEADERBOARD_POLL_SECONDS, or 5 if that is 0)")
    @click.option("--ticks", type=int, default=0, help="Stop after this many 1s redraws (0 = until Ctrl-C)")
    def watch_cmd(interval, ticks):
        """
        Keep the table on screen: the feed refetches every --interval seconds and the
        countdown redraws every second. Ctrl-C stops both.
        """
        interval = interval or app.config["LEADERBOARD_POLL_SECONDS"] or 5
        task = FeedTask(app, interval=interval)
        task.start()
        rollover = app.config["PAYOUT_SUNDAY_ROLLOVER"]
        drawn = 0
        try:
            while ticks <= 0 or drawn < ticks:
                click.clear()
                click.echo(f"Next Payout In: {countdown_text(rollover=rollover)}")
                for line in render_table(task.snapshot(), app.config["LEADERBOARD_PERIOD"]):
                    click.echo(line)
                drawn += 1
                time.sleep(1)
        except KeyboardInterrupt:
            pass
        finally:
            task.stop()

    @leaderboard_cli.command("countdown")
    @click.option("--at", "at", default=None, help="Pretend it is this ISO time (UTC if no offset)")
    def countdown_cmd(at):
        """Print the time left until Sunday 23:59 UTC."""
        now = _parse_at(at)
        click.echo(countdown_text(now, rollover=app.config["PAYOUT_SUNDAY_ROLLOVER"]))
