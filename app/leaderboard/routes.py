from __future__ import annotations
from datetime import datetime, timezone

from flask import current_app, render_template

from app.extensions import feed
from app.services.feed import LOAD_ERROR
from app.services.payout_clock import next_payout_utc, time_remaining
from . import bp


# --- routes ---
@bp.route("/", methods=["GET"], endpoint="leaderboard")
def leaderboard():
    """
    Weekly referral leaderboard:
      - Header: host name, pot, program name and "Next Payout In" countdown
      - Rows: place, masked user, wager for the configured period, prize
      - A failed fetch shows the static error line instead of the table
    """
    cfg = current_app.config
    now = datetime.now(timezone.utc)
    target = next_payout_utc(now, cfg["PAYOUT_SUNDAY_ROLLOVER"])
    snap = feed.current()

    return render_template(
        "leaderboard.html",
        rows=snap.entries,
        error=snap.error,
        load_error=LOAD_ERROR,
        loading=snap.loading,
        period=cfg["LEADERBOARD_PERIOD"],
        payout_at=target,
        remaining=time_remaining(now, target),
        poll_seconds=cfg["LEADERBOARD_POLL_SECONDS"],
        host_name=cfg["LEADERBOARD_HOST_NAME"],
        pot_label=cfg["LEADERBOARD_POT_LABEL"],
        program_name=cfg["LEADERBOARD_PROGRAM_NAME"],
    )
