from flask import Blueprint, jsonify, current_app, make_response
from datetime import datetime, timezone
from app.extensions import feed
from app.services.payout_clock import next_payout_utc, time_remaining, format_countdown
from app.services.referral_client import ReferralAPIError, fetch_leaderboard

bp = Blueprint("api", __name__, url_prefix="/api")

UPSTREAM_ERROR = "Failed to fetch remote data"

def _no_cache(resp):
    resp.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
    resp.headers["Pragma"] = "no-cache"
    resp.headers["Expires"] = "0"
    return resp

@bp.get("/leaderboard")
def leaderboard_proxy():
    """
    Relay the referral leaderboard; any upstream failure becomes a generic 500.
    The body is parsed and re-serialized by jsonify, so it matches upstream in content
    but not byte for byte (Flask sorts object keys).
    """
    try:
        data = fetch_leaderboard()
    except ReferralAPIError as e:
        current_app.logger.warning(
            "Leaderboard proxy upstream failure status=%s: %s", e.status_code, e
        )
        return _no_cache(make_response(jsonify({"error": UPSTREAM_ERROR}), 500))

    return _no_cache(make_response(jsonify(data), 200))

@bp.get("/leaderboard/ranked")
def leaderboard_ranked():
    """Already-ranked rows plus the countdown, polled by the leaderboard page."""
    cfg = current_app.config
    now = datetime.now(timezone.utc)
    target = next_payout_utc(now, cfg["PAYOUT_SUNDAY_ROLLOVER"])

    snap = feed.current()
    payload = {
        **snap.to_dict(),
        "period": cfg["LEADERBOARD_PERIOD"],
        "next_payout_at": target.isoformat(),
        "countdown": format_countdown(time_remaining(now, target)),
    }
    return _no_cache(make_response(jsonify(payload), 200))
