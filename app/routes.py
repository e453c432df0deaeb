from flask import Blueprint, redirect, url_for

bp = Blueprint('main', __name__)


# --- ROUTES ---
@bp.route("/")
def index():
    return redirect(url_for("leaderboard.leaderboard"))
