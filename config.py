import os
from dotenv import load_dotenv

# Load .env only for local/dev convenience. In production, env vars come from the host dashboard.
load_dotenv()

DEFAULT_PRIZES = "100,90,60,50,40,20,10"

def _parse_prizes(raw: str | None) -> list[int]:
    if not raw:
        raw = DEFAULT_PRIZES
    # strip() each value in case .env had spaces after commas
    return [int(p.strip()) for p in raw.split(",") if p.strip()]

def _timeout(raw: str | None) -> float | None:
    # 0 (or empty) means wait on the upstream indefinitely
    value = float(raw or 0)
    return value if value > 0 else None

class BaseConfig:
    # --- Secrets & keys ---
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-key")  # override in production

    # --- Referral API settings ---
    REFERRAL_API_BASE = os.environ.get("REFERRAL_API_BASE", "https://api.goated.com")
    REFERRAL_CODE = os.environ.get("REFERRAL_CODE", "OQID5MA")
    REFERRAL_TIMEOUT_SECONDS = _timeout(os.environ.get("REFERRAL_TIMEOUT_SECONDS", "20"))

    # --- Leaderboard settings ---
    # "upstream" hits the referral API directly, "proxy" goes through /api/leaderboard
    LEADERBOARD_SOURCE = os.environ.get("LEADERBOARD_SOURCE", "upstream")
    LEADERBOARD_PROXY_URL = os.environ.get("LEADERBOARD_PROXY_URL", "http://127.0.0.1:5000/api/leaderboard")
    LEADERBOARD_PERIOD = os.environ.get("LEADERBOARD_PERIOD", "this_week")
    LEADERBOARD_SIZE = int(os.environ.get("LEADERBOARD_SIZE", 7))
    LEADERBOARD_PRIZES = _parse_prizes(os.environ.get("LEADERBOARD_PRIZES"))
    # 0 = fetch once per page view; >0 = background refresh every N seconds
    LEADERBOARD_POLL_SECONDS = float(os.environ.get("LEADERBOARD_POLL_SECONDS", 0))

    # "next_week": on Sunday, count down to the following Sunday
    # "same_day":  on Sunday, count down to today's 23:59
    PAYOUT_SUNDAY_ROLLOVER = os.environ.get("PAYOUT_SUNDAY_ROLLOVER", "next_week")

    # --- Branding ---
    LEADERBOARD_HOST_NAME = os.environ.get("LEADERBOARD_HOST_NAME", "Johnny Knox")
    LEADERBOARD_POT_LABEL = os.environ.get("LEADERBOARD_POT_LABEL", "$400 Weekly")
    LEADERBOARD_PROGRAM_NAME = os.environ.get("LEADERBOARD_PROGRAM_NAME", "Goated Leaderboard")

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    # dev-only niceties
    TEMPLATES_AUTO_RELOAD = True

class ProductionConfig(BaseConfig):
    DEBUG = False
    TESTING = False
    PREFERRED_URL_SCHEME = "https"

class TestingConfig(BaseConfig):
    TESTING = True
    REFERRAL_API_BASE = "https://referral.test"
    REFERRAL_CODE = "TESTCODE"
    LEADERBOARD_SOURCE = "upstream"
    LEADERBOARD_PERIOD = "this_week"
    LEADERBOARD_SIZE = 7
    LEADERBOARD_PRIZES = _parse_prizes(DEFAULT_PRIZES)
    LEADERBOARD_POLL_SECONDS = 0
    PAYOUT_SUNDAY_ROLLOVER = "next_week"

def get_config():
    """Choose config based on FLASK_ENV (or APP_ENV). Default to Production."""
    env = (os.environ.get("APP_ENV") or os.environ.get("FLASK_ENV") or "production").lower()
    if env.startswith("dev"):
        return DevelopmentConfig
    if env.startswith("test"):
        return TestingConfig
    return ProductionConfig
