# app/services/referral_client.py
from typing import Any
import requests
from flask import current_app


class ReferralAPIError(Exception):
    """Upstream call failed: transport error, non-2xx status or a body that isn't JSON."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def leaderboard_url() -> str:
    base = current_app.config["REFERRAL_API_BASE"].rstrip("/")
    code = current_app.config["REFERRAL_CODE"]
    return f"{base}/user/affiliate/referral-leaderboard/{code}"


def _get(url: str) -> Any:
    timeout = current_app.config.get("REFERRAL_TIMEOUT_SECONDS")
    try:
        r = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        current_app.logger.warning(f"Referral API request failed: {e!r}")
        raise ReferralAPIError(str(e)) from e

    try:
        r.raise_for_status()
    except requests.HTTPError as e:
        current_app.logger.warning(f"Referral API error {r.status_code} url={url}")
        raise ReferralAPIError(f"HTTP error! status: {r.status_code}", status_code=r.status_code) from e

    try:
        return r.json()
    except ValueError as e:
        current_app.logger.warning(f"Referral API returned non-JSON body ({len(r.content)} bytes)")
        raise ReferralAPIError("Upstream body is not JSON", status_code=r.status_code) from e


def fetch_leaderboard() -> Any:
    """One GET against the referral leaderboard endpoint. No retries, no caching."""
    return _get(leaderboard_url())


def fetch_via_proxy() -> Any:
    """Same payload, but relayed through our own /api/leaderboard route."""
    return _get(current_app.config["LEADERBOARD_PROXY_URL"])


def fetch_players_payload() -> Any:
    source = current_app.config.get("LEADERBOARD_SOURCE", "upstream")
    if source == "proxy":
        return fetch_via_proxy()
    return fetch_leaderboard()
