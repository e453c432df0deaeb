# app/services/feed.py
from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional

from flask import Flask, current_app

from app.services.ranking import MalformedPayloadError, extract_players, rank_players
from app.services.referral_client import ReferralAPIError, fetch_players_payload
from app.types import RankedEntry

LOAD_ERROR = "Failed to load leaderboard. Please try again later."
EXTENSION_KEY = "leaderboard_feed"


@dataclass
class Snapshot:
    entries: List[RankedEntry] = field(default_factory=list)
    error: Optional[str] = None
    fetched_at: Optional[datetime] = None
    sequence: int = 0

    @property
    def loading(self) -> bool:
        return self.fetched_at is None and self.error is None

    def to_dict(self) -> dict:
        return {
            "entries": list(self.entries),
            "error": self.error,
            "fetched_at": self.fetched_at.isoformat() if self.fetched_at else None,
        }


class FeedTask:
    """
    One data-fetching task per app.

    With LEADERBOARD_POLL_SECONDS > 0, start() runs a background thread that fetches
    right away and then on every interval. With 0, nothing runs in the background and
    current() fetches on demand. Every cycle gets a sequence number when it starts; a
    result is only published if it is newer than what is already shown, and nothing
    is published after stop().
    """

    def __init__(
        self,
        app: Flask,
        fetch: Callable[[], Any] | None = None,
        interval: float | None = None,
    ):
        self.app = app
        self._fetch = fetch or fetch_players_payload
        self._interval = interval
        self._lock = threading.Lock()
        self._seq = itertools.count(1)
        self._snapshot = Snapshot()
        self._cancelled = threading.Event()
        # one stop event per run; a loop that outlives stop() never sees a later start()
        self._run_stopped: threading.Event | None = None
        self._thread: threading.Thread | None = None

    @property
    def interval(self) -> float:
        if self._interval is not None:
            return float(self._interval)
        return float(self.app.config.get("LEADERBOARD_POLL_SECONDS") or 0)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # --- lifecycle ---
    def start(self) -> bool:
        if self.interval <= 0 or self.running:
            return False
        self._cancelled.clear()
        self._run_stopped = threading.Event()
        self._thread = threading.Thread(
            target=self._run, args=(self._run_stopped,), name="leaderboard-feed", daemon=True
        )
        self._thread.start()
        self.app.logger.info("Leaderboard feed started (every %ss)", self.interval)
        return True

    def stop(self, timeout: float | None = 5) -> None:
        self._cancelled.set()
        if self._run_stopped is not None:
            self._run_stopped.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            self.app.logger.info("Leaderboard feed stopped")

    def _run(self, stopped: threading.Event) -> None:
        while not stopped.is_set():
            self.refresh(stopped)
            stopped.wait(self.interval)

    # --- data ---
    def snapshot(self) -> Snapshot:
        with self._lock:
            return self._snapshot

    def current(self) -> Snapshot:
        if self.running:
            return self.snapshot()
        return self.refresh()

    def refresh(self, stopped: threading.Event | None = None) -> Snapshot:
        seq = next(self._seq)
        with self.app.app_context():
            result = self._cycle(seq)
        self._publish(result, stopped)
        return self.snapshot()

    def _cycle(self, seq: int) -> Snapshot:
        cfg = current_app.config
        now = datetime.now(timezone.utc)
        try:
            payload = self._fetch()
            players = extract_players(payload)
            entries = rank_players(
                players,
                period=cfg["LEADERBOARD_PERIOD"],
                limit=cfg["LEADERBOARD_SIZE"],
                prizes=cfg["LEADERBOARD_PRIZES"],
            )
        except (ReferralAPIError, MalformedPayloadError) as e:
            current_app.logger.warning("Error fetching leaderboard data: %s", e)
            return Snapshot(error=LOAD_ERROR, fetched_at=now, sequence=seq)
        except Exception:
            current_app.logger.exception("Unexpected error in leaderboard feed")
            return Snapshot(error=LOAD_ERROR, fetched_at=now, sequence=seq)

        current_app.logger.info(
            "Leaderboard refreshed seq=%s players=%s ranked=%s", seq, len(players), len(entries)
        )
        return Snapshot(entries=entries, fetched_at=now, sequence=seq)

    def _publish(self, result: Snapshot, stopped: threading.Event | None = None) -> bool:
        with self._lock:
            if self._cancelled.is_set() or (stopped is not None and stopped.is_set()):
                return False
            if result.sequence <= self._snapshot.sequence:
                return False
            self._snapshot = result
            return True


class LeaderboardFeed:
    """Flask extension wrapper: one FeedTask per app, stored in app.extensions."""

    def __init__(self, app: Flask | None = None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask, fetch: Callable[[], Any] | None = None) -> FeedTask:
        task = FeedTask(app, fetch=fetch)
        app.extensions[EXTENSION_KEY] = task
        return task

    @property
    def task(self) -> FeedTask:
        return current_app.extensions[EXTENSION_KEY]

    def current(self) -> Snapshot:
        return self.task.current()
