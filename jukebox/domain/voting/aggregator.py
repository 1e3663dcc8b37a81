#!/usr/bin/env python
"""
Skip/keep vote aggregation for the currently playing track.

The first skip vote opens a fixed debounce window. Votes keep accumulating
until the window's timer fires, and the track is skipped only when skip
votes strictly outnumber keep votes. reset() returns to Idle at any time;
each session carries a token so a timer armed before a reset cannot act
on the session that replaced it.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from jukebox.errors import CollaboratorError, InsufficientVotes

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SECONDS = 10.0

TimerFactory = Callable[[float, Callable[[], None]], Any]


def default_timer_factory(interval: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(interval, callback)
    timer.daemon = True
    return timer


@dataclass
class VoteSession:
    token: int = 0
    skip_count: int = 0
    keep_count: int = 0
    window_active: bool = False
    window_deadline: Optional[float] = None  # monotonic clock
    timer: Any = field(default=None, repr=False)


@dataclass(frozen=True)
class VoteSnapshot:
    token: int
    skip_count: int
    keep_count: int
    window_active: bool
    seconds_remaining: Optional[float]

    def to_dict(self) -> dict:
        return {
            "session": self.token,
            "skip_votes": self.skip_count,
            "keep_votes": self.keep_count,
            "window_active": self.window_active,
            "seconds_remaining": self.seconds_remaining,
        }


@dataclass(frozen=True)
class VoteOutcome:
    skipped: bool
    skip_count: int
    keep_count: int


class VoteAggregator:
    def __init__(
        self,
        skipper,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        timer_factory: Optional[TimerFactory] = None,
        on_resolved: Optional[Callable[[VoteOutcome], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._skipper = skipper
        self.window_seconds = window_seconds
        self._timer_factory = timer_factory or default_timer_factory
        self._on_resolved = on_resolved
        self._clock = clock
        self._lock = threading.RLock()
        self._session = VoteSession()

    def record_skip(self) -> None:
        with self._lock:
            if not self._session.window_active:
                self._open_window()
            self._session.skip_count += 1
            logger.info(
                "Skip vote recorded (session %d: skip=%d keep=%d)",
                self._session.token, self._session.skip_count, self._session.keep_count,
            )

    def record_keep(self) -> None:
        with self._lock:
            self._session.keep_count += 1
            logger.info(
                "Keep vote recorded (session %d: skip=%d keep=%d)",
                self._session.token, self._session.skip_count, self._session.keep_count,
            )

    def resolve_window(self) -> VoteOutcome:
        """Apply the majority rule to the current counts.

        Raises InsufficientVotes unless skip votes strictly outnumber keep
        votes. Errors from the skip call propagate unchanged. An open window
        is closed first, so its timer can no longer resolve the same votes.
        """
        with self._lock:
            skip_count = self._session.skip_count
            keep_count = self._session.keep_count
            if self._session.window_active:
                self._reset_locked()
        return self._resolve(skip_count, keep_count)

    def reset(self) -> None:
        with self._lock:
            self._reset_locked()
            logger.info("Vote session reset (now session %d)", self._session.token)

    def snapshot(self) -> VoteSnapshot:
        with self._lock:
            session = self._session
            remaining = None
            if session.window_active and session.window_deadline is not None:
                remaining = max(0.0, round(session.window_deadline - self._clock(), 3))
            return VoteSnapshot(
                token=session.token,
                skip_count=session.skip_count,
                keep_count=session.keep_count,
                window_active=session.window_active,
                seconds_remaining=remaining,
            )

    def _open_window(self):
        # Idle -> Collecting; caller holds the lock
        session = self._session
        token = session.token
        timer = self._timer_factory(self.window_seconds, lambda: self._on_window_closed(token))
        session.window_active = True
        session.window_deadline = self._clock() + self.window_seconds
        session.timer = timer
        timer.start()
        logger.info("Skip window opened for %.1fs (session %d)", self.window_seconds, token)
        return timer

    def _reset_locked(self) -> None:
        timer = self._session.timer
        if timer is not None:
            timer.cancel()
        self._session = VoteSession(token=self._session.token + 1)

    def _decide(self, skip_count: int, keep_count: int) -> VoteOutcome:
        if skip_count <= keep_count:
            raise InsufficientVotes(skip_count, keep_count)
        self._skipper.skip_current_track()
        logger.info("Skipped current track (skip=%d keep=%d)", skip_count, keep_count)
        return VoteOutcome(skipped=True, skip_count=skip_count, keep_count=keep_count)

    def _resolve(self, skip_count: int, keep_count: int) -> VoteOutcome:
        try:
            outcome = self._decide(skip_count, keep_count)
        except InsufficientVotes:
            self._notify(VoteOutcome(skipped=False, skip_count=skip_count, keep_count=keep_count))
            raise
        self._notify(outcome)
        return outcome

    def _notify(self, outcome: VoteOutcome) -> None:
        if self._on_resolved is not None:
            self._on_resolved(outcome)

    def _on_window_closed(self, token: int) -> None:
        with self._lock:
            session = self._session
            if session.token != token or not session.window_active:
                logger.debug("Ignoring stale skip window for session %d", token)
                return
            skip_count = session.skip_count
            keep_count = session.keep_count
            self._reset_locked()

        try:
            self._resolve(skip_count, keep_count)
        except InsufficientVotes as exc:
            logger.info("%s (skip=%d keep=%d)", exc.message, exc.skip_count, exc.keep_count)
        except CollaboratorError as exc:
            logger.error("Skip approved but the skip call failed: %s", exc)


__all__ = [
    "VoteAggregator",
    "VoteSession",
    "VoteSnapshot",
    "VoteOutcome",
    "default_timer_factory",
    "DEFAULT_WINDOW_SECONDS",
]
