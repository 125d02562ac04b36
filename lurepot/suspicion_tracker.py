"""Counts suspicious requests per address and blacklists repeat offenders."""

from __future__ import annotations

import sys
import threading
import time
from dataclasses import dataclass
from typing import Optional

from .blacklist import Blacklist, BlacklistFullError
from .logger import HoneypotLogger

MAX_SUSPICIOUS_ENTRIES = 100
SUSPICIOUS_THRESHOLD = 1000
SUSPICIOUS_WINDOW_SEC = 300


@dataclass
class _Attempts:
    count: int
    first_attempt: float


class SuspicionTracker:
    """Blacklists an address once it reaches ``threshold`` attempts within ``window`` seconds."""

    def __init__(
        self,
        blacklist: Blacklist,
        logger: HoneypotLogger,
        threshold: int = SUSPICIOUS_THRESHOLD,
        window: float = SUSPICIOUS_WINDOW_SEC,
        capacity: int = MAX_SUSPICIOUS_ENTRIES,
    ) -> None:
        self.blacklist = blacklist
        self.logger = logger
        self.threshold = threshold
        self.window = window
        self.capacity = capacity
        self._entries: dict[str, _Attempts] = {}
        self._lock = threading.Lock()

    def register(self, ip: str, now: Optional[float] = None) -> None:
        """Record one suspicious attempt from ``ip`` at time ``now`` (defaults to the clock)."""
        if now is None:
            now = time.time()
        with self._lock:
            entry = self._entries.get(ip)
            if entry is None:
                if len(self._entries) < self.capacity:
                    self._entries[ip] = _Attempts(1, now)
                else:
                    self.logger.log_message(
                        "Suspicion tracker full — cannot register new IP"
                    )
                return

            if now - entry.first_attempt > self.window:
                entry.count = 1
                entry.first_attempt = now
                return

            entry.count += 1
            if entry.count >= self.threshold and ip not in self.blacklist:
                try:
                    self.blacklist.add(ip)
                except BlacklistFullError as exc:
                    print(exc, file=sys.stderr)
                    return
                self.logger.log_message(
                    "IP added to blacklist due to repeated suspicious activity"
                )

    def count(self, ip: str) -> int:
        """Return the attempts counted for ``ip`` in its current window."""
        entry = self._entries.get(ip)
        return entry.count if entry is not None else 0