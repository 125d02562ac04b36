"""Bounded list of trusted client addresses."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from .logger import HoneypotLogger

MAX_WHITELIST = 10

DEFAULT_ENTRIES = (("127.0.0.1", 1), ("192.168.196.112", 1))


class WhitelistFullError(Exception):
    """Raised when an entry is added to a whitelist that has no room left."""


@dataclass(frozen=True)
class WhitelistEntry:
    """A trusted address and its access level."""

    ip: str
    access_level: int


class Whitelist:
    """Trusted addresses, up to ``capacity`` entries; duplicates are allowed."""

    def __init__(
        self, capacity: int = MAX_WHITELIST, logger: Optional[HoneypotLogger] = None
    ) -> None:
        self.capacity = capacity
        self.logger = logger
        self._entries: list[WhitelistEntry] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, ip: str, access_level: int) -> WhitelistEntry:
        """Trust ``ip`` with ``access_level`` and return the new entry."""
        with self._lock:
            if len(self._entries) >= self.capacity:
                raise WhitelistFullError(f"Whitelist is full, cannot add {ip}")
            entry = WhitelistEntry(ip, access_level)
            self._entries.append(entry)
            return entry

    def is_whitelisted(self, ip: str) -> bool:
        """Return whether ``ip`` is trusted, logging it once per entry examined."""
        for entry in list(self._entries):
            if self.logger is not None:
                self.logger.log_message(ip)
            if entry.ip == ip:
                return True
        return False


def default_whitelist(logger: Optional[HoneypotLogger] = None) -> Whitelist:
    """Return a whitelist holding the built-in trusted addresses."""
    whitelist = Whitelist(logger=logger)
    for ip, level in DEFAULT_ENTRIES:
        whitelist.add(ip, level)
    return whitelist