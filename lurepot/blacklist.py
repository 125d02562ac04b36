"""Bounded set of blocked client addresses."""

from __future__ import annotations

import threading
from typing import Iterator

MAX_BLACKLIST_SIZE = 100


class BlacklistFullError(Exception):
    """Raised when an address is added to a blacklist that has no room left."""


class Blacklist:
    """Blocked IP addresses, kept in insertion order, up to ``capacity`` of them."""

    def __init__(self, capacity: int = MAX_BLACKLIST_SIZE) -> None:
        self.capacity = capacity
        self._ips: dict[str, None] = {}
        self._lock = threading.Lock()

    def __contains__(self, ip: object) -> bool:
        return ip in self._ips

    def __len__(self) -> int:
        return len(self._ips)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._ips))

    def add(self, ip: str) -> None:
        """Block ``ip``; adding an address twice has no effect."""
        with self._lock:
            if len(self._ips) >= self.capacity:
                raise BlacklistFullError(f"Blacklist is full, cannot add {ip}")
            self._ips.setdefault(ip, None)

    def clear(self) -> None:
        """Remove every address."""
        with self._lock:
            self._ips.clear()

    def format(self) -> str:
        """Return a human-readable listing of the blocked addresses."""
        return "Blacklisted IPs:\n" + "".join(f" - {ip}\n" for ip in self)