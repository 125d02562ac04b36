"""Timestamped, append-only log file for honeypot events."""

from __future__ import annotations

import os
import sys
import threading
import time
from contextlib import suppress
from pathlib import Path
from typing import Optional, Union

from .config import LOG_FILE

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_PAYLOAD_LENGTH = 200

PathLike = Union[str, "os.PathLike[str]"]


def get_timestamp() -> str:
    """Return the current local time formatted with TIME_FORMAT."""
    return time.strftime(TIME_FORMAT, time.localtime())


def clear_file(path: PathLike) -> None:
    """Truncate the file at ``path``; failures are silently ignored."""
    with suppress(OSError):
        with open(path, "w", encoding="utf-8"):
            pass


def clean_payload(payload: Optional[str]) -> str:
    """Return at most 200 characters of ``payload`` with CR and LF turned into spaces."""
    if payload is None:
        return ""
    return payload[:MAX_PAYLOAD_LENGTH].replace("\r", " ").replace("\n", " ")


class HoneypotLogger:
    """Writes timestamped lines to a log file, reopening it for every entry."""

    def __init__(self, path: PathLike = LOG_FILE) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _write(self, text: str) -> bool:
        line = f"[{get_timestamp()}] {text}"
        try:
            with self._lock, open(self.path, "a", encoding="utf-8") as handle:
                handle.write(line + "\n")
        except OSError as exc:
            print(f"Failed to open log file: {exc}", file=sys.stderr)
            return False
        return True

    def init(self) -> None:
        """Record that logging has started."""
        self._write("Logger initialized")

    def clear(self) -> None:
        """Empty the log file."""
        with self._lock:
            clear_file(self.path)

    def log_message(self, message: str) -> None:
        """Record a general message."""
        self._write(message)

    def log_error(self, message: str) -> None:
        """Record an error message."""
        self._write(f"ERROR: {message}")

    def log_connection(self, ip: str, port: int, protocol: str) -> None:
        """Record an incoming connection and echo it to standard output."""
        text = f"Connection from {ip}:{port} using {protocol}"
        if self._write(text):
            print(f"[{get_timestamp()}] {text}")

    def log_connection_details(
        self, ip: str, port: int, protocol: str, payload: Optional[str]
    ) -> None:
        """Record a connection together with the first 200 characters of its payload."""
        shown = payload[:MAX_PAYLOAD_LENGTH] if payload is not None else "<no data>"
        self._write(f"{protocol} connection from {ip}:{port} | Payload: {shown}")