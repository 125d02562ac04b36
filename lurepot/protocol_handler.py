"""Fake HTTP, SSH and Telnet services and the rules that flag suspicious input."""

from __future__ import annotations

import sys
from contextlib import suppress
from itertools import takewhile
from typing import Any, Optional, Sequence, Tuple

from .blacklist import Blacklist
from .config import BUFFER_SIZE, HTTP_NOT_FOUND, HTTP_ROBOTS
from .logger import HoneypotLogger
from .suspicion_tracker import SuspicionTracker

ALLOWED_HTTP_METHODS = ("GET", "POST", "HEAD", "OPTIONS")
MAX_METHOD_LENGTH = 7
SQL_INJECTION_PATTERNS = (" OR ", "' OR ", "--", "';")
SCANNER_AGENTS = ("sqlmap", "Nikto", "curl", "wget", "nmap")
MIN_HTTP_LENGTH = 10
MIN_SSH_LENGTH = 5
MIN_TELNET_LENGTH = 5

SSH_PATTERNS = (
    "root",
    "admin",
    "password",
    "ssh2",
    "OpenSSH_",
    "exploit",
    "masscan",
    "nmap",
    "hydra",
)

TELNET_PATTERNS = (
    "root",
    "admin",
    "1234",
    "telnet",
    "shell",
    "sh",
    "wget",
    "tftp",
    "busybox",
    "bin/busybox",
    "password",
    "login",
)

HTTP_FORBIDDEN_SHORT = (
    "HTTP/1.1 403 Forbidden\r\nContent-Type: text/html\r\n\r\n<h1>403 Forbidden</h1>"
)
HTTP_BANNER = (
    "HTTP/1.1 200 OK\r\nContent-Type: text/html\r\n\r\n<h1>Welcome to the Honeypot</h1>"
)
SSH_BANNER = "SSH-2.0-OpenSSH_8.2p1 Ubuntu-4ubuntu0.5\r\n"
TELNET_LOGIN_PROMPT = "login: "

Address = Tuple[Any, ...]


def _note(logger: Optional[HoneypotLogger], message: str) -> None:
    if logger is not None:
        logger.log_message(message)


def _first_match(request: str, patterns: Sequence[str]) -> Optional[str]:
    return next((pattern for pattern in patterns if pattern in request), None)


def is_suspicious_http_request(
    request: Optional[str], logger: Optional[HoneypotLogger] = None
) -> bool:
    """Return whether an HTTP request looks hostile, logging the reason."""
    if request is None:
        return False

    method = "".join(takewhile(lambda ch: not ch.isspace(), request))[:MAX_METHOD_LENGTH]
    if method not in ALLOWED_HTTP_METHODS:
        _note(logger, "Suspicious HTTP method detected")
        return True

    if _first_match(request, SQL_INJECTION_PATTERNS) is not None:
        _note(logger, "Suspicious SQL injection pattern detected")
        return True

    if len(request) < MIN_HTTP_LENGTH:
        _note(logger, "Suspiciously short HTTP request")
        return True

    if _first_match(request, SCANNER_AGENTS) is not None:
        _note(logger, "Suspicious User-Agent detected")
        return True

    return False


def is_suspicious_ssh_request(
    request: Optional[str], logger: Optional[HoneypotLogger] = None
) -> bool:
    """Return whether SSH input looks hostile, logging the reason."""
    if request is None:
        return False

    pattern = _first_match(request, SSH_PATTERNS)
    if pattern is not None:
        _note(logger, f"Suspicious SSH string detected: {pattern}")
        return True

    if len(request) < MIN_SSH_LENGTH:
        _note(logger, "Suspiciously short SSH data detected")
        return True

    return False


def is_suspicious_telnet_request(
    request: Optional[str], logger: Optional[HoneypotLogger] = None
) -> bool:
    """Return whether Telnet input looks hostile, logging the reason."""
    if request is None:
        return False

    pattern = _first_match(request, TELNET_PATTERNS)
    if pattern is not None:
        _note(logger, f"Suspicious Telnet content detected: {pattern}")
        return True

    if len(request) < MIN_TELNET_LENGTH:
        _note(logger, "Suspiciously short Telnet input detected")
        return True

    return False


def _decode(data: bytes) -> str:
    """Turn received bytes into text, stopping at the first NUL byte."""
    return data.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def _send(conn: Any, text: str) -> None:
    with suppress(OSError):
        conn.sendall(text.encode("ascii"))


class ProtocolHandler:
    """Serves one client connection for each of the fake protocols."""

    def __init__(
        self, blacklist: Blacklist, tracker: SuspicionTracker, logger: HoneypotLogger
    ) -> None:
        self.blacklist = blacklist
        self.tracker = tracker
        self.logger = logger

    def _receive(self, conn: Any) -> Optional[str]:
        try:
            data = conn.recv(BUFFER_SIZE - 1)
        except OSError as exc:
            print(f"recv: {exc}", file=sys.stderr)
            return None
        return _decode(data)

    def handle_http(self, conn: Any, address: Address) -> None:
        """Answer one HTTP request and close the connection."""
        ip, port = address[0], address[1]
        try:
            request = self._receive(conn)
            if request is None:
                return
            self.logger.log_connection_details(ip, port, "HTTP", request)

            if ip in self.blacklist:
                self.logger.log_message("Blocked request from blacklisted IP")
                _send(conn, HTTP_FORBIDDEN_SHORT)
                return

            if is_suspicious_http_request(request, self.logger):
                self.logger.log_message("Received HTTP request")
                self.logger.log_message("Suspicious HTTP \r\n")
                self.tracker.register(ip)
            else:
                self.logger.log_message("Received HTTP request\r\n")

            if "GET /robots.txt" in request:
                _send(conn, HTTP_ROBOTS)
                self.logger.log_message("Served fake robots.txt")
            elif "GET /favicon.ico" in request:
                _send(conn, HTTP_NOT_FOUND)
                self.logger.log_message("Favicon requested")
            else:
                _send(conn, HTTP_BANNER)
        finally:
            conn.close()

    def handle_ssh(self, conn: Any, address: Address) -> None:
        """Read the client's greeting, answer with a fake SSH banner and close."""
        ip, port = address[0], address[1]
        try:
            request = self._receive(conn)
            if request is None:
                return

            if ip in self.blacklist:
                self.logger.log_message("Blocked SSH request from blacklisted IP")
                return

            self.logger.log_connection_details(ip, port, "SSH", request)

            if is_suspicious_ssh_request(request, self.logger):
                self.logger.log_message("Received SSH request")
                self.logger.log_message("Suspicious SSH request detected\r\n")
                self.tracker.register(ip)
            else:
                self.logger.log_message("Received SSH request\r\n")

            _send(conn, SSH_BANNER)
        finally:
            conn.close()

    def handle_telnet(self, conn: Any, address: Address) -> None:
        """Read input, show a fake login prompt, record the reply and close."""
        ip, port = address[0], address[1]
        try:
            request = self._receive(conn)
            if request is None:
                return

            if ip in self.blacklist:
                self.logger.log_message("Blocked Telnet request from blacklisted IP")
                return

            self.logger.log_connection_details(ip, port, "Telnet", request)

            if is_suspicious_telnet_request(request, self.logger):
                self.logger.log_message("Received Telnet request")
                self.logger.log_message("Suspicious Telnet request detected\r\n")
                self.tracker.register(ip)
            else:
                self.logger.log_message("Received Telnet request\r\n")

            _send(conn, TELNET_LOGIN_PROMPT)

            try:
                reply = conn.recv(BUFFER_SIZE - 1)
            except OSError:
                reply = b""
            if reply:
                self.logger.log_message("Telnet password attempt logged")
                self.logger.log_connection_details(
                    ip, port, "Telnet-Password", _decode(reply)
                )
        finally:
            conn.close()