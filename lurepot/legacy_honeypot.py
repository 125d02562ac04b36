"""Single-threaded honeypot that multiplexes all listeners with a selector."""

from __future__ import annotations

import selectors
import socket
import sys
import threading
from contextlib import ExitStack
from typing import Any, Callable, Mapping, Optional

from .config import PORT_HTTP, PORT_SSH, PORT_TELNET
from .protocol_handler import ProtocolHandler
from .whitelist import Whitelist

MAX_CONNECTIONS = 10
POLL_INTERVAL = 0.5

DEFAULT_PORTS = {"HTTP": PORT_HTTP, "SSH": PORT_SSH, "Telnet": PORT_TELNET}


def create_listener(port: int, host: str = "", backlog: int = MAX_CONNECTIONS) -> socket.socket:
    """Return a TCP socket listening on ``host``:``port`` with address reuse enabled."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        sock.listen(backlog)
    except OSError:
        sock.close()
        raise
    return sock


def _service(handler: ProtocolHandler, protocol: str) -> Callable[[Any, Any], None]:
    return getattr(handler, f"handle_{protocol.lower()}")


def _serve_one(
    listener: socket.socket, protocol: str, handler: ProtocolHandler, whitelist: Whitelist
) -> None:
    logger = handler.logger
    try:
        conn, address = listener.accept()
    except OSError as exc:
        print(f"accept: {exc}", file=sys.stderr)
        return

    with conn:
        ip, port = address[0], address[1]
        logger.log_connection(ip, port, protocol)

        if ip in handler.blacklist:
            logger.log_message("Blocked blacklisted IP")
            return

        if not whitelist.is_whitelisted(ip):
            logger.log_message("Suspicious IP detected (not whitelisted)")

        _service(handler, protocol)(conn, address)


def run_legacy(
    handler: ProtocolHandler,
    whitelist: Whitelist,
    ports: Optional[Mapping[str, int]] = None,
    stop_event: Optional[threading.Event] = None,
) -> None:
    """Serve every protocol from one thread until ``stop_event`` is set.

    Raises OSError when a listening socket cannot be created.
    """
    ports = dict(DEFAULT_PORTS if ports is None else ports)
    logger = handler.logger

    with ExitStack() as stack:
        listeners = {}
        try:
            for protocol, port in ports.items():
                listeners[protocol] = stack.enter_context(create_listener(port))
        except OSError as exc:
            print(f"socket: {exc}", file=sys.stderr)
            logger.log_message("Socket creation failed.")
            raise

        summary = ", ".join(
            f"{sock.getsockname()[1]} ({protocol})" for protocol, sock in listeners.items()
        )
        logger.log_message(f"Honeypot listening on ports {summary}")

        selector = stack.enter_context(selectors.DefaultSelector())
        for protocol, sock in listeners.items():
            selector.register(sock, selectors.EVENT_READ, protocol)

        while stop_event is None or not stop_event.is_set():
            try:
                ready = selector.select(timeout=POLL_INTERVAL)
            except OSError as exc:
                print(f"select: {exc}", file=sys.stderr)
                continue
            for key, _ in ready:
                _serve_one(key.fileobj, key.data, handler, whitelist)