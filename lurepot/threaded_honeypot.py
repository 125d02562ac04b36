"""Honeypot that runs one listening thread per protocol."""

from __future__ import annotations

import socket
import sys
import threading
from typing import Any, Callable, Mapping, Optional

from .legacy_honeypot import DEFAULT_PORTS, create_listener
from .protocol_handler import ProtocolHandler

POLL_INTERVAL = 0.5


def _service(handler: ProtocolHandler, protocol: str) -> Callable[[Any, Any], None]:
    return getattr(handler, f"handle_{protocol.lower()}")


def serve_protocol(
    protocol: str,
    port: int,
    handler: ProtocolHandler,
    stop_event: Optional[threading.Event] = None,
) -> None:
    """Accept and serve ``protocol`` clients on ``port`` one by one until stopped."""
    logger = handler.logger
    serve = _service(handler, protocol)
    try:
        listener = create_listener(port)
    except OSError as exc:
        print(f"{protocol} bind: {exc}", file=sys.stderr)
        return

    with listener:
        listener.settimeout(POLL_INTERVAL)
        logger.log_message(f"{protocol} honeypot listening...")

        while stop_event is None or not stop_event.is_set():
            try:
                conn, address = listener.accept()
            except socket.timeout:
                continue
            except OSError as exc:
                print(f"{protocol} accept: {exc}", file=sys.stderr)
                continue
            conn.settimeout(None)
            logger.log_connection(address[0], address[1], protocol)
            serve(conn, address)


def run_threaded(
    handler: ProtocolHandler,
    ports: Optional[Mapping[str, int]] = None,
    stop_event: Optional[threading.Event] = None,
) -> None:
    """Start a listener thread for each protocol and wait for all of them."""
    ports = dict(DEFAULT_PORTS if ports is None else ports)
    threads = [
        threading.Thread(
            target=serve_protocol,
            args=(protocol, port, handler, stop_event),
            name=f"{protocol}-honeypot",
            daemon=True,
        )
        for protocol, port in ports.items()
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()