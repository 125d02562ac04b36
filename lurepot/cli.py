"""Command-line entry point that starts the honeypot."""

from __future__ import annotations

import argparse
from contextlib import suppress
from pathlib import Path
from typing import Optional, Sequence

from .blacklist import Blacklist
from .config import LOG_FILE, PORT_HTTP, PORT_SSH, PORT_TELNET
from .legacy_honeypot import run_legacy
from .logger import HoneypotLogger
from .protocol_handler import ProtocolHandler
from .suspicion_tracker import SuspicionTracker
from .threaded_honeypot import run_threaded
from .whitelist import default_whitelist


def build_handler(logger: HoneypotLogger) -> ProtocolHandler:
    """Return a protocol handler with an empty blacklist and a fresh tracker."""
    blacklist = Blacklist()
    tracker = SuspicionTracker(blacklist, logger)
    return ProtocolHandler(blacklist, tracker, logger)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="lurepot", description="Low-interaction HTTP, SSH and Telnet honeypot."
    )
    parser.add_argument(
        "--mode",
        choices=("legacy", "multithreaded"),
        default="multithreaded",
        help="serve from one thread (legacy) or one thread per protocol",
    )
    parser.add_argument("--log-file", default=LOG_FILE, help="path of the log file")
    parser.add_argument("--http-port", type=int, default=PORT_HTTP)
    parser.add_argument("--ssh-port", type=int, default=PORT_SSH)
    parser.add_argument("--telnet-port", type=int, default=PORT_TELNET)
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the honeypot; return 1 if the legacy listeners cannot be created."""
    args = _parse_args(argv)

    log_path = Path(args.log_file)
    with suppress(OSError):
        log_path.parent.mkdir(parents=True, exist_ok=True)
    logger = HoneypotLogger(log_path)
    logger.clear()
    logger.log_message("Honeypot starting...")

    handler = build_handler(logger)
    whitelist = default_whitelist(logger)
    ports = {"HTTP": args.http_port, "SSH": args.ssh_port, "Telnet": args.telnet_port}

    try:
        if args.mode == "legacy":
            logger.log_message("Running in LEGACY mode")
            try:
                run_legacy(handler, whitelist, ports)
            except OSError:
                return 1
        else:
            logger.log_message("Running in MULTITHREADED mode")
            run_threaded(handler, ports)
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())