# lurepot

lurepot is a small low-interaction honeypot. It listens on three TCP ports
and pretends to be common network services:

| Port | Service | What the visitor gets                                          |
|------|---------|----------------------------------------------------------------|
| 8080 | HTTP    | a welcome page, a fake `robots.txt`, or a 404 for `/favicon.ico` |
| 2222 | SSH     | an OpenSSH version banner                                      |
| 2323 | Telnet  | a `login: ` prompt; whatever the client sends next is recorded |

Each connection reads one chunk of client data (up to 1023 bytes), logs it
with a timestamp, the client address and the protocol, answers, and closes.
Connections are also echoed to standard output.

## Detection

Each request is checked against simple rules:

* **HTTP** – methods other than `GET`, `POST`, `HEAD` and `OPTIONS`, the
  SQL-injection fragments `" OR "`, `"' OR "`, `--` and `';`, requests shorter
  than 10 characters, and the scanner names `sqlmap`, `Nikto`, `curl`, `wget`
  and `nmap`.
* **SSH** – strings such as `root`, `admin`, `password`, `hydra`, `masscan` or
  `nmap`, and input shorter than 5 characters.
* **Telnet** – strings such as `root`, `admin`, `1234`, `sh`, `busybox`, `wget`
  and `tftp`, and input shorter than 5 characters.

The reason is written to the log. Suspicious requests are counted per client
address by `SuspicionTracker`; an address that reaches 1000 attempts within
300 seconds is added to the `Blacklist` (at most 100 addresses). Blacklisted
HTTP clients receive `403 Forbidden`; blacklisted SSH and Telnet clients are
disconnected without an answer.

In legacy mode each connection is also checked against the whitelist
(`127.0.0.1` and `192.168.196.112` by default); a connection from any other
address is noted in the log as suspicious but is still served.

## Installation

```
pip install .
```

No third-party libraries are needed.

## Running

Start the honeypot with one listening thread per service:

```
lurepot
```

Or serve every service from a single loop that waits on all three sockets:

```
lurepot --mode=legacy
```

Options:

* `--mode {legacy,multithreaded}` – how to serve (default `multithreaded`).
* `--log-file PATH` – where to write the log (default `logs/honeypot.log`;
  the directory is created if needed). The file is emptied at every start.
* `--http-port`, `--ssh-port`, `--telnet-port` – override the default ports.

Stop it with Ctrl+C. In legacy mode the command exits with status 1 if any
listening socket cannot be created; in multithreaded mode a service that
cannot bind its port reports the error and the others keep running.

## Using it from Python

The pieces can be put together by hand, for example to serve on other ports
and stop on demand:

```python
import threading

from lurepot.cli import build_handler
from lurepot.logger import HoneypotLogger
from lurepot.threaded_honeypot import run_threaded

logger = HoneypotLogger("honeypot.log")
handler = build_handler(logger)
stop = threading.Event()
server = threading.Thread(
    target=run_threaded,
    args=(handler, {"HTTP": 18080, "SSH": 12222, "Telnet": 12323}, stop),
)
server.start()
# ... later
stop.set()
server.join()
```

`run_legacy(handler, whitelist, ports, stop_event)` in
`lurepot.legacy_honeypot` works the same way and takes a `Whitelist`, such as
the one returned by `lurepot.whitelist.default_whitelist()`.

`Blacklist`, `Whitelist` and `SuspicionTracker` can also be used on their
own; `Blacklist.add` and `Whitelist.add` raise `BlacklistFullError` and
`WhitelistFullError` when full. The functions `is_suspicious_http_request`,
`is_suspicious_ssh_request` and `is_suspicious_telnet_request` in
`lurepot.protocol_handler` check a single request without any network
traffic.

## What it does not do

* It does not speak the real SSH or Telnet protocols: no key exchange, no
  option negotiation, no shell. Every client gets one canned answer.
* The blacklist, the whitelist and the suspicion counts live only in memory
  and are lost when the process stops; there is no configuration file for
  them.
* Connections are handled one at a time per listener.

## Tests

```
pip install .[test]
pytest
```