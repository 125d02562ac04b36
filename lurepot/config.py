"""Ports, buffer sizes, banners and canned HTTP responses used by the honeypot."""

PORT_HTTP = 8080
PORT_SSH = 2222
PORT_TELNET = 2323

BUFFER_SIZE = 1024

LOG_FILE = "logs/honeypot.log"

_CRLF = "\r\n"


def _html_page(status: str, heading: str) -> str:
    """Build a close-after-send HTML response with a single heading."""
    head = _CRLF.join(
        (f"HTTP/1.1 {status}", "Content-Type: text/html", "Connection: close")
    )
    return f"{head}{_CRLF}{_CRLF}<html><body><h1>{heading}</h1></body></html>"


def _robots(paths: tuple[str, ...]) -> str:
    """Build a robots.txt body that disallows every given path for all agents."""
    lines = ["User-agent: *", *(f"Disallow: {path}" for path in paths)]
    return "".join(line + _CRLF for line in lines)


BANNER_HTTP = f"HTTP/1.1 200 OK{_CRLF}Content-Length: 0{_CRLF}{_CRLF}"
BANNER_SSH = f"SSH-2.0-OpenSSH_8.2p1 Ubuntu{_CRLF}"

HTTP_OK = _html_page("200 OK", "Welcome to the Honeypot")
HTTP_FORBIDDEN = _html_page("403 Forbidden", "403 Forbidden")
HTTP_NOT_FOUND = _html_page("404 Not Found", "404 Not Found")
HTTP_SERVER_ERROR = _html_page(
    "500 Internal Server Error", "500 Internal Server Error"
)

_ROBOTS_DISALLOWED = (
    "/",
    "/admin/",
    "/login/",
    "/register/",
    "/api/",
    "/private/",
    "/tmp/",
    "/uploads/",
    "/cgi-bin/",
    "/scripts/",
)

HTTP_ROBOTS = _robots(_ROBOTS_DISALLOWED)