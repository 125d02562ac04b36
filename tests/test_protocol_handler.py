import pytest

from lurepot.blacklist import Blacklist
from lurepot.config import HTTP_NOT_FOUND, HTTP_ROBOTS
from lurepot.logger import HoneypotLogger
from lurepot.protocol_handler import (
    ProtocolHandler,
    is_suspicious_http_request,
    is_suspicious_ssh_request,
    is_suspicious_telnet_request,
)
from lurepot.suspicion_tracker import SuspicionTracker

CLIENT = ("10.0.0.5", 40000)


class FakeConn:
    def __init__(self, *chunks, fail=False):
        self._chunks = list(chunks)
        self._fail = fail
        self.sent = b""
        self.closed = False

    def recv(self, size):
        if self._fail:
            raise ConnectionResetError("reset")
        return self._chunks.pop(0)[:size] if self._chunks else b""

    def sendall(self, data):
        self.sent += data

    def close(self):
        self.closed = True


@pytest.fixture
def logger(tmp_path):
    return HoneypotLogger(tmp_path / "honeypot.log")


@pytest.fixture
def handler(logger):
    blacklist = Blacklist()
    tracker = SuspicionTracker(blacklist, logger)
    return ProtocolHandler(blacklist, tracker, logger)


def log_text(logger):
    return logger.path.read_text(encoding="utf-8")


@pytest.mark.parametrize(
    "request_text",
    [
        "GET / HTTP/1.1\r\nHost: example.com\r\n\r\n",
        "OPTIONS * HTTP/1.1\r\n\r\n",
        "POST /form HTTP/1.1\r\n\r\n",
    ],
)
def test_http_benign_requests(request_text):
    assert is_suspicious_http_request(request_text) is False


def test_http_none_is_not_suspicious():
    assert is_suspicious_http_request(None) is False


@pytest.mark.parametrize(
    "request_text, reason",
    [
        ("DELETE / HTTP/1.1\r\n\r\n", "Suspicious HTTP method detected"),
        ("PROPFIND / HTTP/1.1\r\n\r\n", "Suspicious HTTP method detected"),
        ("", "Suspicious HTTP method detected"),
        ("GET /?id=1 OR 1=1 HTTP/1.1\r\n", "Suspicious SQL injection pattern detected"),
        ("GET /?q=a-- HTTP/1.1\r\n", "Suspicious SQL injection pattern detected"),
        ("GET /", "Suspiciously short HTTP request"),
        ("GET / HTTP/1.1\r\nUser-Agent: curl/8.0\r\n", "Suspicious User-Agent detected"),
        ("GET / HTTP/1.1\r\nUser-Agent: sqlmap\r\n", "Suspicious User-Agent detected"),
    ],
)
def test_http_suspicious_requests_are_logged(logger, request_text, reason):
    assert is_suspicious_http_request(request_text, logger) is True
    assert reason in log_text(logger)


def test_ssh_pattern_is_named(logger):
    assert is_suspicious_ssh_request("SSH-2.0-OpenSSH_9.0", logger) is True
    assert "Suspicious SSH string detected: OpenSSH_" in log_text(logger)


def test_ssh_short_input(logger):
    assert is_suspicious_ssh_request("hey", logger) is True
    assert "Suspiciously short SSH data detected" in log_text(logger)


def test_ssh_benign_and_none():
    assert is_suspicious_ssh_request("hello world") is False
    assert is_suspicious_ssh_request(None) is False


def test_telnet_first_pattern_wins(logger):
    assert is_suspicious_telnet_request("shell", logger) is True
    assert "Suspicious Telnet content detected: shell" in log_text(logger)


def test_telnet_sh_pattern(logger):
    assert is_suspicious_telnet_request("bash", logger) is True
    assert "Suspicious Telnet content detected: sh\n" in log_text(logger)


def test_telnet_short_and_benign(logger):
    assert is_suspicious_telnet_request("abc", logger) is True
    assert "Suspiciously short Telnet input detected" in log_text(logger)
    assert is_suspicious_telnet_request("hello") is False
    assert is_suspicious_telnet_request(None) is False


def test_handle_http_serves_banner(handler, logger):
    conn = FakeConn(b"GET / HTTP/1.1\r\nHost: example.com\r\n\r\n")
    handler.handle_http(conn, CLIENT)
    assert conn.sent == (
        b"HTTP/1.1 200 OK\r\nContent-Type: text/html\r\n\r\n"
        b"<h1>Welcome to the Honeypot</h1>"
    )
    assert conn.closed
    text = log_text(logger)
    assert "HTTP connection from 10.0.0.5:40000 | Payload: GET /" in text
    assert handler.tracker.count("10.0.0.5") == 0


def test_handle_http_robots(handler, logger):
    conn = FakeConn(b"GET /robots.txt HTTP/1.1\r\n\r\n")
    handler.handle_http(conn, CLIENT)
    assert conn.sent == HTTP_ROBOTS.encode()
    assert "Served fake robots.txt" in log_text(logger)


def test_handle_http_favicon(handler, logger):
    conn = FakeConn(b"GET /favicon.ico HTTP/1.1\r\n\r\n")
    handler.handle_http(conn, CLIENT)
    assert conn.sent == HTTP_NOT_FOUND.encode()
    assert "Favicon requested" in log_text(logger)


def test_handle_http_suspicious_is_tracked(handler):
    handler.handle_http(FakeConn(b"TRACE / HTTP/1.1\r\n\r\n"), CLIENT)
    handler.handle_http(FakeConn(b"TRACE / HTTP/1.1\r\n\r\n"), CLIENT)
    assert handler.tracker.count("10.0.0.5") == 2


def test_handle_http_blacklisted(handler, logger):
    handler.blacklist.add("10.0.0.5")
    conn = FakeConn(b"TRACE / HTTP/1.1\r\n\r\n")
    handler.handle_http(conn, CLIENT)
    assert conn.sent.startswith(b"HTTP/1.1 403 Forbidden")
    assert conn.closed
    assert handler.tracker.count("10.0.0.5") == 0
    assert "Blocked request from blacklisted IP" in log_text(logger)


def test_handle_http_recv_failure(handler):
    conn = FakeConn(fail=True)
    handler.handle_http(conn, CLIENT)
    assert conn.sent == b""
    assert conn.closed


def test_repeated_attempts_blacklist(logger):
    blacklist = Blacklist()
    tracker = SuspicionTracker(blacklist, logger, threshold=2)
    handler = ProtocolHandler(blacklist, tracker, logger)
    handler.handle_http(FakeConn(b"PUT / HTTP/1.1\r\n\r\n"), CLIENT)
    handler.handle_http(FakeConn(b"PUT / HTTP/1.1\r\n\r\n"), CLIENT)
    assert "10.0.0.5" in blacklist


def test_handle_ssh_sends_banner(handler, logger):
    conn = FakeConn(b"SSH-2.0-OpenSSH_9.0\r\n")
    handler.handle_ssh(conn, CLIENT)
    assert conn.sent == b"SSH-2.0-OpenSSH_8.2p1 Ubuntu-4ubuntu0.5\r\n"
    assert conn.closed
    assert handler.tracker.count("10.0.0.5") == 1
    assert "Suspicious SSH request detected" in log_text(logger)


def test_handle_ssh_blacklisted(handler, logger):
    handler.blacklist.add("10.0.0.5")
    conn = FakeConn(b"SSH-2.0-client\r\n")
    handler.handle_ssh(conn, CLIENT)
    assert conn.sent == b""
    assert conn.closed
    assert "Blocked SSH request from blacklisted IP" in log_text(logger)


def test_handle_telnet_prompts_and_records_reply(handler, logger):
    conn = FakeConn(b"hello\r\n", b"password\r\n")
    handler.handle_telnet(conn, CLIENT)
    assert conn.sent == b"login: "
    assert conn.closed
    text = log_text(logger)
    assert "Telnet password attempt logged" in text
    assert "Telnet-Password connection from 10.0.0.5:40000 | Payload: password" in text


def test_handle_telnet_without_reply(handler, logger):
    conn = FakeConn(b"busybox\r\n")
    handler.handle_telnet(conn, CLIENT)
    assert conn.sent == b"login: "
    assert "Telnet password attempt logged" not in log_text(logger)
    assert handler.tracker.count("10.0.0.5") == 1


def test_handle_telnet_blacklisted(handler):
    handler.blacklist.add("10.0.0.5")
    conn = FakeConn(b"hello\r\n")
    handler.handle_telnet(conn, CLIENT)
    assert conn.sent == b""
    assert conn.closed