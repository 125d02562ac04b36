"""A low-interaction honeypot imitating HTTP, SSH and Telnet services."""

__version__ = "0.1.0"