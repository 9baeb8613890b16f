"""Plain HTTP/1.1 requests."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["HttpRequest", "get_request"]

_CRLF = b"\r\n"


@dataclass(frozen=True)
class HttpRequest:
    """An HTTP/1.1 request: request line, header lines and body."""

    request_line: str
    headers: tuple[str, ...] = field(default_factory=tuple)
    body: bytes = b""

    def to_bytes(self) -> bytes:
        lines = (self.request_line, *self.headers)
        head = b"".join(line.encode("ascii") + _CRLF for line in lines)
        return head + _CRLF + self.body


def get_request(url: str, host: str) -> HttpRequest:
    """Build a GET request that asks the server to close the connection."""
    return HttpRequest(
        request_line=f"GET {url} HTTP/1.1",
        headers=(
            f"Host: {host}",
            "User-Agent: curl/7.68.0",
            "Accept: */*",
            "Connection: close",
        ),
    )