"""DNS query messages."""

from __future__ import annotations

import struct
from dataclasses import dataclass

__all__ = ["DnsQuery", "encode_name", "dns_query"]

_HEADER = struct.Struct("!HHHHHH")
_QUESTION_TAIL = struct.Struct("!HH")
_MAX_LABEL = 63


def encode_name(host: str) -> bytes:
    """Encode a host name as length-prefixed labels ending in a zero byte."""
    encoded = bytearray()
    for label in filter(None, host.split(".")):
        raw = label.encode("ascii")
        if len(raw) > _MAX_LABEL:
            raise ValueError(f"label {label!r} is longer than {_MAX_LABEL} bytes")
        encoded.append(len(raw))
        encoded += raw
    encoded.append(0)
    return bytes(encoded)


@dataclass(frozen=True)
class DnsQuery:
    """A DNS message carrying a single question."""

    name: bytes
    transaction_id: int = 0x0000
    flags: int = 0x0100
    questions: int = 1
    answers: int = 0
    authority: int = 0
    additional: int = 0
    query_type: int = 0x0001
    query_class: int = 0x0001

    def to_bytes(self) -> bytes:
        header = _HEADER.pack(
            self.transaction_id,
            self.flags,
            self.questions,
            self.answers,
            self.authority,
            self.additional,
        )
        return header + self.name + _QUESTION_TAIL.pack(self.query_type, self.query_class)


def dns_query(host: str) -> DnsQuery:
    """Build a recursive A-record query for *host*."""
    return DnsQuery(name=encode_name(host))