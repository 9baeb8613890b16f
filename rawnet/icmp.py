"""ICMP echo messages."""

from __future__ import annotations

import struct
from dataclasses import dataclass, replace
from typing import Optional

from rawnet.checksum import internet_checksum
from rawnet.ip import IPProtocol

__all__ = ["Icmp", "echo_request", "find_icmp_reply"]

_HEADER = struct.Struct("!BBHHH")
_ETHERNET_HEADER_SIZE = 14
_IP_HEADER_SIZE = 20
_PAYLOAD_OFFSET = _ETHERNET_HEADER_SIZE + _IP_HEADER_SIZE


@dataclass(frozen=True)
class Icmp:
    """An ICMP echo request or reply."""

    type: int = 0x08
    code: int = 0x00
    checksum: int = 0
    identification: int = 0x0010
    sequence: int = 0x0001
    data: bytes = b"\x01\x02"

    def to_bytes(self) -> bytes:
        header = _HEADER.pack(
            self.type, self.code, self.checksum, self.identification, self.sequence
        )
        return header + self.data

    @classmethod
    def parse(cls, data: bytes) -> "Icmp":
        """Read an ICMP message; everything after its header is its data."""
        if len(data) < _HEADER.size:
            raise ValueError(f"an ICMP header needs {_HEADER.size} bytes, got {len(data)}")
        kind, code, value, identification, sequence = _HEADER.unpack_from(data)
        return cls(
            type=kind,
            code=code,
            checksum=value,
            identification=identification,
            sequence=sequence,
            data=bytes(data[_HEADER.size :]),
        )


def echo_request() -> Icmp:
    """Build a ping request with its checksum filled in."""
    message = Icmp()
    value = int.from_bytes(internet_checksum(message.to_bytes()), "big")
    return replace(message, checksum=value)


def find_icmp_reply(frame: bytes) -> Optional[Icmp]:
    """Return the ICMP message in an Ethernet/IPv4 frame, or None if it holds none."""
    if len(frame) < _PAYLOAD_OFFSET + _HEADER.size:
        return None
    if frame[_ETHERNET_HEADER_SIZE + 9] != IPProtocol.ICMP:
        return None
    return Icmp.parse(frame[_PAYLOAD_OFFSET:])