"""Ethernet II frame headers."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum

__all__ = ["EtherType", "EthernetFrame"]

_HEADER = struct.Struct("!6s6sH")


class EtherType(IntEnum):
    """Payload types carried in an Ethernet frame."""

    IPV4 = 0x0800
    ARP = 0x0806


@dataclass(frozen=True)
class EthernetFrame:
    """The 14-byte header of an Ethernet II frame."""

    destination: bytes
    source: bytes
    ether_type: int

    def to_bytes(self) -> bytes:
        return _HEADER.pack(self.destination, self.source, int(self.ether_type))

    @classmethod
    def parse(cls, data: bytes) -> "EthernetFrame":
        """Read the header from the start of *data*."""
        if len(data) < _HEADER.size:
            raise ValueError(f"an Ethernet header needs {_HEADER.size} bytes, got {len(data)}")
        destination, source, kind = _HEADER.unpack_from(data)
        try:
            ether_type: int = EtherType(kind)
        except ValueError:
            ether_type = kind
        return cls(destination=destination, source=source, ether_type=ether_type)