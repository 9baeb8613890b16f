"""TCP headers and whole Ethernet/IPv4/TCP packets as read off the wire."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from rawnet.ethernet import EthernetFrame
from rawnet.ip import IPHeader

__all__ = [
    "FIN",
    "SYN",
    "RST",
    "PSH",
    "ACK",
    "SYNACK",
    "FINACK",
    "PSHACK",
    "TcpHeader",
    "RawPacket",
    "parse_packet",
    "advance_sequence",
]

FIN = 0x01
SYN = 0x02
RST = 0x04
PSH = 0x08
ACK = 0x10
SYNACK = SYN | ACK
FINACK = FIN | ACK
PSHACK = PSH | ACK

_HEADER = struct.Struct("!HHIIBBHHH")
_ETHERNET_HEADER_SIZE = 14
_IP_HEADER_SIZE = 20
_SEQUENCE_MODULUS = 1 << 32


@dataclass(frozen=True)
class TcpHeader:
    """A TCP header with its options and the segment data that follows it."""

    source_port: int
    destination_port: int
    sequence: int
    acknowledgement: int
    flags: int
    offset: int = 0x50
    window: int = 0
    checksum: int = 0
    urgent_pointer: int = 0
    options: bytes = b""
    data: bytes = b""

    @property
    def header_size(self) -> int:
        """Length of the header in bytes, taken from the data offset field."""
        return (self.offset >> 4) * 4

    def to_bytes(self) -> bytes:
        header = _HEADER.pack(
            self.source_port,
            self.destination_port,
            self.sequence,
            self.acknowledgement,
            self.offset,
            self.flags,
            self.window,
            self.checksum,
            self.urgent_pointer,
        )
        return header + self.options + self.data

    @classmethod
    def parse(cls, data: bytes) -> "TcpHeader":
        """Read a TCP segment; everything past the header is its data."""
        if len(data) < _HEADER.size:
            raise ValueError(f"a TCP header needs {_HEADER.size} bytes, got {len(data)}")
        (
            source_port,
            destination_port,
            sequence,
            acknowledgement,
            offset,
            flags,
            window,
            value,
            urgent_pointer,
        ) = _HEADER.unpack_from(data)
        size = (offset >> 4) * 4
        if size < _HEADER.size:
            raise ValueError(f"TCP data offset of {size} bytes is shorter than the header")
        if size > len(data):
            raise ValueError(f"TCP header claims {size} bytes, got {len(data)}")
        return cls(
            source_port=source_port,
            destination_port=destination_port,
            sequence=sequence,
            acknowledgement=acknowledgement,
            flags=flags,
            offset=offset,
            window=window,
            checksum=value,
            urgent_pointer=urgent_pointer,
            options=bytes(data[_HEADER.size : size]),
            data=bytes(data[size:]),
        )


@dataclass(frozen=True)
class RawPacket:
    """An Ethernet frame carrying an IPv4 header and a TCP segment."""

    ethernet: EthernetFrame
    ip: IPHeader
    tcp: TcpHeader


def parse_packet(data: bytes) -> RawPacket:
    """Split a captured frame into its Ethernet, IPv4 and TCP parts."""
    ip_start = _ETHERNET_HEADER_SIZE
    tcp_start = ip_start + _IP_HEADER_SIZE
    return RawPacket(
        ethernet=EthernetFrame.parse(data[:ip_start]),
        ip=IPHeader.parse(data[ip_start:tcp_start]),
        tcp=TcpHeader.parse(data[tcp_start:]),
    )


def advance_sequence(number: int, add: int) -> int:
    """Add *add* to a 32-bit sequence number, wrapping around as TCP does."""
    return (number + add) % _SEQUENCE_MODULUS