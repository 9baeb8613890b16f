"""ARP messages for Ethernet and IPv4."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Optional

from rawnet.ethernet import EtherType
from rawnet.ip import ip_to_bytes

__all__ = ["Arp", "ARP_REQUEST", "ARP_REPLY", "arp_request", "find_arp_reply"]

ARP_REQUEST = 0x0001
ARP_REPLY = 0x0002

_MESSAGE = struct.Struct("!HHBBH6s4s6s4s")
_ETHERNET_HEADER_SIZE = 14


@dataclass(frozen=True)
class Arp:
    """An ARP message resolving an IPv4 address to an Ethernet address."""

    opcode: int
    sender_mac: bytes
    sender_ip: bytes
    target_mac: bytes
    target_ip: bytes
    hardware_type: int = 0x0001
    protocol_type: int = 0x0800
    hardware_size: int = 6
    protocol_size: int = 4

    def to_bytes(self) -> bytes:
        return _MESSAGE.pack(
            self.hardware_type,
            self.protocol_type,
            self.hardware_size,
            self.protocol_size,
            self.opcode,
            self.sender_mac,
            self.sender_ip,
            self.target_mac,
            self.target_ip,
        )

    @classmethod
    def parse(cls, data: bytes) -> "Arp":
        """Read an ARP message from the start of *data*."""
        if len(data) < _MESSAGE.size:
            raise ValueError(f"an ARP message needs {_MESSAGE.size} bytes, got {len(data)}")
        (
            hardware_type,
            protocol_type,
            hardware_size,
            protocol_size,
            opcode,
            sender_mac,
            sender_ip,
            target_mac,
            target_ip,
        ) = _MESSAGE.unpack_from(data)
        return cls(
            opcode=opcode,
            sender_mac=sender_mac,
            sender_ip=sender_ip,
            target_mac=target_mac,
            target_ip=target_ip,
            hardware_type=hardware_type,
            protocol_type=protocol_type,
            hardware_size=hardware_size,
            protocol_size=protocol_size,
        )


def arp_request(sender_mac: bytes, sender_ip: bytes, target_ip: str) -> Arp:
    """Build a request asking who holds *target_ip*."""
    return Arp(
        opcode=ARP_REQUEST,
        sender_mac=sender_mac,
        sender_ip=sender_ip,
        target_mac=bytes(6),
        target_ip=ip_to_bytes(target_ip),
    )


def find_arp_reply(frame: bytes) -> Optional[Arp]:
    """Return the ARP reply carried in an Ethernet frame, or None if it holds none."""
    if len(frame) < _ETHERNET_HEADER_SIZE + _MESSAGE.size:
        return None
    if int.from_bytes(frame[12:14], "big") != EtherType.ARP:
        return None
    if int.from_bytes(frame[20:22], "big") != ARP_REPLY:
        return None
    return Arp.parse(frame[_ETHERNET_HEADER_SIZE:])