"""IPv4 headers."""

from __future__ import annotations

import ipaddress
import struct
from dataclasses import dataclass, replace
from enum import IntEnum

from rawnet.checksum import internet_checksum

__all__ = ["IPProtocol", "IPHeader", "ip_to_bytes"]

_HEADER = struct.Struct("!BBHHHBBH4s4s")


class IPProtocol(IntEnum):
    """Protocol numbers carried in the IPv4 header."""

    ICMP = 0x01
    TCP = 0x06
    UDP = 0x11


def ip_to_bytes(address: str) -> bytes:
    """Return the four bytes of a dotted IPv4 address."""
    return ipaddress.IPv4Address(address).packed


@dataclass(frozen=True)
class IPHeader:
    """A 20-byte IPv4 header without options."""

    source: bytes
    destination: bytes
    protocol: int
    version_ihl: int = 0x45
    service_type: int = 0x00
    total_length: int = 0
    identification: int = 0
    flags: int = 0x4000
    ttl: int = 0x40
    checksum: int = 0

    def to_bytes(self) -> bytes:
        return _HEADER.pack(
            self.version_ihl,
            self.service_type,
            self.total_length,
            self.identification,
            self.flags,
            self.ttl,
            int(self.protocol),
            self.checksum,
            self.source,
            self.destination,
        )

    def with_checksum(self) -> "IPHeader":
        """Return a copy whose checksum field covers the rest of the header."""
        blank = replace(self, checksum=0)
        value = int.from_bytes(internet_checksum(blank.to_bytes()), "big")
        return replace(self, checksum=value)

    @classmethod
    def parse(cls, data: bytes) -> "IPHeader":
        """Read the header from the start of *data*."""
        if len(data) < _HEADER.size:
            raise ValueError(f"an IPv4 header needs {_HEADER.size} bytes, got {len(data)}")
        (
            version_ihl,
            service_type,
            total_length,
            identification,
            flags,
            ttl,
            protocol,
            value,
            source,
            destination,
        ) = _HEADER.unpack_from(data)
        try:
            protocol = IPProtocol(protocol)
        except ValueError:
            pass
        return cls(
            source=source,
            destination=destination,
            protocol=protocol,
            version_ihl=version_ihl,
            service_type=service_type,
            total_length=total_length,
            identification=identification,
            flags=flags,
            ttl=ttl,
            checksum=value,
        )