"""Build and parse network protocol data, from Ethernet frames to TLS 1.2 key derivation."""

__version__ = "0.1.0"

__all__ = [
    "arp",
    "checksum",
    "dns",
    "ethernet",
    "hpack",
    "http",
    "http2",
    "icmp",
    "ip",
    "packet",
    "tlsprf",
]