"""Internet checksum helpers shared by the packet builders."""

from __future__ import annotations

__all__ = ["sum_words", "checksum", "internet_checksum", "format_bytes"]


def sum_words(data: bytes) -> int:
    """Add up *data* as big-endian 16-bit words.

    The data must hold a whole number of words; pad odd-length data first.
    """
    if len(data) % 2:
        raise ValueError(f"cannot sum {len(data)} bytes as 16-bit words")
    return sum(int.from_bytes(data[i : i + 2], "big") for i in range(0, len(data), 2))


def checksum(total: int) -> bytes:
    """Fold a word sum once into 16 bits and return its one's complement."""
    if total < 0:
        raise ValueError("a word sum cannot be negative")
    folded = (total & 0xFFFF) + (total >> 16)
    return ((folded ^ 0xFFFF) & 0xFFFF).to_bytes(2, "big")


def internet_checksum(data: bytes) -> bytes:
    """Return the checksum of *data*, padding an odd length with a zero byte."""
    if len(data) % 2:
        data = bytes(data) + b"\x00"
    return checksum(sum_words(data))


def format_bytes(data: bytes) -> str:
    """Render bytes as unpadded lower-case hex, each followed by a space."""
    return "".join(f"{byte:x} " for byte in data)