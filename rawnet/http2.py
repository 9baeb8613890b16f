"""HTTP/2 frames: building a client's opening frames and parsing server frames."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from rawnet.hpack import HeaderField, decode_header_block, encode_header

__all__ = [
    "STREAM_MAGIC",
    "FrameType",
    "Setting",
    "Frame",
    "SettingsEntry",
    "WindowUpdate",
    "ParsedFrame",
    "connection_preface",
    "settings_frame",
    "first_frames",
    "header_frame",
    "parse_settings",
    "parse_frame",
    "parse_frames",
]

STREAM_MAGIC = "PRI * HTTP/2.0\r\n\r\nSM\r\n\r\n"

_FRAME_HEADER_SIZE = 9
_SETTING = struct.Struct("!HI")
_FLAG_ACK = 0x01
_FLAGS_END_STREAM_HEADERS = 0x05
_STREAM_MASK = 0x7FFFFFFF


class FrameType(IntEnum):
    DATA = 0
    HEADERS = 1
    PRIORITY = 2
    RST_STREAM = 3
    SETTINGS = 4
    PUSH_PROMISE = 5
    PING = 6
    GOAWAY = 7
    WINDOW_UPDATE = 8
    CONTINUATION = 9


class Setting(IntEnum):
    HEADER_TABLE_SIZE = 1
    ENABLE_PUSH = 2
    MAX_CONCURRENT_STREAMS = 3
    INITIAL_WINDOW_SIZE = 4
    MAX_FRAME_SIZE = 5
    MAX_HEADER_LIST_SIZE = 6


@dataclass(frozen=True)
class Frame:
    """An HTTP/2 frame ready to be written."""

    type: int
    flags: int
    stream_id: int
    payload: bytes = b""

    def to_bytes(self) -> bytes:
        return (
            len(self.payload).to_bytes(3, "big")
            + bytes([int(self.type), self.flags])
            + (self.stream_id & _STREAM_MASK).to_bytes(4, "big")
            + self.payload
        )


@dataclass(frozen=True)
class SettingsEntry:
    """One identifier/value pair of a SETTINGS frame."""

    identifier: Setting
    value: int

    def to_bytes(self) -> bytes:
        return _SETTING.pack(int(self.identifier), self.value)


@dataclass(frozen=True)
class WindowUpdate:
    """The content of a WINDOW_UPDATE frame."""

    stream_id: int
    increment: int


FrameContent = Union[list[SettingsEntry], WindowUpdate, list[HeaderField], bytes]


@dataclass(frozen=True)
class ParsedFrame:
    """A received frame: its type and its decoded content."""

    type: int
    frame: FrameContent


def connection_preface() -> bytes:
    """Return the client connection preface."""
    return STREAM_MAGIC.encode("ascii")


def settings_frame() -> Frame:
    """Build the client's SETTINGS frame."""
    entries = (
        SettingsEntry(Setting.ENABLE_PUSH, 0),
        SettingsEntry(Setting.INITIAL_WINDOW_SIZE, 0x00400000),
        SettingsEntry(Setting.MAX_HEADER_LIST_SIZE, 0x00A00000),
    )
    payload = b"".join(entry.to_bytes() for entry in entries)
    return Frame(FrameType.SETTINGS, 0x00, 0, payload)


def first_frames() -> bytes:
    """Return the preface, SETTINGS and WINDOW_UPDATE a client opens with."""
    update = Frame(FrameType.WINDOW_UPDATE, 0x00, 0, (0x40000000).to_bytes(4, "big"))
    return connection_preface() + settings_frame().to_bytes() + update.to_bytes()


def header_frame() -> bytes:
    """Return a HEADERS frame on stream 1 carrying a GET of / over https."""
    headers = b"".join(
        (
            encode_header(":authority", "127.0.0.1:18443"),
            encode_header("", "GET"),
            encode_header("", "/"),
            encode_header("", "https"),
            encode_header("accept-encoding", "gzip"),
            encode_header("user-agent", "Go-http-client/2.0"),
        )
    )
    return Frame(FrameType.HEADERS, _FLAGS_END_STREAM_HEADERS, 1, headers).to_bytes()


def parse_settings(data: bytes) -> list[SettingsEntry]:
    """Read SETTINGS entries; identifiers this client does not know are ignored."""
    if len(data) % _SETTING.size:
        raise ValueError(f"SETTINGS payload of {len(data)} bytes is not a multiple of 6")
    entries = []
    for identifier, value in _SETTING.iter_unpack(data):
        try:
            entries.append(SettingsEntry(Setting(identifier), value))
        except ValueError:
            continue
    return entries


def _split_frame(data: bytes, pos: int = 0) -> tuple[int, int, int, bytes, int]:
    """Return type, flags, stream id, payload and end position of the frame at *pos*."""
    if len(data) - pos < _FRAME_HEADER_SIZE:
        raise ValueError("data ends inside a frame header")
    length = int.from_bytes(data[pos : pos + 3], "big")
    kind = data[pos + 3]
    flags = data[pos + 4]
    stream_id = int.from_bytes(data[pos + 5 : pos + 9], "big") & _STREAM_MASK
    start = pos + _FRAME_HEADER_SIZE
    end = start + length
    if end > len(data):
        raise ValueError(f"frame needs {length} payload bytes, got {len(data) - start}")
    return kind, flags, stream_id, bytes(data[start:end]), end


def _decode(kind: int, stream_id: int, payload: bytes) -> ParsedFrame:
    if kind == FrameType.SETTINGS:
        return ParsedFrame(FrameType.SETTINGS, parse_settings(payload))
    if kind == FrameType.WINDOW_UPDATE:
        if len(payload) < 4:
            raise ValueError("WINDOW_UPDATE payload is shorter than 4 bytes")
        increment = int.from_bytes(payload[:4], "big") & _STREAM_MASK
        return ParsedFrame(FrameType.WINDOW_UPDATE, WindowUpdate(stream_id, increment))
    if kind == FrameType.HEADERS:
        return ParsedFrame(FrameType.HEADERS, decode_header_block(payload))
    try:
        kind = FrameType(kind)
    except ValueError:
        pass
    return ParsedFrame(kind, payload)


def parse_frame(data: bytes) -> ParsedFrame:
    """Parse the single frame at the start of *data*."""
    kind, _, stream_id, payload, _ = _split_frame(data)
    return _decode(kind, stream_id, payload)


def parse_frames(data: bytes) -> list[ParsedFrame]:
    """Parse consecutive frames, leaving out acknowledgements of our SETTINGS."""
    frames = []
    pos = 0
    while pos < len(data):
        kind, flags, stream_id, payload, pos = _split_frame(data, pos)
        if kind == FrameType.SETTINGS and flags & _FLAG_ACK and not payload:
            continue
        frames.append(_decode(kind, stream_id, payload))
    return frames