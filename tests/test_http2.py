import pytest

from rawnet.hpack import HeaderField
from rawnet.http2 import (
    STREAM_MAGIC,
    Frame,
    FrameType,
    ParsedFrame,
    Setting,
    SettingsEntry,
    WindowUpdate,
    connection_preface,
    first_frames,
    header_frame,
    parse_frame,
    parse_frames,
    parse_settings,
    settings_frame,
)


def test_connection_preface():
    assert connection_preface() == b"PRI * HTTP/2.0\r\n\r\nSM\r\n\r\n"


def test_frame_header_layout():
    raw = Frame(FrameType.PING, 0, 0, b"abcdefgh").to_bytes()
    assert raw[:9] == b"\x00\x00\x08\x06\x00\x00\x00\x00\x00"
    assert raw[9:] == b"abcdefgh"


def test_settings_frame_round_trip():
    parsed = parse_frame(settings_frame().to_bytes())
    assert parsed == ParsedFrame(
        FrameType.SETTINGS,
        [
            SettingsEntry(Setting.ENABLE_PUSH, 0),
            SettingsEntry(Setting.INITIAL_WINDOW_SIZE, 0x00400000),
            SettingsEntry(Setting.MAX_HEADER_LIST_SIZE, 0x00A00000),
        ],
    )


def test_first_frames_layout():
    data = first_frames()
    preface = STREAM_MAGIC.encode()
    assert data.startswith(preface)
    frames = parse_frames(data[len(preface) :])
    assert [frame.type for frame in frames] == [FrameType.SETTINGS, FrameType.WINDOW_UPDATE]
    assert frames[1].frame == WindowUpdate(0, 0x40000000)


def test_header_frame_content():
    raw = header_frame()
    assert raw[3] == FrameType.HEADERS
    assert raw[4] == 0x05
    assert int.from_bytes(raw[5:9], "big") == 1
    assert int.from_bytes(raw[:3], "big") == len(raw) - 9
    parsed = parse_frame(raw)
    assert parsed.frame == [
        HeaderField(":authority", "127.0.0.1:18443"),
        HeaderField(":method", "GET"),
        HeaderField(":path", "/"),
        HeaderField(":scheme", "https"),
        HeaderField("accept-encoding", "gzip"),
        HeaderField("user-agent", "Go-http-client/2.0"),
    ]


def test_data_frame_returns_payload():
    raw = Frame(FrameType.DATA, 0x01, 1, b"hello\n").to_bytes()
    assert parse_frame(raw) == ParsedFrame(FrameType.DATA, b"hello\n")


def test_parse_frames_skips_settings_ack():
    ack = Frame(FrameType.SETTINGS, 0x01, 0, b"").to_bytes()
    data = Frame(FrameType.DATA, 0x01, 1, b"hello\n").to_bytes()
    assert parse_frames(ack + data) == [ParsedFrame(FrameType.DATA, b"hello\n")]


def test_parse_frames_keeps_order():
    headers = header_frame()
    data = Frame(FrameType.DATA, 0x01, 1, b"body").to_bytes()
    frames = parse_frames(headers + data)
    assert [frame.type for frame in frames] == [FrameType.HEADERS, FrameType.DATA]
    assert frames[1].frame == b"body"


def test_parse_settings_max_frame_size():
    payload = SettingsEntry(Setting.MAX_FRAME_SIZE, 16384).to_bytes()
    assert parse_settings(payload) == [SettingsEntry(Setting.MAX_FRAME_SIZE, 16384)]


def test_parse_settings_ignores_unknown_identifier():
    unknown = (0x99).to_bytes(2, "big") + (7).to_bytes(4, "big")
    known = SettingsEntry(Setting.ENABLE_PUSH, 1).to_bytes()
    assert parse_settings(unknown + known) == [SettingsEntry(Setting.ENABLE_PUSH, 1)]


def test_parse_settings_rejects_partial_entry():
    with pytest.raises(ValueError):
        parse_settings(b"\x00\x02\x00\x00\x00")


def test_parse_frame_rejects_truncated_payload():
    raw = Frame(FrameType.DATA, 0, 1, b"hello").to_bytes()
    with pytest.raises(ValueError):
        parse_frame(raw[:-1])


def test_parse_frame_rejects_short_header():
    with pytest.raises(ValueError):
        parse_frame(b"\x00\x00\x00\x04")