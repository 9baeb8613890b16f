import pytest

from rawnet.ethernet import EtherType, EthernetFrame
from rawnet.ip import IPHeader, IPProtocol, ip_to_bytes
from rawnet.packet import (
    ACK,
    PSHACK,
    SYNACK,
    RawPacket,
    TcpHeader,
    advance_sequence,
    parse_packet,
)

SOURCE_MAC = bytes.fromhex("020000000001")
DEST_MAC = bytes.fromhex("020000000002")


def _segment(**overrides):
    fields = dict(
        source_port=42279,
        destination_port=8080,
        sequence=1000,
        acknowledgement=2000,
        flags=PSHACK,
        window=0xFAF0,
        checksum=0x1234,
        data=b"HTTP/1.1 200 OK\r\n",
    )
    fields.update(overrides)
    return TcpHeader(**fields)


def test_tcp_round_trip():
    segment = _segment()
    assert TcpHeader.parse(segment.to_bytes()) == segment


def test_tcp_wire_layout():
    raw = _segment(data=b"").to_bytes()
    assert raw[0:2] == (42279).to_bytes(2, "big")
    assert raw[2:4] == (8080).to_bytes(2, "big")
    assert raw[12] == 0x50
    assert raw[13] == PSHACK
    assert len(raw) == 20


def test_tcp_options_are_split_from_data():
    options = b"\x02\x04\x05\xb4"
    segment = _segment(offset=0x60, options=options, flags=SYNACK, data=b"xyz")
    parsed = TcpHeader.parse(segment.to_bytes())
    assert parsed.header_size == 24
    assert parsed.options == options
    assert parsed.data == b"xyz"
    assert parsed.flags == SYNACK


def test_tcp_parse_too_short():
    with pytest.raises(ValueError):
        TcpHeader.parse(b"\x00" * 19)


def test_tcp_parse_offset_beyond_data():
    raw = bytearray(_segment(data=b"").to_bytes())
    raw[12] = 0xF0
    with pytest.raises(ValueError):
        TcpHeader.parse(bytes(raw))


def test_tcp_parse_offset_below_minimum():
    raw = bytearray(_segment(data=b"").to_bytes())
    raw[12] = 0x40
    with pytest.raises(ValueError):
        TcpHeader.parse(bytes(raw))


def test_parse_packet_splits_layers():
    ethernet = EthernetFrame(DEST_MAC, SOURCE_MAC, EtherType.IPV4)
    segment = _segment(flags=ACK, data=b"")
    ip = IPHeader(
        source=ip_to_bytes("127.0.0.1"),
        destination=ip_to_bytes("127.0.0.1"),
        protocol=IPProtocol.TCP,
        total_length=20 + len(segment.to_bytes()),
    ).with_checksum()
    frame = ethernet.to_bytes() + ip.to_bytes() + segment.to_bytes()

    packet = parse_packet(frame)

    assert packet == RawPacket(ethernet=ethernet, ip=ip, tcp=segment)
    assert packet.ip.protocol == IPProtocol.TCP
    assert packet.tcp.flags == ACK


def test_parse_packet_truncated():
    ethernet = EthernetFrame(DEST_MAC, SOURCE_MAC, EtherType.IPV4)
    with pytest.raises(ValueError):
        parse_packet(ethernet.to_bytes() + b"\x45" * 10)


def test_advance_sequence_adds():
    assert advance_sequence(1000, 17) == 1017


def test_advance_sequence_wraps_at_32_bits():
    assert advance_sequence(0xFFFFFFFF, 1) == 0


@pytest.mark.parametrize("start", [0, 123456, 0xFFFFFFF0])
def test_advance_sequence_stays_in_range(start):
    result = advance_sequence(start, 0x20)
    assert 0 <= result < 1 << 32
    assert (result - start) % (1 << 32) == 0x20