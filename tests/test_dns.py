import pytest

from rawnet.dns import DnsQuery, dns_query, encode_name

JPRS = bytes(
    [0x03, 0x77, 0x77, 0x77, 0x04, 0x6A, 0x70, 0x72,
     0x73, 0x02, 0x63, 0x6F, 0x02, 0x6A, 0x70, 0x00]
)


def test_encode_name_matches_wire_form():
    assert encode_name("www.jprs.co.jp") == JPRS


def test_encode_name_ignores_empty_labels():
    assert encode_name(".www.jprs.co.jp.") == JPRS


def test_encode_name_rejects_long_label():
    with pytest.raises(ValueError):
        encode_name("a" * 64 + ".com")


def test_query_header_bytes():
    data = dns_query("www.jprs.co.jp").to_bytes()
    assert data[:12] == b"\x00\x00\x01\x00\x00\x01\x00\x00\x00\x00\x00\x00"


def test_query_layout():
    data = dns_query("www.jprs.co.jp").to_bytes()
    assert data[12:-4] == JPRS
    assert data[-4:] == b"\x00\x01\x00\x01"
    assert len(data) == 12 + len(JPRS) + 4


def test_query_carries_encoded_name():
    assert dns_query("example.com") == DnsQuery(name=encode_name("example.com"))