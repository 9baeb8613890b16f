# rawnet

Byte-level building blocks for the classic network stack. `rawnet` builds and
parses the wire formats of Ethernet, ARP, IPv4, ICMP, TCP, DNS queries,
HTTP/1.1 requests, HPACK and HTTP/2 frames, and derives TLS 1.2 keys with the
SHA-256 PRF. Each layer becomes plain `bytes` that you can inspect, join and
hand to a socket of your own.

## Installation

```
pip install rawnet
```

It needs Python 3.10 or later. The only dependency is `cryptography`, which
`rawnet.tlsprf` uses for AES-GCM and X25519.

## Modules

| Module | What it covers |
| --- | --- |
| `rawnet.checksum` | `sum_words`, `checksum`, `internet_checksum`, `format_bytes` |
| `rawnet.ethernet` | `EtherType`, `EthernetFrame` |
| `rawnet.ip` | `IPProtocol`, `IPHeader`, `ip_to_bytes` |
| `rawnet.arp` | `Arp`, `arp_request`, `find_arp_reply` |
| `rawnet.icmp` | `Icmp`, `echo_request`, `find_icmp_reply` |
| `rawnet.dns` | `DnsQuery`, `encode_name`, `dns_query` |
| `rawnet.http` | `HttpRequest`, `get_request` |
| `rawnet.hpack` | `HeaderField`, `STATIC_TABLE`, Huffman coding, header blocks |
| `rawnet.http2` | `Frame`, `FrameType`, `Setting`, SETTINGS and WINDOW_UPDATE, the connection preface |
| `rawnet.packet` | `TcpHeader`, `RawPacket`, `parse_packet`, `advance_sequence`, TCP flag constants |
| `rawnet.tlsprf` | TLS 1.2 PRF, master secret, `KeyBlock`, Finished protection, X25519 |

All message types are frozen dataclasses. Parsers raise `ValueError` when the
data is too short or malformed.

## Examples

### Checksums

```python
from rawnet.checksum import format_bytes, internet_checksum

digest = internet_checksum(b"\x08\x00\x00\x00\x00\x10\x00\x01\x01\x02")
print(format_bytes(digest))
```

`internet_checksum` pads odd-length data with a zero byte; `sum_words` alone
refuses odd lengths.

### An ARP request in an Ethernet frame

The MAC and IP addresses below are made up.

```python
from rawnet.arp import arp_request
from rawnet.ethernet import EtherType, EthernetFrame
from rawnet.ip import ip_to_bytes

my_mac = bytes.fromhex("020000000001")
request = arp_request(my_mac, ip_to_bytes("192.0.2.10"), "192.0.2.1")
frame = EthernetFrame(b"\xff" * 6, my_mac, EtherType.ARP)
wire = frame.to_bytes() + request.to_bytes()
```

If a received Ethernet frame holds an ARP reply, `find_arp_reply(frame)`
returns the parsed `Arp`; otherwise it returns `None`.

### An ICMP echo request inside IPv4

```python
from dataclasses import replace

from rawnet.icmp import echo_request
from rawnet.ip import IPHeader, IPProtocol, ip_to_bytes

icmp = echo_request().to_bytes()
header = IPHeader(ip_to_bytes("192.0.2.10"), ip_to_bytes("192.0.2.1"), IPProtocol.ICMP)
header = replace(header, total_length=20 + len(icmp)).with_checksum()
datagram = header.to_bytes() + icmp
```

`find_icmp_reply(frame)` returns the ICMP message carried in an
Ethernet/IPv4 frame whose protocol is ICMP, or `None`.

### HTTP/1.1 and DNS

```python
from rawnet.dns import dns_query, encode_name
from rawnet.http import get_request

print(get_request("/", "localhost:8080").to_bytes())
print(encode_name("www.example.com"))
query = dns_query("www.example.com").to_bytes()
```

### HPACK and HTTP/2

```python
from rawnet.hpack import decode_header_block, encode_header, huffman_decode, huffman_encode
from rawnet.http2 import connection_preface, first_frames, header_frame, parse_frames

assert huffman_decode(huffman_encode("www.example.com")) == "www.example.com"

block = encode_header("", "GET") + encode_header("user-agent", "rawnet")
for field in decode_header_block(block):
    print(field.name, field.value)

opening = first_frames() + header_frame()
for frame in parse_frames(opening[len(connection_preface()):]):
    print(frame.type, frame.frame)
```

`parse_frames` leaves out empty SETTINGS acknowledgements. SETTINGS frames
decode to a list of `SettingsEntry`, WINDOW_UPDATE to `WindowUpdate`,
HEADERS to a list of `HeaderField`, and other frames to their raw payload.

### TCP parsing

```python
from rawnet.packet import advance_sequence, parse_packet

assert advance_sequence(0xFFFFFFFF, 1) == 0
```

`parse_packet(data)` splits one captured Ethernet/IPv4/TCP frame into a
`RawPacket` with `ethernet`, `ip` and `tcp` parts; `TcpHeader.parse` keeps
the options and the segment data apart.

### TLS 1.2 key derivation

```python
from rawnet.tlsprf import (
    client_verify_data,
    decrypt_record,
    encrypt_finished,
    key_block,
    master_secret,
    x25519_keypair,
    x25519_shared,
)

premaster = b"\x03\x03" + bytes(46)
client_random = bytes(32)
server_random = bytes(32)

master = master_secret(premaster, client_random, server_random)
keys = key_block(master, client_random, server_random)
verify = client_verify_data(master, b"...handshake messages...")
record = encrypt_finished(keys.client_write_key, verify, keys.client_write_iv)

alice_private, alice_public = x25519_keypair()
bob_private, bob_public = x25519_keypair()
assert x25519_shared(alice_private, bob_public) == x25519_shared(bob_private, alice_public)
```

`decrypt_record` raises `ValueError` when a record does not authenticate.

## What it does not do

`rawnet` only builds and parses bytes. It opens no sockets and sends or
receives nothing, so it does not resolve addresses over ARP, ping, run a TCP
handshake, or talk to an HTTP server by itself. The HPACK decoder works
against the static table only and keeps no dynamic table. The TLS module
derives keys and protects a Finished message; it does not carry out a TLS
handshake.

## Running the tests

```
pip install -e ".[test]"
pytest
```