"""HPACK header compression: Huffman coding and static-table header fields."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "HeaderField",
    "STATIC_TABLE",
    "huffman_encode",
    "huffman_decode",
    "decode_header_block",
    "encode_header",
]


@dataclass(frozen=True)
class HeaderField:
    """One HTTP/2 header: a name and its value."""

    name: str
    value: str = ""


def _build_static_table() -> tuple[HeaderField, ...]:
    pseudo = (
        (":authority", ("",)),
        (":method", ("GET", "POST")),
        (":path", ("/", "/index.html")),
        (":scheme", ("http", "https")),
        (":status", ("200", "204", "206", "304", "400", "404", "500")),
    )
    plain_names = (
        "accept-language accept-ranges accept access-control-allow-origin age "
        "allow authorization cache-control content-disposition content-encoding "
        "content-language content-length content-location content-range "
        "content-type cookie date etag expect expires from host if-match "
        "if-modified-since if-none-match if-range if-unmodified-since "
        "last-modified link location max-forwards proxy-authenticate "
        "proxy-authorization range referer refresh retry-after server "
        "set-cookie strict-transport-security transfer-encoding user-agent "
        "vary via www-authenticate"
    ).split()
    fields = [HeaderField(name, value) for name, values in pseudo for value in values]
    fields.append(HeaderField("accept-charset"))
    fields.append(HeaderField("accept-encoding", "gzip, deflate"))
    fields.extend(HeaderField(name) for name in plain_names)
    return tuple(fields)


STATIC_TABLE: tuple[HeaderField, ...] = _build_static_table()

# Later entries win, so a name shared by several entries maps to the last one.
_INDEX_BY_NAME = {field.name: index for index, field in enumerate(STATIC_TABLE, 1)}
_INDEX_BY_VALUE = {
    field.value: index for index, field in enumerate(STATIC_TABLE, 1) if field.value
}

# Runs of symbols with consecutive codes: (bit length, first code, symbols).
_HUFFMAN_RUNS: tuple[tuple[int, int, str], ...] = (
    (5, 0x00, "012aceiost"),
    (6, 0x14, " %-./3456789=A_bdfghlmnpru"),
    (7, 0x5C, ":BCDEFGHIJKLMNOPQRSTUVWYjkqvwxyz"),
    (8, 0xF8, "&*,;XZ"),
    (10, 0x3F8, "!\"()?"),
    (11, 0x7FA, "'+|"),
    (12, 0xFFA, "#>"),
    (13, 0x1FF9, "$@[]~"),
    (14, 0x3FFC, "^}"),
    (15, 0x7FFC, "<`{"),
    (19, 0x7FFF0, "\\"),
)

_HUFFMAN_CODES: dict[str, str] = {
    char: format(first + offset, f"0{length}b")
    for length, first, symbols in _HUFFMAN_RUNS
    for offset, char in enumerate(symbols)
}
_HUFFMAN_SYMBOLS = {code: char for char, code in _HUFFMAN_CODES.items()}
_MAX_CODE_LENGTH = max(length for length, _, _ in _HUFFMAN_RUNS)


def huffman_encode(text: str) -> bytes:
    """Huffman-code printable ASCII text, padding the last octet with 1 bits."""
    try:
        bits = "".join(_HUFFMAN_CODES[char] for char in text)
    except KeyError as exc:
        raise ValueError(f"no Huffman code for {exc.args[0]!r}") from None
    bits += "1" * (-len(bits) % 8)
    if not bits:
        return b""
    return int(bits, 2).to_bytes(len(bits) // 8, "big")


def huffman_decode(data: bytes) -> str:
    """Decode Huffman-coded bytes; trailing bits must be all-ones padding."""
    chars: list[str] = []
    code = ""
    for bit in "".join(f"{byte:08b}" for byte in data):
        code += bit
        char = _HUFFMAN_SYMBOLS.get(code)
        if char is not None:
            chars.append(char)
            code = ""
        elif len(code) > _MAX_CODE_LENGTH:
            raise ValueError(f"unknown Huffman code {code!r}")
    if "0" in code:
        raise ValueError("Huffman data ends inside a code")
    return "".join(chars)


def _static_entry(index: int) -> HeaderField:
    if not 1 <= index <= len(STATIC_TABLE):
        raise ValueError(f"header index {index} is outside the static table")
    return STATIC_TABLE[index - 1]


def _read_int(data: bytes, pos: int, prefix_bits: int) -> tuple[int, int]:
    """Read an HPACK prefix integer starting at *pos*; return it and the next position."""
    mask = (1 << prefix_bits) - 1
    value = data[pos] & mask
    pos += 1
    if value < mask:
        return value, pos
    shift = 0
    while True:
        if pos >= len(data):
            raise ValueError("header block ends inside an integer")
        byte = data[pos]
        pos += 1
        value += (byte & 0x7F) << shift
        shift += 7
        if not byte & 0x80:
            return value, pos


def _read_string(data: bytes, pos: int) -> tuple[str, int]:
    if pos >= len(data):
        raise ValueError("header block ends before a string")
    huffman = bool(data[pos] & 0x80)
    length, pos = _read_int(data, pos, 7)
    end = pos + length
    if end > len(data):
        raise ValueError("header block ends inside a string")
    raw = bytes(data[pos:end])
    return (huffman_decode(raw) if huffman else raw.decode("latin-1")), end


def _read_literal(data: bytes, pos: int, prefix_bits: int) -> tuple[HeaderField, int]:
    index, pos = _read_int(data, pos, prefix_bits)
    if index == 0:
        name, pos = _read_string(data, pos)
    else:
        name = _static_entry(index).name
    value, pos = _read_string(data, pos)
    return HeaderField(name, value), pos


def decode_header_block(data: bytes) -> list[HeaderField]:
    """Decode an HPACK header block against the static table."""
    fields: list[HeaderField] = []
    pos = 0
    while pos < len(data):
        first = data[pos]
        if first & 0x80:
            index, pos = _read_int(data, pos, 7)
            fields.append(_static_entry(index))
        elif first & 0x40:
            field, pos = _read_literal(data, pos, 6)
            fields.append(field)
        elif first & 0x20:
            # Dynamic table size update: nothing to record.
            _, pos = _read_int(data, pos, 5)
        else:
            field, pos = _read_literal(data, pos, 4)
            fields.append(field)
    return fields


def _encode_int(value: int, prefix_bits: int, flags: int) -> bytes:
    limit = (1 << prefix_bits) - 1
    if value < limit:
        return bytes([flags | value])
    out = bytearray([flags | limit])
    value -= limit
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def _encode_string(text: str) -> bytes:
    encoded = huffman_encode(text)
    return _encode_int(len(encoded), 7, 0x80) + encoded


def encode_header(name: str, value: str) -> bytes:
    """Encode one header.

    With an empty *name* the value must be in the static table and is sent as
    an indexed field; otherwise a literal with incremental indexing is sent,
    naming the header by static index where the table has it.
    """
    if not name:
        index = _INDEX_BY_VALUE.get(value)
        if index is None:
            raise ValueError(f"value {value!r} is not in the static table")
        return _encode_int(index, 7, 0x80)
    index = _INDEX_BY_NAME.get(name)
    if index is None:
        return b"\x40" + _encode_string(name) + _encode_string(value)
    return _encode_int(index, 6, 0x40) + _encode_string(value)