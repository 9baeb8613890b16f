"""TLS 1.2 key derivation, Finished protection and X25519 key agreement."""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.asymmetric.x25519 import (
    X25519PrivateKey,
    X25519PublicKey,
)
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)

__all__ = [
    "MASTER_SECRET_LABEL",
    "KEY_EXPANSION_LABEL",
    "CLIENT_FINISHED_LABEL",
    "KeyBlock",
    "p_hash",
    "prf",
    "master_secret",
    "key_block",
    "client_verify_data",
    "encrypt_finished",
    "decrypt_record",
    "x25519_keypair",
    "x25519_shared",
]

MASTER_SECRET_LABEL = b"master secret"
KEY_EXPANSION_LABEL = b"key expansion"
CLIENT_FINISHED_LABEL = b"client finished"

_MASTER_SECRET_SIZE = 48
_VERIFY_DATA_SIZE = 12
_KEY_SIZE = 16
_IV_SIZE = 4
_KEY_BLOCK_SIZE = 2 * _KEY_SIZE + 2 * _IV_SIZE
_EXPLICIT_NONCE = bytes(8)
_FINISHED_AAD = bytes(8) + b"\x14\x00\x00\x0c"


@dataclass(frozen=True)
class KeyBlock:
    """Keys and implicit IVs for an AES-128-GCM connection."""

    client_write_key: bytes
    server_write_key: bytes
    client_write_iv: bytes
    server_write_iv: bytes

    @classmethod
    def from_bytes(cls, data: bytes) -> "KeyBlock":
        """Split a 40-byte key block into its parts."""
        if len(data) < _KEY_BLOCK_SIZE:
            raise ValueError(f"a key block needs {_KEY_BLOCK_SIZE} bytes, got {len(data)}")
        key_end = 2 * _KEY_SIZE
        return cls(
            client_write_key=bytes(data[:_KEY_SIZE]),
            server_write_key=bytes(data[_KEY_SIZE:key_end]),
            client_write_iv=bytes(data[key_end : key_end + _IV_SIZE]),
            server_write_iv=bytes(data[key_end + _IV_SIZE : key_end + 2 * _IV_SIZE]),
        )


def p_hash(secret: bytes, seed: bytes, length: int) -> bytes:
    """Expand *secret* and *seed* into *length* bytes with HMAC-SHA256."""
    if length < 0:
        raise ValueError("length cannot be negative")
    output = bytearray()
    a = hmac.digest(secret, seed, hashlib.sha256)
    while len(output) < length:
        output += hmac.digest(secret, a + seed, hashlib.sha256)
        a = hmac.digest(secret, a, hashlib.sha256)
    return bytes(output[:length])


def prf(secret: bytes, label: bytes, seed: bytes, length: int) -> bytes:
    """The TLS 1.2 pseudo-random function over SHA-256."""
    return p_hash(secret, label + seed, length)


def master_secret(premaster: bytes, client_random: bytes, server_random: bytes) -> bytes:
    """Derive the 48-byte master secret from the premaster secret."""
    return prf(premaster, MASTER_SECRET_LABEL, client_random + server_random, _MASTER_SECRET_SIZE)


def key_block(master: bytes, client_random: bytes, server_random: bytes) -> KeyBlock:
    """Derive the AES-128-GCM keys and IVs from the master secret."""
    block = prf(master, KEY_EXPANSION_LABEL, server_random + client_random, _KEY_BLOCK_SIZE)
    return KeyBlock.from_bytes(block)


def client_verify_data(master: bytes, handshake_messages: bytes) -> bytes:
    """Return the 12-byte verify_data of the client's Finished message."""
    digest = hashlib.sha256(handshake_messages).digest()
    return prf(master, CLIENT_FINISHED_LABEL, digest, _VERIFY_DATA_SIZE)


def encrypt_finished(key: bytes, verify_data: bytes, iv_prefix: bytes) -> bytes:
    """Seal *verify_data* with AES-GCM as the first record after ChangeCipherSpec."""
    nonce = bytes(iv_prefix) + _EXPLICIT_NONCE
    return AESGCM(bytes(key)).encrypt(nonce, bytes(verify_data), _FINISHED_AAD)


def decrypt_record(key: bytes, nonce: bytes, ciphertext: bytes, aad: bytes) -> bytes:
    """Open an AES-GCM record; raise ValueError if it does not authenticate."""
    try:
        return AESGCM(bytes(key)).decrypt(bytes(nonce), bytes(ciphertext), bytes(aad))
    except InvalidTag:
        raise ValueError("record failed authentication") from None


def x25519_keypair() -> tuple[bytes, bytes]:
    """Generate a fresh X25519 key pair as raw (private, public) bytes."""
    private = X25519PrivateKey.generate()
    private_raw = private.private_bytes(Encoding.Raw, PrivateFormat.Raw, NoEncryption())
    public_raw = private.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)
    return private_raw, public_raw


def x25519_shared(private_key: bytes, peer_public: bytes) -> bytes:
    """Compute the X25519 shared secret of a raw private key and a peer's public key."""
    private = X25519PrivateKey.from_private_bytes(bytes(private_key))
    public = X25519PublicKey.from_public_bytes(bytes(peer_public))
    return private.exchange(public)