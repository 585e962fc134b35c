"""Building fake tickets (title.tik) and certificate chains (title.cert)."""

from __future__ import annotations

import os
import struct
from collections.abc import Callable
from enum import IntFlag
from pathlib import Path

APP_NAME = "NUSspli"
MAGIC_HEADER = bytes(range(10))
HEADER_SIG_TYPE = 0x00010004
META_VERSION = 0x01

HEADER_SIZE = 0x140
TICKET_SIZE = 0x2B8
CA3_CERT_SIZE = 0x400
XSC_CERT_SIZE = 0x300
CP8_CERT_SIZE = 0x1C0
CETK_SIZE = HEADER_SIZE + CA3_CERT_SIZE + XSC_CERT_SIZE + CP8_CERT_SIZE

TICKET_ISSUER = "Root-CA00000003-XS0000000c"
TICKET_ID_MASK = 0x0000FFFFFFFFFFFF
TICKET_ID_PREFIX = 0x0005000000000000
KEY_SIZE = 0x10

_HEADER = struct.Struct(">I10s2x16s16s16s175xB80s")
_TICKET_BODY = struct.Struct(">64s60sBBB16sxQIQHH8xBBH40xIxB66x64sHHIIHHI")
_CA3 = struct.Struct(">64s3xB64s256s4xI52xI512s60x")
_XSC = struct.Struct(">64s3xB64s256s4xI52xI256s60x")
_CP8 = struct.Struct(">64s3xB64s256s4xI52x")

_RAND_AREA_SIZE = 0x50
_PUBKEY_SIZE = 0x3C
_TEXT_FIELD_SIZE = 0x10

Rng = Callable[[int], bytes]


class FileType(IntFlag):
    """Kinds of files handled for a title; TORAM may be OR'ed onto one of them."""

    TMD = 1
    TIK = 1 << 1
    CERT = 1 << 2
    APP = 1 << 3
    H3 = 1 << 4
    JSON = 1 << 5
    TORAM = 1 << 6


def _random(rng: Rng | None, size: int) -> bytes:
    data = bytes((rng or os.urandom)(size))
    if len(data) != size:
        raise ValueError(f"random source returned {len(data)} bytes, expected {size}")
    return data


def _text(name: str, value: str, size: int) -> bytes:
    raw = value.encode("ascii")
    if len(raw) > size:
        raise ValueError(f"{name} must fit in {size} bytes, got {len(raw)}")
    return raw


def _check_range(name: str, value: int, bits: int) -> None:
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{name} out of unsigned {bits}-bit range: {value}")


def build_header(file_type: FileType, version: str, rng: Rng | None = None) -> bytes:
    """Build the 0x140-byte marker header hidden in the signature area."""
    kind = "Ticket" if file_type == FileType.TIK else "Certificate"
    return _HEADER.pack(
        HEADER_SIG_TYPE,
        MAGIC_HEADER,
        _text("app name", APP_NAME, _TEXT_FIELD_SIZE),
        _text("version", version, _TEXT_FIELD_SIZE),
        _text("file type", kind, _TEXT_FIELD_SIZE),
        META_VERSION,
        _random(rng, _RAND_AREA_SIZE),
    )


def build_ticket(
    title_id: int,
    title_version: int,
    key: bytes,
    version: str,
    rng: Rng | None = None,
) -> bytes:
    """Build a unique ticket without sections for the given title and encrypted key."""
    _check_range("title ID", title_id, 64)
    _check_range("title version", title_version, 16)
    key = bytes(key)
    if len(key) != KEY_SIZE:
        raise ValueError(f"key must be {KEY_SIZE} bytes, got {len(key)}")

    header = build_header(FileType.TIK, version, rng)
    pubkey = _random(rng, _PUBKEY_SIZE)
    ticket_id = int.from_bytes(_random(rng, 8), "big")
    ticket_id = (ticket_id & TICKET_ID_MASK) | TICKET_ID_PREFIX

    body = _TICKET_BODY.pack(
        TICKET_ISSUER.encode("ascii"),
        pubkey,
        0x01,  # version
        0x01,  # ca_crl_version
        0x00,  # signer_crl_version
        key,
        ticket_id,
        0,  # device_id
        title_id,
        0,  # sys_access
        title_version,
        0,  # license_type
        0,  # ckey_index
        0x0006,  # property_mask
        0,  # account_id
        0x01,  # audit
        bytes(0x40),  # limit_entries
        0x0001,  # header_version
        0,  # header_size
        0x14,  # total_hdr_size
        0,  # sect_hdr_offset
        0,  # num_sect_headers
        0,  # num_sect_header_entry_size
        0,  # header_flags
    )
    return header + body


def build_cert(version: str, rng: Rng | None = None) -> bytes:
    """Build the three-part certificate chain with random signatures."""
    header = build_header(FileType.CERT, version, rng)
    sig1 = _random(rng, 0x100)
    cert1 = _random(rng, 0x200)
    sig2 = _random(rng, 0x100)
    cert2 = _random(rng, 0x100)
    sig3 = _random(rng, 0x100)

    ca3 = _CA3.pack(
        b"Root-CA00000003", 0x01, b"CP0000000b", sig1, 0x00010001, 0x00010003, cert1
    )
    xsc = _XSC.pack(b"Root", 0x01, b"CA00000003", sig2, 0x00010001, 0x00010004, cert2)
    cp8 = _CP8.pack(b"Root-CA00000003", 0x01, b"XS0000000c", sig3, 0x00010001)
    return header + ca3 + xsc + cp8


def write_ticket(
    path: str | os.PathLike[str],
    title_id: int,
    title_version: int,
    key: bytes,
    version: str,
    rng: Rng | None = None,
) -> bytes:
    """Write a new ticket to ``path`` and return its bytes."""
    data = build_ticket(title_id, title_version, key, version, rng)
    Path(path).write_bytes(data)
    return data


def write_cert(
    path: str | os.PathLike[str],
    version: str,
    rng: Rng | None = None,
) -> bytes:
    """Write a new certificate chain to ``path`` and return its bytes."""
    data = build_cert(version, rng)
    Path(path).write_bytes(data)
    return data