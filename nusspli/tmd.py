"""Reading and writing title metadata (TMD) files."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntFlag

CONTENT_INFO_COUNT = 64
TMD_SIZE = 0x0B04
CONTENT_SIZE = 0x30
CONTENT_INFO_SIZE = 0x24
IO_BUFSIZE = 128 * 1024

_SIG_SIZE = 256
_ISSUER_SIZE = 64
_HASH_SIZE = 32

_HEADER = struct.Struct(">I256s60x64sBBBxQQIH62xIHHH2x32s")
_INFO = struct.Struct(">HH32s")
_CONTENT = struct.Struct(">IHHQ32s")
_INFOS_OFFSET = _HEADER.size


class ContentType(IntFlag):
    """Flags found in a content record's type field."""

    ENCRYPTED = 0x0001
    HASHED = 0x0002
    CONTENT = 0x2000
    UNKNOWN = 0x4000


def _check_len(name: str, value: bytes, size: int) -> bytes:
    value = bytes(value)
    if len(value) != size:
        raise ValueError(f"{name} must be {size} bytes, got {len(value)}")
    return value


def _check_range(name: str, value: int, bits: int) -> None:
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{name} out of unsigned {bits}-bit range: {value}")


@dataclass
class TmdContent:
    """One content record: an .app file belonging to the title."""

    cid: int
    index: int
    type: int
    size: int
    hash: bytes = bytes(_HASH_SIZE)

    def __post_init__(self) -> None:
        _check_range("cid", self.cid, 32)
        _check_range("index", self.index, 16)
        _check_range("type", self.type, 16)
        _check_range("size", self.size, 64)
        self.hash = _check_len("hash", self.hash, _HASH_SIZE)

    @property
    def flags(self) -> ContentType:
        """The type field as content flags."""
        return ContentType(self.type)

    def to_bytes(self) -> bytes:
        return _CONTENT.pack(self.cid, self.index, self.type, self.size, self.hash)


@dataclass
class TmdContentInfo:
    """One content info record covering a run of content records."""

    index: int = 0
    count: int = 0
    hash: bytes = bytes(_HASH_SIZE)

    def __post_init__(self) -> None:
        _check_range("index", self.index, 16)
        _check_range("count", self.count, 16)
        self.hash = _check_len("hash", self.hash, _HASH_SIZE)

    def to_bytes(self) -> bytes:
        return _INFO.pack(self.index, self.count, self.hash)


@dataclass
class Tmd:
    """Title metadata. Reserved areas are written as zeros."""

    tid: int = 0
    title_version: int = 0
    sig_type: int = 0
    sig: bytes = bytes(_SIG_SIZE)
    issuer: bytes = bytes(_ISSUER_SIZE)
    version: int = 0
    ca_crl_version: int = 0
    signer_crl_version: int = 0
    sys_version: int = 0
    title_type: int = 0
    group: int = 0
    access_rights: int = 0
    boot_index: int = 0
    hash: bytes = bytes(_HASH_SIZE)
    content_infos: list[TmdContentInfo] = field(default_factory=list)
    contents: list[TmdContent] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.sig = _check_len("sig", self.sig, _SIG_SIZE)
        self.issuer = _check_len("issuer", self.issuer, _ISSUER_SIZE)
        self.hash = _check_len("hash", self.hash, _HASH_SIZE)
        for name, bits in (
            ("sig_type", 32),
            ("version", 8),
            ("ca_crl_version", 8),
            ("signer_crl_version", 8),
            ("sys_version", 64),
            ("tid", 64),
            ("title_type", 32),
            ("group", 16),
            ("access_rights", 32),
            ("title_version", 16),
            ("boot_index", 16),
        ):
            _check_range(name, getattr(self, name), bits)

        infos = list(self.content_infos)
        if len(infos) > CONTENT_INFO_COUNT:
            raise ValueError(f"at most {CONTENT_INFO_COUNT} content infos are allowed")
        infos.extend(TmdContentInfo() for _ in range(CONTENT_INFO_COUNT - len(infos)))
        self.content_infos = infos

        self.contents = list(self.contents)
        _check_range("number of contents", len(self.contents), 16)

    @property
    def num_contents(self) -> int:
        return len(self.contents)

    def to_bytes(self) -> bytes:
        """Serialise to the on-disk big-endian layout."""
        header = _HEADER.pack(
            self.sig_type,
            self.sig,
            self.issuer,
            self.version,
            self.ca_crl_version,
            self.signer_crl_version,
            self.sys_version,
            self.tid,
            self.title_type,
            self.group,
            self.access_rights,
            self.title_version,
            self.num_contents,
            self.boot_index,
            self.hash,
        )
        infos = b"".join(info.to_bytes() for info in self.content_infos)
        contents = b"".join(content.to_bytes() for content in self.contents)
        return header + infos + contents


def parse_tmd(data: bytes) -> Tmd:
    """Parse TMD bytes. Data after the last content record is ignored."""
    data = bytes(data)
    if len(data) < TMD_SIZE:
        raise ValueError(f"TMD too short: {len(data)} bytes, need at least {TMD_SIZE}")

    (
        sig_type,
        sig,
        issuer,
        version,
        ca_crl_version,
        signer_crl_version,
        sys_version,
        tid,
        title_type,
        group,
        access_rights,
        title_version,
        num_contents,
        boot_index,
        tmd_hash,
    ) = _HEADER.unpack_from(data)

    needed = TMD_SIZE + num_contents * CONTENT_SIZE
    if len(data) < needed:
        raise ValueError(
            f"TMD declares {num_contents} contents but holds only {len(data)} bytes"
        )

    infos = [TmdContentInfo(*fields) for fields in _INFO.iter_unpack(data[_INFOS_OFFSET:TMD_SIZE])]
    contents = [TmdContent(*fields) for fields in _CONTENT.iter_unpack(data[TMD_SIZE:needed])]

    return Tmd(
        tid=tid,
        title_version=title_version,
        sig_type=sig_type,
        sig=sig,
        issuer=issuer,
        version=version,
        ca_crl_version=ca_crl_version,
        signer_crl_version=signer_crl_version,
        sys_version=sys_version,
        title_type=title_type,
        group=group,
        access_rights=access_rights,
        boot_index=boot_index,
        hash=tmd_hash,
        content_infos=infos,
        contents=contents,
    )


def fs_align(value: int) -> int:
    """Round up to the next multiple of 0x40."""
    if value < 0:
        raise ValueError("value must not be negative")
    return (value + 0x3F) & ~0x3F