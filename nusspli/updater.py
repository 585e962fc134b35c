"""Self-update support: check URLs, server responses, release archives."""

from __future__ import annotations

import io
import json
import os
import zipfile
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Union

NAPI_URL = "https://napi.example.com/v2/"
UPDATE_CHECK_URL = NAPI_URL + "s?t="
UPDATE_DOWNLOAD_URL = "https://releases.example.com/download/v"
DEBUG_SUFFIX = "-DEBUG"

Archive = Union[bytes, bytearray, memoryview, str, "os.PathLike[str]", BinaryIO]


class NusspliType(IntEnum):
    """The flavour of the application an update is built for."""

    AROMA = 0
    CHANNEL = 1
    HBL = 2


class UpdateError(Exception):
    """Raised when checking for or applying an update fails."""


@dataclass(frozen=True)
class UpdateInfo:
    """A newer release offered by the update server."""

    version: str
    type: NusspliType


_CHECK_LETTERS = {
    "hbl": "h",
    "lite": "l",
    "aroma": "a",
    "channel": "c",
}


def update_check_url(variant: NusspliType | str) -> str:
    """Return the update check URL for a build variant.

    ``variant`` is a :class:`NusspliType` or one of "aroma", "channel",
    "hbl" and "lite".
    """
    key = variant.name.lower() if isinstance(variant, NusspliType) else str(variant).lower()
    try:
        return UPDATE_CHECK_URL + _CHECK_LETTERS[key]
    except KeyError:
        raise ValueError(f"unknown build variant: {variant!r}") from None


def _as_int(value: object) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _as_str(value: object) -> str | None:
    return value if isinstance(value, str) else None


def parse_update_response(payload: bytes | str, own_type: NusspliType) -> UpdateInfo | None:
    """Interpret the server's answer to an update check.

    Returns the offered update, or None when there is none or the answer
    cannot be understood. Server-side failures raise :class:`UpdateError`.
    """
    try:
        data = json.loads(payload)
    except (ValueError, TypeError):
        return None
    if not isinstance(data, dict):
        return None

    state = _as_int(data.get("s"))
    if state is None:
        return None

    if state == 0:
        return None
    if state == 1:
        version = _as_str(data.get("v"))
        return None if version is None else UpdateInfo(version, NusspliType(own_type))
    if state == 2:
        version = _as_str(data.get("v"))
        if version is None:
            return None
        suggested = _as_int(data.get("t")) or 0
        if not suggested:
            return None
        try:
            return UpdateInfo(version, NusspliType(suggested))
        except ValueError:
            raise UpdateError("Internal error!") from None
    if state in (3, 4):
        raise UpdateError("Internal server error!")
    raise UpdateError(f"Invalid state value: {state}")


def release_url(new_version: str, kind: NusspliType, lite: bool = False, debug: bool = False) -> str:
    """Return the download URL of a release archive."""
    try:
        kind = NusspliType(kind)
    except ValueError:
        raise UpdateError("Internal error!") from None

    if kind is NusspliType.AROMA:
        suffix = "-Lite" if lite else "-Aroma"
    elif kind is NusspliType.CHANNEL:
        suffix = "-Channel"
    else:
        suffix = "-HBL"

    debug_part = DEBUG_SUFFIX if debug else ""
    return f"{UPDATE_DOWNLOAD_URL}{new_version}/NUSspli-{new_version}{suffix}{debug_part}.zip"


def _open_archive(archive: Archive) -> zipfile.ZipFile:
    source: object
    if isinstance(archive, (bytes, bytearray, memoryview)):
        source = io.BytesIO(bytes(archive))
    else:
        source = archive
    try:
        return zipfile.ZipFile(source)  # type: ignore[arg-type]
    except (zipfile.BadZipFile, OSError, ValueError) as exc:
        raise UpdateError("Error opening zip!") from exc


def _target_for(member: str, destination: Path) -> Path:
    parts = PurePosixPath(member).parts
    if not parts or member.startswith("/") or any(p in ("..", "") for p in parts) or "\\" in member:
        raise UpdateError(f"Error extracting zip: unsafe entry {member!r}")
    return destination.joinpath(*parts)


def extract_update(archive: Archive, destination: str | os.PathLike[str]) -> list[Path]:
    """Unpack a release archive below ``destination``.

    Directory entries are skipped; parent directories are created as needed.
    Returns the paths of the files written, in archive order.
    """
    dest = Path(destination)
    written: list[Path] = []
    with _open_archive(archive) as zf:
        for info in zf.infolist():
            if info.filename.endswith("/"):
                continue
            target = _target_for(info.filename, dest)
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise UpdateError(f"Error creating directory: {target.parent}") from exc
            try:
                with zf.open(info) as src, open(target, "wb") as out:
                    while chunk := src.read(128 * 1024):
                        out.write(chunk)
            except (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError) as exc:
                raise UpdateError(f"Error extracting file: {target}") from exc
            except OSError as exc:
                raise UpdateError(f"Error writing file: {target}") from exc
            written.append(target)
    return written