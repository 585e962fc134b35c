"""Character classification, hex helpers and human-readable formatting."""

from __future__ import annotations

CUSTOM_MCP_ERROR_EOM = 0xDEAD0001
CUSTOM_MCP_ERROR_CANCELLED = 0xDEAD0002

_MAX_HEX_DIGITS = 99
_MAX_DECODED_BYTES = 64
_UINT64_MAX = (1 << 64) - 1
_UINT32_MAX = (1 << 32) - 1
_FORBIDDEN_IN_FILENAME = frozenset('/\\"*:<>?|')
_INVALID_NIBBLE = 0xFF


def _single(c: str) -> str:
    if not isinstance(c, str) or len(c) != 1:
        raise ValueError(f"expected a single character, got {c!r}")
    return c


def is_number(c: str) -> bool:
    """Return True for an ASCII decimal digit."""
    return "0" <= _single(c) <= "9"


def is_lowercase(c: str) -> bool:
    """Return True for an ASCII lowercase letter."""
    return "a" <= _single(c) <= "z"


def is_uppercase(c: str) -> bool:
    """Return True for an ASCII uppercase letter."""
    return "A" <= _single(c) <= "Z"


def is_alphanumerical(c: str) -> bool:
    """Return True for an ASCII letter or digit."""
    return is_lowercase(c) or is_uppercase(c) or is_number(c)


def is_allowed_in_filename(c: str) -> bool:
    """Return True for printable ASCII that is safe in a file name."""
    c = _single(c)
    return " " <= c <= "~" and c not in _FORBIDDEN_IN_FILENAME


def is_lowercase_hexa(c: str) -> bool:
    """Return True for a digit or a lowercase hex letter."""
    return is_number(c) or "a" <= c <= "f"


def is_uppercase_hexa(c: str) -> bool:
    """Return True for a digit or an uppercase hex letter."""
    return is_number(c) or "A" <= c <= "F"


def is_hexa(c: str) -> bool:
    """Return True for any hexadecimal digit."""
    return is_lowercase_hexa(c) or is_uppercase_hexa(c)


def hex_string(value: int, digits: int) -> str:
    """Format an unsigned 64-bit value as lowercase hex, zero-padded to ``digits``."""
    if not 0 <= value <= _UINT64_MAX:
        raise ValueError(f"value out of unsigned 64-bit range: {value}")
    if not 0 <= digits <= _MAX_HEX_DIGITS:
        raise ValueError(f"digits must be between 0 and {_MAX_HEX_DIGITS}")
    return f"{value:0{digits}x}"


def secs_to_time(seconds: int) -> str:
    """Render a duration as hours, minutes and seconds, or "N/A" when empty."""
    if not 0 <= seconds <= _UINT32_MAX:
        raise ValueError(f"seconds out of unsigned 32-bit range: {seconds}")

    hour = seconds // 3600 % 3600
    minute = seconds // 60 % 60
    seconds %= 60

    parts: list[str] = []
    if hour:
        parts.append(f"{hour} hours")
    if minute or parts:
        parts.append(f"{minute:02d} minutes")
    if seconds or parts:
        parts.append(f"{seconds:02d} seconds")
        return " ".join(parts)
    return "N/A"


def _scaled(value: float, units: tuple[str, str, str]) -> str:
    if value < 1024.0:
        return f"{value:.2f} {units[0]}"
    if value < 1024.0 * 1024.0:
        return f"{value / 1024.0:.2f} {units[1]}"
    return f"{value / (1024.0 * 1024.0):.2f} {units[2]}"


def speed_string(byte_per_second: float) -> str:
    """Describe a transfer rate in bits and bytes per second."""
    bits = _scaled(byte_per_second * 8.0, ("b/s", "Kb/s", "Mb/s"))
    byte_part = _scaled(byte_per_second, ("B/s", "KB/s", "MB/s"))
    return f"{bits} ({byte_part})"


def _char_to_byte(c: str) -> int:
    if is_number(c):
        return ord(c) - ord("0")
    if is_lowercase_hexa(c):
        return ord(c) - ord("a") + 0xA
    if is_uppercase_hexa(c):
        return ord(c) - ord("A") + 0xA
    return _INVALID_NIBBLE


def hex_to_bytes(text: str) -> bytes:
    """Decode pairs of hex characters into at most 64 bytes.

    Characters that are not hex digits decode as 0xFF, so an invalid high
    nibble yields 0xF0 and an invalid low nibble saturates the byte.
    """
    if len(text) % 2:
        raise ValueError("hex text must have an even number of characters")
    pairs = zip(text[0::2], text[1::2])
    return bytes(
        ((_char_to_byte(high) << 4) & 0xFF) | _char_to_byte(low)
        for _, (high, low) in zip(range(_MAX_DECODED_BYTES), pairs)
    )