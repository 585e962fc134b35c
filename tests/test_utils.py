import string

import pytest

from nusspli.utils import (
    hex_string,
    hex_to_bytes,
    is_allowed_in_filename,
    is_alphanumerical,
    is_hexa,
    is_lowercase,
    is_lowercase_hexa,
    is_number,
    is_uppercase,
    is_uppercase_hexa,
    secs_to_time,
    speed_string,
)

ASCII = [chr(i) for i in range(128)]


@pytest.mark.parametrize("c", ASCII)
def test_is_number_matches_digits(c):
    assert is_number(c) == (c in string.digits)


@pytest.mark.parametrize("c", ASCII)
def test_case_checks_match_ascii_letters(c):
    assert is_lowercase(c) == (c in string.ascii_lowercase)
    assert is_uppercase(c) == (c in string.ascii_uppercase)


@pytest.mark.parametrize("c", ASCII)
def test_is_alphanumerical_matches_ascii_alnum(c):
    assert is_alphanumerical(c) == (c in string.ascii_letters + string.digits)


@pytest.mark.parametrize("c", ASCII)
def test_hex_checks(c):
    assert is_hexa(c) == (c in string.hexdigits)
    assert is_lowercase_hexa(c) == (c in "0123456789abcdef")
    assert is_uppercase_hexa(c) == (c in "0123456789ABCDEF")


@pytest.mark.parametrize("c", list('/\\"*:<>?|'))
def test_forbidden_filename_characters(c):
    assert is_allowed_in_filename(c) is False


@pytest.mark.parametrize("c", [" ", "~", "a", "Z", "0", "-", "_", "."])
def test_allowed_filename_characters(c):
    assert is_allowed_in_filename(c) is True


@pytest.mark.parametrize("c", ["\n", "\t", "\x7f", "\x00", "é"])
def test_non_printable_ascii_not_allowed_in_filename(c):
    assert is_allowed_in_filename(c) is False


@pytest.mark.parametrize("bad", ["", "ab"])
def test_character_checks_require_single_character(bad):
    with pytest.raises(ValueError):
        is_number(bad)


def test_hex_string_example():
    assert hex_string(0x50D1, 8) == "000050d1"


@pytest.mark.parametrize("value", [0, 1, 0x0005000E10101A00, (1 << 64) - 1])
def test_hex_string_round_trip(value):
    text = hex_string(value, 16)
    assert len(text) == 16
    assert int(text, 16) == value
    assert text == text.lower()


def test_hex_string_does_not_truncate():
    text = hex_string(0x12345, 2)
    assert int(text, 16) == 0x12345
    assert len(text) == 5


@pytest.mark.parametrize("digits", [-1, 100])
def test_hex_string_rejects_bad_width(digits):
    with pytest.raises(ValueError):
        hex_string(1, digits)


@pytest.mark.parametrize("value", [-1, 1 << 64])
def test_hex_string_rejects_out_of_range(value):
    with pytest.raises(ValueError):
        hex_string(value, 16)


@pytest.mark.parametrize("value", [0, 0x0005000010101A00, (1 << 64) - 1])
def test_hex_to_bytes_round_trip(value):
    assert hex_to_bytes(hex_string(value, 16)) == value.to_bytes(8, "big")


def test_hex_to_bytes_matches_fromhex_and_ignores_case():
    text = "00112233445566778899AABBCCDDEEFF"
    assert hex_to_bytes(text) == bytes.fromhex(text)
    assert hex_to_bytes(text.lower()) == hex_to_bytes(text)


def test_hex_to_bytes_limits_to_64_bytes():
    result = hex_to_bytes("ab" * 100)
    assert len(result) == 64
    assert result == bytes.fromhex("ab" * 64)


def test_hex_to_bytes_invalid_low_nibble_saturates():
    assert hex_to_bytes("0z") == b"\xff"


def test_hex_to_bytes_rejects_odd_length():
    with pytest.raises(ValueError):
        hex_to_bytes("abc")


def test_secs_to_time_zero():
    assert secs_to_time(0) == "N/A"


def test_secs_to_time_hours_wrap_to_nothing():
    assert secs_to_time(3600 * 3600) == "N/A"


def test_secs_to_time_seconds_only():
    text = secs_to_time(7)
    assert "seconds" in text
    assert "minutes" not in text
    assert "hours" not in text
    assert int(text.split()[0]) == 7


def test_secs_to_time_minutes_force_seconds():
    text = secs_to_time(120)
    assert "hours" not in text
    words = text.split()
    assert int(words[0]) == 2
    assert words[1] == "minutes"
    assert int(words[2]) == 0
    assert words[3] == "seconds"


def test_secs_to_time_hours_show_all_parts():
    words = secs_to_time(2 * 3600 + 5).split()
    assert [int(w) for w in words[0::2]] == [2, 0, 5]
    assert words[1::2] == ["hours", "minutes", "seconds"]


@pytest.mark.parametrize("seconds", [-1, 1 << 32])
def test_secs_to_time_rejects_out_of_range(seconds):
    with pytest.raises(ValueError):
        secs_to_time(seconds)


def test_speed_string_small_rate():
    text = speed_string(100.0)
    assert text.split()[1] == "b/s"
    assert text.endswith("B/s)")
    assert float(text.split()[0]) == pytest.approx(800.0)
    assert float(text.split("(")[1].split()[0]) == pytest.approx(100.0)


def test_speed_string_kilo_rate():
    text = speed_string(200.0)
    assert text.split()[1] == "Kb/s"
    assert text.endswith(" B/s)")
    assert float(text.split()[0]) == pytest.approx(1600.0 / 1024.0, abs=0.005)


def test_speed_string_mega_rate():
    rate = 5.0 * 1024 * 1024
    text = speed_string(rate)
    assert text.split()[1] == "Mb/s"
    assert text.endswith("MB/s)")
    assert float(text.split("(")[1].split()[0]) == pytest.approx(5.0)